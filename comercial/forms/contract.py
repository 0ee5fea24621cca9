"""Forms for contract management and manual invoice generation."""
from flask_wtf import FlaskForm
from wtforms import SelectField
from wtforms.validators import DataRequired, Length, NumberRange

from comercial.forms.fields import (
    AmountField, OptionalIntegerField, OptionalValue, RequiredValue, TextValueField
)
from comercial.models.contract import Contract, CONTRACT_STATUSES, STATUS_ACTIVE
from comercial.utils.dates import parse_local_date
from comercial.utils.validators import (
    validate_day_of_month, validate_local_date, validate_month, validate_year_not_past
)


class ContractForm(FlaskForm):
    """
    Create/edit a contract.

    Dates are ``DD/MM/YYYY`` text; amounts use a comma for cents. All
    checks run before any call to the data service.
    """

    cliente_id = OptionalIntegerField(
        'Cliente',
        validators=[DataRequired(message='Cliente é obrigatório.')]
    )

    programa_id = OptionalIntegerField(
        'Programa',
        validators=[DataRequired(message='Programa é obrigatório.')]
    )

    corretor_id = OptionalIntegerField('Corretor', validators=[OptionalValue()])

    forma_pagamento_id = OptionalIntegerField(
        'Forma de pagamento',
        validators=[DataRequired(message='Forma de pagamento é obrigatória.')]
    )

    data_emissao = TextValueField(
        'Data de emissão',
        validators=[
            DataRequired(message='Data de emissão é obrigatória.'),
            validate_local_date
        ],
        render_kw={'placeholder': 'DD/MM/AAAA'}
    )

    data_vencimento = TextValueField(
        'Data de vencimento',
        validators=[
            DataRequired(message='Data de vencimento é obrigatória.'),
            validate_local_date
        ],
        render_kw={'placeholder': 'DD/MM/AAAA'}
    )

    dia_vencimento = OptionalIntegerField(
        'Dia de vencimento',
        validators=[
            RequiredValue(message='Dia de vencimento é obrigatório.'),
            validate_day_of_month
        ]
    )

    num_insercoes = OptionalIntegerField(
        'Número de inserções',
        validators=[
            RequiredValue(message='Número de inserções é obrigatório.'),
            NumberRange(min=0, message='Número de inserções inválido.')
        ]
    )

    valor = AmountField(
        'Valor',
        validators=[
            RequiredValue(message='Valor é obrigatório.'),
            NumberRange(min=0, message='Valor inválido.')
        ]
    )

    comissao = AmountField(
        'Comissão (%)',
        validators=[
            RequiredValue(message='Comissão é obrigatória.'),
            NumberRange(min=0, max=100, message='Comissão deve estar entre 0 e 100.')
        ]
    )

    status = SelectField(
        'Status',
        choices=[(status, status.capitalize()) for status in CONTRACT_STATUSES],
        default=STATUS_ACTIVE,
        validate_choice=True
    )

    descritivo = TextValueField(
        'Descritivo',
        validators=[OptionalValue(), Length(max=1000, message='Descritivo pode ter no máximo 1000 caracteres.')]
    )

    def to_contract(self) -> Contract:
        """Build the contract record from validated data."""
        return Contract(
            client_id=self.cliente_id.data,
            program_id=self.programa_id.data,
            agent_id=self.corretor_id.data,
            payment_method_id=self.forma_pagamento_id.data,
            issue_date=parse_local_date(self.data_emissao.data),
            due_date=parse_local_date(self.data_vencimento.data),
            day_of_month=self.dia_vencimento.data,
            insertions=self.num_insercoes.data,
            value=self.valor.data,
            commission_percent=self.comissao.data,
            status=self.status.data or STATUS_ACTIVE,
            description=self.descritivo.data or '',
        )


class SingleInvoiceForm(FlaskForm):
    """Generate one invoice of a contract for a given month/year."""

    mes = OptionalIntegerField(
        'Mês',
        validators=[
            DataRequired(message='Mês é obrigatório.'),
            validate_month
        ]
    )

    ano = OptionalIntegerField(
        'Ano',
        validators=[
            DataRequired(message='Ano é obrigatório.'),
            validate_year_not_past
        ]
    )
