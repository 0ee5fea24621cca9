"""Forms for invoice payment."""
from flask_wtf import FlaskForm
from wtforms.validators import DataRequired

from comercial.forms.fields import OptionalIntegerField, TextValueField
from comercial.utils.validators import validate_local_date


class PaymentForm(FlaskForm):
    """Register the payment of an invoice (date and method together)."""

    data_pagamento = TextValueField(
        'Data de pagamento',
        validators=[
            DataRequired(message='Data de pagamento é obrigatória.'),
            validate_local_date
        ],
        render_kw={'placeholder': 'DD/MM/AAAA'}
    )

    forma_pagamento_id = OptionalIntegerField(
        'Forma de pagamento',
        validators=[DataRequired(message='Forma de pagamento é obrigatória.')]
    )
