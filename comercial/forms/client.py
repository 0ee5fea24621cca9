"""Forms for client management."""
from flask_wtf import FlaskForm
from wtforms.validators import DataRequired, Email, Length

from comercial.forms.fields import OptionalValue, TextValueField
from comercial.models.client import Client
from comercial.utils.validators import validate_cnpj, validate_cpf


class ClientForm(FlaskForm):
    """Create/edit a client. Only the trade name is mandatory."""

    nome_fantasia = TextValueField(
        'Nome fantasia',
        validators=[
            DataRequired(message='Nome fantasia é obrigatório.'),
            Length(max=255, message='Nome fantasia pode ter no máximo 255 caracteres.')
        ]
    )

    razao_social = TextValueField('Razão social', validators=[OptionalValue(), Length(max=255)])
    contato = TextValueField('Contato', validators=[OptionalValue(), Length(max=255)])

    cpf = TextValueField(
        'CPF',
        validators=[OptionalValue(), validate_cpf],
        render_kw={'placeholder': '000.000.000-00'}
    )

    cnpj = TextValueField(
        'CNPJ',
        validators=[OptionalValue(), validate_cnpj],
        render_kw={'placeholder': '00.000.000/0000-00'}
    )

    insc_municipal = TextValueField('Inscrição municipal', validators=[OptionalValue(), Length(max=50)])
    atividade = TextValueField('Atividade', validators=[OptionalValue(), Length(max=255)])

    # Address
    endereco = TextValueField('Endereço', validators=[OptionalValue(), Length(max=255)])
    numero = TextValueField('Número', validators=[OptionalValue(), Length(max=20)])
    bairro = TextValueField('Bairro', validators=[OptionalValue(), Length(max=100)])
    cidade = TextValueField('Cidade', validators=[OptionalValue(), Length(max=100)])
    estado = TextValueField('Estado', validators=[OptionalValue(), Length(max=2, message='Use a sigla do estado.')])
    cep = TextValueField('CEP', validators=[OptionalValue(), Length(max=10)])

    email = TextValueField(
        'E-mail',
        validators=[OptionalValue(), Email(message='Informe um e-mail válido.')]
    )
    fone = TextValueField('Telefone', validators=[OptionalValue(), Length(max=20)])

    def to_client(self) -> Client:
        return Client(
            trade_name=self.nome_fantasia.data,
            legal_name=self.razao_social.data or '',
            contact=self.contato.data or '',
            cpf=self.cpf.data or '',
            cnpj=self.cnpj.data or '',
            municipal_registration=self.insc_municipal.data or '',
            activity=self.atividade.data or '',
            address=self.endereco.data or '',
            number=self.numero.data or '',
            district=self.bairro.data or '',
            city=self.cidade.data or '',
            state=self.estado.data or '',
            postal_code=self.cep.data or '',
            email=self.email.data or '',
            phone=self.fone.data or '',
        )
