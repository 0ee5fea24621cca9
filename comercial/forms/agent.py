"""Form for agent (corretor) management."""
from flask_wtf import FlaskForm
from wtforms.validators import DataRequired, Email, Length

from comercial.forms.fields import OptionalValue, TextValueField
from comercial.models.agent import Agent
from comercial.utils.dates import parse_local_date
from comercial.utils.validators import validate_local_date


class AgentForm(FlaskForm):

    nome = TextValueField(
        'Nome',
        validators=[
            DataRequired(message='Nome é obrigatório.'),
            Length(max=255, message='Nome pode ter no máximo 255 caracteres.')
        ]
    )

    email = TextValueField('E-mail', validators=[OptionalValue(), Email(message='Informe um e-mail válido.')])
    endereco = TextValueField('Endereço', validators=[OptionalValue(), Length(max=255)])
    fone = TextValueField('Telefone', validators=[OptionalValue(), Length(max=20)])

    data_admissao = TextValueField(
        'Data de admissão',
        validators=[OptionalValue(), validate_local_date],
        render_kw={'placeholder': 'DD/MM/AAAA'}
    )

    def to_agent(self) -> Agent:
        return Agent(
            name=self.nome.data,
            email=self.email.data or '',
            address=self.endereco.data or '',
            phone=self.fone.data or '',
            admission_date=parse_local_date(self.data_admissao.data),
        )
