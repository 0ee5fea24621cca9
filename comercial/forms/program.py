"""Form for program management."""
from flask_wtf import FlaskForm
from wtforms.validators import DataRequired, Length, NumberRange, Regexp

from comercial.forms.fields import AmountField, OptionalValue, TextValueField
from comercial.models.program import Program

TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'


class ProgramForm(FlaskForm):
    """Create/edit a program with its time slot and sponsorship price."""

    programa = TextValueField(
        'Programa',
        validators=[
            DataRequired(message='Programa é obrigatório.'),
            Length(max=255)
        ]
    )

    hora_inicio = TextValueField(
        'Hora de início',
        validators=[OptionalValue(), Regexp(TIME_PATTERN, message='Use o formato HH:MM.')]
    )

    hora_fim = TextValueField(
        'Hora de término',
        validators=[OptionalValue(), Regexp(TIME_PATTERN, message='Use o formato HH:MM.')]
    )

    apresentador = TextValueField('Apresentador', validators=[OptionalValue(), Length(max=255)])
    dias_apresentacao = TextValueField('Dias de apresentação', validators=[OptionalValue(), Length(max=100)])

    valor_patrocinio = AmountField(
        'Valor do patrocínio',
        validators=[OptionalValue(), NumberRange(min=0, message='Valor inválido.')]
    )

    estilo = TextValueField('Estilo', validators=[OptionalValue(), Length(max=100)])

    def to_program(self) -> Program:
        return Program(
            name=self.programa.data,
            start_time=self.hora_inicio.data or '',
            end_time=self.hora_fim.data or '',
            presenter=self.apresentador.data or '',
            air_days=self.dias_apresentacao.data or '',
            sponsorship_price=self.valor_patrocinio.data,
            style=self.estilo.data or '',
        )
