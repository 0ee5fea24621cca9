"""Form fields and validators shared by the JSON forms.

Forms are submitted as JSON, so field values may arrive as numbers, strings
or null instead of the strings WTForms expects from an HTML form.
"""
from decimal import Decimal, InvalidOperation

from wtforms import DecimalField, IntegerField, StringField
from wtforms.validators import StopValidation

from comercial.utils.exceptions import ValidationError


def coerce_int_or_none(value):
    """
    Custom coerce function for SelectField that allows empty string to become None.

    Args:
        value: Value from form (string, number or None)

    Returns:
        int or None: Coerced value
    """
    if value in ('', None):
        return None
    return int(value)


class TextValueField(StringField):
    """StringField that accepts JSON numbers and null (null becomes '')."""

    def process_formdata(self, valuelist):
        if valuelist:
            value = valuelist[0]
            self.data = '' if value is None else str(value).strip()


class OptionalIntegerField(IntegerField):
    """
    IntegerField that accepts JSON numbers, numeric strings, '' and null.

    Empty values become None instead of a 'Not a valid integer' error.
    """

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        value = valuelist[0]
        if value in ('', None):
            self.data = None
            return
        try:
            self.data = coerce_int_or_none(value)
        except (TypeError, ValueError):
            self.data = None
            raise ValueError('Número inteiro inválido.')


class AmountField(DecimalField):
    """
    Monetary/percentage amount.

    JSON numbers are taken as they are. Text uses the Brazilian notation with
    a comma as the decimal separator and must not contain dots
    (``'1500,50'`` is accepted, ``'1.500,50'`` and ``'1500.50'`` are not).
    """

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        value = valuelist[0]
        if value in ('', None):
            self.data = None
            return

        if isinstance(value, bool):
            self.data = None
            raise ValueError('Valor inválido.')

        if isinstance(value, (int, float)):
            self.data = Decimal(str(value))
            return

        text = str(value).strip()
        if '.' in text:
            self.data = None
            raise ValueError('O valor não pode conter pontos. Use vírgula para os centavos.')
        try:
            self.data = Decimal(text.replace(',', '.'))
        except InvalidOperation:
            self.data = None
            raise ValueError('Valor inválido.')


class RequiredValue:
    """
    Require a value while still accepting 0.

    DataRequired rejects falsy data, which would refuse a legitimate 0 (an
    amount, a due day or an insertion count).
    """

    def __init__(self, message=None):
        self.message = message

    def __call__(self, form, field):
        if field.data is None or field.data == '':
            # Unparseable input already carries its own message
            if field.process_errors:
                raise StopValidation()
            raise StopValidation(self.message or 'Campo obrigatório.')


class OptionalValue:
    """
    Stop the validation chain when no value was given.

    WTForms' Optional only looks at the raw input, and a JSON null is not an
    empty string, so null would still reach the remaining validators.
    """

    def __call__(self, form, field):
        if (field.data is None or field.data == '') and not field.process_errors:
            field.errors[:] = []
            raise StopValidation()


def validate_or_raise(form):
    """
    Validate a submitted form.

    Raises:
        ValidationError: With the field errors in the payload, so nothing
            reaches the data service
    """
    if not form.validate_on_submit():
        raise ValidationError('Dados inválidos.', payload={'fields': form.errors})
