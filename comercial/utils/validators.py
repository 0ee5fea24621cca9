"""
Custom WTForms validators for back-office input.

Every rule here runs before any call to the data service, so an invalid
form never produces a partial write.
"""
import re
from wtforms import ValidationError

from comercial.utils.dates import local_now, parse_local_date


def validate_local_date(form, field):
    """
    Validate a ``DD/MM/YYYY`` calendar date.

    Empty values are left to DataRequired/Optional.

    Raises:
        ValidationError: If the text is malformed or not a real calendar day

    Example usage:
        class PaymentForm(FlaskForm):
            payment_date = TextValueField('Data de pagamento', validators=[
                DataRequired(),
                validate_local_date
            ])
    """
    if not field.data:
        return
    if parse_local_date(field.data) is None:
        raise ValidationError('Data inválida. Use o formato DD/MM/AAAA.')


def validate_day_of_month(form, field):
    """
    Validate the recurring due day of a contract.

    Requirements:
    - Integer between 0 and 30 (0 means no recurring invoices)
    """
    if field.data is None:
        return
    if not 0 <= field.data <= 30:
        raise ValidationError('O dia de vencimento deve estar entre 0 e 30.')


def validate_year_not_past(form, field):
    """Reject a year before the current one (single invoice generation)."""
    if field.data is None:
        return
    if field.data < local_now().year:
        raise ValidationError('O ano não pode ser anterior ao ano atual.')


def validate_month(form, field):
    if field.data is None:
        return
    if not 1 <= field.data <= 12:
        raise ValidationError('Mês inválido.')


def validate_cpf(form, field):
    """
    Validate a Brazilian CPF (individual tax id).

    Requirements:
    - Exactly 11 digits once dots and dashes are removed
    """
    if not field.data:
        return
    digits = re.sub(r'[.\-\s]', '', field.data)
    if not digits.isdigit():
        raise ValidationError('CPF deve conter apenas números.')
    if len(digits) != 11:
        raise ValidationError('CPF deve ter 11 dígitos.')


def validate_cnpj(form, field):
    """
    Validate a Brazilian CNPJ (organizational tax id).

    Requirements:
    - Exactly 14 digits once dots, slashes and dashes are removed
    """
    if not field.data:
        return
    digits = re.sub(r'[./\-\s]', '', field.data)
    if not digits.isdigit():
        raise ValidationError('CNPJ deve conter apenas números.')
    if len(digits) != 14:
        raise ValidationError('CNPJ deve ter 14 dígitos.')
