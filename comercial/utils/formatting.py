"""Display formatters for money, percentages and Brazilian phone numbers."""
import re
from decimal import Decimal, ROUND_HALF_UP


def format_brl(value) -> str:
    """
    Format an amount as Brazilian reais.

    Examples:
        >>> format_brl(Decimal('1234.5'))
        'R$ 1.234,50'
        >>> format_brl(None)
        'R$ 0,00'
    """
    amount = Decimal(str(value or 0)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    sign = '-' if amount < 0 else ''
    integer, _, cents = f'{abs(amount):.2f}'.partition('.')
    integer = f'{int(integer):,}'.replace(',', '.')
    return f'{sign}R$ {integer},{cents}'


def format_percent(value) -> str:
    """Format a percentage with two decimals, e.g. ``12.50%``."""
    amount = Decimal(str(value or 0)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return f'{amount}%'


def format_phone(value: str) -> str:
    """
    Format a phone number the Brazilian way based on its digit count.

    8 digits: xxxx-xxxx, 9: xxxxx-xxxx, 10: (xx) xxxx-xxxx,
    11: (xx) xxxxx-xxxx. Anything else is returned unchanged.
    """
    if not value:
        return ''

    digits = re.sub(r'\D', '', value)

    if len(digits) == 8:
        return f'{digits[:4]}-{digits[4:]}'
    if len(digits) == 9:
        return f'{digits[:5]}-{digits[5:]}'
    if len(digits) == 10:
        return f'({digits[:2]}) {digits[2:6]}-{digits[6:]}'
    if len(digits) == 11:
        return f'({digits[:2]}) {digits[2:7]}-{digits[7:]}'
    return value
