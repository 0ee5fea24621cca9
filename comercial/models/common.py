"""Conversion helpers shared by the record classes.

The data service returns loosely typed JSON (numbers as strings, empty
strings for missing values); these helpers normalize it once at the edge.
"""
from decimal import Decimal, InvalidOperation
from typing import Optional


def to_decimal(value) -> Optional[Decimal]:
    """Decimal from a JSON number/string, None when absent or unparseable."""
    if value is None or value == '':
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).replace(',', '.'))
    except InvalidOperation:
        return None


def to_int(value) -> Optional[int]:
    """int from a JSON number/string, None when absent or unparseable."""
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_text(value) -> str:
    return '' if value is None else str(value)


def decimal_to_api(value: Optional[Decimal]):
    """Decimal -> JSON number (the service expects numbers, not strings)."""
    if value is None:
        return None
    return float(value)


def nested(payload: dict, key: str, field: str) -> Optional[str]:
    """Read ``payload[key][field]`` when the service embeds a related record."""
    related = payload.get(key)
    if isinstance(related, dict):
        return related.get(field)
    return None
