"""Unit tests for display formatters."""
from decimal import Decimal

import pytest

from comercial.utils.formatting import format_brl, format_percent, format_phone


@pytest.mark.parametrize('raw, expected', [
    ('12345678', '1234-5678'),
    ('912345678', '91234-5678'),
    ('1112345678', '(11) 1234-5678'),
    ('11912345678', '(11) 91234-5678'),
    ('(11) 91234-5678', '(11) 91234-5678'),
    ('123', '123'),
    ('', ''),
])
def test_format_phone(raw, expected):
    assert format_phone(raw) == expected


def test_format_brl():
    assert format_brl(Decimal('1234.5')) == 'R$ 1.234,50'
    assert format_brl(Decimal('1000000')) == 'R$ 1.000.000,00'
    assert format_brl(None) == 'R$ 0,00'
    assert format_brl(Decimal('-10.005')) == '-R$ 10,01'


def test_format_percent():
    assert format_percent(Decimal('12.5')) == '12.50%'
    assert format_percent(None) == '0.00%'
