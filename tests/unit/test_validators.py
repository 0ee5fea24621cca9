"""Unit tests for custom WTForms validators."""
from types import SimpleNamespace

import pytest
from wtforms import ValidationError

from comercial.utils.validators import (
    validate_cnpj, validate_cpf, validate_day_of_month, validate_local_date, validate_month,
    validate_year_not_past
)


def _field(data):
    return SimpleNamespace(data=data)


class TestLocalDate:

    def test_valid(self):
        validate_local_date(None, _field('29/02/2024'))

    @pytest.mark.parametrize('text', ['31/02/2024', '1/1/2020', '2024-01-01'])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            validate_local_date(None, _field(text))

    def test_empty_is_skipped(self):
        validate_local_date(None, _field(''))


class TestDayOfMonth:

    @pytest.mark.parametrize('day', [0, 1, 30])
    def test_valid(self, day):
        validate_day_of_month(None, _field(day))

    @pytest.mark.parametrize('day', [-1, 31])
    def test_invalid(self, day):
        with pytest.raises(ValidationError):
            validate_day_of_month(None, _field(day))


def test_month_range():
    validate_month(None, _field(12))
    with pytest.raises(ValidationError):
        validate_month(None, _field(0))


def test_year_not_past(app, mocker):
    from datetime import datetime
    mocker.patch('comercial.utils.validators.local_now', return_value=datetime(2024, 6, 1))

    validate_year_not_past(None, _field(2024))
    with pytest.raises(ValidationError):
        validate_year_not_past(None, _field(2023))


class TestTaxIds:

    def test_cpf(self):
        validate_cpf(None, _field('123.456.789-09'))
        validate_cpf(None, _field('12345678909'))
        with pytest.raises(ValidationError):
            validate_cpf(None, _field('1234567890'))
        with pytest.raises(ValidationError):
            validate_cpf(None, _field('123.456.789-0A'))

    def test_cnpj(self):
        validate_cnpj(None, _field('12.345.678/0001-95'))
        with pytest.raises(ValidationError):
            validate_cnpj(None, _field('12.345.678/0001'))

    def test_empty_is_skipped(self):
        validate_cpf(None, _field(''))
        validate_cnpj(None, _field(None))
