"""Unit tests for custom exceptions."""
from comercial.utils.exceptions import (
    APIError, AuthError, BusinessLogicError, DataServiceError, DuplicateError,
    NotFoundError, ServerError, UnauthorizedError, ValidationError
)


def test_api_error_defaults():
    error = APIError('Falha')
    assert error.status_code == 500
    assert error.to_dict() == {'error': 'Falha', 'status_code': 500}


def test_api_error_payload_is_merged():
    error = ValidationError('Dados inválidos.', payload={'fields': {'valor': ['Valor inválido.']}})
    data = error.to_dict()
    assert data['status_code'] == 400
    assert data['fields'] == {'valor': ['Valor inválido.']}


def test_status_codes():
    assert AuthError('x').status_code == 401
    assert UnauthorizedError('x').status_code == 403
    assert NotFoundError('x').status_code == 404
    assert ServerError('x').status_code == 500
    assert DataServiceError('x').status_code == 502


def test_business_errors_are_validation_errors():
    assert isinstance(BusinessLogicError('x'), ValidationError)
    assert isinstance(DuplicateError('x'), ValidationError)
    assert BusinessLogicError('x').status_code == 400


def test_data_service_error_context():
    cause = TimeoutError('slow')
    error = DataServiceError('Timeout', method='GET', path='/faturamento/t', upstream_status=None,
                             original_exception=cause)
    assert error.method == 'GET'
    assert error.path == '/faturamento/t'
    assert error.original_exception is cause
    assert isinstance(error, ServerError)
