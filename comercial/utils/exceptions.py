"""
Custom Exception Classes for the Radio Comercial back-office
Provides standardized error handling with HTTP status codes
"""


class APIError(Exception):
    """
    Base API Error class
    All custom exceptions inherit from this class
    """
    status_code = 500

    def __init__(self, message, status_code=None, payload=None):
        """
        Initialize API Error

        Args:
            message (str): Error message to display to user
            status_code (int, optional): HTTP status code (default: 500)
            payload (dict, optional): Additional error context data
        """
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        """
        Convert exception to dictionary for JSON response

        Returns:
            dict: Error response dictionary
        """
        rv = dict(self.payload or ())
        rv['error'] = self.message
        rv['status_code'] = self.status_code
        return rv


class ValidationError(APIError):
    """
    400 Bad Request - Validation errors (user input errors)

    Usage:
        raise ValidationError('Data de pagamento inválida!')
        raise ValidationError('Dados inválidos', payload={'fields': form.errors})
    """
    status_code = 400


class AuthError(APIError):
    """
    401 Unauthorized - Wrong credentials or missing session

    Usage:
        raise AuthError('Senha incorreta.')
    """
    status_code = 401


class NotFoundError(APIError):
    """
    404 Not Found - Resource not found

    Usage:
        raise NotFoundError('Contrato 12 não encontrado.')
    """
    status_code = 404


class UnauthorizedError(APIError):
    """
    403 Forbidden - Permission denied

    Usage:
        raise UnauthorizedError('Sessão sem chave de acesso.')
    """
    status_code = 403


class ServerError(APIError):
    """
    500 Internal Server Error - Unexpected server errors

    Usage:
        raise ServerError('Erro inesperado ao calcular métricas.')
    """
    status_code = 500


class DataServiceError(ServerError):
    """
    502 Bad Gateway - The external data service failed or was unreachable

    Usage:
        raise DataServiceError('Erro ao carregar as faturas!', method='GET',
                               path='/faturamento/abc', original_exception=exc)
    """
    status_code = 502

    def __init__(self, message, method=None, path=None, upstream_status=None, original_exception=None):
        super().__init__(message)
        self.method = method
        self.path = path
        self.upstream_status = upstream_status
        self.original_exception = original_exception


class BusinessLogicError(ValidationError):
    """
    400 Bad Request - Business logic validation errors

    Usage:
        raise BusinessLogicError('Fatura já está paga.')
        raise BusinessLogicError('Contrato sem dia de vencimento configurado.')
    """
    pass


class DuplicateError(ValidationError):
    """
    400 Bad Request - Duplicate resource errors

    Usage:
        raise DuplicateError('Já existe um cliente com este CNPJ.')
    """
    pass
