"""Session helpers: who is logged in and which tenant key their calls carry."""
from functools import wraps

from flask_login import current_user

from comercial.utils.exceptions import AuthError, UnauthorizedError


def get_tenant_key():
    """
    Tenant key of the logged-in operator.

    Every data service read and write is scoped by this opaque key.

    Returns:
        str: tenant key stored in the session at login

    Raises:
        AuthError: If nobody is logged in
        UnauthorizedError: If the session carries no tenant key
    """
    if not current_user.is_authenticated:
        raise AuthError('Sessão expirada. Faça login novamente.')

    tenant_key = getattr(current_user, 'tenant_key', None)
    if not tenant_key:
        raise UnauthorizedError('Sessão sem chave de acesso.')
    return tenant_key


def operator_required(f):
    """
    Decorator for JSON endpoints that need a logged-in operator.

    Unlike ``login_required`` it never redirects: anonymous requests get a
    401 JSON error through the global APIError handler.

    Usage:
        @bp.route('/contratos')
        @operator_required
        def list_contracts():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        get_tenant_key()
        return f(*args, **kwargs)

    return decorated_function
