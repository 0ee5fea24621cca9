"""Shared-password authentication for the back office."""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from flask import current_app

from comercial import bcrypt
from comercial.utils.exceptions import AuthError

# Security logger for audit trail
security_logger = logging.getLogger('security')


@dataclass(frozen=True)
class SessionToken:
    """Opaque proof of a successful login: the tenant key the session may use."""
    tenant_key: str
    issued_at: datetime


class Authenticator:
    """
    Check the shared back-office password.

    The password is only ever held as a bcrypt hash. Callers get a
    SessionToken and never learn how it was produced.
    """

    def __init__(self, password_hash: str, tenant_key: str):
        self.password_hash = password_hash
        self.tenant_key = tenant_key

    @classmethod
    def from_config(cls, app) -> 'Authenticator':
        """
        Build from ``ACCESS_PASSWORD_HASH``, or hash ``ACCESS_PASSWORD`` once
        at start-up when no hash is configured (development/testing).
        """
        password_hash = app.config.get('ACCESS_PASSWORD_HASH')
        if not password_hash:
            password = app.config.get('ACCESS_PASSWORD')
            if not password:
                raise RuntimeError('ACCESS_PASSWORD_HASH or ACCESS_PASSWORD must be configured')
            password_hash = bcrypt.generate_password_hash(password).decode('utf-8')
            app.logger.info('Using ACCESS_PASSWORD hashed at start-up')
        return cls(password_hash, app.config['TENANT_KEY'])

    def login(self, password: str) -> SessionToken:
        """
        Validate the password.

        Returns:
            SessionToken

        Raises:
            AuthError: Empty or wrong password
        """
        if not password or not bcrypt.check_password_hash(self.password_hash, password):
            raise AuthError('Senha incorreta.')
        return SessionToken(tenant_key=self.tenant_key, issued_at=datetime.now(timezone.utc))


def init_authenticator(app) -> Authenticator:
    authenticator = Authenticator.from_config(app)
    app.extensions['authenticator'] = authenticator
    return authenticator


def get_authenticator() -> Authenticator:
    return current_app.extensions['authenticator']
