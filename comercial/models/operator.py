"""Logged-in operator (Flask-Login user backed by the session only)."""
from flask_login import UserMixin

OPERATOR_ID = 'operator'


class Operator(UserMixin):
    """
    The single back-office operator.

    There are no user accounts: whoever knows the shared password gets a
    session holding the tenant key, which every data service call carries.
    """

    def __init__(self, tenant_key: str):
        self.id = OPERATOR_ID
        self.tenant_key = tenant_key

    def __repr__(self):
        return f'<Operator tenant={self.tenant_key}>'
