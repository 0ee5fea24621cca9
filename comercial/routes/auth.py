"""Authentication routes for login and logout."""
from flask import Blueprint, jsonify, request, session
from flask_login import login_user, logout_user, login_required, current_user
from comercial import limiter
from comercial.forms.auth import LoginForm
from comercial.forms.fields import validate_or_raise
from comercial.models.operator import Operator
from comercial.services.auth_service import get_authenticator
from comercial.utils.exceptions import AuthError
from datetime import datetime, timezone
import logging

# Configure security logger
security_logger = logging.getLogger('security')

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("5 per 15 minutes")  # Rate limit: max 5 login attempts per 15 minutes per IP
def login():
    """
    Check the shared password and open an operator session.

    The session stores the tenant key handed out by the authenticator; every
    later data service call is scoped by it.
    """
    if current_user.is_authenticated:
        return jsonify({'success': True, 'message': 'Sessão já iniciada.'}), 200

    form = LoginForm()
    validate_or_raise(form)

    try:
        token = get_authenticator().login(form.password.data)
    except AuthError:
        # Log failed login attempt
        security_logger.warning(f"Failed login attempt: ip={request.remote_addr}")
        raise

    session['tenant_key'] = token.tenant_key
    login_user(Operator(token.tenant_key))

    # Log successful login
    security_logger.info(f"Successful login: ip={request.remote_addr}")

    return jsonify({'success': True, 'message': 'Login realizado com sucesso!'}), 200


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Clear the operator session."""
    # Log logout event before clearing session
    security_logger.info(
        f"Operator logout: ip={request.remote_addr}, "
        f"timestamp={datetime.now(timezone.utc).isoformat()}"
    )

    logout_user()
    session.pop('tenant_key', None)
    return jsonify({'success': True, 'message': 'Sessão encerrada.'}), 200


@auth_bp.route('/session', methods=['GET'])
def session_status():
    """Whether the browser holds an operator session."""
    return jsonify({'authenticated': current_user.is_authenticated}), 200
