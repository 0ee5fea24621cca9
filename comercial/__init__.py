"""
Flask application factory.
Creates and configures the Flask application with all extensions.
"""
from flask import Flask
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config import config

# Initialize extensions (but don't bind to app yet)
login_manager = LoginManager()
bcrypt = Bcrypt()
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
)


def create_app(config_name='development'):
    """
    Application factory function.

    Args:
        config_name: Configuration to use ('development', 'production', 'testing')

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Configure logging
    config[config_name].configure_logging(app)

    # Initialize extensions with app
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)

    # Only initialize rate limiter if not disabled in config
    if app.config.get('RATELIMIT_ENABLED', True):
        limiter.init_app(app)
    else:
        app.logger.info("Rate limiting is disabled (testing mode)")

    # External data service client and the shared-password authenticator
    from comercial.services.data_api_service import init_data_api
    from comercial.services.auth_service import init_authenticator
    init_data_api(app)
    init_authenticator(app)
    app.logger.info(f"Data API: {app.config['DATA_API_URL']}")

    @login_manager.user_loader
    def load_user(user_id):
        """
        Flask-Login user_loader callback.
        Rebuilds the operator from the tenant key stored at login.

        Args:
            user_id: Operator id stored in the session

        Returns:
            Operator or None if the session holds no tenant key
        """
        from flask import session
        from comercial.models.operator import Operator, OPERATOR_ID

        tenant_key = session.get('tenant_key')
        if user_id != OPERATOR_ID or not tenant_key:
            return None
        return Operator(tenant_key)

    @login_manager.unauthorized_handler
    def unauthorized():
        from flask import jsonify
        return jsonify({
            'error': 'Faça login para acessar este recurso.',
            'status_code': 401
        }), 401

    # Health check endpoint (simple route, not a blueprint)
    @app.route('/health')
    def health():
        """Health check endpoint for monitoring."""
        return {'status': 'ok'}, 200

    # Register auth blueprint
    from comercial.routes.auth import auth_bp
    app.register_blueprint(auth_bp)

    # Register API blueprint (CSRF token)
    from comercial.routes.api import api_bp
    app.register_blueprint(api_bp)

    # Register clients blueprint
    from comercial.routes.clients import clients_bp
    app.register_blueprint(clients_bp)

    # Register settings blueprint (agents, programs, payment methods, logs)
    from comercial.routes.settings import settings_bp
    app.register_blueprint(settings_bp)

    # Register contracts blueprint
    from comercial.routes.contracts import contracts_bp
    app.register_blueprint(contracts_bp)

    # Register invoices blueprint
    from comercial.routes.invoices import invoices_bp
    app.register_blueprint(invoices_bp)

    # Register commissions blueprint
    from comercial.routes.commissions import commissions_bp
    app.register_blueprint(commissions_bp)

    # Register dashboard blueprint
    from comercial.routes.dashboard import dashboard_bp
    app.register_blueprint(dashboard_bp)

    # Register security headers middleware
    @app.after_request
    def set_security_headers(response):
        """
        Set security headers on all HTTP responses.

        - X-Content-Type-Options: Prevents MIME type sniffing attacks
        - X-Frame-Options: Prevents clickjacking attacks
        - Strict-Transport-Security (HSTS): Forces HTTPS connections
        """
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'

        # Force HTTPS for 1 year (only in production with HTTPS enabled)
        if app.config.get('SESSION_COOKIE_SECURE', False):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    from comercial.cli import register_commands
    register_commands(app)

    return app


def register_error_handlers(app):
    """
    Register global error handlers for the application.

    Every response is JSON: ``{'error': <message>, 'status_code': <int>}``
    plus the payload of the raised APIError (e.g. form field errors).

    Handles:
    - Custom API exceptions (ValidationError, DataServiceError, etc.)
    - CSRF failures
    - Standard HTTP errors (401, 403, 404, 405, 429, 500)
    - Unexpected exceptions
    """
    from flask import jsonify, request
    from flask_wtf.csrf import CSRFError
    from werkzeug.exceptions import HTTPException
    from comercial.utils.exceptions import APIError, DataServiceError

    @app.errorhandler(APIError)
    def handle_api_error(error):
        """Handle custom API errors."""
        if isinstance(error, DataServiceError):
            app.logger.error(
                f'Data service error: {error.message} '
                f'({error.method} {error.path}, upstream={error.upstream_status})'
            )
        elif error.status_code >= 500:
            app.logger.error(f'API Error: {error.message}', exc_info=True)
        else:
            app.logger.info(f'API Error {error.status_code}: {error.message}')

        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        app.logger.warning(f'CSRF validation failed: {request.url}: {error.description}')
        return jsonify({
            'error': 'Token CSRF inválido ou ausente.',
            'status_code': 400
        }), 400

    @app.errorhandler(401)
    def handle_401(error):
        return jsonify({
            'error': 'Faça login para acessar este recurso.',
            'status_code': 401
        }), 401

    @app.errorhandler(403)
    def handle_403(error):
        """
        Handle 403 Forbidden errors.
        """
        app.logger.warning(f'403 Forbidden: {request.url}')
        return jsonify({
            'error': 'Você não tem permissão para acessar este recurso.',
            'status_code': 403
        }), 403

    @app.errorhandler(404)
    def handle_404(error):
        """
        Handle 404 Not Found errors.
        """
        app.logger.warning(f'404 Not Found: {request.url}')
        return jsonify({
            'error': 'Recurso não encontrado.',
            'status_code': 404
        }), 404

    @app.errorhandler(405)
    def handle_405(error):
        return jsonify({
            'error': 'Método não permitido.',
            'status_code': 405
        }), 405

    @app.errorhandler(429)
    def handle_rate_limit(error):
        """
        Handle 429 Too Many Requests (rate limit exceeded).

        Triggered when a client exceeds the login limit (5 attempts per 15 minutes).
        """
        app.logger.warning(f'429 Rate Limit Exceeded: {request.url} from IP: {request.remote_addr}')
        return jsonify({
            'error': 'Muitas tentativas. Tente novamente em 15 minutos.',
            'status_code': 429
        }), 429

    @app.errorhandler(500)
    def handle_500(error):
        """
        Handle 500 Internal Server Error.
        """
        app.logger.error(f'500 Internal Server Error: {request.url}', exc_info=True)
        return jsonify({
            'error': 'Erro no servidor. Tente novamente.',
            'status_code': 500
        }), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        """
        Handle unexpected exceptions.

        This is a catch-all for any unhandled exceptions.
        """
        if isinstance(error, HTTPException):
            return jsonify({
                'error': error.description,
                'status_code': error.code
            }), error.code

        app.logger.error(f'Unexpected error: {str(error)}', exc_info=True)
        return jsonify({
            'error': 'Erro inesperado. Tente novamente.',
            'status_code': 500
        }), 500
