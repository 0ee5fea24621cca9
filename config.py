"""
Flask application configuration.
Defines environment-based configuration classes.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration with common settings."""

    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Session security
    SESSION_COOKIE_HTTPONLY = True  # Prevent JavaScript access to cookies
    SESSION_COOKIE_SAMESITE = 'Lax'  # CSRF protection
    SESSION_COOKIE_SECURE = False  # Set to True in ProductionConfig (requires HTTPS)

    # CSRF protection
    WTF_CSRF_ENABLED = True
    WTF_CSRF_SECRET_KEY = os.environ.get('CSRF_SECRET_KEY') or SECRET_KEY

    @classmethod
    def init_app(cls, app):
        """Initialize application with configuration-specific settings."""
        pass

    # External data service (all entities live there)
    DATA_API_URL = os.environ.get('DATA_API_URL') or 'http://localhost:5000'
    DATA_API_TIMEOUT = int(os.environ.get('DATA_API_TIMEOUT') or 15)
    DATA_API_TOKEN = os.environ.get('DATA_API_TOKEN') or ''
    DATA_API_MAX_WORKERS = int(os.environ.get('DATA_API_MAX_WORKERS') or 4)

    # Tenant key sent as 'chave' on every call, handed out after login
    TENANT_KEY = os.environ.get('TENANT_KEY') or 'dev-tenant'

    # Shared operator password (prefer the bcrypt hash in production)
    ACCESS_PASSWORD = os.environ.get('ACCESS_PASSWORD') or 'dev-password'
    ACCESS_PASSWORD_HASH = os.environ.get('ACCESS_PASSWORD_HASH') or ''

    # Bcrypt
    BCRYPT_LOG_ROUNDS = 12  # Cost factor for password hashing

    # Rate limiting (login endpoint)
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI') or 'memory://'

    # Calendar dates cross the service boundary as instants of local midnight
    APP_TIMEZONE = os.environ.get('APP_TIMEZONE') or 'America/Sao_Paulo'

    # List screens
    ITEMS_PER_PAGE = int(os.environ.get('ITEMS_PER_PAGE') or 8)

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    SECURITY_LOG_FILE = os.path.join(os.path.dirname(__file__), 'logs', 'security.log')

    @classmethod
    def configure_logging(cls, app):
        """Configure application logging including security logger."""
        import logging
        from logging.handlers import RotatingFileHandler

        app.logger.setLevel(cls.LOG_LEVEL)

        # Create logs directory if it doesn't exist
        log_dir = os.path.dirname(cls.SECURITY_LOG_FILE)
        os.makedirs(log_dir, exist_ok=True)

        # Configure security logger
        security_logger = logging.getLogger('security')
        security_logger.setLevel(logging.INFO)

        # Handlers are process-wide; avoid stacking them on every create_app()
        if not any(isinstance(h, RotatingFileHandler) for h in security_logger.handlers):
            security_handler = RotatingFileHandler(
                cls.SECURITY_LOG_FILE,
                maxBytes=10485760,  # 10MB
                backupCount=10
            )
            security_handler.setFormatter(logging.Formatter(
                '[%(asctime)s] %(levelname)s: %(message)s'
            ))
            security_logger.addHandler(security_handler)

        # Also log to console in development
        if app.config.get('DEBUG') and not any(
            type(h) is logging.StreamHandler for h in security_logger.handlers
        ):
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter(
                '[%(asctime)s] %(levelname)s: %(message)s'
            ))
            security_logger.addHandler(console_handler)


class DevelopmentConfig(Config):
    """Development environment configuration."""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production environment configuration."""
    DEBUG = False
    TESTING = False

    # Production session security (HTTPS required)
    SESSION_COOKIE_SECURE = True  # HTTPS only
    SESSION_COOKIE_SAMESITE = 'Strict'  # Stricter CSRF protection

    # In production, enforce environment variables
    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

        # Ensure critical environment variables are set
        assert os.environ.get('SECRET_KEY'), 'SECRET_KEY must be set in production'
        assert os.environ.get('DATA_API_URL'), 'DATA_API_URL must be set in production'
        assert os.environ.get('TENANT_KEY'), 'TENANT_KEY must be set in production'
        assert os.environ.get('ACCESS_PASSWORD_HASH'), 'ACCESS_PASSWORD_HASH must be set in production'


class TestingConfig(Config):
    """Testing environment configuration."""
    TESTING = True
    DEBUG = True

    DATA_API_URL = 'http://data-api.test'
    TENANT_KEY = 'test-tenant'
    ACCESS_PASSWORD = 'senha-teste'
    ACCESS_PASSWORD_HASH = ''

    # Disable CSRF for testing
    WTF_CSRF_ENABLED = False

    # Faster password hashing for tests
    BCRYPT_LOG_ROUNDS = 4

    # Disable rate limiting for tests
    RATELIMIT_ENABLED = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
