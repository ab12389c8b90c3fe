"""
Flask application configuration classes.
Provides configuration for development, production, and testing environments.
"""

import os


class Config:
    """Base configuration class with common settings."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or 'instance/reservations.db'

    # Room registry (external asset service)
    ROOM_REGISTRY_BASE_URL = os.environ.get('ROOM_REGISTRY_BASE_URL') or 'http://localhost:9000'
    ROOM_REGISTRY_ROOM_PATH = os.environ.get('ROOM_REGISTRY_ROOM_PATH') or '/api/v3/assets/rooms'
    ROOM_REGISTRY_READY_PATH = (
        os.environ.get('ROOM_REGISTRY_READY_PATH') or '/api/v3/assets/health/ready'
    )
    ROOM_REGISTRY_TIMEOUT = float(os.environ.get('ROOM_REGISTRY_TIMEOUT', 5))
    # Only idempotent GETs are retried
    ROOM_REGISTRY_RETRIES = int(os.environ.get('ROOM_REGISTRY_RETRIES', 0))

    # Application settings
    APP_NAME = 'Reservations'
    API_VERSION = os.environ.get('API_VERSION') or '3.0.0'
    API_AUTHORS = [
        author.strip()
        for author in (os.environ.get('API_AUTHORS') or 'Reservations Team').split(',')
        if author.strip()
    ]


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False

    DATABASE_PATH = os.environ.get('DATABASE_PATH') or Config.DATABASE_PATH

    @classmethod
    def validate(cls) -> None:
        """Validate that required production environment variables are set."""
        if not os.environ.get('DATABASE_PATH'):
            raise ValueError("DATABASE_PATH environment variable must be set in production")
        if not os.environ.get('ROOM_REGISTRY_BASE_URL'):
            raise ValueError("ROOM_REGISTRY_BASE_URL environment variable must be set in production")


class TestConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    DATABASE_PATH = os.environ.get('DATABASE_PATH', ':memory:')
    SECRET_KEY = 'test-secret-key'
    ROOM_REGISTRY_BASE_URL = 'http://registry.test'
    ROOM_REGISTRY_TIMEOUT = 1.0
    ROOM_REGISTRY_RETRIES = 0


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
