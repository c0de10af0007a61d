"""
Application configuration

Values are read from environment variables (optionally from a .env file).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BACKEND_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BACKEND_DIR.parent

load_dotenv(PROJECT_ROOT / '.env')


def _split_origins(raw: str):
    origins = [o.strip() for o in (raw or '').split(',') if o.strip()]
    if not origins or origins == ['*']:
        return '*'
    return origins


class Config:
    """Base configuration"""
    ENV_NAME = 'base'
    DEBUG = False
    TESTING = False

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', f"sqlite:///{PROJECT_ROOT / 'study_materials.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '3001'))

    CORS_ORIGINS = _split_origins(os.getenv('CORS_ORIGINS', '*'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Built front end, only served in production
    SERVE_STATIC = False
    STATIC_DIST_DIR = os.getenv('STATIC_DIST_DIR', str(PROJECT_ROOT / 'dist'))

    # Placeholder creator attached to every material
    DEFAULT_USER_EMAIL = os.getenv('DEFAULT_USER_EMAIL', 'default@example.com')
    DEFAULT_USER_NAME = os.getenv('DEFAULT_USER_NAME', 'Default User')

    # Client-side admin gate (not a security mechanism)
    ADMIN_USER_ID = os.getenv('ADMIN_USER_ID', 'RRCE')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'RRCE@Study')

    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:3001/api')

    # Include tracebacks in 500 responses
    EXPOSE_ERROR_DETAILS = False


class DevelopmentConfig(Config):
    ENV_NAME = 'development'
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG').upper()
    EXPOSE_ERROR_DETAILS = True


class ProductionConfig(Config):
    ENV_NAME = 'production'
    SERVE_STATIC = True
    CORS_ORIGINS = _split_origins(os.getenv('CORS_ORIGINS', ''))
    API_BASE_URL = os.getenv('API_BASE_URL', 'https://study-material-hub.vercel.app/api')


class TestingConfig(Config):
    ENV_NAME = 'testing'
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite://')
    LOG_LEVEL = 'WARNING'


_CONFIGS = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}


def get_config(name: str = None):
    """Return the config class for `name` (defaults to FLASK_ENV)."""
    name = (name or os.getenv('FLASK_ENV') or 'development').lower()
    return _CONFIGS.get(name, DevelopmentConfig)
