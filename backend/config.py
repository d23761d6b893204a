import os
from dotenv import load_dotenv
from urllib.parse import quote_plus

load_dotenv()

class Config:
    """Base configuration class"""
    # Production: SECRET_KEY must be set via environment variable
    # Development: Falls back to dev key (only for local development)
    _secret_key = os.environ.get('SECRET_KEY')
    if not _secret_key:
        if os.environ.get('FLASK_ENV', 'development') == 'production':
            raise ValueError("SECRET_KEY environment variable must be set in production!")
        _secret_key = 'dev-secret-key-change-in-production'
    SECRET_KEY = _secret_key

    # Database Configuration
    DB_HOST = os.environ.get('DB_HOST', 'localhost')
    DB_PORT = os.environ.get('DB_PORT', '3306')
    DB_USER = os.environ.get('DB_USER', 'dwatson')
    DB_PASSWORD = os.environ.get('DB_PASSWORD', 'dwatson')
    DB_NAME = os.environ.get('DB_NAME', 'dwatson_store')

    # URL-encode password to handle special characters like @, #, etc.
    encoded_password = quote_plus(DB_PASSWORD)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f"mysql+pymysql://{DB_USER}:{encoded_password}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 3600,
    }

    # Application Settings
    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    # In production, DEBUG must be False
    DEBUG = os.environ.get('FLASK_DEBUG', 'False') == 'True' if FLASK_ENV == 'production' else os.environ.get('FLASK_DEBUG', 'True') == 'True'
    TESTING = False

    # Admin API credentials (X-API-Key / X-API-Secret headers)
    API_KEY = os.environ.get('API_KEY', 'dev-admin-key')
    API_SECRET = os.environ.get('API_SECRET', 'dev-admin-secret')

    # Homepage rendering
    STORE_NAME = os.environ.get('STORE_NAME', 'D. Watson')
    # Empty: the homepage reads sections from this app in-process.
    # Set it only when the section API runs on a separate host.
    STOREFRONT_API_URL = os.environ.get('STOREFRONT_API_URL', '')
    SECTION_FETCH_TIMEOUT = float(os.environ.get('SECTION_FETCH_TIMEOUT', '8'))

    # Public cache lifetimes (seconds)
    PUBLIC_SECTIONS_MAX_AGE = 300
    SECTION_DATA_MAX_AGE = 120


class TestingConfig(Config):
    """Configuration used by the test suite"""
    TESTING = True
    FLASK_ENV = 'testing'
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    API_KEY = 'test-key'
    API_SECRET = 'test-secret'
    STOREFRONT_API_URL = ''
    SECTION_FETCH_TIMEOUT = 2.0
