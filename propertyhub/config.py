import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def default_cache_type(redis_url):
    """Redis when a shared backend is configured, otherwise no caching.

    A per-process cache would only be flushed in the worker that handled the
    write, so it is never the default outside development.
    """
    return 'RedisCache' if redis_url else 'NullCache'


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///propertyhub.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)

    # Result cache (Flask-Caching)
    REDIS_URL = os.getenv('REDIS_URL')
    CACHE_TYPE = os.getenv('CACHE_TYPE') or default_cache_type(REDIS_URL)
    CACHE_NO_NULL_WARNING = True
    CACHE_REDIS_URL = REDIS_URL
    CACHE_DEFAULT_TIMEOUT = int(os.getenv('CACHE_DEFAULT_TIMEOUT', 60))
    CACHE_KEY_PREFIX = 'propertyhub:'

    RATELIMIT_ENABLED = True
    RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '200 per day;50 per hour')

    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:5173')
    MAIL_FROM = os.getenv('MAIL_FROM', 'PropertyHub <noreply@propertyhub.app>')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    BCRYPT_ROUNDS = 10
    TALISMAN_ENABLED = False


class DevelopmentConfig(Config):
    DEBUG = True
    # The dev server runs a single process
    CACHE_TYPE = os.getenv('CACHE_TYPE') or ('RedisCache' if Config.REDIS_URL else 'SimpleCache')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SECRET_KEY = 'testing-secret-key'
    JWT_SECRET_KEY = 'testing-jwt-secret-key-with-enough-length'
    CACHE_TYPE = 'SimpleCache'
    RATELIMIT_ENABLED = False
    # Minimum bcrypt cost keeps the suite fast
    BCRYPT_ROUNDS = 4


class ProductionConfig(Config):
    DEBUG = False
    TALISMAN_ENABLED = True


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(config_name=None):
    """Resolve a config class from a name or the FLASK_ENV variable"""
    name = config_name or os.getenv('FLASK_ENV', 'development')
    return config_by_name.get(name, DevelopmentConfig)
