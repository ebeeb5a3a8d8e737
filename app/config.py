"""Application settings.

Values are read from the environment; a ``.env`` file in the project root
is loaded first with python-dotenv, without overriding variables that are
already exported.
"""

import os
from pathlib import Path

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(PROJECT_ROOT / '.env')


def _get_bool(key, default=False):
    raw = os.getenv(key, '').strip().lower()
    if not raw:
        return default
    return raw in ('1', 'true', 'yes', 'on')


def _get_list(key, default):
    raw = os.getenv(key, '').strip()
    if not raw:
        return default
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    DATABASE_URI = os.getenv('DATABASE_URI', f"sqlite:///{PROJECT_ROOT / 'bookstore.db'}")
    SQL_ECHO = _get_bool('SQL_ECHO')
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    CORS_ORIGINS = _get_list('CORS_ORIGINS', ['*'])
    DB_CONNECT_ATTEMPTS = int(os.getenv('DB_CONNECT_ATTEMPTS', '5'))
    # Seconds between attempts while waiting for the database at startup
    DB_CONNECT_DELAY = float(os.getenv('DB_CONNECT_DELAY', '3'))
    WTF_CSRF_ENABLED = True
    TESTING = False
    DEBUG = False


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG').upper()


class TestingConfig(Config):
    TESTING = True
    DATABASE_URI = 'sqlite:///:memory:'
    SQL_ECHO = False
    WTF_CSRF_ENABLED = False
    DB_CONNECT_ATTEMPTS = 1
    DB_CONNECT_DELAY = 0
    LOG_LEVEL = 'WARNING'


CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': Config,
}


def get_config(name=None):
    name = name or os.getenv('BOOKSTORE_ENV', 'production')
    return CONFIGS.get(name, Config)
