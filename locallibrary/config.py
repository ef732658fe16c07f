"""Application configuration, read from environment variables."""

import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # SECURITY: set a secure random key in production via env var
    SECRET_KEY = os.environ.get('CATALOG_SECRET') or "dev-secret-change-me"
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f"sqlite:///{os.path.join(BASE_DIR, 'catalog.db')}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('CATALOG_LOG_LEVEL') or "INFO"
    LOG_DIR = os.environ.get('CATALOG_LOG_DIR')  # None -> console only
    CONFIGURE_LOGGING = True

    # Talisman: redirect to https and mark the session cookie secure
    FORCE_HTTPS = _env_flag('CATALOG_FORCE_HTTPS')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    WTF_CSRF_ENABLED = False
    CONFIGURE_LOGGING = False
    FORCE_HTTPS = False
