"""Configuration management for Expire Passwords"""
import os
import secrets
from datetime import timedelta

class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///expire_passwords.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PERMANENT_SESSION_LIFETIME = timedelta(hours=1)

    # Session cookie hardening
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Rotation policy defaults, used when the stored option is absent
    EXPIRE_PASSWORDS_DEFAULT_LIMIT = int(os.environ.get('EXPIRE_PASSWORDS_DEFAULT_LIMIT', 90))
    EXPIRE_PASSWORDS_EXEMPT_ROLES = ('administrator',)
    EXPIRE_PASSWORDS_OPTION_NAME = 'user_expass_settings'
    EXPIRY_WARNING_DAYS = 30

    # Accounts
    MIN_PASSWORD_LENGTH = 8
    DEFAULT_ROLE = 'subscriber'

    # Password reset keys
    PASSWORD_RESET_KEY_LIFETIME = timedelta(days=1)
    PASSWORD_RESET_NOTIFIER = None  # callable(user, url); logs only when unset

    # bcrypt work factor
    BCRYPT_ROUNDS = 12

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False

class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True

class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True

    # Use in-memory database for tests
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # Faster hashing for tests
    BCRYPT_ROUNDS = 4

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
