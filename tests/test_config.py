"""Test configuration loading"""
from datetime import timedelta

from expire_passwords.app import create_app
from expire_passwords.config import Config, config


def test_development_config():
    """Verify development configuration loads correctly"""
    app = create_app('development', SQLALCHEMY_DATABASE_URI='sqlite:///:memory:')
    assert app.config['DEBUG'] is True
    assert app.config['EXPIRE_PASSWORDS_DEFAULT_LIMIT'] == 90
    assert 'SECRET_KEY' in app.config


def test_testing_config_uses_fast_hashing():
    app = create_app('testing')
    assert app.config['TESTING'] is True
    assert app.config['BCRYPT_ROUNDS'] < Config.BCRYPT_ROUNDS
    assert app.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite:///:memory:'


def test_rotation_defaults():
    assert Config.EXPIRE_PASSWORDS_EXEMPT_ROLES == ('administrator',)
    assert Config.EXPIRE_PASSWORDS_OPTION_NAME == 'user_expass_settings'
    assert Config.PASSWORD_RESET_KEY_LIFETIME == timedelta(days=1)
    assert config['default'] is config['development']
