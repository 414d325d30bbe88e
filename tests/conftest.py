"""Shared fixtures for Expire Passwords tests"""
from dataclasses import dataclass, field
from typing import FrozenSet

import pytest

from expire_passwords.app import create_app
from expire_passwords.extensions import db
from expire_passwords.services.auth_services import AuthService

NOW = 1_700_000_000
DAY = 86400


@pytest.fixture
def app():
    """Application on an in-memory database with an active app context"""
    app = create_app('testing', SECRET_KEY='test-secret')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory creating persisted accounts"""
    def _make_user(username='alice', password='correct horse', roles=('subscriber',), email=None):
        return AuthService.create_user(username, password,
                                       email=email or f'{username}@example.com',
                                       roles=roles)
    return _make_user


@dataclass
class FakeUser:
    id: int = 1
    username: str = 'alice'
    role_names: FrozenSet[str] = field(default_factory=lambda: frozenset({'subscriber'}))
    password_hash: str = ''
    is_active: bool = True


class FakeStore:
    """In-memory metadata store recording every write"""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []

    def get(self, user_id):
        return self.data.get(user_id)

    def add(self, user_id, value):
        self.writes.append(('add', user_id, value))
        return self.data.setdefault(user_id, value)

    def set(self, user_id, value):
        self.writes.append(('set', user_id, value))
        self.data[user_id] = value


class FakeClock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
