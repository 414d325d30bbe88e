"""Authentication service for Expire Passwords"""
import logging

from flask import current_app
from sqlalchemy import func, or_

from expire_passwords.extensions import db
from expire_passwords.models.user import Role, User
from expire_passwords.utils import security

logger = logging.getLogger(__name__)

class AuthService:
    """Handles authentication operations"""

    @staticmethod
    def hash_password(password):
        """Hash password using bcrypt at the configured work factor"""
        return security.hash_password(password, rounds=current_app.config['BCRYPT_ROUNDS'])

    @staticmethod
    def verify_password(password, stored_hash):
        """Verify password against stored hash using constant-time comparison"""
        return security.verify_password(password, stored_hash)

    @staticmethod
    def find_by_login(login):
        """Look up an account by username or e-mail"""
        login = (login or '').strip()
        if not login:
            return None
        return User.query.filter(
            or_(User.username == login, func.lower(User.email) == login.lower())
        ).first()

    @staticmethod
    def authenticate(username, password):
        """Return the active user for valid credentials, else None"""
        user = User.query.filter_by(username=username, is_active=True).first()
        if user and AuthService.verify_password(password, user.password_hash):
            return user
        logger.info('Failed login for %r', username)
        return None

    @staticmethod
    def create_user(username, password, email=None, roles=()):
        """Create an account with the given role names"""
        user = User(
            username=username,
            email=email or None,
            password_hash=AuthService.hash_password(password),
            roles=[Role.get_or_create(name) for name in roles]
        )
        db.session.add(user)
        db.session.commit()
        logger.info('Created user %s with roles %s', user.username, sorted(user.role_names))
        return user

    @staticmethod
    def set_password(user, password):
        """Replace the stored credential"""
        user.password_hash = AuthService.hash_password(password)
        db.session.commit()
