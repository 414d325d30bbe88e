# expire_passwords/models/__init__.py
"""Database models for Expire Passwords"""
from .user import User, Role, user_roles
from .user_meta import UserMeta
from .option import Option
from .user_session import UserSession
from .password_reset_key import PasswordResetKey

__all__ = ['User', 'Role', 'user_roles', 'UserMeta', 'Option', 'UserSession', 'PasswordResetKey']
