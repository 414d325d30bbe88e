# expire_passwords/services/reset_key_service.py
"""Issuance and checking of single-use password reset keys"""
import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from expire_passwords.exceptions import ExpiredResetKey, InvalidResetKey, ResetKeyError
from expire_passwords.extensions import db
from expire_passwords.models.password_reset_key import PasswordResetKey
from expire_passwords.models.user import User
from expire_passwords.utils.security import generate_secure_token, hash_token, tokens_match

logger = logging.getLogger(__name__)


class ResetKeyService:
    """
    One live key per account; issuing a new key replaces the previous one

    Args:
        lifetime: how long an issued key stays valid
    """

    def __init__(self, lifetime: timedelta = timedelta(days=1)):
        self.lifetime = lifetime

    def issue(self, user) -> str:
        """
        Issue a new reset key for ``user``

        Raises:
            ResetKeyError: if the account cannot receive a key
        """
        if not getattr(user, 'is_active', True):
            raise ResetKeyError(f'user {user.id} is inactive')

        key = generate_secure_token(20)
        now = datetime.utcnow()
        try:
            PasswordResetKey.query.filter_by(user_id=user.id).delete()
            db.session.add(PasswordResetKey(
                user_id=user.id,
                key_hash=hash_token(key),
                created_at=now,
                expires_at=now + self.lifetime
            ))
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise ResetKeyError(f'reset key for user {user.id} could not be stored') from exc

        logger.info('Issued password reset key for user %s', user.id)
        return key

    def check(self, key: str, login: str):
        """
        Resolve a key and login name to the account it was issued for

        Raises:
            InvalidResetKey: unknown login or non-matching key
            ExpiredResetKey: matching key past its lifetime
        """
        if not key or not login:
            raise InvalidResetKey('missing key or login')

        user = User.query.filter_by(username=login).first()
        if user is None:
            raise InvalidResetKey('unknown login')

        record = PasswordResetKey.query.filter_by(user_id=user.id).first()
        if record is None or not tokens_match(key, record.key_hash):
            raise InvalidResetKey('key does not match')

        if record.is_expired():
            raise ExpiredResetKey('key expired')

        return user

    def consume(self, user) -> None:
        """Invalidate the key of ``user`` after a successful reset"""
        PasswordResetKey.query.filter_by(user_id=user.id).delete()
        db.session.commit()
