# expire_passwords/services/session_service.py
"""Server-side session tracking so all sessions of an account can be revoked"""
import logging
from datetime import datetime

from flask import has_request_context, request, session
from sqlalchemy.exc import SQLAlchemyError

from expire_passwords.exceptions import StoreUnavailable
from expire_passwords.extensions import db
from expire_passwords.models.user import User
from expire_passwords.models.user_session import UserSession
from expire_passwords.utils.security import generate_secure_token, hash_token

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = 'session_token'


class SessionService:
    """Creates, resolves and destroys login sessions"""

    @staticmethod
    def create_session(user) -> str:
        """Start a session for ``user`` and bind it to the browser cookie"""
        token = generate_secure_token()
        record = UserSession(
            user_id=user.id,
            token_hash=hash_token(token),
            ip_address=request.remote_addr if has_request_context() else None
        )
        db.session.add(record)
        db.session.commit()

        session.clear()
        session[SESSION_TOKEN_KEY] = token
        session['user_id'] = user.id
        session['username'] = user.username
        session.permanent = True
        return token

    @staticmethod
    def current_user():
        """Return the user bound to the browser session, or None if revoked"""
        token = session.get(SESSION_TOKEN_KEY)
        if not token:
            return None
        record = UserSession.query.filter_by(token_hash=hash_token(token)).first()
        if record is None:
            return None
        record.last_seen_at = datetime.utcnow()
        db.session.commit()
        return db.session.get(User, record.user_id)

    @staticmethod
    def end_session():
        """Destroy the current browser session only"""
        token = session.get(SESSION_TOKEN_KEY)
        if token:
            UserSession.query.filter_by(token_hash=hash_token(token)).delete()
            db.session.commit()
        session.clear()

    @staticmethod
    def destroy_all_sessions(user) -> int:
        """
        Revoke every session of ``user``

        Returns:
            Number of sessions revoked
        """
        try:
            count = UserSession.query.filter_by(user_id=user.id).delete()
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception('Failed to destroy sessions for user %s', user.id)
            raise StoreUnavailable(f'sessions for user {user.id} could not be destroyed') from exc
        if has_request_context() and session.get('user_id') == user.id:
            session.clear()
        logger.info('Destroyed %d session(s) for user %s', count, user.id)
        return count
