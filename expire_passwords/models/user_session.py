# expire_passwords/models/user_session.py
"""Server-side login session records"""
from datetime import datetime
from expire_passwords.extensions import db

class UserSession(db.Model):
    """
    One row per active login session.
    The browser only carries the raw token; we keep its hash so that
    every session of a user can be revoked at once.
    """
    __tablename__ = 'user_sessions'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    token_hash = db.Column(db.String(64), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    last_seen_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    ip_address = db.Column(db.String(45))  # IPv6 support

    def __repr__(self):
        return f'<UserSession user_id={self.user_id} created_at={self.created_at}>'
