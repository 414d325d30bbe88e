# expire_passwords/models/password_reset_key.py
"""Password reset key model"""
from datetime import datetime
from expire_passwords.extensions import db

class PasswordResetKey(db.Model):
    """
    Single-use, time-bounded password reset key.
    Only the SHA-256 of the key is stored.
    """
    __tablename__ = 'password_reset_keys'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, unique=True)
    key_hash = db.Column(db.String(64), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    expires_at = db.Column(db.DateTime, nullable=False)

    def __repr__(self):
        return f'<PasswordResetKey user_id={self.user_id} expires_at={self.expires_at}>'

    def is_expired(self, now=None):
        """Check if the key has outlived its lifetime"""
        return (now or datetime.utcnow()) > self.expires_at
