# expire_passwords/models/user_meta.py
"""Per-user key/value metadata"""
from expire_passwords.extensions import db

class UserMeta(db.Model):
    """
    Free-form metadata attached to a user account.
    Rotation metadata lives here under its own key.
    """
    __tablename__ = 'user_meta'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'meta_key', name='uq_user_meta_key'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    meta_key = db.Column(db.String(255), nullable=False)
    meta_value = db.Column(db.Text)

    def __repr__(self):
        return f'<UserMeta user_id={self.user_id} key={self.meta_key}>'
