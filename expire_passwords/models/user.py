"""User and role models for Expire Passwords"""
from datetime import datetime
from expire_passwords.extensions import db

user_roles = db.Table(
    'user_roles',
    db.Column('user_id', db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    db.Column('role_id', db.Integer, db.ForeignKey('roles.id', ondelete='CASCADE'), primary_key=True)
)

class Role(db.Model):
    """Role identifier an account can hold"""
    __tablename__ = 'roles'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False)

    def __repr__(self):
        return f'<Role {self.name}>'

    @classmethod
    def get_or_create(cls, name):
        """Return the role called ``name``, adding it to the session if new"""
        role = cls.query.filter_by(name=name).first()
        if role is None:
            role = cls(name=name)
            db.session.add(role)
        return role

class User(db.Model):
    """User account owned by the identity platform"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=True)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True)

    # Relationships
    roles = db.relationship('Role', secondary=user_roles, lazy='selectin')
    meta = db.relationship('UserMeta', backref='user',
                           lazy=True, cascade='all, delete-orphan')
    sessions = db.relationship('UserSession', backref='user',
                               lazy=True, cascade='all, delete-orphan')
    reset_keys = db.relationship('PasswordResetKey', backref='user',
                                 lazy=True, cascade='all, delete-orphan')

    def __repr__(self):
        return f'<User {self.username}>'

    @property
    def role_names(self):
        """Set of role identifiers held by this account"""
        return frozenset(role.name for role in self.roles)
