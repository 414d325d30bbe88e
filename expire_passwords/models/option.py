"""Site option model"""
from expire_passwords.extensions import db

class Option(db.Model):
    """Named configuration value editable by administrators"""
    __tablename__ = 'options'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(191), unique=True, nullable=False)
    value = db.Column(db.JSON)

    def __repr__(self):
        return f'<Option {self.name}>'
