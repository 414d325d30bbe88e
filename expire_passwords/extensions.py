# expire_passwords/extensions.py
"""Flask extensions initialization"""
from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()
