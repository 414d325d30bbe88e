# expire_passwords/__init__.py
"""Expire Passwords - periodic password rotation for a login system"""
__version__ = "1.0.0"
