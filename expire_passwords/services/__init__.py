# expire_passwords/services/__init__.py
"""Service layer for the rotation policy and its platform adapters"""
