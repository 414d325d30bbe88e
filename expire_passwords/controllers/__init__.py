# expire_passwords/controllers/__init__.py
"""Blueprints for the login screens and dashboard"""
