# expire_passwords/utils/decorators.py
"""Authentication decorators"""
from functools import wraps
from flask import flash, g, redirect, session, url_for
from expire_passwords.services.session_service import SessionService

def login_required(f):
    """
    Decorator to ensure user is authenticated before accessing route
    Sessions revoked server-side are rejected even if the cookie survives
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user_id' not in session:
            flash('Please log in to access this page.', 'warning')
            return redirect(url_for('auth.login'))

        user = SessionService.current_user()
        if not user or not user.is_active:
            session.clear()
            flash('Session invalid. Please log in again.', 'error')
            return redirect(url_for('auth.login'))

        g.user = user
        return f(*args, **kwargs)
    return decorated_function
