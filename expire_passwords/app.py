"""Application factory for Expire Passwords"""
import logging

from flask import Flask, redirect, session, url_for
from jinja2 import ChoiceLoader

from expire_passwords.config import config
from expire_passwords.exceptions import StoreUnavailable
from expire_passwords.extensions import db
from expire_passwords.templates import template_loader

logger = logging.getLogger('expire_passwords')

def create_app(config_name='default', **overrides):
    """Create and configure Flask application"""
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])
    app.config.update(overrides)

    logger.setLevel(app.config['LOG_LEVEL'])
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
        logger.addHandler(handler)

    # Embedded templates take part in normal template lookup
    app.jinja_loader = ChoiceLoader([template_loader, app.jinja_loader])

    # Initialize extensions
    db.init_app(app)

    # Register blueprints
    from expire_passwords.controllers.auth_controller import auth_bp
    from expire_passwords.controllers.dashboard_controller import dashboard_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(dashboard_bp, url_prefix='/dashboard')

    from expire_passwords.commands import expass_cli
    app.cli.add_command(expass_cli)

    @app.route('/')
    def index():
        """Landing page"""
        if 'user_id' in session:
            return redirect(url_for('dashboard.index'))
        return redirect(url_for('auth.login'))

    register_error_handlers(app)

    # Create database tables
    with app.app_context():
        from expire_passwords import models  # noqa: F401
        db.create_all()

    return app

def register_error_handlers(app):
    """Register error handlers"""
    @app.errorhandler(StoreUnavailable)
    def store_unavailable(error):
        db.session.rollback()
        logger.error('Storage unavailable: %s', error)
        return "Service temporarily unavailable", 503

    @app.errorhandler(404)
    def not_found(error):
        return "Page not found", 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return "Internal server error", 500
