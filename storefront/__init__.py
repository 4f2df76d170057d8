"""
Storefront - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance. The factory is the only place the
request pipeline is assembled; the session backend and database options come
from the configuration class.
"""

import logging
import os

from flask import Flask, jsonify, session
from storefront.extensions import db, login_manager
from storefront.config import Config

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    from storefront.access_log import configure_logging
    configure_logging(app)

    os.makedirs(app.instance_path, exist_ok=True)
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Server-side sessions
    from storefront.sessions import init_sessions
    init_sessions(app)

    # Request pipeline and error pages
    from storefront.pipeline import register_pipeline
    from storefront.errors import register_error_handlers
    register_pipeline(app)
    register_error_handlers(app)

    # Register blueprints
    from storefront.auth import auth_bp
    from storefront.admin import admin_bp
    from storefront.shop import shop_bp

    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(shop_bp)
    app.register_blueprint(auth_bp)

    if app.config['ENABLE_DEBUG_SESSION_ROUTE']:
        logger.warning("ENABLE_DEBUG_SESSION_ROUTE is on: /debug-session exposes raw session data")
        app.add_url_rule('/debug-session', 'debug_session', debug_session)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from storefront.models import User
        return User.get_by_id(user_id)

    # Create database tables
    with app.app_context():
        db.create_all()

    return app


def debug_session():
    """Raw session contents, for local troubleshooting only."""
    return jsonify(dict(session))
