"""
Flask Extensions

Created unbound here and initialised in the application factory.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_session import Session
from flask_wtf.csrf import CSRFProtect

# Database instance
db = SQLAlchemy()

# Login manager for user authentication
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Please log in to access this page.'
login_manager.login_message_category = 'warning'

# Server-side sessions, the cookie only carries the session id
sess = Session()

# CSRF protection for every state-changing request
csrf = CSRFProtect()
