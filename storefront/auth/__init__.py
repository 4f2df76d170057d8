"""
Auth Blueprint

Signup, login and logout for shop customers.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from storefront.auth import routes  # noqa: E402, F401
