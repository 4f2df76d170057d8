"""
Admin Blueprint

Product management for logged-in users. Each user manages only the
products they created.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from storefront.admin import routes  # noqa: E402, F401
