"""
Error Pages

404 for unmatched routes, 403 for rejected CSRF tokens and a generic 500 page
for anything raised further up the pipeline.
"""

import logging

from flask import g, render_template
from flask_login import AnonymousUserMixin
from flask_wtf.csrf import CSRFError

from storefront.extensions import db

logger = logging.getLogger(__name__)


def _session_is_logged_in():
    """Read the login flag without assuming a session was ever opened."""
    ctx = g.get('request_context')
    current_session = ctx.session if ctx is not None else None
    if current_session is None:
        return False
    return bool(current_session.get('is_logged_in', False))


def page_not_found(error):
    return render_template('404.html', page_title='Page Not Found', path='/404'), 404


def csrf_failed(error):
    logger.warning("Rejected request with bad CSRF token: %s", error.description)
    return render_template('error.html',
                           page_title='Invalid Form Submission',
                           path='/403',
                           message='Your form has expired or is invalid. Please reload the page and try again.'), 403


def bad_request(error):
    return render_template('error.html',
                           page_title='Bad Request',
                           path='/400',
                           message=error.description), 400


def internal_error(error):
    logger.exception("Unhandled error", exc_info=getattr(error, 'original_exception', error))
    db.session.rollback()
    # Flask-Login's template context processor would retry the failed user lookup
    if '_login_user' not in g:
        g._login_user = AnonymousUserMixin()
    return render_template('500.html',
                           page_title='Error!',
                           path='/500',
                           is_authenticated=_session_is_logged_in()), 500


def register_error_handlers(app):
    app.register_error_handler(404, page_not_found)
    app.register_error_handler(CSRFError, csrf_failed)
    app.register_error_handler(400, bad_request)
    app.register_error_handler(500, internal_error)
