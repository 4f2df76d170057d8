import re

from storefront.extensions import db


def extract_csrf_token(html):
    match = re.search(r'name="csrf_token" value="([^"]+)"', html)
    assert match, 'no CSRF token in page'
    return match.group(1)


def context_of(captured_templates, name):
    """Context of the last render of template `name`."""
    for template, context in reversed(captured_templates):
        if template.name == name:
            return context
    raise AssertionError(f'{name} was not rendered')


def stored_sessions(app):
    """Store id -> expiry of every session row Flask-Session holds."""
    model = app.session_interface.sql_session_model
    with app.app_context():
        return {row.session_id: row.expiry for row in db.session.query(model)}


def store_id(app, sid):
    return app.config['SESSION_KEY_PREFIX'] + sid
