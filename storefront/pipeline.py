"""
Request Pipeline

Registers the per-request hooks in the order they must run:

    session -> user -> CSRF check -> CSRF token -> upload check -> routes

and, on the way out, security headers, compression and the access log.
Flask runs ``before_request`` hooks in registration order and
``after_request`` hooks in reverse registration order.
"""

from flask import abort, current_app, get_flashed_messages, request, session
from flask_login import current_user
from flask_wtf.csrf import generate_csrf

from storefront.access_log import log_request
from storefront.compression import compress_response, should_compress
from storefront.context import get_request_context
from storefront.extensions import csrf
from storefront.uploads import accept_upload

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Referrer-Policy': 'no-referrer',
    'Cross-Origin-Opener-Policy': 'same-origin',
    'X-DNS-Prefetch-Control': 'off',
}


def resolve_session():
    """Record the session Flask opened from the cookie."""
    get_request_context().session = session._get_current_object()


def attach_user():
    """Load the user referenced by the session, if it still exists.

    A missing user leaves the request anonymous; a failing lookup raises and
    ends in the 500 page.
    """
    user = current_user._get_current_object()
    if user.is_authenticated:
        get_request_context().current_user = user


def issue_csrf_token():
    get_request_context().csrf_token = generate_csrf()


def handle_upload():
    """Check the single image posted under the upload field.

    An acceptable file is kept on the request context until a view claims
    it with ``uploads.claim_upload``; nothing is written here.
    """
    if request.method != 'POST':
        return

    field = current_app.config['UPLOAD_FIELD']
    files = request.files.getlist(field)
    if not files:
        return
    if len(files) > 1:
        abort(400, description=f'Only one file may be sent as "{field}".')

    if accept_upload(files[0], current_app.config['ALLOWED_IMAGE_TYPES']):
        get_request_context().pending_upload = files[0]


def inject_template_locals():
    """Values every template can use.

    Built from the request context only, so error pages render even when the
    session or the user could not be resolved.
    """
    ctx = get_request_context()
    messages = get_flashed_messages(with_categories=True) if ctx.session is not None else []
    return dict(
        is_authenticated=ctx.is_authenticated,
        csrf_token=ctx.csrf_token or '',
        flash_messages=messages,
    )


def set_security_headers(response):
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


def compress(response):
    if should_compress(request, response, current_app.config['COMPRESS_MIN_SIZE']):
        compress_response(response, current_app.config['COMPRESS_LEVEL'])
    return response


def write_access_log(response):
    log_request(request, response)
    return response


def register_pipeline(app):
    """Wire the request hooks onto `app` in pipeline order."""
    app.before_request(resolve_session)
    app.before_request(attach_user)
    # CSRFProtect adds its validation hook here
    csrf.init_app(app)
    app.before_request(issue_csrf_token)
    app.before_request(handle_upload)

    app.context_processor(inject_template_locals)

    app.after_request(write_access_log)
    app.after_request(compress)
    app.after_request(set_security_headers)
