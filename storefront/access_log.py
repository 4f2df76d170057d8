"""
Logging Setup

Application loggers use ``logging.getLogger(__name__)``. Requests are
written to a separate access log in the Apache "combined" format.
"""

import logging
import os
from datetime import datetime, timezone

access_logger = logging.getLogger('storefront.access')


def configure_logging(app):
    """Attach the access log file handler and set application log levels."""
    logging.getLogger('storefront').setLevel(logging.DEBUG if app.debug else logging.INFO)

    access_logger.setLevel(logging.INFO)
    access_logger.propagate = False

    path = app.config.get('ACCESS_LOG_PATH')
    if not path:
        return

    path = os.path.abspath(path)
    for handler in access_logger.handlers:
        if getattr(handler, 'baseFilename', None) == path:
            return

    handler = logging.FileHandler(path, mode='a', encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(message)s'))
    access_logger.addHandler(handler)


def format_access_line(request, response, now=None):
    """Render one request as a combined-format log line."""
    now = now or datetime.now(timezone.utc)
    user = request.remote_user or '-'
    request_line = f'{request.method} {request.full_path.rstrip("?")} {request.environ.get("SERVER_PROTOCOL", "HTTP/1.1")}'
    size = response.content_length
    return '{addr} - {user} [{time}] "{line}" {status} {size} "{referrer}" "{agent}"'.format(
        addr=request.remote_addr or '-',
        user=user,
        time=now.strftime('%d/%b/%Y:%H:%M:%S %z'),
        line=request_line,
        status=response.status_code,
        size=size if size is not None else '-',
        referrer=request.referrer or '-',
        agent=request.user_agent.string or '-',
    )


def log_request(request, response):
    access_logger.info(format_access_line(request, response))
