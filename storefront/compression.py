"""
Response Compression

Gzips text responses for clients that send ``Accept-Encoding: gzip``.
"""

import gzip

COMPRESSIBLE_TYPES = frozenset({
    'text/html',
    'text/css',
    'text/plain',
    'text/xml',
    'text/javascript',
    'application/json',
    'application/javascript',
    'application/xml',
    'image/svg+xml',
})


def should_compress(request, response, min_size):
    """Decide whether `response` is worth gzipping for `request`."""
    if 'gzip' not in request.headers.get('Accept-Encoding', '').lower():
        return False
    if response.direct_passthrough or response.is_streamed:
        return False
    if response.status_code < 200 or response.status_code in (204, 304):
        return False
    if 'Content-Encoding' in response.headers:
        return False
    if response.mimetype not in COMPRESSIBLE_TYPES:
        return False
    return (response.content_length or 0) >= min_size


def compress_response(response, level=6):
    """Gzip the body in place, keeping the original if gzip does not help."""
    body = response.get_data()
    compressed = gzip.compress(body, compresslevel=level)
    if len(compressed) >= len(body):
        return response

    response.set_data(compressed)
    response.headers['Content-Encoding'] = 'gzip'
    response.vary.add('Accept-Encoding')
    return response
