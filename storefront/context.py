"""
Per-request Context

Everything the request pipeline resolves for a request is collected on one
typed object stored at ``g.request_context``.
"""

from dataclasses import dataclass
from typing import Any, Optional

from flask import g


@dataclass
class UploadedFile:
    """Image accepted from the upload field and written to disk"""
    original_filename: str
    mimetype: str
    filename: str
    path: str


@dataclass
class RequestContext:
    session: Optional[Any] = None
    current_user: Optional[Any] = None
    # Accepted image not yet written, see uploads.claim_upload
    pending_upload: Optional[Any] = None
    uploaded_file: Optional[UploadedFile] = None
    csrf_token: Optional[str] = None

    @property
    def is_authenticated(self):
        return self.current_user is not None


def get_request_context():
    """Return the context of the current request, creating it on first use."""
    if 'request_context' not in g:
        g.request_context = RequestContext()
    return g.request_context
