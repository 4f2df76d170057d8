"""
Product Image Uploads

Validation and naming are pure functions. The upload hook only checks the
posted file; it is written to disk by ``claim_upload`` once a view decides
to keep it, so requests that never use the image leave nothing behind.
"""

import logging
import os
from datetime import datetime, timezone

from flask import current_app
from werkzeug.utils import secure_filename

from storefront.context import UploadedFile, get_request_context

logger = logging.getLogger(__name__)


def is_allowed_image(mimetype, allowed):
    """Return True if `mimetype` is one of the `allowed` image types."""
    return (mimetype or '').lower() in allowed


def build_stored_filename(original_filename, now):
    """Prefix the original filename with an ISO-8601 UTC timestamp.

    Colons are replaced with hyphens so the name is valid on every
    filesystem, e.g. ``2024-05-01T09-30-12.345Z-shoe.png``. Two uploads with
    the same name within the same millisecond get the same stored name.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    stamp = now.strftime('%Y-%m-%dT%H:%M:%S') + f'.{now.microsecond // 1000:03d}Z'
    return f"{stamp.replace(':', '-')}-{original_filename}"


def accept_upload(file_storage, allowed):
    """Return the sanitised filename of an acceptable image, else None.

    No file chosen, a media type outside `allowed` and a name that sanitises
    to nothing all count as "no image".
    """
    if file_storage is None or not file_storage.filename:
        return None

    if not is_allowed_image(file_storage.mimetype, allowed):
        logger.info("Dropped upload %r with type %s", file_storage.filename, file_storage.mimetype)
        return None

    return secure_filename(file_storage.filename) or None


def save_upload(file_storage, folder, allowed, now=None):
    """Store an uploaded image and describe it.

    Returns None, without writing anything, when the file is not acceptable.
    """
    original = accept_upload(file_storage, allowed)
    if original is None:
        return None

    filename = build_stored_filename(original, now or datetime.now(timezone.utc))
    os.makedirs(folder, exist_ok=True)
    path = os.path.join(folder, filename)
    file_storage.save(path)
    logger.debug("Stored upload %s", path)

    return UploadedFile(
        original_filename=file_storage.filename,
        mimetype=file_storage.mimetype,
        filename=filename,
        path=path,
    )


def claim_upload():
    """Write the image accepted for this request to disk.

    Returns the stored ``UploadedFile``, or None when the request carried no
    acceptable image. Calling it twice stores the file once.
    """
    ctx = get_request_context()
    if ctx.uploaded_file is None and ctx.pending_upload is not None:
        ctx.uploaded_file = save_upload(ctx.pending_upload,
                                        current_app.config['UPLOAD_FOLDER'],
                                        current_app.config['ALLOWED_IMAGE_TYPES'])
        ctx.pending_upload = None
    return ctx.uploaded_file


def delete_upload(folder, filename):
    """Remove a stored image; a file that is already gone is ignored."""
    if not filename:
        return
    try:
        os.remove(os.path.join(folder, filename))
    except FileNotFoundError:
        logger.warning("Image %s was already removed", filename)
