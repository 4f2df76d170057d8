"""
Server-side Sessions

Flask-Session keeps the session data in a store and puts only the session id
in the cookie. ``SESSION_TYPE`` picks the store:

- ``sqlalchemy``: rows in the ``sessions`` table of the shop database. Expired
  rows are swept now and then during requests and by
  ``prune_expired_sessions`` (see ``scripts/prune_sessions.py``).
- ``mongodb``: documents in a MongoDB collection, dropped by the TTL index
  Flask-Session puts on their expiry.
"""

import logging
from datetime import datetime

from flask import current_app
from pymongo import MongoClient

from storefront.extensions import db, sess

logger = logging.getLogger(__name__)

SESSION_TYPES = ('sqlalchemy', 'mongodb')


def init_sessions(app):
    """Hand the configured store's client to Flask-Session and install it."""
    session_type = app.config['SESSION_TYPE']
    if session_type not in SESSION_TYPES:
        raise ValueError(f'Unknown SESSION_TYPE {session_type!r}')

    if session_type == 'sqlalchemy':
        app.config['SESSION_SQLALCHEMY'] = db
    elif 'SESSION_MONGODB' not in app.config:
        app.config['SESSION_MONGODB'] = MongoClient(app.config['MONGODB_URI'])

    sess.init_app(app)
    logger.debug("Sessions stored with %s", session_type)


def prune_expired_sessions():
    """Delete stored sessions whose expiry has passed.

    Returns:
        Number of sessions removed. Always 0 for MongoDB, which expires
        documents by itself.
    """
    model = getattr(current_app.session_interface, 'sql_session_model', None)
    if model is None:
        return 0

    removed = db.session.query(model).filter(
        model.expiry <= datetime.utcnow()
    ).delete(synchronize_session=False)
    db.session.commit()
    logger.info("Pruned %d expired sessions", removed)
    return removed
