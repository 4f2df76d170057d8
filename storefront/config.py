"""
Configuration settings for the Storefront application
"""
import os
from datetime import timedelta

from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

# Values from a .env file in the project root; real environment variables win
load_dotenv(os.path.join(basedir, '.env'))


class Config:
    """Flask application configuration"""

    # Secret used to sign CSRF tokens
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'shop.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Server-side sessions (Flask-Session): 'sqlalchemy' keeps them next to
    # the shop data, 'mongodb' keeps them in a document collection
    SESSION_TYPE = os.environ.get('SESSION_TYPE') or 'sqlalchemy'
    SESSION_PERMANENT = True
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_KEY_PREFIX = 'session:'
    SESSION_SQLALCHEMY_TABLE = 'sessions'
    # Expired rows are also swept on about one request in this many
    SESSION_CLEANUP_N_REQUESTS = 100
    MONGODB_URI = os.environ.get('MONGODB_URI') or 'mongodb://localhost:27017'
    SESSION_MONGODB_DB = os.environ.get('MONGODB_DB') or 'shop'
    SESSION_MONGODB_COLLECT = 'sessions'

    # Product image uploads
    UPLOAD_FOLDER = os.path.join(basedir, 'images')
    UPLOAD_FIELD = 'image'
    ALLOWED_IMAGE_TYPES = frozenset({'image/png', 'image/jpg', 'image/jpeg'})

    # Access log and compression
    ACCESS_LOG_PATH = os.path.join(basedir, 'access.log')
    COMPRESS_MIN_SIZE = 500
    COMPRESS_LEVEL = 6

    # CSRF tokens live as long as the session
    WTF_CSRF_TIME_LIMIT = None

    # Dumps the raw session as JSON. Never enable in production.
    ENABLE_DEBUG_SESSION_ROUTE = False

    # Application settings
    PRODUCTS_PER_PAGE = 6
    PORT = int(os.environ.get('PORT') or 3000)


class MongoConfig(Config):
    """Sessions kept in MongoDB, cookie lives for the browser session"""
    SESSION_TYPE = 'mongodb'
    SESSION_PERMANENT = False
    # Lifetime of the stored document, removed by MongoDB's TTL index
    PERMANENT_SESSION_LIFETIME = timedelta(days=14)


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SESSION_TYPE = 'sqlalchemy'
    WTF_CSRF_ENABLED = False
    # Let uncaught errors reach the 500 page instead of the test client
    PROPAGATE_EXCEPTIONS = False
    ACCESS_LOG_PATH = None
    # Expired sessions are pruned explicitly where a test needs it
    SESSION_CLEANUP_N_REQUESTS = None
