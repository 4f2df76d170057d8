import pytest
from flask import template_rendered
from werkzeug.security import generate_password_hash

from storefront import create_app
from storefront.config import TestConfig
from storefront.extensions import db
from storefront.models import User, Product


@pytest.fixture()
def make_app(tmp_path):
    """Build an app from TestConfig with extra config overrides."""
    def _make(**overrides):
        attrs = {'UPLOAD_FOLDER': str(tmp_path / 'images')}
        attrs.update(overrides)
        config_class = type('LocalTestConfig', (TestConfig,), attrs)
        return create_app(config_class)
    return _make


@pytest.fixture()
def app(make_app):
    return make_app()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def upload_folder(app):
    return app.config['UPLOAD_FOLDER']


@pytest.fixture()
def create_user(app):
    def _create(email='shopper@example.com', password='secret123'):
        with app.app_context():
            user = User(email=email, password_hash=generate_password_hash(password))
            db.session.add(user)
            db.session.commit()
            return user.id
    return _create


@pytest.fixture()
def create_product(app):
    def _create(user_id, title='Red Shoe', price=19.99, description='A very red shoe', image_url=None):
        with app.app_context():
            product = Product(title=title, price=price, description=description,
                              image_url=image_url, user_id=user_id)
            db.session.add(product)
            db.session.commit()
            return product.id
    return _create


@pytest.fixture()
def login(client):
    def _login(email='shopper@example.com', password='secret123'):
        return client.post('/login', data={'email': email, 'password': password})
    return _login


@pytest.fixture()
def captured_templates(app):
    recorded = []

    def record(sender, template, context, **extra):
        recorded.append((template, context))

    template_rendered.connect(record, app)
    yield recorded
    template_rendered.disconnect(record, app)

