import gzip
import logging

from sqlalchemy.exc import OperationalError

from storefront.access_log import access_logger
from storefront.models import User, Product
from tests.helpers import context_of


def test_first_request_gets_session_cookie(client):
    r = client.get('/')
    assert r.status_code == 200
    cookies = r.headers.getlist('Set-Cookie')
    assert any(c.startswith('session=') for c in cookies)
    assert any('Expires=' in c for c in cookies if c.startswith('session='))
    assert any('HttpOnly' in c for c in cookies)


def test_existing_session_is_reused(client):
    client.get('/')
    sid = client.get_cookie('session').value
    r = client.get('/products')
    assert r.status_code == 200
    assert client.get_cookie('session').value == sid


def test_unauthenticated_index(client, captured_templates):
    r = client.get('/')
    assert r.status_code == 200
    context = context_of(captured_templates, 'shop/index.html')
    assert context['is_authenticated'] is False
    assert context['csrf_token']
    assert 'Login' in r.get_data(as_text=True)


def test_dangling_user_reference_is_anonymous(client, captured_templates):
    with client.session_transaction() as sess:
        sess['_user_id'] = '4242'
        sess['is_logged_in'] = True

    r = client.get('/')
    assert r.status_code == 200
    assert context_of(captured_templates, 'shop/index.html')['is_authenticated'] is False

    # Login-protected pages still treat the client as a guest
    r = client.get('/cart')
    assert r.status_code == 302
    assert '/login' in r.headers['Location']


def test_logged_in_user_is_attached(client, create_user, login, captured_templates):
    create_user()
    r = login()
    assert r.status_code == 302

    client.get('/')
    assert context_of(captured_templates, 'shop/index.html')['is_authenticated'] is True


def test_admin_post_without_login_is_redirected(app, client):
    r = client.post('/admin/add-product', data={
        'title': 'Blue Hat', 'price': '5', 'description': 'A blue hat'})
    assert r.status_code == 302
    assert '/login' in r.headers['Location']
    with app.app_context():
        assert Product.query.count() == 0


def test_unknown_path_renders_404(client, captured_templates):
    r = client.get('/no/such/page')
    assert r.status_code == 404
    context = context_of(captured_templates, '404.html')
    assert context['page_title'] == 'Page Not Found'
    assert context['path'] == '/404'


def test_user_lookup_failure_renders_500(client, create_user, login, captured_templates, monkeypatch):
    create_user()
    login()

    def broken_lookup(cls, user_id):
        raise OperationalError('SELECT users', {}, Exception('database disconnected'))

    monkeypatch.setattr(User, 'get_by_id', classmethod(broken_lookup))

    r = client.get('/')
    assert r.status_code == 500
    context = context_of(captured_templates, '500.html')
    assert context['page_title'] == 'Error!'
    assert context['path'] == '/500'
    assert context['is_authenticated'] is True


def test_500_page_without_login_flag(client, monkeypatch, captured_templates):
    with client.session_transaction() as sess:
        sess['_user_id'] = '1'

    def broken_lookup(cls, user_id):
        raise OperationalError('SELECT users', {}, Exception('database disconnected'))

    monkeypatch.setattr(User, 'get_by_id', classmethod(broken_lookup))

    r = client.get('/')
    assert r.status_code == 500
    assert context_of(captured_templates, '500.html')['is_authenticated'] is False


def test_debug_session_route_is_off_by_default(client):
    assert client.get('/debug-session').status_code == 404


def test_debug_session_is_stable_between_calls(make_app):
    client = make_app(ENABLE_DEBUG_SESSION_ROUTE=True).test_client()
    client.get('/')

    first = client.get('/debug-session')
    second = client.get('/debug-session')
    assert first.status_code == 200
    assert first.get_json() == second.get_json()
    assert 'csrf_token' in first.get_json()


def test_security_headers(client):
    r = client.get('/')
    assert r.headers['X-Content-Type-Options'] == 'nosniff'
    assert r.headers['X-Frame-Options'] == 'SAMEORIGIN'


def test_gzip_when_client_accepts_it(make_app):
    client = make_app(COMPRESS_MIN_SIZE=1).test_client()

    r = client.get('/', headers={'Accept-Encoding': 'gzip, deflate'})
    assert r.headers['Content-Encoding'] == 'gzip'
    assert 'Accept-Encoding' in r.headers['Vary']
    assert b'No Products Found' in gzip.decompress(r.data)

    r = client.get('/')
    assert 'Content-Encoding' not in r.headers
    assert b'No Products Found' in r.data


def test_access_log_line(make_app, tmp_path):
    log_path = tmp_path / 'access.log'
    client = make_app(ACCESS_LOG_PATH=str(log_path)).test_client()
    try:
        client.get('/products?page=2', headers={'User-Agent': 'pytest-agent'})
    finally:
        for handler in list(access_logger.handlers):
            if isinstance(handler, logging.FileHandler):
                handler.close()
                access_logger.removeHandler(handler)

    line = log_path.read_text().strip().splitlines()[-1]
    assert line.startswith('127.0.0.1 - - [')
    assert '"GET /products?page=2 HTTP/1.1" 200' in line
    assert line.endswith('"-" "pytest-agent"')
