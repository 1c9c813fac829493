import pytest

from timeline_app import create_app, db


@pytest.fixture()
def app():
    # In-memory sqlite; no app context is held so each request gets a fresh g
    app = create_app(testing=True, config={'SECRET_KEY': 'test-secret'})
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


def login_token(client, username='admin', password='admin!'):
    resp = client.post('/api/auth/login', json={'username': username, 'password': password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()['token']


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture()
def admin_headers(client):
    return bearer(login_token(client))


@pytest.fixture()
def studio_headers(client):
    return bearer(login_token(client, 'StudioFree', 'StudioFree!'))
