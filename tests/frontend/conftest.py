import pytest

from framebox_web import app as flask_app
from framebox_web.views import auth, dashboard, clients, catalog, cashflow, categories, schedule


class FakeBackend:
    """Stands in for api_request: canned answers per (method, endpoint)"""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def on(self, method, endpoint, body=None, status=200):
        self.responses[(method, endpoint)] = (body, status)

    def __call__(self, method, endpoint, data=None, params=None, include_auth=True):
        self.calls.append((method, endpoint, data, params))
        return self.responses.get((method, endpoint), (None, "Backend connection error"))

    def sent(self, method, endpoint):
        return [data for (m, e, data, _) in self.calls if (m, e) == (method, endpoint)]


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True, WTF_CSRF_ENABLED=False)
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    with client.session_transaction() as sess:
        sess['access_token'] = 'token'
        sess['email'] = 'studio@framebox.test'
    return client


@pytest.fixture
def backend(monkeypatch):
    fake = FakeBackend()
    for module in (auth, dashboard, clients, catalog, cashflow, categories, schedule):
        monkeypatch.setattr(module, 'api_request', fake)
    return fake
