import json
import time

import jwt
import pytest
import requests

from delivery_dashboard.core import activity_logs, set_backend_client
from delivery_dashboard.core.api_client import BackendClient

BASE_URL = 'http://backend.test/api'


def make_response(status_code=200, body=None, text=None):
    response = requests.Response()
    response.status_code = status_code
    response.encoding = 'utf-8'
    if text is not None:
        response._content = text.encode('utf-8')
        response.headers['Content-Type'] = 'text/html'
    elif body is not None:
        response._content = json.dumps(body).encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
    else:
        response._content = b''
    return response


def make_token(expires_in=2 * 3600, user_id=7):
    payload = {'user_id': user_id, 'exp': int(time.time()) + expires_in}
    return jwt.encode(payload, 'test-secret', algorithm='HS256')


class FakeSession:
    """Stands in for requests.Session; answers from a table of canned responses

    Each (method, path) holds a queue; the last entry keeps answering once the
    others are used up. Unknown routes answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, status_code=200, body=None, text=None, exc=None):
        self.routes.setdefault((method, path), []).append((status_code, body, text, exc))
        return self

    def request(self, method, url, headers=None, params=None, json=None, timeout=None):
        path = url[len(BASE_URL):]
        self.calls.append({
            'method': method,
            'path': path,
            'headers': headers or {},
            'params': params,
            'json': json,
            'timeout': timeout,
        })
        queue = self.routes.get((method, path))
        if not queue:
            return make_response(404, {'detail': 'Not found.'})
        status_code, body, text, exc = queue.pop(0) if len(queue) > 1 else queue[0]
        if exc is not None:
            raise exc
        return make_response(status_code, body, text)

    def replace(self, method, path, status_code=200, body=None, text=None, exc=None):
        """Drop whatever is queued for a route and answer with this instead"""
        self.routes[(method, path)] = []
        return self.add(method, path, status_code, body, text, exc)

    def calls_to(self, method, path):
        return [c for c in self.calls if c['method'] == method and c['path'] == path]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def backend(session):
    client = BackendClient(base_url=BASE_URL, timeout=2, session=session)
    client.set_token(make_token())
    return client


@pytest.fixture
def anonymous_backend(session):
    return BackendClient(base_url=BASE_URL, timeout=2, session=session)


@pytest.fixture
def app(backend):
    from delivery_dashboard.components import registry
    from delivery_dashboard.components.auth import auth_service
    from delivery_dashboard.dashboard_app import DashboardApp

    set_backend_client(backend)
    registry.reset_providers()
    activity_logs.clear()

    flask_app = DashboardApp().create_app()
    flask_app.config['TESTING'] = True
    yield flask_app

    registry.reset_providers()
    auth_service.refresh_token = None
    auth_service.user = None
    set_backend_client(None)


@pytest.fixture
def client(app):
    return app.test_client()
