"""
Shared fixtures: a scripted fake backend behind httpx.MockTransport and a
TestClient whose backend dependency points at it.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from historymap.core.dependencies import get_backend_client
from historymap.main import app
from historymap.services.backend_client import BackendClient

BACKEND_URL = "http://backend.test"
SERVICE_TOKEN = "service-token"


class FakeBackend:
    """Answers registered (method, path) pairs and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status=200, json_body=None, text=None, content=None, headers=None):
        self.routes[(method.upper(), path)] = (status, json_body, text, content, headers or {})

    def fail(self, method, path, exc):
        self.routes[(method.upper(), path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text="Not Found")
        if isinstance(route, Exception):
            raise route
        status, json_body, text, content, headers = route
        if json_body is not None:
            return httpx.Response(status, json=json_body, headers=headers)
        if content is not None:
            return httpx.Response(status, content=content, headers=headers)
        return httpx.Response(status, text=text or "", headers=headers)

    def last(self, method=None, path=None) -> httpx.Request:
        for request in reversed(self.requests):
            if method and request.method != method:
                continue
            if path and request.url.path != path:
                continue
            return request
        raise AssertionError(f"no request matching {method} {path}")

    def last_json(self, method=None, path=None):
        return json.loads(self.last(method, path).content)


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def backend_client(fake_backend):
    return BackendClient(
        base_url=BACKEND_URL,
        api_token=SERVICE_TOKEN,
        timeout=5,
        transport=httpx.MockTransport(fake_backend.handler),
    )


@pytest.fixture
def client(backend_client):
    app.dependency_overrides[get_backend_client] = lambda: backend_client
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def raw_points():
    return [
        {
            "objectId": "p1",
            "name": "Praça Internacional",
            "lat": "-30.885",
            "lon": "-55.510",
            "neighborhood": "Zona Norte",
            "type": {"id": "t1", "name": "Praça", "icon": "tree", "color": "#0a0"},
            "photoUrls": ["p1/front.jpg"],
        },
        {
            "objectId": "p2",
            "name": "Praça XV",
            "lat": -30.8901,
            "lon": -55.5322,
            "neighborhood": "Centro",
            "address": "Rua XV, 100",
            "type": {"id": "t1", "name": "Praça", "icon": "tree", "color": "#0a0"},
            "photoIds": ["https://images.example/p2.jpg"],
        },
        {
            "objectId": "p3",
            "name": "Catedral",
            "lat": "bad",
            "lon": "-55.0",
        },
        {
            "objectId": "p4",
            "name": "Palácio Moysés Vianna",
            "lat": "-30.885004",
            "lon": "-55.510004",
            "neighborhood": "Centro",
            "type": {"id": "t2", "name": "Monumento", "icon": "landmark", "color": "#a00"},
        },
    ]
