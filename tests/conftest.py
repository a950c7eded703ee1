"""
Shared fixtures: a fake GetTranslated server on ``httpx.MockTransport``
and a client wired to in-memory collaborators.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Union

import httpx
import pytest

from gettranslated.client import GetTranslated
from gettranslated.config import Settings
from gettranslated.core.events import LanguageListeners
from gettranslated.integrations.gateway import NetworkGateway
from gettranslated.storage.local import InMemoryKeyValueStore

SERVER_URL = "https://test.gettranslated.ai"
APP_PACKAGE = "com.example.app"

DEFAULT_INIT = {
    "project": "Demo App",
    "base_language": "en",
    "languages": ["en", "es", "fr"],
}

Route = Union[Callable[[httpx.Request], httpx.Response], tuple[int, Any]]


class FakeServer:
    """Records requests and answers from a per-path route table."""
    
    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Route] = {
            "/client/init": (200, DEFAULT_INIT),
            "/client/login": (200, {}),
            "/client/string": (200, {"translation": "Hola"}),
            "/client/sync": (200, {"translations": []}),
        }
    
    def respond(self, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[path] = (status, body if body is not None else {})
    
    def route(self, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path] = handler
    
    def fail_connection(self, path: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)
        self.routes[path] = handler
    
    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404)
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)
    
    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)
    
    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]
    
    def payloads(self, path: str) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.calls(path)]


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def listeners():
    """Fresh listener registry so tests don't share process-wide state."""
    return LanguageListeners()


@pytest.fixture
def settings():
    return Settings(app_package=APP_PACKAGE, api_key="", log_level="warn", _env_file=None)


@pytest.fixture
def make_client(server, store, listeners, settings):
    def factory(device_language: str = "es") -> GetTranslated:
        gateway = NetworkGateway(SERVER_URL, transport=server.transport)
        return GetTranslated(
            settings=settings,
            store=store,
            gateway=gateway,
            listeners=listeners,
            device_language=lambda: device_language,
        )
    return factory


@pytest.fixture
def client(make_client):
    """Client whose device language is Spanish."""
    return make_client()
