"""Shared fixtures: mocked upstream API, proxy wiring, no internet."""

import json
from pathlib import Path

import httpx
import pytest

from talenthub import api
from talenthub.config import CacheBackend, TalentHubConfig
from talenthub.core.proxy import TalentProxy
from talenthub.core.upstream import TalentAPIClient


FIXTURES_DIR = Path(__file__).parent / "fixtures"
TEST_API_KEY = "tp-test-key-0123456789"


def load_fixture(name: str) -> dict:
    """Load a JSON fixture by file stem."""
    return json.loads((FIXTURES_DIR / f"{name}.json").read_text(encoding="utf-8"))


class FakeUpstream:
    """
    httpx handler standing in for the Talent Protocol API.

    Routes map a URL path to either a JSON payload or an httpx.Response.
    Every received request is recorded.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("X-API-KEY") != TEST_API_KEY:
            return httpx.Response(401, json={"error": "Unauthorized"})

        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep a developer's API key and cache settings out of the tests."""
    monkeypatch.delenv("TALENT_PROTOCOL_API_KEY", raising=False)
    monkeypatch.delenv("TALENTHUB_API_KEY", raising=False)
    monkeypatch.setattr(api, "_config", None)
    monkeypatch.setattr(api, "_proxy", None)
    yield
    api.app.dependency_overrides.clear()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def live_proxy(upstream) -> TalentProxy:
    """TalentProxy with an API key, talking to the fake upstream."""
    client = TalentAPIClient(api_key=TEST_API_KEY, transport=upstream.transport())
    return TalentProxy(client)


@pytest.fixture
def offline_proxy() -> TalentProxy:
    """TalentProxy without an API key."""
    return TalentProxy(None)


@pytest.fixture
def service_config() -> TalentHubConfig:
    return TalentHubConfig(
        proxy_url="http://testserver",
        cache_backend=CacheBackend.NONE,
        max_concurrency=3,
    )


def asgi_transport(proxy: TalentProxy) -> httpx.ASGITransport:
    """Route service calls in-process through the FastAPI app using `proxy`."""
    api.app.dependency_overrides[api.get_proxy] = lambda: proxy
    return httpx.ASGITransport(app=api.app)
