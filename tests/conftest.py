import pytest
import requests
from fastapi.testclient import TestClient

from linkstash import metadata
from linkstash.main import create_app
from linkstash.storage import LinkStore


class FakeResponse:
    def __init__(self, status_code=200, payload=None, error=None):
        self.status_code = status_code
        self._payload = payload
        self._error = error

    def json(self):
        if self._error:
            raise self._error
        return self._payload


@pytest.fixture(autouse=True)
def offline(monkeypatch):
    """No test talks to the real oEmbed endpoint."""
    calls = []

    def fail(*args, **kwargs):
        calls.append((args, kwargs))
        raise requests.ConnectionError("network disabled in tests")

    monkeypatch.setattr(metadata.requests, "get", fail)
    return calls


@pytest.fixture
def oembed(monkeypatch):
    """Serve a canned oEmbed response; returns the list of recorded calls."""
    calls = []

    def install(response):
        def fake_get(url, params=None, timeout=None):
            calls.append({"url": url, "params": params, "timeout": timeout})
            return response

        monkeypatch.setattr(metadata.requests, "get", fake_get)
        return calls

    return install


@pytest.fixture
def links_path(tmp_path):
    return tmp_path / "data" / "saved_links.json"


@pytest.fixture
def store(links_path):
    return LinkStore.load(links_path)


@pytest.fixture
def client(store, tmp_path):
    app = create_app(store, preferences_path=tmp_path / "data" / "preferences.json")
    return TestClient(app)
