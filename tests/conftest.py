"""Shared test fixtures for smartcat."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Ensure the source directory is importable without installing the package.
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


class RecordingTransport(httpx.MockTransport):
    """Mock transport answering every request with a fixed response."""

    def __init__(self, status_code=200, body=None, content=None, error=None):
        self.requests = []
        self._status_code = status_code
        self._body = body
        self._content = content
        self._error = error
        super().__init__(self._handle)

    def _handle(self, request):
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if self._content is not None:
            return httpx.Response(self._status_code, content=self._content)
        return httpx.Response(self._status_code, json=self._body)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def mock_http():
    """Build an ``httpx.Client`` backed by a RecordingTransport."""
    clients = []

    def _factory(**kwargs):
        transport = RecordingTransport(**kwargs)
        client = httpx.Client(transport=transport)
        clients.append(client)
        return client, transport

    yield _factory
    for client in clients:
        client.close()


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "smartcat"
    monkeypatch.setenv("SMARTCAT_CONFIG_PATH", str(path))
    monkeypatch.setenv("SMARTCAT_NONINTERACTIVE", "1")
    return path
