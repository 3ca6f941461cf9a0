"""Shared fixtures for item client tests."""

import json
import socket

import httpx
import pytest

from item_client.config import EndpointConfig

ENV_VARS = (
    "ITEM_API_SCHEME",
    "ITEM_API_HOST",
    "ITEM_API_PORT",
    "ITEM_API_PATH",
    "ITEM_API_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and working directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def endpoint():
    return EndpointConfig(host="items.test", port=8080, path="/items/1")


@pytest.fixture
def unused_port():
    """A local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def json_transport(payload, status_code=200, requests=None):
    """MockTransport answering every request with payload encoded as JSON."""
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(
            status_code,
            content=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
    return httpx.MockTransport(handler)


def raw_transport(content: bytes, status_code=200, content_type="application/json"):
    """MockTransport answering every request with the given raw body."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=content, headers={"Content-Type": content_type})
    return httpx.MockTransport(handler)
