"""
Shared pytest fixtures: a fake etcd cluster behind a patched
``requests.request``.
"""
import os
import sys

import pytest
import requests

# Make the package importable without installing it
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from etcdapi import transport  # noqa: E402


class DummyResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False


class FakeCluster:
    """
    Answers requests per ``host:port``.

    A server mapped to an exception instance raises it; a server mapped to
    a string answers with that body; a callable gets (method, url, data)
    and returns a body. Unknown servers refuse connections.
    """

    def __init__(self):
        self.servers = {}
        self.calls = []

    def add(self, address, answer, status_code=200):
        self.servers[address] = (answer, status_code)

    def down(self, address):
        self.servers[address] = (requests.ConnectionError(f"{address} refused"), 0)

    def contacted(self):
        return [url.split("/")[2] for _, url, _ in self.calls]

    def request(self, method, url, data=None, headers=None, timeout=None, allow_redirects=True):
        self.calls.append((method, url, data))
        address = url.split("/")[2]
        answer, status_code = self.servers.get(
            address, (requests.ConnectionError(f"{address} refused"), 0)
        )
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            answer = answer(method, url, data)
        return DummyResponse(answer, status_code)


@pytest.fixture(autouse=True)
def reset_transport():
    """Every test starts and ends without process-wide transport state."""
    transport.shutdown()
    yield
    transport.shutdown()


@pytest.fixture
def cluster(monkeypatch):
    fake = FakeCluster()
    monkeypatch.setattr(requests, "request", fake.request)
    return fake


@pytest.fixture
def servers():
    return ["a:4001", "b:4001", "c:4001"]
