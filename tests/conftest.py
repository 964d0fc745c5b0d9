"""
Shared fixtures: requests.post is replaced by a fake transport so no test
touches the network.
"""

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

import yourls_client
from yourls_client import YourlsClient

API_URL = "http://sho.rt/yourls-api.php"


def make_response(status_code: int = 200, body: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response carrying the given JSON body (or raw text)."""
    response = requests.Response()
    response.status_code = status_code
    if text is None:
        text = json.dumps({} if body is None else body)
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.url = API_URL
    return response


class FakeTransport:
    """Stands in for requests.post and records every call."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self._replies: List[Any] = []

    def reply(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self._replies.append(make_response(status_code, body, text))

    def fail(self, error: Exception) -> None:
        self._replies.append(error)

    @property
    def last_data(self) -> Dict[str, Any]:
        return self.calls[-1]["data"]

    def __call__(self, url, data=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "data": data, "timeout": timeout})
        if not self._replies:
            raise AssertionError("unexpected request: no reply queued")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(yourls_client.requests, "post", fake)
    return fake


@pytest.fixture
def client():
    return YourlsClient(API_URL, "username", "password")


@pytest.fixture
def http_response():
    return make_response
