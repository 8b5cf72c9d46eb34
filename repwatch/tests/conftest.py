"""Shared fixtures: quiet logging, a routed httpx mock transport, log capture."""

import json
import os

# Before anything imports repwatch.core.logging: no log files during tests.
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("SLACK_WEBHOOK_URL", "")

import httpx
import pytest
from loguru import logger

from repwatch.core.config import Settings


def make_response(reply, request: httpx.Request) -> httpx.Response:
    if callable(reply):
        return reply(request)
    status, body = reply if isinstance(reply, tuple) else (200, reply)
    return httpx.Response(status, request=request, **_body_kwargs(body))


def _body_kwargs(body):
    if isinstance(body, (bytes, str)):
        return {"content": body}
    return {"content": json.dumps(body).encode(), "headers": {"content-type": "application/json"}}


class RoutedTransport(httpx.MockTransport):
    """MockTransport answering by URL substring; unmatched URLs get a 404.

    ``routes`` maps a substring of ``host + path`` to a reply: a JSON-able
    object (200), ``(status, body)``, raw ``bytes``/``str`` (200), or a
    callable taking the request. The first matching key wins.
    """

    def __init__(self, routes):
        self.routes = routes
        self.requests = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        target = f"{request.url.host}{request.url.path}"
        for fragment, reply in self.routes.items():
            if fragment in target:
                return make_response(reply, request)
        return httpx.Response(404, json={"detail": "not found"}, request=request)

    def seen(self, fragment: str):
        return [r for r in self.requests if fragment in f"{r.url.host}{r.url.path}"]


class CapturedLog:
    """A bound logger plus the records it emitted."""

    def __init__(self, name: str):
        self.name = name
        self.records = []
        self.logger = logger.bind(name=name)

    def messages(self, level: str = None):
        return [r["message"] for r in self.records if level is None or r["level"].name == level]


@pytest.fixture
def routed():
    return RoutedTransport


@pytest.fixture
def captured_log():
    captured = CapturedLog("test-capture")
    handler_id = logger.add(
        lambda message: captured.records.append(message.record),
        level="DEBUG",
        filter=lambda record: record["extra"].get("name") == captured.name,
    )
    yield captured
    logger.remove(handler_id)


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        LOG_DIR="",
        OPENSTATES_API_KEY="openstates-test-key",
        CONGRESS_API_KEY="congress-test-key",
        COURTLISTENER_TOKEN=None,
    )


@pytest.fixture
def keyless_settings():
    return Settings(_env_file=None, LOG_DIR="", OPENSTATES_API_KEY=None, CONGRESS_API_KEY=None)
