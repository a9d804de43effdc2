"""Shared fixtures: a scriptable in-memory transport and translator builders."""

import asyncio
import io
import json
from typing import Any, Union
from urllib.parse import urlparse

import pytest

from mtran_client.logger import Logger
from mtran_client.transport import HttpRequest, HttpResponse, Transport
from mtran_client.translators.mtran_translator import MTranTranslator

HANG = "hang"

Reply = Union[HttpResponse, Exception, str]


def respond(status: int = 200, payload: Any = None, raw: str = None) -> HttpResponse:
    """Build a response with a JSON (or raw text) body."""
    text = raw if raw is not None else json.dumps(payload)
    return HttpResponse(status=status, text=text)


class FakeTransport(Transport):
    """Transport answering from a path -> reply table and recording every request."""

    def __init__(self, routes: dict[str, Reply] = None):
        self.routes: dict[str, Reply] = dict(routes or {})
        self.requests: list[HttpRequest] = []
        self.cancelled: list[str] = []

    @property
    def paths(self) -> list[str]:
        return [urlparse(r.url).path for r in self.requests]

    async def send(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        path = urlparse(request.url).path
        reply = self.routes.get(path)
        if reply is None:
            return respond(404, {"message": f"no route for {path}"})
        if isinstance(reply, Exception):
            raise reply
        if reply == HANG:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled.append(path)
                raise
        return reply


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def logger(log_stream):
    return Logger("tests", level="DEBUG", stream=log_stream)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def make_translator(logger, transport):
    """Factory building an MTranTranslator over the fake transport."""

    def _make(**mtran_settings) -> MTranTranslator:
        settings = {"api_url": "localhost:9000"}
        settings.update(mtran_settings)
        config = {"translation": {"provider": "mtran", "mtran": settings}}
        return MTranTranslator(config, logger, transport)

    return _make


@pytest.fixture
def translator(make_translator):
    return make_translator()
