import asyncio
import json
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import requests


@dataclass
class HttpRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    timeout: Optional[float] = None


@dataclass
class HttpResponse:
    status: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Parses the body; raises ValueError when it is not JSON."""
        return json.loads(self.text)


class Transport(ABC):
    """HTTP capability the adapter sends its requests through."""

    @abstractmethod
    async def send(self, request: HttpRequest) -> HttpResponse:
        """
        Sends one request and returns the status and body.

        Must tolerate being cancelled while in flight. Should raise TimeoutError
        when its own deadline passes; any other exception is treated as a
        network failure.
        """


class RequestsTransport(Transport):
    """
    Default transport built on requests.

    Each request runs on its own daemon thread and reports back to the event
    loop when done. When the caller's deadline cancels the send, the thread is
    abandoned rather than joined: nothing waits for it, neither the event loop
    shutting down nor interpreter exit. The deadline is also handed to requests
    so an abandoned thread still ends once the server goes quiet.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session

    def _send_blocking(self, request: HttpRequest) -> HttpResponse:
        sender = self.session or requests
        try:
            response = sender.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body.encode("utf-8") if request.body is not None else None,
                timeout=request.timeout,
            )
        except requests.Timeout as e:
            raise TimeoutError(str(e)) from e
        return HttpResponse(status=response.status_code, text=response.text)

    async def send(self, request: HttpRequest) -> HttpResponse:
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def _settle(response: Optional[HttpResponse], error: Optional[Exception]):
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(response)

        def _worker():
            response, error = None, None
            try:
                response = self._send_blocking(request)
            except Exception as e:
                error = e
            try:
                loop.call_soon_threadsafe(_settle, response, error)
            except RuntimeError:
                # Loop already closed: the caller timed out and went away.
                return

        threading.Thread(
            target=_worker, name=f"mtran-{request.method.lower()}", daemon=True
        ).start()
        return await future
