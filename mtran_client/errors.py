import json
from typing import Any, Optional

TIMEOUT_STATUS = -1
NETWORK_STATUS = -2
INVALID_INPUT_STATUS = -1

MESSAGE_PREFIX = "[MTranServer]"


def format_error_message(
    message: str, status: Optional[int] = None, data: Optional[Any] = None
) -> str:
    """
    Builds the multi-line text shown to the user for a failed call.

    Negative statuses are synthetic (timeout, network, bad input) and are
    labelled as error codes; everything else is reported as an HTTP status.
    A string ``message`` in the payload wins over dumping the whole payload.
    """
    lines = [f"{MESSAGE_PREFIX} {message}"]

    if status is not None:
        if status < 0:
            lines.append(f"Error code: {status}")
        else:
            lines.append(f"HTTP status: {status}")

    if isinstance(data, dict) and data:
        detail = data.get("message")
        if isinstance(detail, str):
            lines.append(f"Details: {detail}")
        else:
            try:
                lines.append(f"Details: {json.dumps(data, indent=2, ensure_ascii=False)}")
            except (TypeError, ValueError):
                lines.append("Details: [unserializable error data]")

    return "\n".join(lines)


class MTranError(Exception):
    """Base class for every failure raised by the adapter."""

    default_status: Optional[int] = None

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        data: Optional[dict] = None,
    ):
        self.status = self.default_status if status is None else status
        self.data = data if data is not None else {}
        self.reason = message
        super().__init__(format_error_message(message, self.status, self.data))

    @property
    def message(self) -> str:
        return str(self)


class ConfigError(MTranError):
    """Missing or invalid adapter configuration."""


class InvalidInputError(MTranError):
    """The caller passed input the server cannot be asked to translate."""

    default_status = INVALID_INPUT_STATUS


class RequestTimeoutError(MTranError):
    """The request did not complete before its deadline."""

    default_status = TIMEOUT_STATUS


class NetworkError(MTranError):
    """Transport-level failure: DNS, refused connection, dropped socket."""

    default_status = NETWORK_STATUS


class ServiceUnavailableError(NetworkError):
    """The preflight health check reported the server as down."""


class ServerError(MTranError):
    """The server answered with a non-2xx status."""


class MalformedResponseError(MTranError):
    """A 2xx response did not carry the expected field."""
