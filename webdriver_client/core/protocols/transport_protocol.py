from __future__ import annotations

from typing import Any, Protocol


class TransportProtocol(Protocol):
    """Request/response transport used by the session and element proxies.

    The protocol keeps the core package independent of the HTTP library.
    The concrete implementation lives in
    `webdriver_client.infrastructure.http_transport`.
    """

    base_url: str
    verbose: bool

    def send(self, method: str, path: str, body: Any = None, timeout: float | None = None) -> Any:
        """Send one command and return the parsed response.

        `path` is appended to the transport's base URL. A `body` of None sends
        no payload; an empty dict sends the JSON text `{}`. Returns the parsed
        JSON document (with its `value` member untouched), the raw text for
        non-JSON responses, or None for an empty body.

        Implementations raise `CommandTimeoutError` when `timeout` seconds
        pass without a response and `RemoteCommandError` for error statuses.
        """

    def close(self) -> None:
        """Release any connection resources held by the transport."""
