from typing import Any

from webdriver_client.core.protocols.transport_protocol import TransportProtocol

SESSION_ID = "session-1"


class FakeTransport(TransportProtocol):
    """Records every request and replays queued responses in order.

    A queued exception is raised instead of returned. With nothing queued,
    `{"value": None}` is returned, like a W3C command without a result.
    """

    def __init__(self, *responses: Any, base_url: str = "http://localhost:4444", verbose: bool = False) -> None:
        self.base_url = base_url
        self.verbose = verbose
        self.responses: list[Any] = list(responses)
        self.closed = False

        # recording
        self.requests: list[tuple[str, str, Any, float | None]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    # TransportProtocol
    def send(self, method: str, path: str, body: Any = None, timeout: float | None = None) -> Any:
        self.requests.append((method, path, body, timeout))
        if not self.responses:
            return {"value": None}
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True

    # helpers for assertions
    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(method, path) for method, path, _, _ in self.requests]

    @property
    def last_body(self) -> Any:
        return self.requests[-1][2]


def new_session_response(session_id: str = SESSION_ID, capabilities: dict | None = None) -> dict:
    return {"value": {"sessionId": session_id, "capabilities": capabilities or {"browserName": "firefox"}}}
