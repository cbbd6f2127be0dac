"""Error taxonomy for the WebDriver client.

Every error raised by the client derives from ``WebDriverError``. Errors
reported by the remote end are ``RemoteCommandError`` instances (or one of
the code-specific subclasses below) and keep the W3C error code
and message inspectable, so callers can branch on the kind of failure.
"""

from __future__ import annotations


class WebDriverError(Exception):
    """Base class for all client errors."""


class CommandBuildError(WebDriverError):
    """A command could not be turned into a request."""


class UnknownCommandError(CommandBuildError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown WebDriver command: {name!r}")
        self.name = name


class UnresolvedPlaceholderError(CommandBuildError):
    def __init__(self, name: str, path: str, placeholders: list[str]) -> None:
        missing = ", ".join(placeholders)
        super().__init__(f"Command {name!r} is missing path parameters ({missing}): {path}")
        self.name = name
        self.path = path
        self.placeholders = placeholders


class CommandTimeoutError(WebDriverError, TimeoutError):
    """No response arrived within the request deadline."""

    def __init__(self, method: str, url: str, timeout: float | None) -> None:
        super().__init__(f"{method} {url} timed out after {timeout} seconds")
        self.method = method
        self.url = url
        self.timeout = timeout


class MalformedResponseError(WebDriverError):
    """The server sent a body that is not the JSON the client expected."""

    def __init__(self, reason: str, body: str) -> None:
        super().__init__(f"{reason}: {body[:200]!r}")
        self.reason = reason
        self.body = body


def to_sentence_case(text: str) -> str:
    return text[:1].upper() + text[1:]


class RemoteCommandError(WebDriverError):
    """The remote end answered with a WebDriver error.

    ``code`` is the W3C error code (e.g. ``"no such element"``) and
    ``message`` the server message with any duplicated ``"<code>: "``
    prefix removed.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status: int | None = None,
        stacktrace: str | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status = status
        self.stacktrace = stacktrace
        super().__init__(f"{to_sentence_case(code)}: {message}")


class ElementClickInterceptedError(RemoteCommandError):
    pass


class ElementNotInteractableError(RemoteCommandError):
    pass


class InvalidArgumentError(RemoteCommandError):
    pass


class InvalidSelectorError(RemoteCommandError):
    pass


class InvalidSessionIdError(RemoteCommandError):
    pass


class JavascriptError(RemoteCommandError):
    pass


class NoSuchAlertError(RemoteCommandError):
    pass


class NoSuchCookieError(RemoteCommandError):
    pass


class NoSuchElementError(RemoteCommandError):
    pass


class NoSuchFrameError(RemoteCommandError):
    pass


class NoSuchShadowRootError(RemoteCommandError):
    pass


class NoSuchWindowError(RemoteCommandError):
    pass


class DetachedShadowRootError(RemoteCommandError):
    pass


class ScriptTimeoutError(RemoteCommandError):
    pass


class SessionNotCreatedError(RemoteCommandError):
    pass


class StaleElementReferenceError(RemoteCommandError):
    pass


class UnexpectedAlertOpenError(RemoteCommandError):
    pass


class UnknownCommandRemoteError(RemoteCommandError):
    pass


class UnsupportedOperationError(RemoteCommandError):
    pass


REMOTE_ERRORS: dict[str, type[RemoteCommandError]] = {
    "element click intercepted": ElementClickInterceptedError,
    "element not interactable": ElementNotInteractableError,
    "invalid argument": InvalidArgumentError,
    "invalid selector": InvalidSelectorError,
    "invalid session id": InvalidSessionIdError,
    "javascript error": JavascriptError,
    "no such alert": NoSuchAlertError,
    "no such cookie": NoSuchCookieError,
    "no such element": NoSuchElementError,
    "no such frame": NoSuchFrameError,
    "no such shadow root": NoSuchShadowRootError,
    "no such window": NoSuchWindowError,
    "detached shadow root": DetachedShadowRootError,
    "script timeout": ScriptTimeoutError,
    "session not created": SessionNotCreatedError,
    "stale element reference": StaleElementReferenceError,
    "unexpected alert open": UnexpectedAlertOpenError,
    "unknown command": UnknownCommandRemoteError,
    "unsupported operation": UnsupportedOperationError,
}


def strip_code_prefix(code: str, message: str) -> str:
    """Remove one leading ``"<code>: "`` from ``message`` if present."""
    prefix = f"{code}: "
    if message.startswith(prefix):
        return message[len(prefix):]
    return message


def remote_error_for(
    code: str,
    message: str,
    status: int | None = None,
    stacktrace: str | None = None,
) -> RemoteCommandError:
    """Build the most specific ``RemoteCommandError`` for a W3C error code."""
    error_cls = REMOTE_ERRORS.get(code, RemoteCommandError)
    return error_cls(code, strip_code_prefix(code, message), status=status, stacktrace=stacktrace)
