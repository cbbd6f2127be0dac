import logging
from typing import Any

from webdriver_client.core.actions import ActionsStream
from webdriver_client.core.codec import decode, encode
from webdriver_client.core.commands import execute_command, unwrap_value
from webdriver_client.core.element import ELEMENT_KEY, By, ShadowRoot, WebElement, locator_body, reference_id
from webdriver_client.core.errors import MalformedResponseError
from webdriver_client.core.protocols.transport_protocol import TransportProtocol
from webdriver_client.core.status import get_status

logger = logging.getLogger(__name__)

PRINT_ORIENTATIONS = ("portrait", "landscape")
MARGIN_SIDES = ("left", "right", "top", "bottom")
WINDOW_TYPES = ("tab", "window")


def default_capabilities(browser: str) -> dict[str, Any]:
    if browser == "firefox":
        return {"browserName": "firefox", "acceptInsecureCerts": True}
    if browser == "edge":
        return {"browserName": "MicrosoftEdge"}
    return {"browserName": browser}


def merge_capabilities(defaults: dict[str, Any], overrides: dict[str, Any] | None) -> dict[str, Any]:
    """Merge `overrides` into `defaults`; nested dicts are merged key by key."""
    merged = dict(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_capabilities(merged[key], value)
        else:
            merged[key] = value
    return merged


def _check_number(name: str, value: Any, minimum: float | None = None, maximum: float | None = None,
                  allow_none: bool = True) -> None:
    if value is None:
        if allow_none:
            return
        raise ValueError(f"`{name}` must be a number")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"`{name}` must be a number, got: {type(value).__name__}")
    if minimum is not None and value < minimum:
        raise ValueError(f"`{name}` must be at least {minimum}, got: {value}")
    if maximum is not None and value > maximum:
        raise ValueError(f"`{name}` must be at most {maximum}, got: {value}")


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def _read_new_session(response: Any) -> tuple[str, dict[str, Any]]:
    """Return the session id and capabilities from a New Session response.

    W3C servers nest both under `value`; JSON Wire servers put `sessionId` at
    the top level and the capabilities in `value`.
    """
    value = unwrap_value(response)
    if isinstance(value, dict) and isinstance(value.get("sessionId"), str):
        return value["sessionId"], value.get("capabilities") or {}
    if isinstance(response, dict) and isinstance(response.get("sessionId"), str):
        return response["sessionId"], value if isinstance(value, dict) else {}
    raise MalformedResponseError("New Session response has no session id", repr(response))


class Session:
    """A WebDriver session on a remote end.

    Constructing a `Session` opens it: a New Session command is sent with the
    default capabilities for `browser` merged with `capabilities`. The
    session is closed with `close()`, or automatically when used as a
    context manager:

        with Session(browser="chrome") as session:
            session.navigate("https://www.python.org")
            print(session.title())

    `request_body`, here and on most methods, replaces the payload the method
    would have sent. `timeout` applies to every request of this session (None
    waits indefinitely).
    """

    def __init__(
        self,
        browser: str = "firefox",
        port: int = 4444,
        host: str = "localhost",
        verbose: bool = False,
        capabilities: dict[str, Any] | None = None,
        request_body: dict | None = None,
        timeout: float | None = None,
        transport: TransportProtocol | None = None,
    ) -> None:
        if not isinstance(browser, str):
            raise TypeError(f"`browser` must be a string, got: {type(browser).__name__}")
        if isinstance(port, bool) or not isinstance(port, int):
            raise TypeError(f"`port` must be an integer, got: {type(port).__name__}")
        if capabilities is not None and not isinstance(capabilities, dict):
            raise TypeError(f"`capabilities` must be a dict, got: {type(capabilities).__name__}")

        if transport is None:
            from webdriver_client.infrastructure.http_transport import HttpTransport
            transport = HttpTransport.for_server(host=host, port=port, verbose=verbose)

        self.transport = transport
        self.browser = browser
        self.host = host
        self.port = port
        self.timeout = timeout
        self.id: str | None = None
        self.capabilities: dict[str, Any] = {}

        body = {
            "capabilities": {
                "firstMatch": [{}],
                "alwaysMatch": merge_capabilities(default_capabilities(browser), capabilities),
            }
        }

        logger.info(f"Opening {browser} session on {host}:{port}")
        response = execute_command(self.transport, "New Session", body=body, request_body=request_body,
                                   timeout=timeout, unwrap=False)
        self.id, self.capabilities = _read_new_session(response)
        logger.info(f"Session {self.id} opened")

    def __repr__(self) -> str:
        return f"Session(id={self.id!r}, browser={self.browser!r}, host={self.host!r}, port={self.port!r})"

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _execute(self, command: str, **kwargs) -> Any:
        return execute_command(self.transport, command, session_id=self.id, timeout=self.timeout, **kwargs)

    # --- References ---
    def create_web_element(self, id: str) -> WebElement:
        if not isinstance(id, str):
            raise TypeError(f"Element id must be a string, got: {type(id).__name__}")
        return WebElement(self.id, self.transport, id)

    def create_shadow_root(self, id: str) -> ShadowRoot:
        if not isinstance(id, str):
            raise TypeError(f"Shadow root id must be a string, got: {type(id).__name__}")
        return ShadowRoot(self.id, self.transport, id)

    # --- Session lifecycle ---
    def close(self) -> None:
        """Delete the session on the remote end.

        The object stays usable locally; any further command (including a
        second `close()`) fails remotely with `InvalidSessionIdError`.
        """
        self._execute("Delete Session")
        logger.info(f"Session {self.id} closed")

    def status(self) -> dict[str, Any]:
        return get_status(self.transport, timeout=self.timeout)

    def get_timeouts(self) -> dict[str, Any]:
        """Return the `script`, `pageLoad` and `implicit` timeouts in milliseconds."""
        return self._execute("Get Timeouts")

    def set_timeouts(
        self,
        script: float | None = None,
        page_load: float | None = None,
        implicit_wait: float | None = None,
        request_body: dict | None = None,
    ) -> None:
        """Set session timeouts, in milliseconds. At least one must be given."""
        for name, value in (("script", script), ("page_load", page_load), ("implicit_wait", implicit_wait)):
            _check_number(name, value, minimum=0)
        body = _compact({"script": script, "pageLoad": page_load, "implicit": implicit_wait})
        if not body and request_body is None:
            raise ValueError("At least one of `script`, `page_load` or `implicit_wait` must be given")
        self._execute("Set Timeouts", body=body, request_body=request_body)

    # --- Navigation ---
    def navigate(self, url: str, request_body: dict | None = None) -> None:
        if not isinstance(url, str):
            raise TypeError(f"`url` must be a string, got: {type(url).__name__}")
        self._execute("Navigate To", body={"url": url}, request_body=request_body)

    def current_url(self) -> str:
        return self._execute("Get Current URL")

    def back(self) -> None:
        self._execute("Back", body={})

    def forward(self) -> None:
        self._execute("Forward", body={})

    def refresh(self) -> None:
        self._execute("Refresh", body={})

    def title(self) -> str:
        return self._execute("Get Title")

    # --- Windows ---
    def window_handle(self) -> str:
        return self._execute("Get Window Handle")

    def window_handles(self) -> list[str]:
        return self._execute("Get Window Handles")

    def new_window(self, type: str = "tab", request_body: dict | None = None) -> dict[str, str]:
        """Open a new tab or window. Returns its `handle` and `type`; does not switch to it."""
        if type not in WINDOW_TYPES:
            raise ValueError(f"`type` must be one of {WINDOW_TYPES}, got: {type!r}")
        return self._execute("New Window", body={"type": type}, request_body=request_body)

    def switch_to_window(self, handle: str, request_body: dict | None = None) -> None:
        if not isinstance(handle, str):
            raise TypeError(f"`handle` must be a string, got: {type(handle).__name__}")
        self._execute("Switch To Window", body={"handle": handle}, request_body=request_body)

    def close_window(self) -> list[str]:
        """Close the current window and return the handles of those still open."""
        return self._execute("Close Window")

    def get_window_rect(self) -> dict[str, float]:
        return self._execute("Get Window Rect")

    def set_window_rect(
        self,
        width: float | None = None,
        height: float | None = None,
        x: float | None = None,
        y: float | None = None,
        request_body: dict | None = None,
    ) -> dict[str, float]:
        _check_number("width", width, minimum=0)
        _check_number("height", height, minimum=0)
        _check_number("x", x)
        _check_number("y", y)
        body = _compact({"width": width, "height": height, "x": x, "y": y})
        if not body and request_body is None:
            raise ValueError("At least one of `width`, `height`, `x` or `y` must be given")
        return self._execute("Set Window Rect", body=body, request_body=request_body)

    def maximize_window(self) -> dict[str, float]:
        return self._execute("Maximize Window", body={})

    def minimize_window(self) -> dict[str, float]:
        return self._execute("Minimize Window", body={})

    def fullscreen_window(self) -> dict[str, float]:
        return self._execute("Fullscreen Window", body={})

    # --- Frames ---
    def switch_to_frame(self, id: int | WebElement | None = None, request_body: dict | None = None) -> None:
        """Switch to a frame by index, by its element, or back to the top level (None)."""
        if isinstance(id, WebElement):
            frame = encode(id)
        elif id is None:
            frame = None
        elif isinstance(id, int) and not isinstance(id, bool) and id >= 0:
            frame = id
        else:
            raise ValueError(f"`id` must be None, a non-negative integer or a WebElement, got: {id!r}")
        self._execute("Switch To Frame", body={"id": frame}, request_body=request_body)

    def switch_to_parent_frame(self) -> None:
        self._execute("Switch To Parent Frame", body={})

    # --- Elements ---
    def get_active_element(self) -> WebElement:
        return self.create_web_element(reference_id(self._execute("Get Active Element"), ELEMENT_KEY))

    def find_element(self, value: str, using: str | By = By.CSS_SELECTOR,
                     request_body: dict | None = None) -> WebElement:
        """Find the first element matching the locator.

        Raises `NoSuchElementError` (from the server) when nothing matches.
        """
        result = self._execute("Find Element", body=locator_body(value, using), request_body=request_body)
        return self.create_web_element(reference_id(result, ELEMENT_KEY))

    def find_elements(self, value: str, using: str | By = By.CSS_SELECTOR,
                      request_body: dict | None = None) -> list[WebElement]:
        """Find all elements matching the locator; empty list if none match."""
        results = self._execute("Find Elements", body=locator_body(value, using), request_body=request_body)
        return [self.create_web_element(reference_id(r, ELEMENT_KEY)) for r in results or []]

    def get_page_source(self) -> str:
        return self._execute("Get Page Source")

    # --- Scripts ---
    def _script(self, command: str, script: str, args: tuple, request_body: dict | None) -> Any:
        if not isinstance(script, str):
            raise TypeError(f"`script` must be a string, got: {type(script).__name__}")
        body = {"script": script, "args": encode(list(args))}
        return decode(self._execute(command, body=body, request_body=request_body), self)

    def execute_script(self, script: str, *args: Any, request_body: dict | None = None) -> Any:
        """Run `script` as the body of a JavaScript function and return its result.

        `args` are available to the script as `arguments`. Elements and shadow
        roots may be passed as arguments and are returned as proxies.
        """
        return self._script("Execute Script", script, args, request_body)

    def execute_async_script(self, script: str, *args: Any, request_body: dict | None = None) -> Any:
        """Like `execute_script`, but the script must call its last argument to finish."""
        return self._script("Execute Async Script", script, args, request_body)

    # --- Cookies ---
    def get_cookies(self) -> list[dict[str, Any]]:
        return self._execute("Get All Cookies")

    def get_cookie(self, name: str) -> dict[str, Any]:
        return self._execute("Get Named Cookie", params={"name": name})

    def add_cookie(self, cookie: dict[str, Any], request_body: dict | None = None) -> None:
        """Add a cookie; `cookie` needs at least `name` and `value`."""
        if not isinstance(cookie, dict):
            raise TypeError(f"`cookie` must be a dict, got: {type(cookie).__name__}")
        self._execute("Add Cookie", body={"cookie": cookie}, request_body=request_body)

    def delete_cookie(self, name: str) -> None:
        self._execute("Delete Cookie", params={"name": name})

    def delete_all_cookies(self) -> None:
        self._execute("Delete All Cookies")

    # --- Actions ---
    def perform_actions(self, actions: ActionsStream, release_actions: bool = True,
                        request_body: dict | None = None) -> None:
        """Perform an `ActionsStream`, then release all keys and buttons unless told not to."""
        if not isinstance(actions, ActionsStream):
            raise TypeError(f"`actions` must be an ActionsStream, got: {type(actions).__name__}")
        self._execute("Perform Actions", body={"actions": actions.to_list()}, request_body=request_body)
        if release_actions:
            self.release_actions()

    def release_actions(self) -> None:
        self._execute("Release Actions")

    # --- Alerts ---
    def accept_alert(self) -> None:
        self._execute("Accept Alert", body={})

    def dismiss_alert(self) -> None:
        self._execute("Dismiss Alert", body={})

    def get_alert_text(self) -> str:
        return self._execute("Get Alert Text")

    def send_alert_text(self, text: str, request_body: dict | None = None) -> None:
        if not isinstance(text, str):
            raise TypeError(f"`text` must be a string, got: {type(text).__name__}")
        self._execute("Send Alert Text", body={"text": text}, request_body=request_body)

    # --- Capture ---
    def screenshot(self) -> str:
        """Return a base64-encoded PNG of the current page."""
        return self._execute("Take Screenshot")

    def print_page(
        self,
        orientation: str = "portrait",
        scale: float = 1,
        background: bool = False,
        width: float | None = None,
        height: float | None = None,
        margin: float | dict[str, float] | None = None,
        footer: str | None = None,
        header: str | None = None,
        shrink_to_fit: bool | None = None,
        page_ranges: list[int | str] | None = None,
        request_body: dict | None = None,
    ) -> str:
        """Render the page as PDF and return it base64-encoded.

        Sizes are in centimetres. `margin` is one number for all sides or a
        dict with any of `left`, `right`, `top` and `bottom`.
        `footer` and `header` are text printed on every page.
        """
        if orientation not in PRINT_ORIENTATIONS:
            raise ValueError(f"`orientation` must be one of {PRINT_ORIENTATIONS}, got: {orientation!r}")
        _check_number("scale", scale, minimum=0.1, maximum=2, allow_none=False)
        if not isinstance(background, bool):
            raise TypeError("`background` must be a bool")
        _check_number("width", width, minimum=0)
        _check_number("height", height, minimum=0)

        if isinstance(margin, dict):
            for side, value in margin.items():
                if side not in MARGIN_SIDES:
                    raise ValueError(
                        f"`margin` keys must be 'left', 'right', 'top' and 'bottom'; incorrect name: {side!r}"
                    )
                _check_number(f"margin['{side}']", value, minimum=0)
        else:
            _check_number("margin", margin, minimum=0)
            if margin is not None:
                margin = {side: margin for side in MARGIN_SIDES}

        for name, text in (("footer", footer), ("header", header)):
            if text is not None and not isinstance(text, str):
                raise TypeError(f"`{name}` must be a string or None, got: {type(text).__name__}")
        if shrink_to_fit is not None and not isinstance(shrink_to_fit, bool):
            raise TypeError("`shrink_to_fit` must be a bool or None")
        if page_ranges is not None and not isinstance(page_ranges, list):
            raise TypeError("`page_ranges` must be a list or None")

        page = _compact({"width": width, "height": height}) or None
        body = _compact({
            "orientation": orientation,
            "scale": scale,
            "background": background,
            "page": page,
            "margin": margin,
            "footer": footer,
            "header": header,
            "shrinkToFit": shrink_to_fit,
            "pageRanges": page_ranges,
        })
        return self._execute("Print Page", body=body, request_body=request_body)
