import logging
from enum import Enum
from typing import Any

from webdriver_client.core.commands import execute_command
from webdriver_client.core.errors import MalformedResponseError
from webdriver_client.core.protocols.transport_protocol import TransportProtocol

logger = logging.getLogger(__name__)

ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
SHADOW_KEY = "shadow-6066-11e4-a52e-4f735466cecf"

DEFAULT_TIMEOUT = 20


class By(str, Enum):
    """Locator strategies accepted by the find commands."""
    CSS_SELECTOR = "css selector"
    XPATH = "xpath"
    TAG_NAME = "tag name"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"


def locator_body(value: str, using: str | By) -> dict[str, str]:
    """Validate a locator and return the find request payload."""
    try:
        strategy = By(using)
    except ValueError:
        allowed = ", ".join(repr(b.value) for b in By)
        raise ValueError(f"`using` must be one of {allowed}, got: {using!r}") from None
    if not isinstance(value, str):
        raise TypeError(f"`value` must be a string, got: {type(value).__name__}")
    return {"using": strategy.value, "value": value}


def reference_id(value: Any, key: str) -> str:
    """Extract the id from a wire reference such as `{ELEMENT_KEY: id}`."""
    if isinstance(value, dict) and isinstance(value.get(key), str):
        return value[key]
    raise MalformedResponseError(f"Expected a {key!r} reference", repr(value))


def _check_timeout(timeout: float | None) -> None:
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout < 0):
        raise ValueError(f"`timeout` must be a non-negative number or None, got: {timeout!r}")


class WebElement:
    """Proxy for an element living in a remote session.

    Instances are cheap; several proxies may refer to the same DOM node. If
    the node leaves the document, operations fail remotely with
    `StaleElementReferenceError`.
    """

    def __init__(self, session_id: str, transport: TransportProtocol, id: str) -> None:
        self.session_id = session_id
        self.transport = transport
        self.id = id

    def __repr__(self) -> str:
        return f"WebElement(session_id={self.session_id!r}, id={self.id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebElement):
            return NotImplemented
        return (self.session_id, self.id) == (other.session_id, other.id)

    def __hash__(self) -> int:
        return hash((WebElement, self.session_id, self.id))

    def _execute(self, command: str, timeout: float | None, **kwargs) -> Any:
        _check_timeout(timeout)
        return execute_command(
            self.transport,
            command,
            session_id=self.session_id,
            element_id=self.id,
            timeout=timeout,
            **kwargs,
        )

    def _new_element(self, id: str) -> "WebElement":
        return WebElement(self.session_id, self.transport, id)

    def to_json(self) -> dict[str, str]:
        return {ELEMENT_KEY: self.id}

    def shadow_root(self, timeout: float | None = DEFAULT_TIMEOUT) -> "ShadowRoot":
        value = self._execute("Get Element Shadow Root", timeout)
        return ShadowRoot(self.session_id, self.transport, reference_id(value, SHADOW_KEY))

    def find_element(
        self,
        value: str,
        using: str | By = By.CSS_SELECTOR,
        request_body: dict | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> "WebElement":
        """Find the first descendant matching the locator.

        Raises `NoSuchElementError` (from the server) when nothing matches.
        """
        body = locator_body(value, using)
        result = self._execute("Find Element From Element", timeout, body=body, request_body=request_body)
        return self._new_element(reference_id(result, ELEMENT_KEY))

    def find_elements(
        self,
        value: str,
        using: str | By = By.CSS_SELECTOR,
        request_body: dict | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> list["WebElement"]:
        """Find all descendants matching the locator; empty list if none match."""
        body = locator_body(value, using)
        results = self._execute("Find Elements From Element", timeout, body=body, request_body=request_body)
        return [self._new_element(reference_id(r, ELEMENT_KEY)) for r in results or []]

    def is_selected(self, timeout: float | None = DEFAULT_TIMEOUT) -> bool:
        return self._execute("Is Element Selected", timeout)

    def is_enabled(self, timeout: float | None = DEFAULT_TIMEOUT) -> bool:
        return self._execute("Is Element Enabled", timeout)

    def is_displayed(self, timeout: float | None = DEFAULT_TIMEOUT) -> bool:
        """Whether the element is visible.

        Uses the non-standard `displayed` endpoint, which some remote ends do
        not implement.
        """
        return self._execute("Element Displayed", timeout)

    def get_attribute(self, name: str, timeout: float | None = DEFAULT_TIMEOUT) -> str | None:
        """Return the HTML attribute `name` as written in the markup."""
        return self._execute("Get Element Attribute", timeout, params={"name": name})

    def get_property(self, name: str, timeout: float | None = DEFAULT_TIMEOUT) -> Any:
        """Return the current value of the DOM property `name`."""
        return self._execute("Get Element Property", timeout, params={"name": name})

    def get_css_value(self, name: str, timeout: float | None = DEFAULT_TIMEOUT) -> str:
        return self._execute("Get Element CSS Value", timeout, params={"property name": name})

    def get_text(self, timeout: float | None = DEFAULT_TIMEOUT) -> str:
        return self._execute("Get Element Text", timeout)

    def get_tag_name(self, timeout: float | None = DEFAULT_TIMEOUT) -> str:
        return self._execute("Get Element Tag Name", timeout)

    def get_rect(self, timeout: float | None = DEFAULT_TIMEOUT) -> dict[str, float]:
        """Return the element's `x`, `y`, `width` and `height`."""
        return self._execute("Get Element Rect", timeout)

    def computed_role(self, timeout: float | None = DEFAULT_TIMEOUT) -> str:
        return self._execute("Get Computed Role", timeout)

    def computed_label(self, timeout: float | None = DEFAULT_TIMEOUT) -> str:
        return self._execute("Get Computed Label", timeout)

    def click(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._execute("Element Click", timeout, body={})

    def clear(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._execute("Element Clear", timeout, body={})

    def send_keys(self, *keys: str, request_body: dict | None = None, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        """Type `keys` into the element.

        Each argument is either literal text or a `Keys` constant; all of them
        are concatenated into one string. Use `key_chord` for combinations.
        """
        for key in keys:
            if not isinstance(key, str):
                raise TypeError(f"Every key must be a string, got: {type(key).__name__}")
        self._execute("Element Send Keys", timeout, body={"text": "".join(keys)}, request_body=request_body)

    def screenshot(self, timeout: float | None = DEFAULT_TIMEOUT) -> str:
        """Return a base64-encoded PNG of the element."""
        return self._execute("Take Element Screenshot", timeout)


class ShadowRoot:
    """Proxy for a shadow root; supports finding elements inside the shadow tree."""

    def __init__(self, session_id: str, transport: TransportProtocol, id: str) -> None:
        self.session_id = session_id
        self.transport = transport
        self.id = id

    def __repr__(self) -> str:
        return f"ShadowRoot(session_id={self.session_id!r}, id={self.id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShadowRoot):
            return NotImplemented
        return (self.session_id, self.id) == (other.session_id, other.id)

    def __hash__(self) -> int:
        return hash((ShadowRoot, self.session_id, self.id))

    def to_json(self) -> dict[str, str]:
        return {SHADOW_KEY: self.id}

    def _find(self, command: str, value: str, using: str | By, request_body: dict | None,
              timeout: float | None) -> Any:
        body = locator_body(value, using)
        _check_timeout(timeout)
        return execute_command(
            self.transport,
            command,
            session_id=self.session_id,
            shadow_id=self.id,
            body=body,
            request_body=request_body,
            timeout=timeout,
        )

    def find_element(
        self,
        value: str,
        using: str | By = By.CSS_SELECTOR,
        request_body: dict | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> WebElement:
        result = self._find("Find Element From Shadow Root", value, using, request_body, timeout)
        return WebElement(self.session_id, self.transport, reference_id(result, ELEMENT_KEY))

    def find_elements(
        self,
        value: str,
        using: str | By = By.CSS_SELECTOR,
        request_body: dict | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> list[WebElement]:
        results = self._find("Find Elements From Shadow Root", value, using, request_body, timeout)
        return [WebElement(self.session_id, self.transport, reference_id(r, ELEMENT_KEY)) for r in results or []]
