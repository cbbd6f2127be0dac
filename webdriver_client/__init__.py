"""Client for the W3C WebDriver protocol."""

from webdriver_client.core.actions import (
    ActionsStream,
    actions_stream,
    mouse_down,
    mouse_move,
    mouse_up,
    pause,
    press,
    release,
    scroll,
)
from webdriver_client.core.element import By, ShadowRoot, WebElement
from webdriver_client.core.errors import (
    CommandTimeoutError,
    MalformedResponseError,
    NoSuchElementError,
    RemoteCommandError,
    StaleElementReferenceError,
    UnknownCommandError,
    WebDriverError,
)
from webdriver_client.core.keys import Keys, key_chord
from webdriver_client.core.session import Session
from webdriver_client.core.status import get_server_status, server_available, wait_for_server_available

__all__ = [
    "ActionsStream",
    "actions_stream",
    "mouse_down",
    "mouse_move",
    "mouse_up",
    "pause",
    "press",
    "release",
    "scroll",
    "By",
    "ShadowRoot",
    "WebElement",
    "CommandTimeoutError",
    "MalformedResponseError",
    "NoSuchElementError",
    "RemoteCommandError",
    "StaleElementReferenceError",
    "UnknownCommandError",
    "WebDriverError",
    "Keys",
    "key_chord",
    "Session",
    "get_server_status",
    "server_available",
    "wait_for_server_available",
]
