import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from webdriver_client.core.errors import UnknownCommandError, UnresolvedPlaceholderError
from webdriver_client.core.protocols.transport_protocol import TransportProtocol

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{[^{}]+}")

SESSION_ID = "{session id}"
ELEMENT_ID = "{element id}"
SHADOW_ID = "{shadow id}"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    method: HttpMethod
    path: str


@dataclass(frozen=True)
class CommandRequest:
    name: str
    method: HttpMethod
    path: str


_ENDPOINTS: list[tuple[HttpMethod, str, str]] = [
    (HttpMethod.POST, "/session", "New Session"),
    (HttpMethod.DELETE, "/session/{session id}", "Delete Session"),
    (HttpMethod.GET, "/status", "Status"),
    (HttpMethod.GET, "/session/{session id}/timeouts", "Get Timeouts"),
    (HttpMethod.POST, "/session/{session id}/timeouts", "Set Timeouts"),
    (HttpMethod.POST, "/session/{session id}/url", "Navigate To"),
    (HttpMethod.GET, "/session/{session id}/url", "Get Current URL"),
    (HttpMethod.POST, "/session/{session id}/back", "Back"),
    (HttpMethod.POST, "/session/{session id}/forward", "Forward"),
    (HttpMethod.POST, "/session/{session id}/refresh", "Refresh"),
    (HttpMethod.GET, "/session/{session id}/title", "Get Title"),
    (HttpMethod.GET, "/session/{session id}/window", "Get Window Handle"),
    (HttpMethod.DELETE, "/session/{session id}/window", "Close Window"),
    (HttpMethod.POST, "/session/{session id}/window", "Switch To Window"),
    (HttpMethod.GET, "/session/{session id}/window/handles", "Get Window Handles"),
    (HttpMethod.POST, "/session/{session id}/window/new", "New Window"),
    (HttpMethod.POST, "/session/{session id}/frame", "Switch To Frame"),
    (HttpMethod.POST, "/session/{session id}/frame/parent", "Switch To Parent Frame"),
    (HttpMethod.GET, "/session/{session id}/window/rect", "Get Window Rect"),
    (HttpMethod.POST, "/session/{session id}/window/rect", "Set Window Rect"),
    (HttpMethod.POST, "/session/{session id}/window/maximize", "Maximize Window"),
    (HttpMethod.POST, "/session/{session id}/window/minimize", "Minimize Window"),
    (HttpMethod.POST, "/session/{session id}/window/fullscreen", "Fullscreen Window"),
    (HttpMethod.GET, "/session/{session id}/element/active", "Get Active Element"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/shadow", "Get Element Shadow Root"),
    (HttpMethod.POST, "/session/{session id}/element", "Find Element"),
    (HttpMethod.POST, "/session/{session id}/elements", "Find Elements"),
    (HttpMethod.POST, "/session/{session id}/element/{element id}/element", "Find Element From Element"),
    (HttpMethod.POST, "/session/{session id}/element/{element id}/elements", "Find Elements From Element"),
    (HttpMethod.POST, "/session/{session id}/shadow/{shadow id}/element", "Find Element From Shadow Root"),
    (HttpMethod.POST, "/session/{session id}/shadow/{shadow id}/elements", "Find Elements From Shadow Root"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/selected", "Is Element Selected"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/attribute/{name}", "Get Element Attribute"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/property/{name}", "Get Element Property"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/css/{property name}", "Get Element CSS Value"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/text", "Get Element Text"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/name", "Get Element Tag Name"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/rect", "Get Element Rect"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/enabled", "Is Element Enabled"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/computedrole", "Get Computed Role"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/computedlabel", "Get Computed Label"),
    (HttpMethod.POST, "/session/{session id}/element/{element id}/click", "Element Click"),
    (HttpMethod.POST, "/session/{session id}/element/{element id}/clear", "Element Clear"),
    (HttpMethod.POST, "/session/{session id}/element/{element id}/value", "Element Send Keys"),
    (HttpMethod.GET, "/session/{session id}/source", "Get Page Source"),
    (HttpMethod.POST, "/session/{session id}/execute/sync", "Execute Script"),
    (HttpMethod.POST, "/session/{session id}/execute/async", "Execute Async Script"),
    (HttpMethod.GET, "/session/{session id}/cookie", "Get All Cookies"),
    (HttpMethod.GET, "/session/{session id}/cookie/{name}", "Get Named Cookie"),
    (HttpMethod.POST, "/session/{session id}/cookie", "Add Cookie"),
    (HttpMethod.DELETE, "/session/{session id}/cookie/{name}", "Delete Cookie"),
    (HttpMethod.DELETE, "/session/{session id}/cookie", "Delete All Cookies"),
    (HttpMethod.POST, "/session/{session id}/actions", "Perform Actions"),
    (HttpMethod.DELETE, "/session/{session id}/actions", "Release Actions"),
    (HttpMethod.POST, "/session/{session id}/alert/dismiss", "Dismiss Alert"),
    (HttpMethod.POST, "/session/{session id}/alert/accept", "Accept Alert"),
    (HttpMethod.GET, "/session/{session id}/alert/text", "Get Alert Text"),
    (HttpMethod.POST, "/session/{session id}/alert/text", "Send Alert Text"),
    (HttpMethod.GET, "/session/{session id}/screenshot", "Take Screenshot"),
    (HttpMethod.GET, "/session/{session id}/element/{element id}/screenshot", "Take Element Screenshot"),
    (HttpMethod.POST, "/session/{session id}/print", "Print Page"),
    # Not part of the W3C standard, but served by Selenium and most drivers.
    (HttpMethod.GET, "/session/{session id}/element/{element id}/displayed", "Element Displayed"),
]

COMMANDS: Mapping[str, CommandDescriptor] = MappingProxyType(
    {name: CommandDescriptor(name=name, method=method, path=path) for method, path, name in _ENDPOINTS}
)


def build_command(
    name: str,
    session_id: str | None = None,
    element_id: str | None = None,
    shadow_id: str | None = None,
    params: Mapping[str, Any] | None = None,
) -> CommandRequest:
    """Resolve a command name and identifiers into a concrete request.

    ``params`` fills command-specific placeholders, keyed by the name between
    the braces (``{"name": "href"}`` or ``{"property name": "display"}``).
    Raises ``UnknownCommandError`` for names missing from ``COMMANDS`` and
    ``UnresolvedPlaceholderError`` if any placeholder is left after
    substitution.
    """
    descriptor = COMMANDS.get(name)
    if descriptor is None:
        raise UnknownCommandError(name)

    path = descriptor.path
    if session_id is not None:
        path = path.replace(SESSION_ID, str(session_id))
    if element_id is not None:
        path = path.replace(ELEMENT_ID, str(element_id))
    if shadow_id is not None:
        path = path.replace(SHADOW_ID, str(shadow_id))
    for key, value in (params or {}).items():
        path = path.replace(f"{{{key}}}", str(value))

    unresolved = PLACEHOLDER.findall(path)
    if unresolved:
        raise UnresolvedPlaceholderError(name, path, unresolved)

    return CommandRequest(name=name, method=descriptor.method, path=path)


def unwrap_value(response: Any) -> Any:
    """Return the ``value`` member of a parsed response, or the raw response."""
    if isinstance(response, dict) and "value" in response:
        return response["value"]
    return response


def execute_command(
    transport: TransportProtocol,
    name: str,
    *,
    session_id: str | None = None,
    element_id: str | None = None,
    shadow_id: str | None = None,
    params: Mapping[str, Any] | None = None,
    body: Any = None,
    request_body: dict | None = None,
    timeout: float | None = None,
    unwrap: bool = True,
) -> Any:
    """Build ``name``, send it through ``transport`` and return the response value.

    ``request_body`` replaces ``body`` entirely when given, which lets callers
    pass vendor-specific payloads through unchanged. With ``unwrap=False`` the
    whole parsed response is returned.
    """
    request = build_command(name, session_id=session_id, element_id=element_id, shadow_id=shadow_id, params=params)
    payload = request_body if request_body is not None else body
    logger.debug(f"Executing {request.name}: {request.method.value} {request.path}")
    response = transport.send(request.method.value, request.path, payload, timeout=timeout)
    return unwrap_value(response) if unwrap else response
