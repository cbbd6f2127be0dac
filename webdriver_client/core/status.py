import logging
import time
from typing import Any

import requests

from webdriver_client.core.commands import execute_command
from webdriver_client.core.errors import CommandTimeoutError, WebDriverError
from webdriver_client.core.protocols.transport_protocol import TransportProtocol

logger = logging.getLogger(__name__)


def get_status(transport: TransportProtocol, timeout: float | None = None) -> dict[str, Any]:
    """Return the remote end's status object.

    Always contains `ready`; servers may add `message`, `uptime`, `nodes`, etc.
    """
    return execute_command(transport, "Status", timeout=timeout)


def get_server_status(port: int = 4444, host: str = "localhost", verbose: bool = False,
                      timeout: float | None = None) -> dict[str, Any]:
    from webdriver_client.infrastructure.http_transport import HttpTransport

    transport = HttpTransport.for_server(host=host, port=port, verbose=verbose)
    try:
        return get_status(transport, timeout=timeout)
    finally:
        transport.close()


def server_available(port: int = 4444, host: str = "localhost", verbose: bool = False) -> bool:
    """Return True if a server on `host:port` reports itself ready."""
    try:
        return bool(get_server_status(port=port, host=host, verbose=verbose).get("ready"))
    except (WebDriverError, requests.exceptions.RequestException) as e:
        logger.debug(f"Server at {host}:{port} not available: {e}")
        return False


def wait_for_server_available(
    timeout: float = 60,
    port: int = 4444,
    host: str = "localhost",
    verbose: bool = False,
    error: bool = False,
    interval: float = 0.5,
) -> bool:
    """Poll the server status until it is ready or `timeout` seconds pass.

    Returns False on expiry. With `error=True`, raises `CommandTimeoutError`
    chained to the last failure instead, if the last attempt failed.
    """
    deadline = time.monotonic() + timeout
    last_error: Exception | None = None

    while time.monotonic() <= deadline:
        try:
            status = get_server_status(port=port, host=host, verbose=verbose, timeout=interval * 4)
            if status.get("ready"):
                return True
            last_error = None
        except (WebDriverError, requests.exceptions.RequestException) as e:
            last_error = e
        time.sleep(interval)

    logger.info(f"Timed out after {timeout} seconds waiting for server at {host}:{port}")
    if error and last_error is not None:
        raise CommandTimeoutError("GET", f"http://{host}:{port}/status", timeout) from last_error
    return False
