import json
import logging
from typing import Any

import requests

from webdriver_client.core.errors import CommandTimeoutError, MalformedResponseError, RemoteCommandError, \
    remote_error_for

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

DEFAULT_HEADERS = {
    "Content-Type": JSON_CONTENT_TYPE,
    "Accept": JSON_CONTENT_TYPE,
}


class HttpTransport:
    """Sends WebDriver commands to a remote end over HTTP using `requests`.

    One transport per thread: the underlying `requests.Session` may pool
    connections and is not shared safely across threads.
    """

    def __init__(self, base_url: str, verbose: bool = False, http_session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.verbose = verbose
        self._http = http_session or requests.Session()

    @classmethod
    def for_server(cls, host: str = "localhost", port: int = 4444, verbose: bool = False) -> "HttpTransport":
        return cls(f"http://{host}:{port}", verbose=verbose)

    def send(self, method: str, path: str, body: Any = None, timeout: float | None = None) -> Any:
        url = f"{self.base_url}{path}"
        data = None if body is None else json.dumps(body).encode("utf-8")

        self._log(f"-> {method} {url}" + ("" if data is None else f" {data.decode('utf-8')}"))

        try:
            response = self._http.request(method, url, data=data, headers=DEFAULT_HEADERS, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise CommandTimeoutError(method, url, timeout) from e

        self._log(f"<- {response.status_code} {url} {response.text[:500]}")

        if not 200 <= response.status_code < 300:
            raise self._remote_error(response)

        return self._parse_success(url, response)

    def close(self) -> None:
        self._http.close()

    def _log(self, message: str) -> None:
        if self.verbose:
            logger.info(message)
        else:
            logger.debug(message)

    @staticmethod
    def _is_json(response: requests.Response) -> bool:
        return "json" in response.headers.get("Content-Type", "").lower()

    def _parse_success(self, url: str, response: requests.Response) -> Any:
        if not response.content:
            return None
        if not self._is_json(response):
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {url} is not valid JSON", response.text) from e

    @staticmethod
    def _remote_error(response: requests.Response) -> RemoteCommandError:
        """Turn an error response into a `RemoteCommandError`.

        The error object sits under `value` on W3C servers and at the top
        level on older ones; `value` is checked first.
        """
        try:
            payload = response.json()
        except ValueError:
            return remote_error_for("unknown error", response.text, status=response.status_code)

        if not isinstance(payload, dict):
            return remote_error_for("unknown error", str(payload), status=response.status_code)

        details = payload.get("value")
        if not (isinstance(details, dict) and "error" in details):
            details = payload

        code = details.get("error") or "unknown error"
        message = details.get("message") or ""
        return remote_error_for(code, message, status=response.status_code, stacktrace=details.get("stacktrace"))
