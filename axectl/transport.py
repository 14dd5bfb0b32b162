"""AxeOS HTTP transport."""

from __future__ import annotations

import time
from types import TracebackType
from typing import Self

import requests
from loguru import logger

from axectl.exceptions import DeviceTimeoutError, DeviceUnreachableError, NetworkError, NonSuccessStatusError

DEFAULT_TIMEOUT = 5.0

API_SYSTEM_INFO = "/api/system/info"
API_DASHBOARD = "/api/system/statistics/dashboard"
API_RESTART = "/api/system/restart"


class AxeOSTransport:
    """Plain HTTP transport against the AxeOS REST API.

    AxeOS has no authentication, so the session carries no credentials.
    Every request makes exactly one attempt. ``timeout`` bounds each socket
    operation and, for fetched bodies, the request as a whole.
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: requests.Session | None = None

    def connect(self) -> None:
        """Open the HTTP session. No request is sent."""
        self._session = requests.Session()
        self._session.headers["Accept"] = "application/json"

    def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def is_connected(self) -> bool:
        return self._session is not None

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()

    def fetch(self, path: str) -> bytes:
        """Send a GET request and return the raw response body.

        Args:
            path: API path appended to the base URL (e.g. "/api/system/info").

        Returns:
            Response body as bytes, undecoded.
        """
        start = time.monotonic()
        resp = self._request("GET", path)
        try:
            return self._read_body(resp, "GET", path, start)
        finally:
            resp.close()

    def send(self, path: str) -> None:
        """Send a POST request with an empty body. The response body is ignored."""
        resp = self._request("POST", path)
        resp.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str) -> requests.Response:
        if not self.is_connected():
            self.connect()
        assert self._session is not None
        url = self.url_for(path)
        logger.debug(f"{method} {url} (timeout {self.timeout}s)")

        try:
            resp = self._session.request(method, url, timeout=(self.timeout, self.timeout), stream=True)
        except requests.RequestException as e:
            raise self._network_error(method, path, e) from e

        logger.debug(f"{method} {url} -> {resp.status_code}")
        if not 200 <= resp.status_code < 300:
            resp.close()
            raise NonSuccessStatusError(
                f"{method} {path} failed: HTTP {resp.status_code} {resp.reason or ''}".rstrip(),
                status_code=resp.status_code,
            )
        return resp

    def _read_body(self, resp: requests.Response, method: str, path: str, start: float) -> bytes:
        """Read the streamed body, failing once the whole request exceeds ``timeout``.

        The socket timeout only bounds each single read, so a device that
        trickles bytes is cut off here.
        """
        chunks: list[bytes] = []
        try:
            for chunk in resp.iter_content(chunk_size=4096):
                chunks.append(chunk)
                if time.monotonic() - start > self.timeout:
                    raise DeviceTimeoutError(
                        f"Device at {self.base_url} could not be reached: "
                        f"response not complete within {self.timeout}s"
                    )
        except requests.RequestException as e:
            raise self._network_error(method, path, e) from e

        body = b"".join(chunks)
        logger.debug(f"{method} {path}: {len(body)} bytes")
        return body

    def _network_error(self, method: str, path: str, e: requests.RequestException) -> NetworkError:
        # ConnectTimeout is also a ConnectionError, so Timeout is checked first
        if isinstance(e, requests.Timeout):
            return DeviceTimeoutError(
                f"Device at {self.base_url} could not be reached: no response within {self.timeout}s"
            )
        if isinstance(
            e,
            (
                requests.ConnectionError,
                requests.exceptions.InvalidURL,
                requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
            ),
        ):
            return DeviceUnreachableError(f"Device at {self.base_url} could not be reached: {e}")
        return NetworkError(f"{method} {path} failed: {e}")
