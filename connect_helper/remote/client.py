"""
Remote management API client.

`RemoteClient` is the capability the connect helper depends on: one call
that takes a path, query parameters, a body and an HTTP method and returns
the decoded ``{"success": ..., "data": ...}`` envelope. `HttpRemoteClient`
implements it over HTTPS with requests.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import requests

from ..config import RemoteConfig, get_config
from ..exceptions import ConfigurationError, ErrorCode, RemoteCallError
from ..utils.logger import get_logger

HeadersProvider = Callable[[], Dict[str, str]]


class RemoteClient(ABC):
    """Transport used to call the remote management API."""

    @abstractmethod
    def call(
        self,
        path: str,
        query: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        method: str = "POST",
    ) -> Any:
        """
        Issue one request and return the decoded response envelope.

        Raises:
            RemoteCallError: If the request could not complete
        """


class HttpRemoteClient(RemoteClient):
    """
    requests-based client for the remote management API.

    The call blocks for the whole round-trip; the configured timeout bounds
    it. There is no retry.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        verify_ssl: Optional[bool] = None,
        headers_provider: Optional[HeadersProvider] = None,
        config: Optional[RemoteConfig] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root; falls back to the configured base URL
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates
            headers_provider: Called per request for extra headers (e.g. auth)
            config: Remote configuration (default: global config)

        Raises:
            ConfigurationError: If no base URL is available
        """
        config = config or get_config().remote
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.timeout
        self.verify_ssl = config.verify_ssl if verify_ssl is None else verify_ssl
        self.headers_provider = headers_provider
        self.logger = get_logger()

        if not self.base_url:
            raise ConfigurationError(
                "Remote API base URL is not configured", setting="remote.base_url"
            )

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {"Accept": "application/json"}
        if self.headers_provider:
            headers.update(self.headers_provider())
        return headers

    def build_url(self, path: str) -> str:
        """Join the base URL and a relative API path."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def call(
        self,
        path: str,
        query: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        method: str = "POST",
    ) -> Any:
        method = method.upper()
        url = self.build_url(path)

        self.logger.debug("Calling remote API", extra={"method": method, "path": path})

        try:
            response = requests.request(
                method,
                url,
                params=query or None,
                json=body or None,
                headers=self._get_headers(),
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.RequestException as e:
            raise RemoteCallError(
                f"Remote API request failed: {method} {path}",
                path=path,
                error_code=ErrorCode.CONNECTION_ERROR,
                cause=e,
                method=method,
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteCallError(
                f"Remote API returned a non-JSON body: {method} {path}",
                path=path,
                error_code=ErrorCode.INVALID_RESPONSE,
                cause=e,
                method=method,
                http_status=response.status_code,
            ) from e

        self.logger.debug(
            "Remote API responded",
            extra={"method": method, "path": path, "http_status": response.status_code},
        )

        return payload
