"""
Base HTTP client with common functionality.

This module provides the shared client used by every backend resolver and
plugin marketplace, so that all outbound requests carry the same
User-Agent and timeout policy.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import httpx
import requests

from ..constants import CONNECT_TIMEOUT_SECONDS, READ_TIMEOUT_SECONDS, USER_AGENT
from ..exceptions import APIError

logger = logging.getLogger(__name__)


class BaseHTTPClient:
    """Base class for HTTP clients with common functionality."""

    def __init__(
        self,
        connect_timeout: float = CONNECT_TIMEOUT_SECONDS,
        read_timeout: float = READ_TIMEOUT_SECONDS,
        user_agent: str = USER_AGENT,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
            user_agent: User-Agent header sent with every request
        """
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.user_agent = user_agent
        self._session: Optional[requests.Session] = None
        self._client: Optional[httpx.Client] = None

    @property
    def headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {"User-Agent": self.user_agent}

    @property
    def timeout(self) -> Tuple[float, float]:
        """The (connect, read) timeout pair understood by requests."""
        return (self.connect_timeout, self.read_timeout)

    @property
    def session(self) -> requests.Session:
        """Get or create synchronous HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.headers)
        return self._session

    @property
    def client(self) -> httpx.Client:
        """Get or create the streaming HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                headers=self.headers,
                timeout=httpx.Timeout(self.read_timeout, connect=self.connect_timeout),
                follow_redirects=True,
            )
        return self._client

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Perform GET request and return the decoded JSON body.

        Args:
            url: URL to request
            params: Optional query parameters

        Returns:
            Decoded JSON (a dict or a list, depending on the endpoint)

        Raises:
            APIError: If the request fails, returns a non-2xx status or a non-JSON body
        """
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.debug(f"HTTP request failed for {url}: {e}")
            raise APIError(f"Failed to fetch data from {url}", e) from e
        except ValueError as e:
            logger.debug(f"Invalid JSON response from {url}: {e}")
            raise APIError(f"Invalid JSON response from {url}", e) from e

    def close(self) -> None:
        """Close HTTP connections."""
        if self._session:
            self._session.close()
            self._session = None
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> 'BaseHTTPClient':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
