"""
Base resolver classes for server backends.

This module provides the abstract base class shared by every backend
resolver and the immutable artifact record they produce.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..exceptions import APIError, ResolutionError
from ..utils.base_api import BaseHTTPClient
from .types import ServerType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedArtifact:
    """A concrete downloadable server jar."""

    file_name: str
    download_url: str
    build: Optional[str] = None


class BaseResolver(ABC):
    """Abstract base class for server backend resolvers."""

    def __init__(self, http_client: BaseHTTPClient, base_url: str) -> None:
        """
        Initialize the resolver.

        Args:
            http_client: Client used for JSON requests
            base_url: Base URL for the backend API
        """
        self.http = http_client
        self.base_url = base_url.rstrip('/')

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Human readable backend name used in messages."""
        pass

    @abstractmethod
    def resolve(
        self,
        server_type: ServerType,
        version: str,
        explicit_build: Optional[str] = None,
    ) -> ResolvedArtifact:
        """Resolve a version (and optional build) into a downloadable artifact."""
        pass

    def build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def fetch_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Fetch a JSON document from the backend.

        Raises:
            ResolutionError: If the backend is unreachable or answers with an error
        """
        url = self.build_url(endpoint)
        try:
            return self.http.get_json(url, params=params)
        except APIError as e:
            raise ResolutionError(f"{self.backend_name} request failed: {e.message}", e.cause or e) from e
