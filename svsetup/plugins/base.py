"""
Base classes for plugin marketplace resolvers.

Marketplace lookups never raise: every outcome is reported as a
``PluginLookup`` so callers decide whether a failure is worth more than a
warning.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import APIError, PluginNotFoundWarning
from ..utils.base_api import BaseHTTPClient

logger = logging.getLogger(__name__)


class LookupStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    BACKEND_ERROR = "backend_error"


@dataclass(frozen=True)
class PluginLookup:
    """Outcome of looking a plugin up on one or more marketplaces."""

    status: LookupStatus
    source: Optional[str] = None
    url: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @classmethod
    def hit(cls, source: str, url: str) -> 'PluginLookup':
        return cls(LookupStatus.FOUND, source=source, url=url)

    @classmethod
    def miss(cls, source: Optional[str] = None) -> 'PluginLookup':
        return cls(LookupStatus.NOT_FOUND, source=source)

    @classmethod
    def failure(cls, source: Optional[str], error: Exception) -> 'PluginLookup':
        return cls(LookupStatus.BACKEND_ERROR, source=source, error=error)


class BasePluginResolver(ABC):
    """Abstract base class for plugin marketplaces."""

    source: str

    def __init__(self, http_client: BaseHTTPClient, base_url: str) -> None:
        self.http = http_client
        self.base_url = base_url.rstrip('/')

    def build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def fetch_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.http.get_json(self.build_url(endpoint), params=params)

    @abstractmethod
    def find_download_url(
        self,
        name: str,
        game_version: str,
        plugin_version: Optional[str] = None,
    ) -> Optional[str]:
        """
        Search the marketplace and return a download URL, or None.

        Implementations raise APIError or PluginNotFoundWarning on backend
        failures and malformed responses.
        """
        pass

    def lookup(
        self,
        name: str,
        game_version: str,
        plugin_version: Optional[str] = None,
    ) -> PluginLookup:
        """Look a plugin up, converting every failure into a PluginLookup."""
        try:
            url = self.find_download_url(name, game_version, plugin_version)
        except (APIError, PluginNotFoundWarning) as e:
            logger.warning(f"{self.source.title()} search failed for {name}: {e}")
            return PluginLookup.failure(self.source, e)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"{self.source.title()} returned an unexpected response for {name}: {e!r}")
            return PluginLookup.failure(self.source, e)

        if url is None:
            logger.debug(f"{name} not found on {self.source}")
            return PluginLookup.miss(self.source)
        return PluginLookup.hit(self.source, url)
