"""Fallback chain across plugin marketplaces."""

import logging
from typing import Dict, List, Optional

from ..utils.base_api import BaseHTTPClient
from ..utils.versioning import PluginIdentifier
from .base import BasePluginResolver, LookupStatus, PluginLookup
from .hangar import HangarResolver
from .modrinth import ModrinthResolver

logger = logging.getLogger(__name__)


class PluginResolverChain:
    """Tries marketplaces in order until one yields a download URL."""

    def __init__(self, resolvers: List[BasePluginResolver]) -> None:
        self._resolvers: Dict[str, BasePluginResolver] = {r.source: r for r in resolvers}
        self._order: List[str] = [r.source for r in resolvers]

    @property
    def sources(self) -> List[str]:
        return list(self._order)

    def resolve(self, identifier: PluginIdentifier, game_version: str) -> PluginLookup:
        """
        Resolve a plugin identifier for a game version.

        An explicit source restricts the search to that marketplace.
        Otherwise the first marketplace to find the plugin wins; backend
        failures are skipped over. When nothing is found, the result is a
        backend error if any marketplace failed, else not found.
        """
        if identifier.source is not None:
            resolver = self._resolvers.get(identifier.source)
            if resolver is None:
                return PluginLookup.miss(identifier.source)
            return resolver.lookup(identifier.name, game_version, identifier.version)

        failure: Optional[PluginLookup] = None
        for source in self._order:
            result = self._resolvers[source].lookup(identifier.name, game_version, identifier.version)
            if result.found:
                return result
            if result.status is LookupStatus.BACKEND_ERROR:
                failure = result
        return failure or PluginLookup.miss()


def create_plugin_chain(http_client: BaseHTTPClient) -> PluginResolverChain:
    """Hangar first, then Modrinth."""
    return PluginResolverChain([HangarResolver(http_client), ModrinthResolver(http_client)])
