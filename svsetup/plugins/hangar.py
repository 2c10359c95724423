"""Hangar (hangar.papermc.io) plugin resolver."""

import logging
from typing import Any, Dict, List, Optional

from ..constants import (
    HANGAR_API_URL, HANGAR_SEARCH_LIMIT, HANGAR_SOURCE, HANGAR_VERSIONS_LIMIT, PLUGIN_PLATFORM
)
from ..exceptions import PluginNotFoundWarning
from ..utils.base_api import BaseHTTPClient
from .base import BasePluginResolver

logger = logging.getLogger(__name__)


def match_version(
    versions: List[Dict[str, Any]],
    game_version: str,
    plugin_version: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Choose a Hangar version entry.

    A requested plugin version matches by exact name; snapshot requests
    additionally accept the first name that starts with the requested
    string, since Hangar appends build metadata to snapshot names.
    Without a plugin version the first entry supporting the game version
    on Paper is taken.
    """
    if plugin_version is not None:
        for entry in versions:
            if entry.get("name") == plugin_version:
                return entry
        if "snapshot" in plugin_version.lower():
            for entry in versions:
                name = entry.get("name")
                if isinstance(name, str) and name.startswith(plugin_version):
                    return entry
        return None

    for entry in versions:
        dependencies = entry.get("platformDependencies") or {}
        if game_version in (dependencies.get(PLUGIN_PLATFORM) or []):
            return entry
    return None


class HangarResolver(BasePluginResolver):
    """Resolves plugins published on Hangar."""

    source = HANGAR_SOURCE

    def __init__(self, http_client: BaseHTTPClient, base_url: str = HANGAR_API_URL) -> None:
        super().__init__(http_client, base_url)

    def find_project(self, name: str) -> Optional[Dict[str, str]]:
        """Return the owner and slug of the top search hit, or None."""
        data = self.fetch_json("projects", params={"q": name, "limit": HANGAR_SEARCH_LIMIT})
        results = data.get("result") or []
        if not results:
            return None

        project = results[0]
        namespace = project.get("namespace") or {}
        owner = namespace.get("owner")
        slug = namespace.get("slug") or project.get("slug")
        if not owner or not slug:
            raise PluginNotFoundWarning(f"Could not extract owner/slug from Hangar project response for {name}")
        return {"owner": owner, "slug": slug}

    def find_download_url(
        self,
        name: str,
        game_version: str,
        plugin_version: Optional[str] = None,
    ) -> Optional[str]:
        project = self.find_project(name)
        if project is None:
            return None

        data = self.fetch_json(
            f"projects/{project['owner']}/{project['slug']}/versions",
            params={"limit": HANGAR_VERSIONS_LIMIT},
        )
        entry = match_version(data.get("result") or [], game_version, plugin_version)
        if entry is None:
            return None

        downloads = entry.get("downloads") or {}
        return (downloads.get(PLUGIN_PLATFORM) or {}).get("downloadUrl")
