"""Modrinth plugin resolver."""

import json
import logging
from typing import Any, Dict, List, Optional

from ..constants import MODRINTH_API_URL, MODRINTH_SEARCH_LIMIT, MODRINTH_SOURCE, PLUGIN_LOADER
from ..exceptions import PluginNotFoundWarning
from ..utils.base_api import BaseHTTPClient
from .base import BasePluginResolver

logger = logging.getLogger(__name__)

SEARCH_FACETS = json.dumps([["project_type:plugin"], ["categories:paper"]])


def match_version(
    versions: List[Dict[str, Any]],
    game_version: str,
    plugin_version: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Choose a Modrinth version entry by number, or by game version and loader."""
    if plugin_version is not None:
        return next((v for v in versions if v.get("version_number") == plugin_version), None)
    for entry in versions:
        if game_version in (entry.get("game_versions") or []) and PLUGIN_LOADER in (entry.get("loaders") or []):
            return entry
    return None


class ModrinthResolver(BasePluginResolver):
    """Resolves plugins published on Modrinth."""

    source = MODRINTH_SOURCE

    def __init__(self, http_client: BaseHTTPClient, base_url: str = MODRINTH_API_URL) -> None:
        super().__init__(http_client, base_url)

    def find_project_id(self, name: str) -> Optional[str]:
        data = self.fetch_json(
            "search",
            params={"query": name, "facets": SEARCH_FACETS, "limit": MODRINTH_SEARCH_LIMIT},
        )
        hits = data.get("hits") or []
        if not hits:
            return None
        project_id = hits[0].get("project_id")
        if not project_id:
            raise PluginNotFoundWarning(f"Modrinth search hit for {name} has no project id")
        return project_id

    def find_download_url(
        self,
        name: str,
        game_version: str,
        plugin_version: Optional[str] = None,
    ) -> Optional[str]:
        project_id = self.find_project_id(name)
        if project_id is None:
            return None

        versions = self.fetch_json(f"project/{project_id}/version")
        if not isinstance(versions, list):
            raise PluginNotFoundWarning(f"Unexpected Modrinth version listing for {name}")

        entry = match_version(versions, game_version, plugin_version)
        if entry is None:
            return None

        files = entry.get("files") or []
        return files[0].get("url") if files else None
