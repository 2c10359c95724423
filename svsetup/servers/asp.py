"""
AdvancedSlimePaper resolver.

ASP builds are addressed by branch and build id rather than by a build
number, so resolution is a two step walk: branches for the game version,
then the file manifest of the chosen build.
"""

import logging
from typing import Any, Dict, List, Optional

from ..constants import ASP_API_URL, ASP_MANUAL_DOWNLOAD_URL, JAR_SUFFIX
from ..exceptions import ResolutionError, ServerSetupError
from ..utils.base_api import BaseHTTPClient
from ..utils.validation import is_safe_file_name
from .base import BaseResolver, ResolvedArtifact
from .types import ServerType

logger = logging.getLogger(__name__)


def _file_name(entry: Dict[str, Any]) -> str:
    name = entry.get("fileName")
    return name if isinstance(name, str) else ""


def _file_size(entry: Dict[str, Any]) -> int:
    size = entry.get("size")
    if isinstance(size, (int, float)):
        return int(size)
    return 0


def _safe_file_name(entry: Dict[str, Any]) -> str:
    name = _file_name(entry)
    return name if is_safe_file_name(name) else ""


def select_server_file(files: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Pick the server jar from an ASP build manifest.

    The first jar that is neither a plugin nor an API jar wins; when the
    naming gives no such jar, the largest jar is taken instead.
    """
    jars = [entry for entry in files if _file_name(entry).endswith(JAR_SUFFIX)]
    for entry in jars:
        lowered = _file_name(entry).lower()
        if "plugin" not in lowered and "api" not in lowered:
            return entry
    if not jars:
        return None
    return max(jars, key=_file_size)


def select_plugin_file(files: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Pick the companion plugin jar from an ASP build manifest."""
    for entry in files:
        name = _file_name(entry)
        if "plugin" in name.lower() and name.endswith(JAR_SUFFIX):
            return entry
    return None


class AdvancedSlimePaperResolver(BaseResolver):
    """Resolver for the InfernalSuite ASP API."""

    def __init__(
        self,
        http_client: BaseHTTPClient,
        branch: Optional[str] = None,
        base_url: str = ASP_API_URL,
    ) -> None:
        super().__init__(http_client, base_url)
        self.branch = branch

    @property
    def backend_name(self) -> str:
        return "Advanced Slime Paper"

    def _require_branch(self) -> str:
        if not self.branch:
            raise ResolutionError("An ASP branch must be configured to provision Advanced Slime Paper")
        return self.branch

    def get_build_id(self, version: str, branch: str) -> str:
        """Find the build id published for branch on a game version."""
        branches = self.fetch_json(f"projects/asp/mcversion/{version}/branches")
        if not isinstance(branches, list):
            raise ResolutionError(f"Unexpected ASP branch listing for version {version}")

        match = next(
            (entry for entry in branches if isinstance(entry, dict) and entry.get("branch") == branch),
            None,
        )
        if match is None:
            raise ResolutionError(f"No builds found for ASP branch '{branch}' on version {version}")

        build_id = match.get("id")
        if not build_id:
            raise ResolutionError(f"Could not get ASP build ID for branch '{branch}'")
        return str(build_id)

    def get_build_files(self, build_id: str) -> List[Dict[str, Any]]:
        data = self.fetch_json(f"projects/asp/buildId/{build_id}")
        files = data.get("files") if isinstance(data, dict) else None
        if not isinstance(files, list):
            raise ResolutionError("No files found in ASP build")
        return [entry for entry in files if isinstance(entry, dict)]

    def get_download_url(self, build_id: str, file_id: str) -> str:
        return self.build_url(f"projects/asp/{build_id}/download/{file_id}")

    def resolve(
        self,
        server_type: ServerType,
        version: str,
        explicit_build: Optional[str] = None,
    ) -> ResolvedArtifact:
        if explicit_build is not None:
            logger.warning(
                f"Build {explicit_build} ignored: Advanced Slime Paper builds are selected by branch"
            )
        branch = self._require_branch()

        try:
            build_id = self.get_build_id(version, branch)
            server_file = select_server_file(self.get_build_files(build_id))
            if server_file is None:
                raise ResolutionError("No server jar found in ASP build")

            file_id = server_file.get("id")
            if not file_id:
                raise ResolutionError("No file ID found for ASP server jar")
        except ServerSetupError as e:
            raise ResolutionError(
                f"Failed to resolve Advanced Slime Paper: {e.message}. "
                f"You can download manually from {ASP_MANUAL_DOWNLOAD_URL}",
                e.cause,
            ) from e

        file_name = _safe_file_name(server_file) or f"{server_type.jar_prefix}{version}-{build_id}.jar"
        logger.info(f"Using Advanced Slime Paper {version} build {build_id} from {branch} branch: {file_name}")
        return ResolvedArtifact(
            file_name=file_name,
            download_url=self.get_download_url(build_id, str(file_id)),
            build=build_id,
        )

    def resolve_plugin(self, version: str) -> Optional[ResolvedArtifact]:
        """
        Resolve the Slime World plugin shipped alongside an ASP build.

        Returns None when the build carries no plugin jar.

        Raises:
            ResolutionError: If the branch or build cannot be fetched
        """
        branch = self._require_branch()
        build_id = self.get_build_id(version, branch)
        plugin_file = select_plugin_file(self.get_build_files(build_id))
        if plugin_file is None or not plugin_file.get("id"):
            return None
        return ResolvedArtifact(
            file_name=_safe_file_name(plugin_file) or "asp-plugin.jar",
            download_url=self.get_download_url(build_id, str(plugin_file["id"])),
            build=build_id,
        )
