"""
PaperMC family resolver.

Paper, Velocity and Folia are published through the same PaperMC API and
differ only by project name.
"""

import logging
from typing import Optional

from ..constants import PAPER_API_URL
from ..exceptions import ResolutionError
from ..utils.base_api import BaseHTTPClient
from .base import BaseResolver, ResolvedArtifact
from .types import ServerType

logger = logging.getLogger(__name__)


class PaperMCResolver(BaseResolver):
    """Resolver for projects hosted on the PaperMC API."""

    def __init__(self, http_client: BaseHTTPClient, base_url: str = PAPER_API_URL) -> None:
        super().__init__(http_client, base_url)

    @property
    def backend_name(self) -> str:
        return "PaperMC"

    def get_latest_build(self, project: str, version: str) -> str:
        """Return the last build listed for a project version."""
        data = self.fetch_json(f"projects/{project}/versions/{version}/")
        builds = data.get("builds") if isinstance(data, dict) else None
        if not isinstance(builds, list) or not builds:
            raise ResolutionError(f"No {project} builds found for version {version}")
        # The API lists builds in ascending order
        return str(builds[-1])

    def get_download_url(self, project: str, version: str, build: str) -> str:
        """Get the download URL for a specific project build."""
        return self.build_url(
            f"projects/{project}/versions/{version}/builds/{build}/downloads/"
            f"{self.get_jar_filename(project, version, build)}"
        )

    @staticmethod
    def get_jar_filename(project: str, version: str, build: str) -> str:
        return f"{project}-{version}-{build}.jar"

    def resolve(
        self,
        server_type: ServerType,
        version: str,
        explicit_build: Optional[str] = None,
    ) -> ResolvedArtifact:
        project = server_type.papermc_project
        if project is None:
            raise ResolutionError(f"{server_type.display_name} is not published on the PaperMC API")

        if explicit_build is not None:
            build = str(explicit_build)
            logger.info(f"Using build {build} for {project} {version}")
        else:
            build = self.get_latest_build(project, version)
            logger.info(f"Using latest build {build} for {project} {version}")

        return ResolvedArtifact(
            file_name=self.get_jar_filename(project, version, build),
            download_url=self.get_download_url(project, version, build),
            build=build,
        )
