"""
Purpur resolver.

Purpur reports its latest build in a nested ``builds.latest`` field, a
different shape from the PaperMC API.
"""

import logging
from typing import Optional

from ..constants import PURPUR_API_URL
from ..exceptions import ResolutionError
from ..utils.base_api import BaseHTTPClient
from .base import BaseResolver, ResolvedArtifact
from .types import ServerType

logger = logging.getLogger(__name__)


class PurpurResolver(BaseResolver):
    """Resolver for the Purpur API."""

    def __init__(self, http_client: BaseHTTPClient, base_url: str = PURPUR_API_URL) -> None:
        super().__init__(http_client, base_url)

    @property
    def backend_name(self) -> str:
        return "Purpur"

    def get_latest_build(self, version: str) -> str:
        data = self.fetch_json(f"purpur/{version}")
        builds = data.get("builds") if isinstance(data, dict) else None
        latest = builds.get("latest") if isinstance(builds, dict) else None
        if not latest:
            raise ResolutionError(f"Could not get latest Purpur build for version {version}")
        return str(latest)

    def resolve(
        self,
        server_type: ServerType,
        version: str,
        explicit_build: Optional[str] = None,
    ) -> ResolvedArtifact:
        if explicit_build is not None:
            build = str(explicit_build)
            logger.info(f"Using Purpur build {build} for {version}")
        else:
            build = self.get_latest_build(version)
            logger.info(f"Using latest Purpur build {build} for {version}")

        return ResolvedArtifact(
            file_name=f"{server_type.jar_prefix}{version}-{build}.jar",
            download_url=self.build_url(f"purpur/{version}/{build}/download"),
            build=build,
        )
