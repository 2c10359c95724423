"""
Server jar store management.

The server directory is the only record of what is installed. Every
operation in this module lists the directory again instead of caching its
contents, so the results always reflect what is on disk.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .constants import JAR_SUFFIX
from .exceptions import LaunchPreconditionError
from .servers.types import ServerType, all_jar_prefixes

logger = logging.getLogger(__name__)


class JarStore:
    """Keeps at most one server jar of the active type in a directory."""

    def __init__(self, server_dir: Path) -> None:
        self.server_dir = Path(server_dir)

    def list_jars(self) -> List[Path]:
        """All jar files directly inside the server directory."""
        if not self.server_dir.is_dir():
            return []
        return sorted(
            path for path in self.server_dir.iterdir()
            if path.is_file() and path.name.endswith(JAR_SUFFIX)
        )

    def _delete(self, jars: List[Path], reason: str) -> List[Path]:
        for jar in jars:
            logger.info(f"Removing {reason}: {jar.name}")
            jar.unlink()
        return jars

    def cleanup_other_types(self, active: ServerType) -> List[Path]:
        """Delete jars that belong to any server type other than active."""
        other_prefixes = [p for p in all_jar_prefixes() if p != active.jar_prefix]
        stale = [
            jar for jar in self.list_jars()
            if any(jar.name.startswith(prefix) for prefix in other_prefixes)
            and not jar.name.startswith(active.jar_prefix)
        ]
        return self._delete(stale, "jar from different server type")

    def cleanup_stale(
        self,
        server_type: ServerType,
        version: str,
        build: Optional[str] = None,
        keep_name: Optional[str] = None,
    ) -> List[Path]:
        """
        Delete jars of server_type that are not the target artifact.

        With a known build only ``<prefix><version>-<build>.jar`` survives;
        without one, any jar of the same version survives. Advanced Slime
        Paper file names come from the marketplace, so for that type only
        keep_name survives.
        """
        prefix = server_type.jar_prefix
        same_type = [jar for jar in self.list_jars() if jar.name.startswith(prefix)]

        if server_type is ServerType.ADVANCED_SLIME_PAPER:
            stale = [jar for jar in same_type if jar.name != keep_name]
        elif build is not None:
            target = f"{prefix}{version}-{build}{JAR_SUFFIX}"
            stale = [jar for jar in same_type if jar.name != target]
        else:
            stem = f"{prefix}{version}-"
            stale = [jar for jar in same_type if not jar.name.startswith(stem)]

        return self._delete(stale, "old server jar")

    def find_server_jar(
        self,
        server_type: ServerType,
        version: str,
        build: Optional[str] = None,
    ) -> Optional[Path]:
        """
        Locate the jar a launcher should run.

        Returns None when no jar matches, or when several do and the
        choice would be ambiguous.
        """
        prefix = server_type.jar_prefix
        if server_type is ServerType.ADVANCED_SLIME_PAPER:
            candidates = [jar for jar in self.list_jars() if jar.name.startswith(prefix)]
        elif build is not None:
            jar = self.server_dir / f"{prefix}{version}-{build}{JAR_SUFFIX}"
            return jar if jar.is_file() else None
        else:
            stem = f"{prefix}{version}-"
            candidates = [jar for jar in self.list_jars() if jar.name.startswith(stem)]

        return candidates[0] if len(candidates) == 1 else None

    def require_server_jar(
        self,
        server_type: ServerType,
        version: str,
        build: Optional[str] = None,
    ) -> Path:
        """Like find_server_jar, but raises when nothing usable is present."""
        jar = self.find_server_jar(server_type, version, build)
        if jar is None:
            build_text = f" build {build}" if build is not None else ""
            raise LaunchPreconditionError(
                f"{server_type.display_name} jar for {version}{build_text} not found in "
                f"{self.server_dir} - run provisioning first."
            )
        return jar
