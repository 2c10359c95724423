"""
Server types supported by ServerSetup.

Each type knows the jar prefix used for files in the server directory and,
for the PaperMC family, the project name on the PaperMC API.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class ServerType(Enum):
    """Closed set of server flavours that can be provisioned."""

    PAPER = "paper"
    VELOCITY = "velocity"
    FOLIA = "folia"
    PURPUR = "purpur"
    ADVANCED_SLIME_PAPER = "advanced_slime_paper"

    @property
    def jar_prefix(self) -> str:
        return _JAR_PREFIXES[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def papermc_project(self) -> Optional[str]:
        """Project name on the PaperMC API, or None outside the PaperMC family."""
        if self in (ServerType.PAPER, ServerType.VELOCITY, ServerType.FOLIA):
            return self.value
        return None

    @classmethod
    def parse(cls, value: str) -> 'ServerType':
        """
        Parse free text into a server type.

        Matching is case-insensitive and treats ``-`` and spaces as ``_``.
        Unrecognized input falls back to PAPER; the fallback is logged.
        """
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        server_type = _ALIASES.get(key)
        if server_type is None:
            logger.warning(f"Unknown server type '{value}', falling back to {cls.PAPER.display_name}")
            return cls.PAPER
        return server_type


_JAR_PREFIXES: Dict[ServerType, str] = {
    ServerType.PAPER: "paper-",
    ServerType.VELOCITY: "velocity-",
    ServerType.FOLIA: "folia-",
    ServerType.PURPUR: "purpur-",
    ServerType.ADVANCED_SLIME_PAPER: "asp-",
}

_DISPLAY_NAMES: Dict[ServerType, str] = {
    ServerType.PAPER: "Paper",
    ServerType.VELOCITY: "Velocity",
    ServerType.FOLIA: "Folia",
    ServerType.PURPUR: "Purpur",
    ServerType.ADVANCED_SLIME_PAPER: "Advanced Slime Paper",
}

_ALIASES: Dict[str, ServerType] = {
    "paper": ServerType.PAPER,
    "velocity": ServerType.VELOCITY,
    "folia": ServerType.FOLIA,
    "purpur": ServerType.PURPUR,
    "advanced_slime_paper": ServerType.ADVANCED_SLIME_PAPER,
    "asp": ServerType.ADVANCED_SLIME_PAPER,
}


def all_jar_prefixes() -> List[str]:
    """Jar prefixes of every known server type."""
    return [server_type.jar_prefix for server_type in ServerType]
