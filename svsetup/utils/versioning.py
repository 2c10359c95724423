"""
Parsing of version strings and plugin identifiers.

Both parsers are pure functions; logging the outcome is left to callers.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..constants import PLUGIN_SOURCES

_BUILD_SUFFIX = re.compile(r"^(.+)-(\d+)$")


@dataclass(frozen=True)
class VersionSpec:
    """A game version with an optional build number taken from its suffix."""

    version: str
    build: Optional[str] = None


@dataclass(frozen=True)
class PluginIdentifier:
    """A plugin request of the form ``[source:]name[:version]``."""

    name: str
    source: Optional[str] = None
    version: Optional[str] = None

    def describe(self) -> str:
        text = self.name
        if self.version:
            text += f" version {self.version}"
        if self.source:
            text += f" on {self.source}"
        return text


def parse_version_spec(value: str) -> VersionSpec:
    """Split ``1.21.8-42`` into version ``1.21.8`` and build ``42``."""
    match = _BUILD_SUFFIX.match(value)
    if match:
        return VersionSpec(version=match.group(1), build=match.group(2))
    return VersionSpec(version=value)


def parse_plugin_identifier(value: str) -> PluginIdentifier:
    """
    Parse a plugin identifier.

    Everything after the name is rejoined verbatim, so version strings
    may themselves contain colons.
    """
    parts = value.strip().split(":")
    if len(parts) >= 2 and parts[0].lower() in PLUGIN_SOURCES:
        source = parts[0].lower()
        name = parts[1]
        version = ":".join(parts[2:]) or None
    else:
        source = None
        name = parts[0]
        version = ":".join(parts[1:]) or None
    return PluginIdentifier(name=name, source=source, version=version)
