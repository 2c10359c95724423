"""
Constants used throughout ServerSetup.

This module contains backend URLs, network settings and file naming
conventions shared by the resolvers and the provisioner.
"""

from typing import List

from . import __version__

# Network settings
CONNECT_TIMEOUT_SECONDS: float = 10.0
READ_TIMEOUT_SECONDS: float = 30.0
DOWNLOAD_CHUNK_SIZE: int = 8192
USER_AGENT: str = f"svsetup/{__version__}"

# Backend API URLs
PAPER_API_URL: str = "https://api.papermc.io/v2"
PURPUR_API_URL: str = "https://api.purpurmc.org/v2"
ASP_API_URL: str = "https://api.infernalsuite.com/v1"
ASP_MANUAL_DOWNLOAD_URL: str = "https://infernalsuite.com/download/asp/"
HANGAR_API_URL: str = "https://hangar.papermc.io/api/v1"
MODRINTH_API_URL: str = "https://api.modrinth.com/v2"

# Plugin marketplaces
HANGAR_SOURCE: str = "hangar"
MODRINTH_SOURCE: str = "modrinth"
PLUGIN_SOURCES: List[str] = [HANGAR_SOURCE, MODRINTH_SOURCE]
HANGAR_SEARCH_LIMIT: int = 1
HANGAR_VERSIONS_LIMIT: int = 100
MODRINTH_SEARCH_LIMIT: int = 1
PLUGIN_PLATFORM: str = "PAPER"
PLUGIN_LOADER: str = "paper"

# Server directory layout
JAR_SUFFIX: str = ".jar"
PLUGINS_DIRECTORY: str = "plugins"
EULA_FILENAME: str = "eula.txt"
EULA_ACCEPTED_TOKEN: str = "eula=true"

# Provisioning defaults
DEFAULT_SERVER_TYPE: str = "paper"
DEFAULT_VERSION: str = "1.21.8"
DEFAULT_SERVER_DIRECTORY: str = "development-server"

# Validation limits
MAX_VERSION_LENGTH: int = 100
MAX_BUILD_LENGTH: int = 64
VALID_VERSION_CHARS: str = r'^[a-zA-Z0-9._+\-]+$'
VALID_BUILD_CHARS: str = r'^[a-zA-Z0-9._\-]+$'
FORBIDDEN_SYSTEM_PATHS: List[str] = ['/etc', '/usr', '/var', '/boot', '/sys', '/proc', '/dev']
