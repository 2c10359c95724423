"""Dispatch table mapping each server type to its backend resolver."""

from typing import Dict, Optional

from ..utils.base_api import BaseHTTPClient
from .asp import AdvancedSlimePaperResolver
from .base import BaseResolver
from .papermc import PaperMCResolver
from .purpur import PurpurResolver
from .types import ServerType


def create_resolver_registry(
    http_client: BaseHTTPClient,
    asp_branch: Optional[str] = None,
) -> Dict[ServerType, BaseResolver]:
    """Map every server type to the resolver for its backend."""
    papermc = PaperMCResolver(http_client)
    return {
        ServerType.PAPER: papermc,
        ServerType.VELOCITY: papermc,
        ServerType.FOLIA: papermc,
        ServerType.PURPUR: PurpurResolver(http_client),
        ServerType.ADVANCED_SLIME_PAPER: AdvancedSlimePaperResolver(http_client, branch=asp_branch),
    }
