"""
Server directory provisioning.

This module ties the resolvers, the jar store, the downloader and the EULA
writer together into a single provisioning run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union
from urllib.parse import unquote, urlparse

from .constants import PLUGINS_DIRECTORY
from .eula import EulaWriter
from .exceptions import ServerSetupError, ValidationError
from .plugins.chain import PluginResolverChain, create_plugin_chain
from .servers.asp import AdvancedSlimePaperResolver
from .servers.base import BaseResolver, ResolvedArtifact
from .servers.registry import create_resolver_registry
from .servers.types import ServerType
from .store import JarStore
from .utils.base_api import BaseHTTPClient
from .utils.download import DownloadManager, ProgressCallback
from .utils.validation import ProvisionValidator
from .utils.versioning import parse_plugin_identifier, parse_version_spec

logger = logging.getLogger(__name__)

ResolverFactory = Callable[[BaseHTTPClient, Optional[str]], Dict[ServerType, BaseResolver]]


@dataclass
class ProvisionRequest:
    """Everything a provisioning run needs to know."""

    server_type: Union[str, ServerType]
    version: str
    server_dir: Path
    build: Optional[str] = None
    plugins: List[str] = field(default_factory=list)
    plugin_urls: List[str] = field(default_factory=list)
    asp_branch: Optional[str] = None
    include_asp_plugin: bool = True


@dataclass
class ProvisionResult:
    """Outcome of a provisioning run."""

    server_type: ServerType
    version: str
    server_jar: Path
    artifact: ResolvedArtifact
    downloaded_server: bool
    plugins: List[Path] = field(default_factory=list)
    missing_plugins: List[str] = field(default_factory=list)
    eula_written: bool = False


def plugin_file_name(url: str) -> str:
    """
    File name a plugin URL is saved under: the decoded last path segment.

    Raises:
        ValidationError: If the URL is malformed or its last segment is not
            a plain file name
    """
    try:
        segment = urlparse(url).path.rsplit("/", 1)[-1]
    except ValueError as e:
        raise ValidationError(f"Malformed plugin URL {url}", e) from e
    return ProvisionValidator.validate_file_name(unquote(segment), "Plugin file name")


class Provisioner:
    """Provisions a server directory from a ProvisionRequest."""

    def __init__(
        self,
        http_client: Optional[BaseHTTPClient] = None,
        downloader: Optional[DownloadManager] = None,
        plugin_chain: Optional[PluginResolverChain] = None,
        resolver_factory: ResolverFactory = create_resolver_registry,
        eula_writer: Optional[EulaWriter] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        self.http_client = http_client or BaseHTTPClient()
        self.downloader = downloader or DownloadManager(
            connect_timeout=self.http_client.connect_timeout,
            read_timeout=self.http_client.read_timeout,
            user_agent=self.http_client.user_agent,
        )
        self.plugin_chain = plugin_chain or create_plugin_chain(self.http_client)
        self.resolver_factory = resolver_factory
        self.eula_writer = eula_writer or EulaWriter()
        self.progress_callback = progress_callback

    def provision(self, request: ProvisionRequest) -> ProvisionResult:
        """
        Run a full provisioning pass.

        Failures resolving or downloading the server jar propagate.
        Plugin failures are logged and reported in the result instead.

        Raises:
            ResolutionError: If the server jar cannot be resolved
            DownloadError: If the server jar cannot be downloaded
        """
        server_type = request.server_type
        if not isinstance(server_type, ServerType):
            server_type = ServerType.parse(server_type)

        spec = parse_version_spec(request.version)
        if spec.build is not None:
            logger.info(f"Parsed version '{request.version}' into version '{spec.version}', build '{spec.build}'")
        build = request.build if request.build is not None else spec.build

        server_dir = Path(request.server_dir)
        server_dir.mkdir(parents=True, exist_ok=True)
        store = JarStore(server_dir)
        store.cleanup_other_types(server_type)

        resolvers = self.resolver_factory(self.http_client, request.asp_branch)
        resolver = resolvers[server_type]
        artifact = resolver.resolve(server_type, spec.version, build)

        server_jar = server_dir / artifact.file_name
        downloaded = self.install_server_jar(store, server_type, spec.version, artifact)

        result = ProvisionResult(
            server_type=server_type,
            version=spec.version,
            server_jar=server_jar,
            artifact=artifact,
            downloaded_server=downloaded,
        )

        plugins_dir = server_dir / PLUGINS_DIRECTORY
        plugins_dir.mkdir(parents=True, exist_ok=True)

        for url in request.plugin_urls:
            self._install_plugin(url, plugins_dir, result, label=url)

        for raw in request.plugins:
            identifier = parse_plugin_identifier(raw)
            logger.info(f"Searching for plugin: {identifier.describe()}")
            lookup = self.plugin_chain.resolve(identifier, spec.version)
            if not lookup.found:
                source_text = f" on {identifier.source}" if identifier.source else ""
                version_text = f"version {identifier.version} " if identifier.version else ""
                logger.warning(
                    f"Could not find a download for plugin '{identifier.name}' "
                    f"{version_text}for Minecraft {spec.version}{source_text}"
                )
                result.missing_plugins.append(raw)
                continue
            self._install_plugin(lookup.url, plugins_dir, result, label=raw)

        if (
            server_type is ServerType.ADVANCED_SLIME_PAPER
            and request.include_asp_plugin
            and isinstance(resolver, AdvancedSlimePaperResolver)
        ):
            self._install_asp_plugin(resolver, spec.version, plugins_dir, result)

        result.eula_written = self.eula_writer.ensure(server_dir)
        return result

    def install_server_jar(
        self,
        store: JarStore,
        server_type: ServerType,
        version: str,
        artifact: ResolvedArtifact,
    ) -> bool:
        """Download the resolved jar unless it is already in place."""
        ProvisionValidator.validate_file_name(artifact.file_name, "Server jar name")
        destination = store.server_dir / artifact.file_name
        if destination.exists():
            logger.info(f"{server_type.display_name} {artifact.file_name} already present.")
            return False

        store.cleanup_stale(server_type, version, artifact.build, keep_name=artifact.file_name)
        logger.info(f"Downloading {server_type.display_name} {version} build {artifact.build}...")
        return self.downloader.fetch(artifact.download_url, destination, self.progress_callback)

    def _install_plugin(
        self,
        url: str,
        plugins_dir: Path,
        result: ProvisionResult,
        label: str,
        file_name: Optional[str] = None,
    ) -> None:
        try:
            if file_name is None:
                file_name = plugin_file_name(url)
            else:
                file_name = ProvisionValidator.validate_file_name(file_name, "Plugin file name")
        except ServerSetupError as e:
            logger.warning(f"Cannot derive a file name for plugin '{label}' from {url}: {e}")
            result.missing_plugins.append(label)
            return

        destination = plugins_dir / file_name
        if destination.resolve().parent != plugins_dir.resolve():
            logger.warning(f"Plugin '{label}' would be written outside {plugins_dir}, skipping")
            result.missing_plugins.append(label)
            return

        try:
            if self.downloader.fetch(url, destination, self.progress_callback):
                logger.info(f"Saved plugin {file_name}")
            else:
                logger.info(f"Plugin {file_name} already present.")
        except ServerSetupError as e:
            logger.warning(f"Failed to download plugin '{label}': {e}")
            result.missing_plugins.append(label)
            return
        result.plugins.append(destination)

    def _install_asp_plugin(
        self,
        resolver: AdvancedSlimePaperResolver,
        version: str,
        plugins_dir: Path,
        result: ProvisionResult,
    ) -> None:
        try:
            artifact = resolver.resolve_plugin(version)
        except ServerSetupError as e:
            logger.warning(f"Failed to resolve ASP plugin: {e}")
            return
        if artifact is None:
            logger.warning(f"No ASP plugin found in build for version {version} on branch {resolver.branch}")
            return
        self._install_plugin(
            artifact.download_url, plugins_dir, result, label=artifact.file_name, file_name=artifact.file_name
        )
