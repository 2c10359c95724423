"""
Command Line Interface for svsetup.

This module provides the main CLI interface using Click framework
for provisioning and inspecting server directories.
"""

import logging
import sys
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from . import __version__
from .config.logging_config import setup_logging
from .config.settings import config
from .exceptions import ServerSetupError
from .provisioner import ProvisionRequest, Provisioner
from .servers.types import ServerType
from .store import JarStore
from .utils.base_api import BaseHTTPClient
from .utils.download import DownloadManager
from .utils.validation import validate_provision_input
from .utils.versioning import parse_version_spec

console = Console()
logger = logging.getLogger(__name__)

BACKENDS = {
    ServerType.PAPER: "PaperMC",
    ServerType.VELOCITY: "PaperMC",
    ServerType.FOLIA: "PaperMC",
    ServerType.PURPUR: "Purpur",
    ServerType.ADVANCED_SLIME_PAPER: "InfernalSuite",
}


def _setting(value, settings: dict, key: str):
    return value if value is not None else settings.get(key)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.version_option(version=__version__, prog_name="svsetup")
def main(debug: bool, no_color: bool) -> None:
    """svsetup - provision Paper, Velocity, Folia, Purpur and ASP server directories."""
    log_level = "DEBUG" if debug else config.get("logging.level", "INFO")
    enable_rich = not no_color and config.get("ui.colored_output", True)
    setup_logging(log_level=log_level, enable_rich_logging=enable_rich)


@main.command()
@click.option('--type', '-t', 'server_type', help='Server type (paper, velocity, folia, purpur, asp)')
@click.option('--version', '-v', 'version', help='Game version, optionally suffixed with -<build>')
@click.option('--build', '-b', help='Build number, overrides a build in the version string')
@click.option('--dir', '-d', 'directory', type=click.Path(), help='Server directory')
@click.option('--plugin', '-p', 'plugins', multiple=True, help='Plugin as [hangar|modrinth:]name[:version]')
@click.option('--plugin-url', 'plugin_urls', multiple=True, help='Direct plugin download URL')
@click.option('--asp-branch', help='Advanced Slime Paper branch')
@click.option('--asp-plugin/--no-asp-plugin', default=None, help='Install the ASP companion plugin')
@click.option('--config', '-c', 'project_file', type=click.Path(exists=True, dir_okay=False),
              help='Project YAML file with a provisioning section')
def provision(
    server_type: Optional[str],
    version: Optional[str],
    build: Optional[str],
    directory: Optional[str],
    plugins: Tuple[str, ...],
    plugin_urls: Tuple[str, ...],
    asp_branch: Optional[str],
    asp_plugin: Optional[bool],
    project_file: Optional[str],
) -> None:
    """Download the server jar, plugins and accept the EULA."""
    try:
        settings = config.provisioning_settings(project_file)
        params = validate_provision_input(
            server_type=_setting(server_type, settings, "server_type"),
            version=_setting(version, settings, "version"),
            directory=_setting(directory, settings, "server_dir"),
            build=_setting(build, settings, "build"),
            plugins=list(plugins) or settings.get("plugins") or [],
            plugin_urls=list(plugin_urls) or settings.get("plugin_urls") or [],
        )
    except ServerSetupError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    request = ProvisionRequest(
        server_type=params['server_type'],
        version=params['version'],
        server_dir=params['directory'],
        build=params['build'],
        plugins=params['plugins'],
        plugin_urls=params['plugin_urls'],
        asp_branch=_setting(asp_branch, settings, "asp_branch"),
        include_asp_plugin=bool(_setting(asp_plugin, settings, "include_asp_plugin")),
    )

    http_client = BaseHTTPClient(
        connect_timeout=config.get("network.connect_timeout"),
        read_timeout=config.get("network.read_timeout"),
    )
    downloader = DownloadManager(
        chunk_size=config.get("network.chunk_size"),
        connect_timeout=http_client.connect_timeout,
        read_timeout=http_client.read_timeout,
    )

    try:
        with http_client, downloader, Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeRemainingColumn(),
            console=console
        ) as progress:
            task_id = progress.add_task("Downloading...", total=None)

            def progress_callback(downloaded: int, total: int) -> None:
                progress.update(task_id, completed=downloaded, total=total)

            provisioner = Provisioner(
                http_client=http_client,
                downloader=downloader,
                progress_callback=progress_callback,
            )
            result = provisioner.provision(request)
    except ServerSetupError as e:
        logger.error(f"Provisioning failed: {e}")
        console.print(f"[red]Provisioning failed: {e}[/red]")
        sys.exit(1)

    table = Table(title=f"{result.server_type.display_name} Server")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Version", result.version)
    table.add_row("Build", str(result.artifact.build))
    table.add_row("Server Jar", result.server_jar.name)
    table.add_row("Jar Status", "Downloaded" if result.downloaded_server else "Already present")
    table.add_row("Plugins", "\n".join(p.name for p in result.plugins) or "-")
    table.add_row("Directory", str(params['directory']))
    console.print(table)

    if result.missing_plugins:
        console.print(Panel(
            "\n".join(result.missing_plugins),
            title="Plugins not installed",
            border_style="yellow"
        ))


@main.command()
@click.option('--type', '-t', 'server_type', help='Server type')
@click.option('--version', '-v', 'version', help='Game version, optionally suffixed with -<build>')
@click.option('--build', '-b', help='Build number')
@click.option('--dir', '-d', 'directory', type=click.Path(), help='Server directory')
@click.option('--config', '-c', 'project_file', type=click.Path(exists=True, dir_okay=False),
              help='Project YAML file with a provisioning section')
def locate(
    server_type: Optional[str],
    version: Optional[str],
    build: Optional[str],
    directory: Optional[str],
    project_file: Optional[str],
) -> None:
    """Print the server jar a launcher would run."""
    try:
        settings = config.provisioning_settings(project_file)
        spec = parse_version_spec(str(_setting(version, settings, "version")))
        build = _setting(build, settings, "build")
        store = JarStore(_setting(directory, settings, "server_dir"))
        jar = store.require_server_jar(
            ServerType.parse(str(_setting(server_type, settings, "server_type"))),
            spec.version,
            str(build) if build is not None else spec.build,
        )
    except ServerSetupError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    click.echo(str(jar.resolve()))


@main.command()
def types() -> None:
    """List supported server types."""
    table = Table(title="Server Types")
    table.add_column("Type", style="cyan")
    table.add_column("Jar Prefix", style="green")
    table.add_column("Backend", style="yellow")

    for server_type in ServerType:
        table.add_row(server_type.display_name, server_type.jar_prefix, BACKENDS[server_type])

    console.print(table)


@main.command()
@click.option('--reset', is_flag=True, help='Reset configuration to defaults')
def config_cmd(reset: bool) -> None:
    """Manage configuration settings."""

    if reset:
        if click.confirm("Are you sure you want to reset configuration to defaults?"):
            config.reset_to_defaults()
            console.print("[green]Configuration reset to defaults.[/green]")
        return

    console.print(f"[blue]Configuration file: {config.config_file}[/blue]")
    console.print("Use --reset to reset to defaults or edit the file directly.")


if __name__ == "__main__":
    main()
