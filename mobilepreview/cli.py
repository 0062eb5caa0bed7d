"""
Command-line interface for mobile preview tooling.

Provides commands for checking the development environment, listing
simulators and opening a component preview in a simulator.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import ConfigError, ConfigLoader, PreviewConfig
from .errors import DeviceCatalogError, ExternalCommandError, LifecycleError
from .requirements import RequirementsEngine
from .requirements.checks import PLATFORMS, setup_requirements
from .simulator import (
    AppTarget,
    CommandRunner,
    LifecycleStep,
    SimulatorLifecycleController,
    StepSeverity,
    UrlTarget,
    XcodeService,
)

console = Console()
logger = logging.getLogger("mobilepreview")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config_path: Optional[str]) -> PreviewConfig:
    try:
        return ConfigLoader(config_path).load()
    except ConfigError as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        sys.exit(1)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(),
    default=None,
    help="Configuration YAML file",
)


# ============================================================
# Main CLI Group
# ============================================================

@click.group()
@click.version_option(version=__version__, prog_name="mobile-preview")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose: bool):
    """
    Mobile Preview

    Check your mobile development setup and preview components in an
    iOS simulator.
    """
    ctx.ensure_object(dict)
    _configure_logging(verbose)


# ============================================================
# INIT Command
# ============================================================

@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="./mobile-preview.yaml",
    help="Output configuration file",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(output: str, force: bool):
    """Write a configuration file with the default settings."""
    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(f"[yellow]{output} already exists. Use --force to overwrite.[/yellow]")
        sys.exit(1)

    ConfigLoader().save(output_path)
    console.print(f"[green]Configuration written to[/green] [cyan]{output}[/cyan]")


# ============================================================
# SETUP Command
# ============================================================

@cli.command()
@click.option(
    "--platform",
    "-p",
    type=click.Choice(PLATFORMS, case_sensitive=False),
    required=True,
    help="Target mobile platform",
)
@config_option
def setup(platform: str, config_path: Optional[str]):
    """Check that the environment meets all requirements."""
    config = _load_config(config_path)
    runner = CommandRunner(logger=logger.getChild("runner"))
    checks = setup_requirements(
        platform,
        runner,
        config,
        xcode=XcodeService(runner, config.ios, logger=logger.getChild("xcode")),
    )

    engine = RequirementsEngine(checks, logger=logger.getChild("requirements"))
    result = asyncio.run(engine.execute_setup(console=console))

    console.print()
    if result.all_passed:
        console.print(f"[green]✓ {result.summary()}[/green]")
    else:
        console.print(f"[red]✗ {result.summary()}[/red]")
        sys.exit(1)


# ============================================================
# RUNTIMES / DEVICES Commands
# ============================================================

@cli.command()
@config_option
def runtimes(config_path: Optional[str]):
    """List supported simulator runtimes, latest first."""
    config = _load_config(config_path)
    xcode = XcodeService(
        CommandRunner(logger=logger.getChild("runner")),
        config.ios,
        logger=logger.getChild("xcode"),
    )

    try:
        found = asyncio.run(xcode.supported_runtimes())
    except (ExternalCommandError, DeviceCatalogError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    for runtime in found:
        console.print(runtime)


@cli.command()
@config_option
def devices(config_path: Optional[str]):
    """List available simulators on supported runtimes."""
    config = _load_config(config_path)
    xcode = XcodeService(
        CommandRunner(logger=logger.getChild("runner")),
        config.ios,
        logger=logger.getChild("xcode"),
    )
    found = asyncio.run(xcode.supported_simulators())

    if not found:
        console.print("[yellow]No supported simulators found.[/yellow]")
        return

    table = Table(title="Simulators", show_header=True, header_style="bold cyan")
    table.add_column("Name")
    table.add_column("UDID")
    table.add_column("Runtime")
    table.add_column("State")
    for device in found:
        state = f"[green]{device.state}[/green]" if device.is_booted else f"[dim]{device.state}[/dim]"
        table.add_row(device.name, device.identifier, device.runtime_version, state)
    console.print(table)


# ============================================================
# LAUNCH Command
# ============================================================

@cli.command()
@click.option("--device", "-d", required=True, help="Simulator name or UDID")
@click.option("--url", help="URL to open in the simulator browser")
@click.option("--app", "bundle_id", help="Bundle id of the native app to launch")
@click.option("--component", default="", help="Component name passed to the app (required with --app)")
@click.option("--project-dir", default="", help="Project directory passed to the app (required with --app)")
@click.option("--app-args", default="", help="Custom arguments passed to the app")
@config_option
def launch(
    device: str,
    url: Optional[str],
    bundle_id: Optional[str],
    component: str,
    project_dir: str,
    app_args: str,
    config_path: Optional[str],
):
    """Boot a simulator and open a URL or launch an app in it."""
    if bool(url) == bool(bundle_id):
        raise click.UsageError("Specify exactly one of --url or --app")
    if bundle_id and not (component and project_dir):
        raise click.UsageError("--app requires --component and --project-dir")

    config = _load_config(config_path)
    target = UrlTarget(url=url) if url else AppTarget(
        bundle_id=bundle_id,
        component_name=component,
        project_dir=project_dir,
        extra_args=app_args,
    )

    try:
        outcomes = asyncio.run(_launch(config, device, target))
    except (LifecycleError, ExternalCommandError, DeviceCatalogError) as e:
        _print_skipped(getattr(e, "outcomes", []))
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    _print_skipped(outcomes)
    console.print(Panel.fit(
        f"[green]Device {device} is ready.[/green]",
        title="Launch Complete",
        border_style="green",
    ))


def _print_skipped(outcomes) -> None:
    for outcome in outcomes:
        if outcome.severity is StepSeverity.BEST_EFFORT and not outcome.succeeded:
            console.print(f"[yellow]⚠ {outcome.step.value} skipped: {outcome.error}[/yellow]")


async def _launch(config: PreviewConfig, device: str, target):
    runner = CommandRunner(logger=logger.getChild("runner"))
    xcode = XcodeService(runner, config.ios, logger=logger.getChild("xcode"))

    record = await xcode.find_simulator(device)
    device_id = record.identifier if record else device

    if config.ios.open_simulator_app:
        await xcode.open_simulator_app()

    with console.status("Launching", spinner="dots") as status:
        def on_step(step: LifecycleStep, description: str) -> None:
            status.update(f"[bold]Launching[/bold] {description}")

        controller = SimulatorLifecycleController(
            runner,
            xcrun_path=config.ios.xcrun_path,
            launch_config=config.launch,
            logger=logger.getChild("lifecycle"),
            on_step=on_step,
        )
        return await controller.bring_device_online_and_open(device_id, target)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
