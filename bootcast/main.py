"""
Main entry point for bootcast.

This module provides the command-line interface that runs an application
through its startup lifecycle with the configured listeners.
"""

import logging
import sys
from typing import List, Optional

import typer

from .application.application import Application
from .application.listener_loader import import_object
from .core.domain.events import LifecyclePhase
from .core.domain.exceptions import ApplicationLifecycleFailure, ListenerLoadError
from .infrastructure.config.loader import ConfigLoader
from .infrastructure.config.models import VALID_LOG_LEVELS, ApplicationConfig, ListenerConfig
from .infrastructure.logging.setup import setup_logging

# Create CLI application
cli = typer.Typer(
    name="bootcast",
    help="Run an application through its startup lifecycle and publish events to its listeners"
)

logger = logging.getLogger(__name__)


def describe_dispatch(phase: LifecyclePhase) -> str:
    """Describe which dispatcher delivers events for a phase."""
    if phase is LifecyclePhase.FAILED:
        return "context if active, otherwise initial multicaster"
    if phase.uses_context_dispatch:
        return "context"
    return "initial multicaster"


@cli.command()
def run(
    args: Optional[List[str]] = typer.Argument(
        None, help="Arguments passed to the application and its runners"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file path"
    ),
    listeners: Optional[List[str]] = typer.Option(
        None, "--listener", "-l", help="Additional listener as module:Class"
    ),
    runners: Optional[List[str]] = typer.Option(
        None, "--runner", "-r", help="Runner callable as module:function"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug mode"
    )
) -> None:
    """Run the application lifecycle."""

    # Load configuration
    config_loader = ConfigLoader()
    try:
        config = config_loader.load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    # Override with command line arguments
    try:
        for path in listeners or []:
            config.listeners.append(ListenerConfig(path=path))
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)
    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            typer.echo(f"Configuration error: log level must be one of "
                       f"{', '.join(VALID_LOG_LEVELS)}, got {log_level}", err=True)
            sys.exit(2)
        config.logging.level = log_level.upper()
    if debug:
        config.debug = True
        config.logging.level = "DEBUG"

    # Setup logging
    setup_logging(config.logging)

    logger.info(f"Running {config.name} v{config.version}")
    logger.info(f"Environment: {config.environment}")

    try:
        application = Application.from_config(config)
        for path in runners or []:
            application.add_runners(import_object(path))
    except (ListenerLoadError, ImportError, AttributeError) as e:
        typer.echo(f"Cannot prepare application: {e}", err=True)
        sys.exit(2)

    try:
        context = application.run(args or [])
    except ApplicationLifecycleFailure as e:
        logger.error(f"Application failed to start: {e}")
        sys.exit(1)

    typer.echo(f"{application.name} is running (context: {context.name})")


@cli.command()
def phases() -> None:
    """List lifecycle phases in publication order with their dispatcher."""
    for phase in list(LifecyclePhase.ordered()) + [LifecyclePhase.FAILED]:
        typer.echo(f"{phase.value:<22} {describe_dispatch(phase)}")


@cli.command()
def init_config(
    output: str = typer.Option(
        "bootcast.yaml", "--output", "-o", help="Output configuration file"
    ),
    format: str = typer.Option(
        "yaml", "--format", "-f", help="Configuration format (yaml/json)"
    )
) -> None:
    """Generate a default configuration file."""

    config = ApplicationConfig(listeners=[
        ListenerConfig(path="bootcast.listeners.builtin:StartupTimingListener"),
        ListenerConfig(path="bootcast.listeners.builtin:FailureReportingListener"),
    ])
    config_loader = ConfigLoader()

    try:
        config_loader.save_config(config, output, format)
        typer.echo(f"Default configuration saved to {output}")
    except ValueError as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
def validate_config(
    config_file: str = typer.Argument(...,
                                      help="Configuration file to validate")
) -> None:
    """Validate a configuration file and the listeners it declares."""

    config_loader = ConfigLoader()

    try:
        config = config_loader.load_config(config_file)
        Application.from_config(config)
    except (FileNotFoundError, ValueError, ListenerLoadError) as e:
        typer.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)

    typer.echo(f"Configuration file {config_file} is valid")
    typer.echo(f"Application: {config.name} v{config.version}")
    typer.echo(f"Listeners: {len(config.enabled_listeners())}")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
