"""
Base CLI infrastructure and common utilities.

Provides configuration loading, output helpers and error handling shared
by all CLI commands.
"""

import functools
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from user_directory.lib.config import Config, get_config_manager, setup_logging


# Rich console for formatting output
console = Console()
logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Base exception for CLI errors."""
    pass


def handle_cli_errors(f):
    """Decorator to handle CLI errors gracefully."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except CLIError as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"[red]Unexpected error: {e}[/red]")
            logger.exception("Unexpected error in CLI command")
            sys.exit(1)
    return wrapper


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def print_table(rows: list, headers: list, title: Optional[str] = None) -> None:
    """Print rows as a rich table."""
    table = Table(title=title)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*[str(value) for value in row])
    console.print(table)


def add_common_options(f):
    """Add common CLI options to a command."""
    f = click.option(
        "--config",
        type=click.Path(exists=True),
        help="Path to configuration file"
    )(f)
    f = click.option(
        "--env-file",
        type=click.Path(exists=True),
        help="Path to environment file"
    )(f)
    f = click.option(
        "--verbose", "-v",
        is_flag=True,
        help="Enable verbose logging"
    )(f)
    return f


def load_cli_config(config_file: Optional[str], env_file: Optional[str], verbose: bool) -> Config:
    """
    Load configuration and set up logging for a CLI command.

    Args:
        config_file: Path to configuration file
        env_file: Path to environment file
        verbose: Enable verbose logging
    """
    try:
        config = get_config_manager(config_file, env_file).load_config()
    except ValueError as e:
        raise CLIError(f"Invalid configuration: {e}")

    setup_logging(config)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    return config
