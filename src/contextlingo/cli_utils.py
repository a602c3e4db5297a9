"""Shared CLI helpers: console, exit codes, logging setup and message output."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_WARNING = 3

console = Console()

# Log records go to stderr so exported text on stdout stays clean
err_console = Console(stderr=True)


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure root logging for a CLI run.

    Args:
        verbose: DEBUG level. Takes precedence over quiet.
        quiet: WARNING level.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, markup=False)],
        force=True,
    )


def _error(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")


def _success(message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]")


def _warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def _info(message: str) -> None:
    console.print(f"[dim]{escape(message)}[/dim]")
