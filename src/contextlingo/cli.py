"""Typer CLI entry point for contextlingo.

Exports the stored settings to the commented text format, imports edited
documents back, and checks documents without touching the store. Only
argument parsing and output here; the work is done in core.
"""

import logging
from pathlib import Path
from typing import Any

import typer
from rich.markup import escape
from rich.table import Table

from contextlingo.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_WARNING,
    _error,
    _info,
    _setup_logging,
    _success,
    _warning,
    console,
)
from contextlingo.core.config import (
    SECTION_ORDER,
    ParseIssue,
    ValidationProblem,
    default_document,
    generate_config_text,
    get_section,
    get_sections,
    import_config_text,
    validate_document,
)
from contextlingo.core.config.constants import MAX_CONFIG_SIZE
from contextlingo.core.exceptions import ContextLingoError
from contextlingo.core.io import atomic_write, read_text_limited
from contextlingo.core.storage import SettingsStore

logger = logging.getLogger(__name__)


app = typer.Typer(
    name="contextlingo",
    help="Export, import and check ContextLingo settings documents",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Export, import and check ContextLingo settings documents."""
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


def _verbose_option() -> Any:
    return typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug output (show detailed logging)",
    )


def _quiet_option() -> Any:
    return typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    )


def _store_option() -> Any:
    return typer.Option(
        None,
        "--store",
        "-s",
        help="Settings store file (defaults to $CONTEXTLINGO_STORE or ~/.contextlingo/storage.yaml)",
    )


def _issues_table(issues: list[ParseIssue], problems: list[ValidationProblem]) -> Table:
    table = Table(title="Document Issues")
    table.add_column("Where", style="cyan")
    table.add_column("Kind")
    table.add_column("Detail")
    for issue in issues:
        table.add_row(
            f"line {issue.line}",
            "[yellow]skipped line[/yellow]",
            f"{escape(issue.reason)}: {escape(issue.text)}",
        )
    for problem in problems:
        table.add_row(escape(problem.location), "[red]invalid value[/red]", escape(problem.message))
    return table


def _fail(e: Exception, verbose: bool) -> typer.Exit:
    if isinstance(e, ContextLingoError):
        _error(str(e))
        return typer.Exit(code=EXIT_CONFIG_ERROR)
    _error(f"Unexpected error: {e}")
    if verbose:
        console.print_exception()
    return typer.Exit(code=EXIT_ERROR)


@app.command()
def export(
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the document to this file instead of stdout",
    ),
    defaults: bool = typer.Option(
        False,
        "--defaults",
        help="Export the built-in defaults instead of the stored settings",
    ),
    store: str | None = _store_option(),
    verbose: bool = _verbose_option(),
    quiet: bool = _quiet_option(),
) -> None:
    """Export settings as a commented, editable document."""
    _setup_logging(verbose, quiet)
    try:
        if defaults:
            text = generate_config_text(default_document())
        else:
            text = SettingsStore.open(store).export_text()

        if output is None:
            typer.echo(text, nl=False)
            return

        atomic_write(output, text)
        if not quiet:
            _success(f"Exported settings to {output}")
    except Exception as e:
        raise _fail(e, verbose) from None


@app.command("import")
def import_(
    file: Path = typer.Argument(..., help="Document to import"),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show what would change without writing the store",
    ),
    store: str | None = _store_option(),
    verbose: bool = _verbose_option(),
    quiet: bool = _quiet_option(),
) -> None:
    """Import a document into the settings store.

    Sections present in the document replace the stored ones; sections
    left out keep their current values.
    """
    _setup_logging(verbose, quiet)
    try:
        text = read_text_limited(file, MAX_CONFIG_SIZE)
        report = SettingsStore.open(store).import_text(text, dry_run=dry_run)
    except Exception as e:
        raise _fail(e, verbose) from None

    if report.issues or report.problems:
        console.print(_issues_table(report.issues, report.problems))
        _warning(
            f"{len(report.issues)} line(s) skipped, {len(report.problems)} invalid value(s); "
            "affected fields keep their defaults where possible"
        )

    if not report.sections:
        _warning("No configuration sections found in the document")
        return

    sections = ", ".join(report.sections)
    if dry_run:
        _info(f"Dry run: would import {sections}")
    elif not quiet:
        _success(f"Imported {sections}")


@app.command()
def check(
    file: Path = typer.Argument(..., help="Document to check"),
    verbose: bool = _verbose_option(),
    quiet: bool = _quiet_option(),
) -> None:
    """Check a document for unreadable lines and invalid values.

    Exits with code 3 when issues are found.
    """
    _setup_logging(verbose, quiet)
    try:
        text = read_text_limited(file, MAX_CONFIG_SIZE)
        result = import_config_text(text)
        problems = validate_document(result.document)
    except Exception as e:
        raise _fail(e, verbose) from None

    if not result.sections:
        _warning("No configuration sections found in the document")

    if result.issues or problems:
        console.print(_issues_table(result.issues, problems))
        raise typer.Exit(code=EXIT_WARNING)

    if not quiet:
        _success(f"{file}: {len(result.sections)} section(s), no issues")


@app.command()
def fields(
    section: str | None = typer.Argument(
        None,
        help=f"Section to describe ({', '.join(SECTION_ORDER)})",
    ),
) -> None:
    """Describe the documented fields of each section."""
    try:
        sections = [get_section(section)] if section else list(get_sections())
    except KeyError as e:
        _error(str(e.args[0]))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    for meta in sections:
        table = Table(title=f"{meta.title} ({meta.key}, {meta.kind.value})")
        table.add_column("Key", style="cyan")
        table.add_column("Type", style="dim")
        table.add_column("Description")
        table.add_column("Options", style="green")
        for field_meta in meta.fields:
            table.add_row(
                field_meta.key,
                field_meta.declared_type or "-",
                escape(field_meta.comment),
                escape(field_meta.options or ""),
            )
        console.print(table)
