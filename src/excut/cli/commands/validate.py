"""Validate command for checking cut job files.

This module provides the `validate` command that checks a JSON job file
for syntax and schema errors, an unknown bin selection policy, a cutting
table that cannot be used, and table rows that would be skipped.
"""

from pathlib import Path
from typing import Annotated

import typer

from excut.application import parse_table
from excut.application.config import (
    ConfigError,
    CutJobConfiguration,
    config_to_rows,
    load_config,
)
from excut.domain import InvalidInput
from excut.infrastructure import available_policies


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a cut job file.

    Exit codes:
        0 - Job file is valid and every table row is usable
        1 - Job file has errors (cannot be used)
        2 - Job file is valid but some rows will be skipped

    Example:
        excut validate my-job.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        _display_load_error(e)
        raise typer.Exit(code=1)

    if config.policy not in available_policies():
        typer.echo("Errors:", err=True)
        typer.echo(f"  policy: unknown bin selection policy '{config.policy}'", err=True)
        typer.echo(f"    Available: {', '.join(available_policies())}", err=True)
        raise typer.Exit(code=1)

    try:
        parse_table(config_to_rows(config), config.stock_size, strict=config.strict)
    except InvalidInput as e:
        typer.echo("Errors:", err=True)
        typer.echo(f"  cutouts: {e}", err=True)
        raise typer.Exit(code=1)

    warnings = _check_rows(config)

    if warnings:
        typer.echo("Warnings:")
        for warning in warnings:
            typer.echo(f"  {warning}")
        typer.echo()
        typer.echo("Job file is valid, but some rows will be skipped.")
        raise typer.Exit(code=2)

    typer.echo("Job file is valid.")


def _check_rows(config: CutJobConfiguration) -> list[str]:
    """Return a warning for every table row that will not produce cutouts."""
    warnings: list[str] = []
    for index, row in enumerate(config.cutouts):
        path = f"cutouts[{index}]"
        if row.count <= 0:
            warnings.append(f"{path}: count {row.count} requests no pieces")
        elif row.size <= 0:
            warnings.append(f"{path}: size {row.size} is not positive")
        elif row.size > config.stock_size:
            warnings.append(
                f"{path}: size {row.size} exceeds stock size {config.stock_size}"
            )
    return warnings


def _display_load_error(error: ConfigError) -> None:
    """Display a job file loading error.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type in ("configuration", "validation"):
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)
