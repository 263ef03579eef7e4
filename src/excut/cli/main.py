"""Typer CLI for cut list optimization."""

import logging
from pathlib import Path
from typing import Annotated, Any, Callable, Sequence

import typer

from excut.application import (
    CutListInput,
    OptimizeCutListCommand,
    read_csv_table,
)
from excut.application.config import (
    ConfigError,
    config_to_rows,
    load_config,
    merge_config_with_cli,
)
from excut.domain import InvalidInput
from excut.infrastructure import (
    BarDiagramRenderer,
    CsvExporter,
    JsonExporter,
    PackingResult,
    SpreadsheetFormatter,
    SummaryFormatter,
    TextReportFormatter,
    available_policies,
)
from excut.cli.commands import validate_command


def _format_table(result: PackingResult) -> str:
    rows = SpreadsheetFormatter().format(result.bins)
    return "\n".join(
        "\t".join("" if cell is None else str(cell) for cell in row) for row in rows
    )


OUTPUT_FORMATS: dict[str, Callable[[PackingResult], str]] = {
    "text": lambda result: TextReportFormatter().format(result.bins),
    "table": _format_table,
    "json": lambda result: JsonExporter().format(result),
    "csv": lambda result: CsvExporter().format(result.bins),
    "diagram": lambda result: BarDiagramRenderer().render(result),
    "summary": lambda result: SummaryFormatter().format(result),
}


app = typer.Typer(
    name="excut",
    help="Plan cuts of linear stock from a list of required pieces.",
)

app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_table(path: Path) -> list[list[str]]:
    try:
        return read_csv_table(path)
    except InvalidInput as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def optimize(
    table_file: Annotated[
        Path | None,
        typer.Argument(help="CSV cutting table with label,count,size rows"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON job file"),
    ] = None,
    stock: Annotated[
        int | None,
        typer.Option("--stock", "-s", help="Stock length of every bin"),
    ] = None,
    kerf: Annotated[
        int | None,
        typer.Option("--kerf", "-k", help="Material consumed by each saw cut"),
    ] = None,
    policy: Annotated[
        str | None,
        typer.Option("--policy", "-p", help="Bin selection policy: current, first-fit, best-fit"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, table, json, csv, diagram, summary"),
    ] = "text",
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Reject non-numeric table cells instead of skipping rows"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to a file instead of stdout"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log packing decisions"),
    ] = False,
) -> None:
    """Optimize a cutting table into a cutting plan.

    The table comes from a CSV file, a JSON job file, or both. When using
    --config, CLI options override job file values and a CSV table replaces
    the job's cutouts.

    Examples:
        excut optimize parts.csv --stock 6000 --kerf 3
        excut optimize --config job.json --format diagram
        excut optimize parts.csv --config job.json --policy best-fit -f json
    """
    _configure_logging(verbose)

    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    rows: Sequence[Sequence[Any]]
    if config_file is not None:
        try:
            config = merge_config_with_cli(
                load_config(config_file), stock_size=stock, kerf=kerf, policy=policy
            )
        except ConfigError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

        rows = _read_table(table_file) if table_file is not None else config_to_rows(config)
        request = CutListInput(
            stock_size=config.stock_size,
            kerf=config.kerf,
            rows=rows,
            policy=config.policy,
            strict=strict or config.strict,
        )
    else:
        if stock is None:
            typer.echo("Error: --stock is required when no --config is given", err=True)
            raise typer.Exit(code=1)
        if table_file is None:
            typer.echo("Error: a cutting table is required when no --config is given", err=True)
            raise typer.Exit(code=1)
        request = CutListInput(
            stock_size=stock,
            kerf=kerf if kerf is not None else 0,
            rows=_read_table(table_file),
            policy=policy or "current",
            strict=strict,
        )

    plan = OptimizeCutListCommand().execute(request)
    if not plan.is_valid:
        for error in plan.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    rendered = OUTPUT_FORMATS[output_format](plan.result)
    if output is not None:
        output.write_text(rendered if rendered.endswith("\n") else rendered + "\n", encoding="utf-8")
        typer.echo(f"Cutting plan written to: {output}")
    else:
        typer.echo(rendered)


@app.command()
def policies() -> None:
    """List available bin selection policies."""
    for name in available_policies():
        typer.echo(name)


if __name__ == "__main__":
    app()
