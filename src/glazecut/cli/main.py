"""Typer CLI for cutting list export."""

import datetime
import logging
from pathlib import Path
from typing import Annotated

import typer

from glazecut.application import BuildSolutionCommand, ExportMeta, SolutionOutput
from glazecut.application.config import (
    ConfigError,
    ExportConfiguration,
    PriceListSchema,
    load_calculation_result,
    load_config,
    load_price_list,
)
from glazecut.infrastructure.exporters import (
    ExporterRegistry,
    ExportIOError,
    ExportManager,
    ShareTextExporter,
)

# Exit code for a batch that was exported with some items skipped
EXIT_ITEM_FAILURES = 2

app = typer.Typer(
    name="glazecut",
    help="Rebuild cutting layouts from a calculation result and export them.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress to stderr"),
    ] = False,
) -> None:
    """Cutting list layouts for aluminum profiles and glass sheets."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _load_inputs(
    result_file: Path,
    config_file: Path | None,
    prices_file: Path | None,
    project_name: str,
    customer_name: str,
) -> tuple[SolutionOutput, ExportConfiguration]:
    """Load every input file and build the solution, exiting on ConfigError."""
    try:
        config = load_config(config_file) if config_file else ExportConfiguration()
        prices = load_price_list(prices_file) if prices_file else PriceListSchema()
        result = load_calculation_result(result_file)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    meta = ExportMeta(
        project_name=project_name,
        customer_name=customer_name,
        issue_date=datetime.date.today(),
        company_name=config.company_name,
    )
    command = BuildSolutionCommand.from_config(config, prices)
    return command.execute(result, meta), config


def _report_failures(solution: SolutionOutput) -> None:
    for failure in solution.failures:
        typer.echo(
            f"Warning: skipped {failure.section} {failure.subject!r} "
            f"({failure.kind}): {failure.message}",
            err=True,
        )


@app.command()
def export(
    result_file: Annotated[
        Path,
        typer.Argument(help="Calculation result JSON file"),
    ],
    formats: Annotated[
        str,
        typer.Option(
            "--formats",
            "-f",
            help="Comma-separated export formats: pdf,xlsx,svg,text (or 'all')",
        ),
    ] = "pdf,xlsx",
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Output directory for exported files"),
    ] = Path("."),
    project_name: Annotated[
        str,
        typer.Option("--project-name", "-p", help="Project name for titles and file names"),
    ] = "Untitled",
    customer_name: Annotated[
        str,
        typer.Option("--customer", help="Customer name printed in the header"),
    ] = "",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON export settings file"),
    ] = None,
    prices_file: Annotated[
        Path | None,
        typer.Option("--prices", help="Path to JSON price list"),
    ] = None,
) -> None:
    """Export the cutting list to one or more document formats."""
    if formats.lower() == "all":
        format_list = ExporterRegistry.available_formats()
    else:
        format_list = [f.strip().lower() for f in formats.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in format_list if f not in available]
    if invalid or not format_list:
        typer.echo(f"Unknown formats: {', '.join(invalid) or formats}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)

    solution, config = _load_inputs(
        result_file, config_file, prices_file, project_name, customer_name
    )
    _report_failures(solution)

    manager = ExportManager(output_dir, config=config)
    try:
        files = manager.export_all(format_list, solution)
    except ExportIOError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("Exported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")

    if not solution.is_valid:
        raise typer.Exit(code=EXIT_ITEM_FAILURES)


@app.command()
def show(
    result_file: Annotated[
        Path,
        typer.Argument(help="Calculation result JSON file"),
    ],
    project_name: Annotated[
        str,
        typer.Option("--project-name", "-p", help="Project name for the title line"),
    ] = "Untitled",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON export settings file"),
    ] = None,
    prices_file: Annotated[
        Path | None,
        typer.Option("--prices", help="Path to JSON price list"),
    ] = None,
) -> None:
    """Print the cutting list as plain text."""
    solution, config = _load_inputs(result_file, config_file, prices_file, project_name, "")
    _report_failures(solution)
    typer.echo(ShareTextExporter(config).export_string(solution), nl=False)
    if not solution.is_valid:
        raise typer.Exit(code=EXIT_ITEM_FAILURES)


@app.command(name="formats")
def list_formats() -> None:
    """List the available export formats."""
    for name in ExporterRegistry.available_formats():
        exporter_class = ExporterRegistry.get(name)
        typer.echo(f"{name}\t.{exporter_class.file_extension}\t{exporter_class.media_type}")


if __name__ == "__main__":
    app()
