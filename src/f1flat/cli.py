"""Command-line interface for the f1flat loader."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from f1flat.config.settings import LoaderSettings

app = typer.Typer(
    name="f1flat",
    help="Load the Ergast motorsport CSV dataset into an indexed SQLite file.",
    no_args_is_help=True,
)

console = Console()


def _settings(
    config: Path | None,
    source: Path | None,
    output: Path | None,
    batch_size: int | None = None,
) -> LoaderSettings:
    from f1flat.config.loader import load_config

    try:
        return load_config(
            config,
            overrides={
                "paths": {"source_dir": source, "output": output},
                "load": {"batch_size": batch_size},
            },
        )
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def load(
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Directory containing the dataset CSVs."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="SQLite file to create (replaced if present)."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Optional YAML configuration file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    batch_size: Annotated[
        int | None,
        typer.Option("--batch-size", help="Validated rows per insert batch.", min=1),
    ] = None,
    log_level: Annotated[
        str, typer.Option("--log-level", help="Log level (DEBUG, INFO, ...).")
    ] = "INFO",
    json_logs: Annotated[
        bool, typer.Option("--json-logs", help="Emit logs as JSON lines.")
    ] = False,
) -> None:
    """Validate every CSV record and build the SQLite store."""
    from f1flat.errors import F1FlatError
    from f1flat.etl import run_load
    from f1flat.utils.logging import configure_logging

    configure_logging(log_level, json_output=json_logs)
    settings = _settings(config, source, output, batch_size)

    console.print(f"[blue]Loading CSVs from {settings.source_dir}[/blue]")
    console.print(f"[dim]Output: {settings.output}[/dim]")

    try:
        with console.status("Loading...") as status:
            result = run_load(
                settings,
                on_progress=lambda entity, rows: status.update(
                    f"Loading {entity}: {rows:,} rows"
                ),
            )
    except F1FlatError as e:
        console.print(f"[red]Load failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print()
    table = Table(title="Load Results")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="green", justify="right")
    for name, rows in result.row_counts.items():
        table.add_row(name, f"{rows:,}")
    table.add_row("[bold]total[/bold]", f"[bold]{result.total_rows:,}[/bold]")
    console.print(table)

    console.print(f"[dim]Indexes created: {len(result.indexes)}[/dim]")
    console.print(
        f"\n[green]Saved to: {result.output_path} "
        f"({result.duration_seconds:.1f}s)[/green]"
    )


@app.command()
def verify(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="SQLite file to verify."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Optional YAML configuration file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    log_level: Annotated[
        str, typer.Option("--log-level", help="Log level (DEBUG, INFO, ...).")
    ] = "WARNING",
) -> None:
    """Check a built store: schemas, foreign keys and indexes."""
    from f1flat.utils.logging import configure_logging
    from f1flat.validation import ConsoleReporter, StoreVerifier

    configure_logging(log_level)
    settings = _settings(config, None, output)

    console.print(f"[blue]Verifying {settings.output}[/blue]")
    try:
        results = StoreVerifier(settings.output).run()
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    ConsoleReporter(console).print_results(results)
    if not all(r.passed for r in results):
        raise typer.Exit(code=1)


@app.command()
def schemas() -> None:
    """List entities in load order with their tables and references."""
    from f1flat.schemas import SchemaRegistry

    table = Table(title="Entities (dependency order)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Entity", style="cyan")
    table.add_column("Table")
    table.add_column("CSV file")
    table.add_column("Kind", style="dim")
    table.add_column("References", style="magenta")

    for position, info in enumerate(SchemaRegistry.entities(), start=1):
        table.add_row(
            str(position),
            info.name,
            info.table,
            info.csv_file,
            info.kind.value,
            ", ".join(info.references) or "-",
        )
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from f1flat import __version__

    console.print(f"f1flat version {__version__}")


if __name__ == "__main__":
    app()
