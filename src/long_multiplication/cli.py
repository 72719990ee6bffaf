"""Command line interface for the long multiplication calculator."""

import logging
import os
import re
import sys
from pathlib import Path
from urllib.parse import unquote

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .calculator import (
    ExitCode,
    RenderStyle,
    content_type_header,
    long_multiplication,
    parse_annotate_flag,
    render_computation,
)
from .engine import EngineLimits, compute
from .errors import LongMultiplicationError
from .utils import Exporter, LoggingDatabase, load_config, setup_db_logging
from .utils.config import OUTPUT_MODES

# Rendered blocks go to stdout; everything else goes through this console.
console = Console(stderr=True)

logger = logging.getLogger(__name__)

CGI_PARTS = ("multiplier", "multiplicand", "output type", "annotate")
OUTPUT_TYPE_PATTERN = re.compile(r"^[A-Za-z0-9.+-]+$")


def setup_logging(level: str = "WARNING", log_file: Path | None = None, log_format: str | None = None):
    """Set up logging configuration."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


@click.group()
@click.option(
    "--config",
    envvar="LONG_MULT_CONFIG",
    default=None,
    help="Path to configuration file (defaults built in)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level",
)
@click.version_option(version=__version__, prog_name="long-mult")
@click.pass_context
def cli(ctx, config, log_level):
    """Long multiplication calculator - step-by-step grade-school multiplication."""
    ctx.ensure_object(dict)

    try:
        loaded = load_config(config)
        limits = EngineLimits.from_config(loaded)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(ExitCode.INVALID_INPUT)

    setup_logging(log_level or loaded.log_level, loaded.log_file, loaded.log_format)
    if loaded.logging_db_path:
        setup_db_logging(loaded)

    ctx.obj["config"] = loaded
    ctx.obj["limits"] = limits
    ctx.obj["console"] = console


@cli.command()
@click.argument("multiplier")
@click.argument("multiplicand")
@click.argument("annotate", required=False)
@click.option(
    "--style",
    type=click.Choice([style.value for style in RenderStyle]),
    help="Layout style (default from config)",
)
@click.option(
    "--output",
    "output_mode",
    type=click.Choice(OUTPUT_MODES),
    help="Print the block, store it to a file, or both",
)
@click.option("--file", "file_path", help="File for --output store/both")
@click.option("--json", "json_path", help="Also export the rows and result as JSON")
@click.pass_context
def multiply(ctx, multiplier, multiplicand, annotate, style, output_mode, file_path, json_path):
    """Show the long multiplication of MULTIPLIER x MULTIPLICAND.

    ANNOTATE turns the explanatory labels on unless it starts with 'n' or 'N'.
    """
    config = ctx.obj["config"]
    console = ctx.obj["console"]

    style = style or config.style
    output_mode = output_mode or config.output_mode
    show_labels = config.annotate if annotate is None else parse_annotate_flag(annotate)

    try:
        computation = compute(multiplier, multiplicand, ctx.obj["limits"])
        content = render_computation(computation, show_labels, style)
    except LongMultiplicationError as e:
        logger.error(f"Rejected {multiplier!r} x {multiplicand!r}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(ExitCode.INVALID_INPUT)

    logger.info(
        f"Multiplied {computation.multiplier.digit_count}-digit by "
        f"{computation.multiplicand.digit_count}-digit operands",
        extra={"style": style, "annotate": show_labels},
    )

    if output_mode in ("display", "both"):
        click.echo(content, nl=False)

    exporter = Exporter(config)
    if output_mode in ("store", "both"):
        path = exporter.store(content, file_path or config.output_file)
        console.print(f"[green]✓[/green] Stored to: {escape(str(path))}")

    if json_path:
        path = exporter.export_json(computation, json_path, style=style, annotate=show_labels)
        console.print(f"[green]✓[/green] Computation exported to: {escape(str(path))}")


def _cgi_arguments_error(parts: list[str]) -> None:
    click.echo(content_type_header("plain"), nl=False)
    click.echo("Error: Some arguments are missing.")
    for number in range(len(parts) + 1, len(CGI_PARTS)):
        click.echo(f"The argument #{number} is missing.")
    if len(parts) > len(CGI_PARTS):
        click.echo("Too many arguments supplied.")
    click.echo("Exiting...")


@cli.command()
@click.argument("query", nargs=-1)
@click.pass_context
def cgi(ctx, query):
    """Answer a CGI request 'multiplier,multiplicand,output_type[,annotate]'.

    Without QUERY the request is read from the QUERY_STRING variable.
    """
    config = ctx.obj["config"]
    raw = ",".join(query) if query else os.environ.get("QUERY_STRING", "")
    parts = [unquote(part) for part in raw.split(",")] if raw else []

    if not len(CGI_PARTS) - 1 <= len(parts) <= len(CGI_PARTS):
        logger.warning(f"CGI request with {len(parts)} arguments: {raw!r}")
        _cgi_arguments_error(parts)
        ctx.exit(ExitCode.ARGUMENTS_MISSING)

    multiplier, multiplicand, output_type = parts[:3]
    show_labels = parse_annotate_flag(parts[3]) if len(parts) > 3 else config.annotate

    if not OUTPUT_TYPE_PATTERN.match(output_type):
        click.echo(content_type_header("plain"), nl=False)
        click.echo(f"Error: Invalid output type '{output_type}'.")
        ctx.exit(ExitCode.INVALID_INPUT)

    try:
        content = long_multiplication(
            multiplier, multiplicand, show_labels, config.style, ctx.obj["limits"]
        )
    except LongMultiplicationError as e:
        logger.error(f"Rejected CGI request {raw!r}: {e}")
        click.echo(content_type_header("plain"), nl=False)
        click.echo(f"Error: {e}")
        ctx.exit(ExitCode.INVALID_INPUT)

    click.echo(content_type_header(output_type), nl=False)
    click.echo(content, nl=False)


@cli.command()
@click.option("--host", default=None, help="Interface to bind (default from config)")
@click.option("--port", type=int, default=None, help="Port to listen on (default from config)")
@click.pass_context
def serve(ctx, host, port):
    """Run the HTTP service."""
    from .service import run_server

    config = ctx.obj["config"]
    host = host or config.server_host
    port = port or config.server_port

    console.print(f"[bold green]Long multiplication service[/bold green] on http://{host}:{port}")
    run_server(host=host, port=port, limits=ctx.obj["limits"])


@cli.command()
@click.pass_context
def status(ctx):
    """Show configuration and logged run statistics."""
    config = ctx.obj["config"]
    console = ctx.obj["console"]

    console.print("\n[bold]Calculator Status[/bold]\n")

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("Max input digits", str(config.max_input_digits))
    table.add_row("Max result digits", str(config.max_result_digits))
    table.add_row("Style", config.style)
    table.add_row("Annotate", "yes" if config.annotate else "no")
    table.add_row("Output mode", config.output_mode)
    table.add_row("Output directory", str(config.output_dir))
    table.add_row("Log database", str(config.logging_db_path or "-"))

    console.print(table)

    if not config.logging_db_path or not Path(config.logging_db_path).exists():
        console.print("[yellow]No log database configured.[/yellow]")
        return

    database = LoggingDatabase(config.logging_db_path)
    stats = database.get_summary_statistics()

    log_table = Table(title="Logged Runs")
    log_table.add_column("Metric", style="cyan")
    log_table.add_column("Count", style="green")

    log_table.add_row("Total logs", str(stats["total_logs"]))
    for level, count in sorted(stats["by_level"].items()):
        log_table.add_row(f"Level {level}", str(count))
    log_table.add_row("Errors", str(stats["error_count"]))

    console.print(log_table)

    if "time_range" in stats:
        console.print(
            f"First run: {stats['time_range']['first']}  Last run: {stats['time_range']['last']}"
        )

    rejections = database.query_logs(status="error", limit=5)
    if rejections:
        recent = Table(title="Recent Rejections")
        recent.add_column("Time", style="cyan")
        recent.add_column("Message", style="red")
        for entry in rejections:
            recent.add_row(entry["timestamp"], escape(entry["message"]))
        console.print(recent)


def main():
    """Console script entry point."""
    cli(obj={}, prog_name="long-mult")


if __name__ == "__main__":
    sys.exit(main())
