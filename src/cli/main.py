"""zapinfo command line interface.

The CLI is the rendering layer: it builds the reader from configuration,
delegates everything else to `ProviderReportAggregator` and turns the
outcome into console output, exports and an exit code.

Exit codes for `provider`: 0 report, 1 not registered, 2 failure.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler

from adapters.json_exporter import dumps_report, export_report_json
from adapters.report_exporter import export_report_html
from adapters.zap_registry import build_registry_reader
from cli.doctor import app as doctor_app
from cli.ui_components import build_failure_panel, print_banner, print_outcome
from core.config import AppSettings
from core.domain.errors import RegistryError
from core.domain.models import NotRegistered, ProviderReport
from core.services.provider_report import ProviderReportAggregator

app = typer.Typer(no_args_is_help=True, help="Inspect provider entries in the on-chain registry.")
app.add_typer(doctor_app, name="doctor")

_console = Console()

EXIT_NOT_REGISTERED = 1
EXIT_FAILURE = 2


def configure_logging(level: str) -> None:
    """Route stdlib logging through Rich on stderr."""

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


async def fetch_outcome(settings: AppSettings, address: str | None) -> ProviderReport | NotRegistered:
    async with build_registry_reader(settings) as reader:
        account = address or await reader.default_account()
        aggregator = ProviderReportAggregator(reader, max_concurrency=settings.registry_max_concurrency)
        return await aggregator.build_report(account)


@app.command()
def provider(
    address: Optional[str] = typer.Argument(
        None,
        help="Provider address. Defaults to the first account of the node.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
    export_json: Optional[Path] = typer.Option(None, "--export-json", help="Write the outcome to a JSON file."),
    export_html: Optional[Path] = typer.Option(None, "--export-html", help="Write the outcome to an HTML file."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show the full registry entry of a provider."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=EXIT_FAILURE) from exc
    configure_logging("DEBUG" if verbose else settings.log_level)

    if not (json_output or no_banner):
        print_banner(_console)

    try:
        outcome = asyncio.run(fetch_outcome(settings, address))
    except RegistryError as exc:
        _console.print(build_failure_panel(exc))
        raise typer.Exit(code=EXIT_FAILURE) from exc
    except ValueError as exc:
        _console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if json_output:
        typer.echo(dumps_report(outcome))
    else:
        print_outcome(_console, outcome)

    if export_json:
        path = export_report_json(outcome=outcome, output_path=export_json)
        _console.print(f"[green]JSON saved to:[/green] {path}")
    if export_html:
        path = export_report_html(outcome=outcome, output_path=export_html)
        _console.print(f"[green]HTML saved to:[/green] {path}")

    if isinstance(outcome, NotRegistered):
        raise typer.Exit(code=EXIT_NOT_REGISTERED)


def run() -> None:
    app()
