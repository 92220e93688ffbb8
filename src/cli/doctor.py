"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from web3 import Web3

from adapters.web3_client import NODE_ERRORS, build_web3
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_rpc(settings: AppSettings) -> tuple[bool, str]:
    w3 = build_web3(settings)
    try:
        chain_id = await w3.eth.chain_id
        return True, f"chain id {chain_id}"
    except NODE_ERRORS as exc:
        return False, f"{exc.__class__.__name__}: {exc}"
    finally:
        await w3.provider.disconnect()


def _address_row(table: Table, label: str, value: str | None) -> bool:
    if not value:
        table.add_row(label, "MISSING", "Not configured")
        return False
    if not Web3.is_address(value):
        table.add_row(label, "FAIL", f"Invalid address: {value}")
        return False
    table.add_row(label, "OK", Web3.to_checksum_address(value))
    return True


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title="zapinfo Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("RPC url", "OK", settings.rpc_url)
    ok_registry = _address_row(table, "Registry address", settings.registry_address)
    ok_bondage = _address_row(table, "Bondage address", settings.bondage_address)
    table.add_row("Max concurrency", "OK", str(settings.registry_max_concurrency))

    # Connectivity (best-effort)
    ok_rpc, detail_rpc = asyncio.run(_check_rpc(settings))
    table.add_row("RPC connectivity", "OK" if ok_rpc else "FAIL", detail_rpc)

    _console.print(table)

    if not (ok_registry and ok_bondage):
        _console.print(
            "\n[yellow]Note:[/yellow] set ZAPINFO_REGISTRY_ADDRESS and ZAPINFO_BONDAGE_ADDRESS "
            f"in .env or {get_user_env_file()}."
        )
    if not (ok_rpc and ok_registry and ok_bondage):
        raise typer.Exit(code=1)
