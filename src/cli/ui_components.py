"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables/panels.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from core.domain.errors import BuildReportFailure, RegistryError
from core.domain.models import EndpointReport, NotRegistered, ProviderReport


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Disabled in non-interactive modes (JSON/pipelines).
    """

    title = Text("zapinfo", style="bold cyan")
    subtitle = Text("Registry providers • Endpoints • Bonding curves", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_identity_panel(report: ProviderReport) -> Panel:
    identity = report.identity
    body = Text()
    body.append("Address: ", style="bold")
    body.append(f"{identity.account}\n")
    body.append("Owner: ", style="bold")
    body.append(f"{identity.owner}\n")
    body.append("Title: ", style="bold")
    body.append(f"{identity.title}\n")
    body.append("Public Key: ", style="bold")
    body.append(identity.pubkey)
    return Panel(body, title=Text("Provider exists in Registry", style="bold green"), border_style="green")


def build_params_table(params: dict[str, str]) -> Table:
    table = Table(title="Params")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in params.items():
        table.add_row(name, value)
    return table


def build_endpoints_table(endpoints: dict[str, EndpointReport]) -> Table:
    table = Table(title="Endpoints")
    table.add_column("Endpoint", style="cyan", no_wrap=True)
    table.add_column("Bonding Curve", style="magenta")
    table.add_column("Bound", style="green")
    table.add_column("Params", style="white")
    for name, endpoint in endpoints.items():
        table.add_row(
            name,
            Pretty(endpoint.curve),
            str(endpoint.bound),
            ", ".join(endpoint.params),
        )
    return table


def build_not_registered_panel(outcome: NotRegistered) -> Panel:
    body = Text(f"Address: {outcome.account}\n")
    body.append("Provider does not exist with this account.", style="yellow")
    return Panel(body, title=Text("Not registered", style="bold yellow"), border_style="yellow")


def build_failure_panel(error: RegistryError) -> Panel:
    body = Text()
    if isinstance(error, BuildReportFailure):
        body.append("Stage: ", style="bold")
        body.append(f"{error.stage}\n")
        body.append("Reason: ", style="bold")
        body.append(error.reason)
    else:
        body.append(str(error))
    return Panel(body, title=Text("Report failed", style="bold red"), border_style="red")


def print_outcome(console: Console, outcome: ProviderReport | NotRegistered) -> None:
    if isinstance(outcome, NotRegistered):
        console.print(build_not_registered_panel(outcome))
        return
    console.print(build_identity_panel(outcome))
    console.print(build_params_table(outcome.params))
    console.print(build_endpoints_table(outcome.endpoints))
