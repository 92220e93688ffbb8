"""HTML report export.

Why it lives in adapters:
- HTML is an infrastructure detail (Jinja2).
- The Core only knows the `ProviderReport` / `NotRegistered` outcomes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.models import NotRegistered, ProviderReport


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_report_html(*, outcome: ProviderReport | NotRegistered) -> str:
    """Render a self-contained HTML page for one outcome."""

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")

    if isinstance(outcome, NotRegistered):
        account = outcome.account
        report = None
    else:
        account = outcome.identity.account
        report = outcome

    template = _get_env().get_template("report.html")
    return template.render(
        account=account,
        report=report,
        generated_at=generated_at,
        report_id=f"{account}:{generated_at}",
    )


def export_report_html(*, outcome: ProviderReport | NotRegistered, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report_html(outcome=outcome), encoding="utf-8")
    return output_path
