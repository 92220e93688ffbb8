"""Tests for JSON and HTML exports of report outcomes."""

from __future__ import annotations

import json
from pathlib import Path

from adapters.json_exporter import export_report_json, report_payload
from adapters.report_exporter import export_report_html, render_report_html
from core.domain.models import EndpointReport, NotRegistered, ProviderIdentity, ProviderReport


def _report() -> ProviderReport:
    return ProviderReport(
        identity=ProviderIdentity(account="0xDEF", owner="0xDEF", title="Weather", pubkey="42"),
        params={"region": "US"},
        endpoints={
            "zeta": EndpointReport(name="zeta", curve=[1, 2], bound=7, params=["b", "a"]),
            "hourly": EndpointReport(name="hourly", curve=[3, 0, 0, 2, 10000], bound=100, params=["unit"]),
        },
    )


def test_json_export_keeps_registry_order(tmp_path: Path) -> None:
    path = export_report_json(outcome=_report(), output_path=tmp_path / "out" / "report.json")

    payload = json.loads(path.read_text(encoding="utf-8"))

    assert payload["status"] == "registered"
    assert payload["identity"]["title"] == "Weather"
    assert list(payload["endpoints"]) == ["zeta", "hourly"]
    assert payload["endpoints"]["hourly"] == {
        "name": "hourly",
        "curve": [3, 0, 0, 2, 10000],
        "bound": 100,
        "params": ["unit"],
    }


def test_json_payload_for_not_registered() -> None:
    assert report_payload(NotRegistered(account="0xABC", owner="0xABC")) == {
        "status": "not_registered",
        "account": "0xABC",
        "owner": "0xABC",
    }


def test_html_export_renders_report(tmp_path: Path) -> None:
    path = export_report_html(outcome=_report(), output_path=tmp_path / "report.html")

    html = path.read_text(encoding="utf-8")

    assert "Weather" in html
    assert "hourly" in html
    assert "region" in html


def test_html_escapes_registry_text() -> None:
    report = ProviderReport(
        identity=ProviderIdentity(account="0xDEF", owner="0xDEF", title="<script>x</script>", pubkey="1"),
    )

    html = render_report_html(outcome=report)

    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html


def test_html_for_not_registered() -> None:
    html = render_report_html(outcome=NotRegistered(account="0xABC"))

    assert "Not registered" in html
    assert "0xABC" in html
