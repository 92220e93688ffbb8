"""JSON export of report outcomes.

Why JSON:
- Interoperability with other tools and pipelines.
- Persists the snapshot without depending on the console/HTML rendering.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import NotRegistered, ProviderReport


def report_payload(outcome: ProviderReport | NotRegistered) -> dict[str, Any]:
    """JSON-ready dict with an explicit `status` discriminator."""

    if isinstance(outcome, NotRegistered):
        return {"status": "not_registered", **outcome.model_dump(mode="json")}
    return {"status": "registered", **outcome.model_dump(mode="json")}


def dumps_report(outcome: ProviderReport | NotRegistered) -> str:
    return json.dumps(report_payload(outcome), ensure_ascii=False, indent=2)


def export_report_json(*, outcome: ProviderReport | NotRegistered, output_path: Path) -> Path:
    """Export a report outcome as UTF-8 JSON keeping registry order."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_report(outcome) + "\n", encoding="utf-8")
    return output_path
