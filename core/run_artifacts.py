"""JSON run summaries for compliance pipelines."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Optional


def write_run_report(
    run_id: str,
    status: str,
    report_file: str,
    stats: Optional[dict[str, Any]] = None,
    error: Optional[str] = None,
    output_dir: str = "target/run_reports",
) -> str:
    """Write ``<output_dir>/<run_id>.json`` describing one audit run and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    payload: dict[str, Any] = {
        "run_id": run_id,
        "status": status,
        "report_file": os.path.abspath(report_file),
        "stats": dict(stats or {}),
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
    }
    if error is not None:
        payload["error"] = error
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path
