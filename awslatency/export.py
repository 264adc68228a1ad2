"""JSON and CSV export for ranked results."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict

from awslatency.models import ResultSet

CSV_COLUMNS = ["timestamp", "rank", "region", "label", "address", "rtt_ms", "packet_loss"]


def export_json(result: ResultSet, indent: int = 2) -> str:
    """Export the result set as a JSON string."""
    data = _build_export_dict(result)
    return json.dumps(data, indent=indent, default=str)


def export_csv(result: ResultSet) -> str:
    """Export ranked entries as CSV (one row per region)."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)

    for entry in result.entries:
        writer.writerow([
            result.timestamp or "",
            entry.rank,
            entry.region,
            entry.display_label,
            entry.address,
            f"{entry.rtt_ms:.3f}" if entry.rtt_ms is not None else "",
            f"{entry.packet_loss:.3f}",
        ])

    return output.getvalue()


def _build_export_dict(result: ResultSet) -> dict:
    return {
        "timestamp": result.timestamp,
        "probed": result.probed,
        "ranked": len(result.entries),
        "results": [asdict(e) for e in result.entries],
        "failed": [
            {
                "region": endpoint.region,
                "address": endpoint.address,
                "outcome": outcome.kind,
                "message": getattr(outcome, "message", None),
            }
            for endpoint, outcome in result.failed
        ],
    }


def write_to_file(content: str, path: str) -> None:
    """Write content to a file."""
    with open(path, "w") as f:
        f.write(content)
