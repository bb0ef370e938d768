"""Write an ImportResult as the JSON hand-off document.

The document carries the full result (shift candidates, slot demands,
totals) under the same camelCase field names as ``ImportResult.to_dict()``.
"""

from __future__ import annotations

import json
from pathlib import Path

from booking_core.models import ImportResult

IMPORT_FILE = "import.json"


def handoff_payload(result: ImportResult) -> dict:
    """Build the hand-off payload, with shifts grouped by date for quick lookup."""
    payload = result.to_dict()
    by_date: dict[str, list[str]] = {}
    for shift in result.shift_candidates:
        by_date.setdefault(shift.date.isoformat(), []).append(shift.id)
    payload["shiftsByDate"] = dict(sorted(by_date.items()))
    return payload


def write_import_result(result: ImportResult, directory: Path) -> dict[str, Path]:
    """Write import.json into ``directory``. Returns {"import.json": Path(...)}."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / IMPORT_FILE
    path.write_text(
        json.dumps(handoff_payload(result), indent=2, ensure_ascii=False, default=str) + "\n",
        encoding="utf-8",
    )
    return {IMPORT_FILE: path}
