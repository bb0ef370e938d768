from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from booking_core.io.writer import IMPORT_FILE, write_import_result
from booking_core.models import ImportResult

logger = logging.getLogger(__name__)


def _json_dump(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2, ensure_ascii=False)


def _json_load(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def import_root(artifact_root: Path) -> Path:
    path = Path(artifact_root) / "imports"
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_import(artifact_root: Path, result: ImportResult) -> Path:
    root = import_root(artifact_root)
    target = root / result.import_id
    write_import_result(result, target)

    manifest = {
        "import_id": result.import_id,
        "source": result.source,
        "generated_at": result.generated_at,
        "range": dict(result.date_range),
        "counts": {
            "bookings": result.total_bookings,
            "shifts": result.total_shifts,
            "tours": result.total_tours,
            "guests": result.total_guests,
            "unmatched": len(result.unmatched),
        },
        "path": str(target.resolve()),
    }
    _json_dump(target / "manifest.json", manifest)
    _json_dump(root / "latest.json", manifest)
    return target


def list_imports(artifact_root: Path, limit: int = 20) -> list[dict[str, Any]]:
    root = import_root(artifact_root)
    manifests: list[dict[str, Any]] = []
    for child in root.iterdir():
        if not child.is_dir():
            continue
        manifest_file = child / "manifest.json"
        if not manifest_file.exists():
            continue
        try:
            manifests.append(_json_load(manifest_file))
        except (OSError, json.JSONDecodeError):
            logger.exception("unreadable import manifest: %s", manifest_file)
            continue
    manifests.sort(key=lambda row: row.get("generated_at", ""), reverse=True)
    return manifests[:limit]


def load_import(artifact_root: Path, import_id: str | None = None) -> dict[str, Any]:
    root = import_root(artifact_root)
    if import_id:
        manifest_path = root / import_id / "manifest.json"
    else:
        manifest_path = root / "latest.json"
    if not manifest_path.exists():
        raise FileNotFoundError("import manifest not found")
    manifest = _json_load(manifest_path)
    iid = manifest["import_id"]
    path = root / iid / IMPORT_FILE
    if not path.exists():
        raise FileNotFoundError(f"import payload not found: {iid}")
    return _json_load(path)
