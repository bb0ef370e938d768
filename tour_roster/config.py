from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from booking_core.taxonomy import TourTaxonomy, load_taxonomy

DEFAULT_LOCAL_TZ = "America/New_York"


@dataclass(frozen=True)
class RuntimeConfig:
    feed_url: str | None
    local_tz: ZoneInfo
    artifact_root: Path
    taxonomy_file: Path | None
    fetch_timeout_s: float


def load_env(dotenv_path: str | Path | None = None) -> None:
    path = Path(dotenv_path) if dotenv_path else None
    if path and path.exists():
        load_dotenv(path)
        return
    load_dotenv()


def resolve_timezone(name: str, *, source: str = "TOUR_ROSTER_LOCAL_TZ") -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone '{name}' in {source}") from exc


def runtime_config() -> RuntimeConfig:
    feed_url = os.getenv("TOUR_ROSTER_FEED_URL", "").strip() or None
    local_tz = resolve_timezone(os.getenv("TOUR_ROSTER_LOCAL_TZ", DEFAULT_LOCAL_TZ).strip())
    artifact_root = Path(os.getenv("TOUR_ROSTER_ARTIFACT_DIR", "./artifacts")).expanduser().resolve()
    taxonomy_value = os.getenv("TOUR_ROSTER_TAXONOMY_FILE", "").strip()
    taxonomy_file = Path(taxonomy_value).expanduser() if taxonomy_value else None
    try:
        timeout = float(os.getenv("TOUR_ROSTER_FETCH_TIMEOUT", "30"))
    except ValueError as exc:
        raise ValueError("TOUR_ROSTER_FETCH_TIMEOUT must be a number of seconds") from exc
    artifact_root.mkdir(parents=True, exist_ok=True)
    return RuntimeConfig(
        feed_url=feed_url,
        local_tz=local_tz,
        artifact_root=artifact_root,
        taxonomy_file=taxonomy_file,
        fetch_timeout_s=timeout,
    )


def load_tour_taxonomy(cfg: RuntimeConfig) -> TourTaxonomy:
    return load_taxonomy(cfg.taxonomy_file)
