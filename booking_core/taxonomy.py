"""Tour taxonomy: maps free-text product names onto canonical tour types."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from .errors import FormatError
from .models import UNKNOWN_TOUR_TYPE, TourTypeConfig
from .roles import DEFAULT_GUIDE_ROLES

logger = logging.getLogger(__name__)

TREEHOUSE_OPTIONS = "Treehouse Options"
VARIANT_SEPARATOR = " - "

DEFAULT_TAXONOMY_FILE = Path(__file__).resolve().parent / "data" / "tour_types.json"


def variant_name(base: str) -> str:
    return f"{base}{VARIANT_SEPARATOR}{TREEHOUSE_OPTIONS}"


class TourTaxonomy:
    """Lookup table of tour types keyed by canonical name.

    Classification is a case-sensitive substring match. A product that also
    mentions ``Treehouse Options`` resolves to the configured variant key,
    which shares its parent's course and staffing settings.
    """

    def __init__(self, tour_types: Mapping[str, TourTypeConfig]):
        self._types = dict(tour_types)
        self._bases = [name for name in self._types if not name.endswith(VARIANT_SEPARATOR + TREEHOUSE_OPTIONS)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "TourTaxonomy":
        types: dict[str, TourTypeConfig] = {}
        for name, raw in data.items():
            if not isinstance(raw, Mapping):
                raise FormatError(f"tour type '{name}' must be an object")
            course = str(raw.get("course") or "").strip()
            if not course:
                raise FormatError(f"tour type '{name}' has no course")
            roles = tuple(str(r) for r in (raw.get("roles") or DEFAULT_GUIDE_ROLES))[:2]
            try:
                duration = float(raw.get("duration_hours", 2.5))
                max_tours = int(raw.get("max_tours_per_shift", 3))
            except (TypeError, ValueError) as exc:
                raise FormatError(f"tour type '{name}' has invalid numeric settings") from exc
            if max_tours < 1:
                raise FormatError(f"tour type '{name}' must allow at least one tour per shift")
            types[name] = TourTypeConfig(
                name=name,
                course=course,
                roles=roles,
                duration_hours=duration,
                max_tours_per_shift=max_tours,
                is_night_tour=bool(raw.get("is_night_tour", False)),
                color=str(raw.get("color") or "#9e9e9e"),
            )
        return cls(types)

    def classify(self, product: str | None) -> str:
        text = product or ""
        for name in self._types:
            if name not in self._bases and name in text:
                return name
        for base in self._bases:
            if base not in text:
                continue
            if TREEHOUSE_OPTIONS in text and variant_name(base) in self._types:
                return variant_name(base)
            return base
        return UNKNOWN_TOUR_TYPE

    def get(self, tour_type: str) -> TourTypeConfig | None:
        return self._types.get(tour_type)

    def courses(self) -> list[str]:
        return sorted({cfg.course for cfg in self._types.values()})

    def names(self) -> list[str]:
        return list(self._types)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: cfg.to_dict() for name, cfg in self._types.items()}

    def __contains__(self, tour_type: object) -> bool:
        return tour_type in self._types

    def __iter__(self) -> Iterator[TourTypeConfig]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)


def load_taxonomy(path: str | Path | None = None) -> TourTaxonomy:
    """Load the tour type table from JSON (packaged default when path is None)."""
    taxonomy_file = Path(path) if path else DEFAULT_TAXONOMY_FILE
    if not taxonomy_file.exists():
        raise FileNotFoundError(f"tour taxonomy not found: {taxonomy_file}")
    with taxonomy_file.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise FormatError(f"tour taxonomy must be a JSON object: {taxonomy_file}")
    taxonomy = TourTaxonomy.from_dict(data)
    logger.debug("loaded %d tour types from %s", len(taxonomy), taxonomy_file)
    return taxonomy
