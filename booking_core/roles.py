"""Role requirements and shift-template matching for guiding shifts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

LEAD_GUIDE = "Lead Guide"
SWEEP_GUIDE = "Sweep Guide"
DEFAULT_GUIDE_ROLES = (LEAD_GUIDE, SWEEP_GUIDE)


def required_roles_for_shift(tour_count: int, roles: Sequence[str] = DEFAULT_GUIDE_ROLES) -> list[str]:
    """Single-tour shifts need only the lead; anything longer adds the sweep.

    Role count depends on the number of tours, not on guest volume.
    """
    ordered = list(roles[:2]) or [LEAD_GUIDE]
    if tour_count <= 1:
        return ordered[:1]
    return ordered


def match_shift_template(
    tour_type: str | None,
    templates: Sequence[Mapping[str, Any]],
) -> Mapping[str, Any] | None:
    """Find the first template whose name contains the tour type (case-insensitive)."""
    needle = str(tour_type or "").lower().strip()
    if not needle:
        return None
    for template in templates:
        name = str(template.get("name") or "").lower()
        if needle in name:
            return template
    return None
