# sitelen/core/reporting.py
"""
JSON-safe dicts of layout options and results, the shape a renderer consumes.
"""

from __future__ import annotations

from sitelen.core.config import (
    SCHEMA_VERSION,
    SURFACE_PRUNE_FACTOR,
)
from sitelen.core.types import LayoutOption, LayoutResult, Placement, Unit


def unit_to_dict(unit: Unit) -> dict:
    out = {
        "kind": unit.kind,
        "size": {"width": unit.size[0], "height": unit.size[1]},
    }
    if unit.token is not None:
        out["token"] = unit.token
    if unit.separator is not None:
        out["separator"] = unit.separator
    if unit.option is not None:
        out["option"] = option_to_dict(unit.option)
    return out


def placement_to_dict(placement: Placement) -> dict:
    return {
        "unit": unit_to_dict(placement.unit),
        "size": {"width": float(placement.size[0]), "height": float(placement.size[1])},
        "position": {"x": float(placement.position[0]), "y": float(placement.position[1])},
    }


def option_to_dict(option: LayoutOption) -> dict:
    """Nested structure of one option; sub-container units embed their own option."""
    return {
        "size": {"width": float(option.size[0]), "height": float(option.size[1])},
        "ratio": option.ratio,
        "normed_ratio": option.normed_ratio,
        "surface": option.surface,
        "placements": [placement_to_dict(p) for p in option.placements],
    }


def result_to_dict(result: LayoutResult, prune_factor: float = SURFACE_PRUNE_FACTOR) -> dict:
    """Options plus search status. `incomplete` is never dropped so callers see partial results."""
    return {
        "schema_version": SCHEMA_VERSION,
        "search": {
            "incomplete": result.incomplete,
            "reason": result.reason,
            "nodes": result.nodes,
            "prune_factor": prune_factor,
        },
        "options": [option_to_dict(o) for o in result.options],
    }
