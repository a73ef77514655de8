# sitelen/core/validate.py
"""
Validate that a layout option is a gap-free, overlap-free tiling of its container.
Return (ok, problems).
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from shapely.ops import unary_union

from sitelen.core.config import AREA_TOLERANCE
from sitelen.core.geometry import container_box, placement_box, placement_extents
from sitelen.core.types import LayoutOption, Unit


def _overlapping_pairs(option: LayoutOption, tolerance: float) -> list[tuple[int, int]]:
    """Index pairs of placements whose intersection has positive area."""
    boxes = [placement_box(p) for p in option.placements]
    pairs: list[tuple[int, int]] = []
    for i in range(len(boxes)):
        for j in range(i + 1, len(boxes)):
            if boxes[i].intersection(boxes[j]).area > tolerance:
                pairs.append((i, j))
    return pairs


def validate_option(
    option: LayoutOption,
    units: Sequence[Unit] | None = None,
    tolerance: float = AREA_TOLERANCE,
) -> tuple[bool, list[str]]:
    """
    True if placements have positive sizes, stay inside the container, do not overlap
    and cover it exactly. With units given, also checks placements map one-to-one onto
    the units, in order, and keep each unit's aspect ratio.
    """
    problems: list[str] = []
    if not option.placements:
        return False, ["Option has no placements."]

    extents = placement_extents(option)
    widths = extents[:, 2] - extents[:, 0]
    heights = extents[:, 3] - extents[:, 1]
    if np.any(widths <= 0) or np.any(heights <= 0):
        problems.append("Placement with non-positive size.")

    scale = max(option.size)
    tol = tolerance * scale
    w, h = option.size
    if (
        np.any(extents[:, 0] < -tol) or np.any(extents[:, 1] < -tol)
        or np.any(extents[:, 2] > w + tol) or np.any(extents[:, 3] > h + tol)
    ):
        problems.append("Placement outside the container.")

    area_tol = tolerance * option.surface
    for i, j in _overlapping_pairs(option, area_tol):
        problems.append(f"Placements {i} and {j} overlap.")

    covered = unary_union([placement_box(p) for p in option.placements])
    if abs(covered.area - container_box(option).area) > area_tol:
        problems.append(f"Placements cover {covered.area:.6f} of {option.surface:.6f}.")

    if units is not None:
        placed = [p.unit for p in option.placements]
        if placed != list(units):
            problems.append("Placements do not match the input units one-to-one.")
        else:
            for p in option.placements:
                base = p.unit.size[0] / p.unit.size[1]
                if not math.isclose(p.size[0] / p.size[1], base, rel_tol=1e-6):
                    problems.append(f"Unit {p.unit.token or p.unit.kind} lost its aspect ratio.")

    return not problems, problems
