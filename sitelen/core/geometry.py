# sitelen/core/geometry.py
"""
Geometry helpers: anchor keys, ratio metrics, scale normalization,
placement rectangles as shapely boxes.
"""

from __future__ import annotations

import numpy as np
from shapely.geometry import Polygon, box

from sitelen.core.config import ANCHOR_DECIMALS
from sitelen.core.types import LayoutOption, Placement, Point, Size


def anchor_key(x: float, y: float) -> Point:
    """Hashable key for a corner; rounded so float noise does not hide a collision."""
    return (round(float(x), ANCHOR_DECIMALS), round(float(y), ANCHOR_DECIMALS))


def ratio_metrics(size: Size) -> tuple[float, float, float]:
    """
    Return (ratio, normed_ratio, surface) for a container size.
    normed_ratio folds ratio into (0, 1] by taking the reciprocal when > 1.
    """
    w, h = size
    ratio = w / h
    normed = ratio if ratio < 1 else h / w
    return ratio, normed, w * h


def unit_scale(placements: tuple[Placement, ...]) -> float:
    """
    Scale of the smallest unit in an option: the least, over all placements,
    of the placement's larger side.
    """
    sizes = np.array([p.size for p in placements], dtype=np.float64)
    return float(np.min(np.max(sizes, axis=1)))


def normalize_option(option: LayoutOption) -> LayoutOption:
    """
    Divide every size and position, and the container size, by the option's unit scale.
    Geometrically identical tilings of differently scaled units become equal.
    Idempotent: the result has unit scale 1.
    """
    scale = unit_scale(option.placements)
    if scale == 1.0:
        return option
    placements = tuple(
        Placement(
            unit=p.unit,
            size=(p.size[0] / scale, p.size[1] / scale),
            position=(p.position[0] / scale, p.position[1] / scale),
        )
        for p in option.placements
    )
    size = (option.size[0] / scale, option.size[1] / scale)
    ratio, normed, surface = ratio_metrics(size)
    return LayoutOption(
        placements=placements,
        size=size,
        ratio=ratio,
        normed_ratio=normed,
        surface=surface,
    )


def placement_box(p: Placement) -> Polygon:
    """Axis-aligned rectangle of a placement (y grows downward; orientation does not matter here)."""
    x, y = p.position
    return box(x, y, x + p.size[0], y + p.size[1])


def container_box(option: LayoutOption) -> Polygon:
    return box(0.0, 0.0, option.size[0], option.size[1])


def placement_extents(option: LayoutOption) -> np.ndarray:
    """(N, 4) array of [minx, miny, maxx, maxy] per placement."""
    if not option.placements:
        return np.zeros((0, 4))
    return np.array(
        [[p.position[0], p.position[1], p.right, p.bottom] for p in option.placements],
        dtype=np.float64,
    )
