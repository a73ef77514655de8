# sitelen/core/selection.py
"""
Caller-side helpers for picking one option to display. The layout engine never
ranks options; a renderer splits a sentence into compounds, lays out each one and
then chooses by aspect ratio here.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from sitelen.core.config import MAX_RATIO, MIN_RATIO, OPTIMAL_RATIO, ROLE_PUNCTUATION
from sitelen.core.types import LayoutOption, Part


def split_compounds(parts: Sequence[Part]) -> list[list[Part]]:
    """Cut a sentence after each punctuation part; trailing parts form a last compound."""
    compounds: list[list[Part]] = []
    current: list[Part] = []
    for part in parts:
        current.append(part)
        if part.role == ROLE_PUNCTUATION:
            compounds.append(current)
            current = []
    if current:
        compounds.append(current)
    return compounds


def rank_by_ratio(options: Sequence[LayoutOption], optimal_ratio: float = OPTIMAL_RATIO) -> list[LayoutOption]:
    """Options ordered by |optimal_ratio - ratio|, closest first; ties keep input order."""
    if not options:
        return []
    distance = np.abs(np.array([o.ratio for o in options], dtype=np.float64) - optimal_ratio)
    order = np.argsort(distance, kind="stable")
    return [options[i] for i in order]


def choose_option(
    options: Sequence[LayoutOption],
    optimal_ratio: float = OPTIMAL_RATIO,
    min_ratio: float = MIN_RATIO,
    max_ratio: float = MAX_RATIO,
    rng: np.random.Generator | None = None,
) -> LayoutOption | None:
    """
    Keep options with min_ratio < ratio < max_ratio and return the one closest to
    optimal_ratio, or a random one when rng is given. None if nothing passes the filter.
    """
    allowed = [o for o in options if min_ratio < o.ratio < max_ratio]
    if not allowed:
        return None
    ranked = rank_by_ratio(allowed, optimal_ratio)
    if rng is not None:
        return ranked[int(rng.integers(len(ranked)))]
    return ranked[0]
