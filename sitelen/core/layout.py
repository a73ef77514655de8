# sitelen/core/layout.py
"""
Container layout engine: enumerate every tiling of an ordered unit sequence into
rows and columns, normalize each tiling to unit scale, deduplicate by signature
and prune options whose surface is far above the best seen so far.

Search is depth-first. From a partial container it tries every next run of
units (any length) either to the right (row extension, the run stacked
top-to-bottom) or below (column extension, the run laid left-to-right).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from sitelen.core.budget import SearchBudget
from sitelen.core.config import INITIAL_MIN_SURFACE, KIND_PUNCTUATION, SURFACE_PRUNE_FACTOR
from sitelen.core.error_codes import BUDGET_EXHAUSTED, EMPTY_UNITS, PreconditionError
from sitelen.core.geometry import anchor_key, normalize_option, ratio_metrics
from sitelen.core.types import LayoutOption, LayoutResult, LayoutState, Placement, Unit

logger = logging.getLogger(__name__)


@dataclass
class _SearchContext:
    """Per-call search bookkeeping; passed explicitly, never shared between calls."""
    units: tuple[Unit, ...]
    budget: SearchBudget
    prune_factor: float
    min_surface: float = INITIAL_MIN_SURFACE
    seen: set[LayoutOption] = field(default_factory=set)
    options: list[LayoutOption] = field(default_factory=list)
    dead_branches: int = 0


def initial_state(unit: Unit) -> LayoutState:
    """First unit alone at the origin; its lower-right corner is forbidden."""
    return LayoutState(
        placements=(Placement(unit=unit, size=unit.size, position=(0.0, 0.0)),),
        size=unit.size,
        forbidden=frozenset({anchor_key(*unit.size)}),
    )


def extend_state(state: LayoutState, run: Sequence[Unit], goes_down: bool) -> LayoutState | None:
    """
    Append a run of units below (goes_down) or to the right of the container.
    Returns None for a dead branch: mismatched run sizes or a unit starting on a forbidden anchor.
    """
    # the run shares its extent on the growing axis; it fills the fixed axis
    add_axis = 1 if goes_down else 0
    fixed_axis = 1 - add_axis
    shared = run[0].size[add_axis]
    if any(not math.isclose(u.size[add_axis], shared) for u in run):
        return None

    fixed_sum = sum(u.size[fixed_axis] for u in run)
    add = shared * state.size[fixed_axis] / fixed_sum

    x, y = (0.0, state.size[1]) if goes_down else (state.size[0], 0.0)
    placements = list(state.placements)
    forbidden = set(state.forbidden)
    for unit in run:
        size = [0.0, 0.0]
        size[add_axis] = add
        size[fixed_axis] = unit.size[fixed_axis] * add / unit.size[add_axis]
        w, h = size
        if goes_down and anchor_key(x, y) in forbidden:
            return None
        placements.append(Placement(unit=unit, size=(w, h), position=(x, y)))
        forbidden.add(anchor_key(x + w, y + h))
        if goes_down:
            x += w
        else:
            y += h

    new_size = list(state.size)
    new_size[add_axis] += add
    return LayoutState(
        placements=tuple(placements),
        size=(new_size[0], new_size[1]),
        forbidden=frozenset(forbidden),
    )


def finalize_state(state: LayoutState) -> LayoutOption:
    """Turn a state that holds every unit into a normalized option."""
    ratio, normed, surface = ratio_metrics(state.size)
    option = LayoutOption(
        placements=state.placements,
        size=state.size,
        ratio=ratio,
        normed_ratio=normed,
        surface=surface,
    )
    return normalize_option(option)


def _collect(ctx: _SearchContext, state: LayoutState) -> None:
    option = finalize_state(state)
    ctx.min_surface = min(ctx.min_surface, option.surface)
    if option in ctx.seen:
        return
    # surface can't be prune_factor times larger than the best so far
    if option.surface / ctx.min_surface < ctx.prune_factor:
        ctx.seen.add(option)
        ctx.options.append(option)


def _step(ctx: _SearchContext, state: LayoutState, index: int, length: int, goes_down: bool) -> None:
    if not ctx.budget.spend():
        return
    new_state = extend_state(state, ctx.units[index:index + length], goes_down)
    if new_state is None:
        ctx.dead_branches += 1
        return
    if index + length == len(ctx.units):
        _collect(ctx, new_state)
        return
    _branch(ctx, new_state, index + length)


def _branch(ctx: _SearchContext, state: LayoutState, index: int) -> None:
    """Try every run length starting at index, to the right and below."""
    remaining = len(ctx.units) - index
    for length in range(1, remaining + 1):
        if ctx.budget.exhausted:
            return
        # punctuation may not be placed to the right, alone
        if ctx.units[index].kind != KIND_PUNCTUATION:
            _step(ctx, state, index, length, goes_down=False)
        _step(ctx, state, index, length, goes_down=True)


def layout_container(
    units: Sequence[Unit],
    budget: SearchBudget | None = None,
    prune_factor: float = SURFACE_PRUNE_FACTOR,
) -> LayoutResult:
    """
    Lay out units (glyphs, syllables or sub-containers) into every valid container.
    Raises PreconditionError on an empty sequence. When the budget runs out the
    result holds the options found so far and incomplete=True.
    """
    units = tuple(units)
    if not units:
        raise PreconditionError(EMPTY_UNITS)
    if prune_factor <= 1.0:
        raise ValueError("prune_factor must be > 1")
    if budget is None:
        budget = SearchBudget()

    if len(units) == 1:
        unit = units[0]
        ratio, normed, surface = ratio_metrics(unit.size)
        option = LayoutOption(
            placements=initial_state(unit).placements,
            size=unit.size,
            ratio=ratio,
            normed_ratio=normed,
            surface=surface,
        )
        result = LayoutResult(options=[option])
        # a budget shared with earlier searches may already be spent
        if budget.poll():
            result.incomplete = True
            result.reason = BUDGET_EXHAUSTED
        return result

    start_nodes = budget.nodes
    ctx = _SearchContext(units=units, budget=budget, prune_factor=prune_factor)
    _branch(ctx, initial_state(units[0]), 1)

    result = LayoutResult(options=ctx.options, nodes=budget.nodes - start_nodes)
    if budget.exhausted:
        result.incomplete = True
        result.reason = BUDGET_EXHAUSTED
        logger.warning(
            "Layout search for %d units stopped after %d nodes; %d options kept.",
            len(units), result.nodes, len(ctx.options),
        )
    logger.debug(
        "layout_container: %d units, %d nodes, %d dead branches, %d options (min surface %.3f)",
        len(units), result.nodes, ctx.dead_branches, len(ctx.options), ctx.min_surface,
    )
    return result
