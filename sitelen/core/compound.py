# sitelen/core/compound.py
"""
Compound layout: lay out a tree of sentence parts. Each part is laid out on its own
(leaf tokens via the container engine, nested parts recursively); every option of
every part then becomes an opaque unit, and each combination of one option per
part is laid out again by the engine at the parent level.
"""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Iterator, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait

from sitelen.core.budget import SearchBudget
from sitelen.core.config import (
    KIND_CONTAINER,
    KIND_PUNCTUATION,
    KIND_SYLLABLE,
    KIND_WORD,
    ROLE_PROPER_NAME,
    ROLE_PUNCTUATION,
    SURFACE_PRUNE_FACTOR,
)
from sitelen.core.error_codes import BUDGET_EXHAUSTED
from sitelen.core.layout import layout_container
from sitelen.core.sizing import DEFAULT_SIZE_TABLE, SizeTable, units_for_tokens
from sitelen.core.types import LayoutOption, LayoutResult, Part, Unit, container_unit

logger = logging.getLogger(__name__)


def layout_part(
    part: Part,
    size_table: SizeTable = DEFAULT_SIZE_TABLE,
    budget: SearchBudget | None = None,
    prune_factor: float = SURFACE_PRUNE_FACTOR,
) -> LayoutResult:
    """
    All options for one part: proper names as syllable glyphs, other leaves as
    word glyphs, internal parts through layout_compound.
    """
    if not part.is_leaf:
        return layout_compound(part.parts, size_table=size_table, budget=budget, prune_factor=prune_factor)
    kind = KIND_SYLLABLE if part.role == ROLE_PROPER_NAME else KIND_WORD
    units = units_for_tokens(part.tokens, kind, size_table)
    return layout_container(units, budget=budget, prune_factor=prune_factor)


def part_units(part: Part, options: Sequence[LayoutOption]) -> list[Unit]:
    """Wrap a part's options as units, tagged punctuation or container, carrying the separator."""
    kind = KIND_PUNCTUATION if part.role == ROLE_PUNCTUATION else KIND_CONTAINER
    return [container_unit(option, kind=kind, separator=part.separator) for option in options]


def _layout_combination(units: tuple[Unit, ...], budget: SearchBudget, prune_factor: float) -> LayoutResult:
    """Process-pool entry point: one combination with its own slice of the budget."""
    return layout_container(units, budget=budget, prune_factor=prune_factor)


def _merge(into: LayoutResult, seen: set[LayoutOption], sub: LayoutResult) -> None:
    for option in sub.options:
        if option not in seen:
            seen.add(option)
            into.options.append(option)
    if sub.incomplete:
        into.incomplete = True
        into.reason = sub.reason


def _layout_in_pool(
    combinations: Iterator[tuple[Unit, ...]],
    budget: SearchBudget,
    max_workers: int,
    prune_factor: float,
) -> list[LayoutResult]:
    """
    Run combinations in a process pool, at most max_workers in flight.
    Each worker gets a child budget with the shared deadline and a share of the
    nodes not yet reserved by other workers; spent nodes are recorded back on
    `budget`. Nothing is dispatched once the budget is exhausted; in that case
    `budget.exhausted` is set. Results come back in submission order.
    """
    subs: dict[int, LayoutResult] = {}
    in_flight: dict[Future, tuple[int, int]] = {}
    reserved = 0
    indexed = enumerate(combinations)
    pending = next(indexed, None)
    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        while True:
            while pending is not None and len(in_flight) < max_workers and not budget.poll():
                nodes_left, _ = budget.remaining()
                share = None
                if nodes_left is not None:
                    share = math.ceil((nodes_left - reserved) / (max_workers - len(in_flight)))
                    if share <= 0:
                        break
                index, combo = pending
                future = pool.submit(_layout_combination, combo, budget.child(max_nodes=share), prune_factor)
                in_flight[future] = (index, share or 0)
                reserved += share or 0
                pending = next(indexed, None)
            if not in_flight:
                break
            # running workers share the parent's deadline, so this wait is bounded by it
            finished, _ = wait(in_flight, return_when=FIRST_COMPLETED)
            for future in finished:
                index, share = in_flight.pop(future)
                reserved -= share
                sub = future.result()
                budget.record(sub.nodes)
                subs[index] = sub
    if pending is not None:
        budget.exhausted = True
    return [subs[i] for i in sorted(subs)]


def layout_compound(
    parts: Sequence[Part],
    size_table: SizeTable = DEFAULT_SIZE_TABLE,
    budget: SearchBudget | None = None,
    max_workers: int | None = None,
    prune_factor: float = SURFACE_PRUNE_FACTOR,
) -> LayoutResult:
    """
    Lay out a structured sentence (or a nested group of parts).
    Every combination of one option per part is passed to layout_container;
    results are merged and deduplicated by signature.
    With max_workers > 1 the combinations run in a process pool under the same
    deadline and node limit (see _layout_in_pool).
    """
    parts = tuple(parts)
    result = LayoutResult()
    if not parts:
        logger.warning("Empty text to layout.")
        return result
    if budget is None:
        budget = SearchBudget()
    start_nodes = budget.nodes
    seen: set[LayoutOption] = set()

    per_part: list[list[Unit]] = []
    for part in parts:
        sub = layout_part(part, size_table=size_table, budget=budget, prune_factor=prune_factor)
        if sub.incomplete:
            result.incomplete = True
            result.reason = sub.reason
        per_part.append(part_units(part, sub.options))
    logger.debug(
        "layout_compound: %d parts with %s options each",
        len(parts), [len(units) for units in per_part],
    )

    combinations = itertools.product(*per_part)
    if max_workers is not None and max_workers > 1:
        for sub in _layout_in_pool(combinations, budget, max_workers, prune_factor):
            _merge(result, seen, sub)
    else:
        for combo in combinations:
            if budget.poll():
                break
            _merge(result, seen, layout_container(combo, budget=budget, prune_factor=prune_factor))
    result.nodes = budget.nodes - start_nodes

    if budget.exhausted and not result.incomplete:
        result.incomplete = True
        result.reason = BUDGET_EXHAUSTED
    if result.incomplete:
        logger.warning(
            "Compound layout of %d parts stopped after %d nodes; %d options kept.",
            len(parts), result.nodes, len(result.options),
        )
    return result
