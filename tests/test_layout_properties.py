# tests/test_layout_properties.py
"""
Properties that hold for every option the engine returns: bijection with the input,
exact coverage without overlap, idempotent normalization, deterministic results,
scale independence and surface pruning.
"""

from __future__ import annotations

import pytest

from sitelen.core.config import KIND_WORD
from sitelen.core.geometry import normalize_option
from sitelen.core.layout import layout_container
from sitelen.core.sizing import units_for_tokens
from sitelen.core.types import Unit
from sitelen.core.validate import validate_option


def _units(*sizes: tuple[float, float]) -> list[Unit]:
    return [Unit(kind=KIND_WORD, size=s, token=f"t{i}") for i, s in enumerate(sizes)]


CASES = [
    _units((1, 1), (1, 1), (1, 1)),
    _units((1, 1), (0.5, 1), (1, 1)),
    _units((1, 1), (1, 0.5), (0.5, 1), (1, 1)),
    _units((1, 1), (1, 1), (1, 1), (1, 1), (1, 1)),
    units_for_tokens(["jan", "lili", "wan", "pona"]),
]


def _geometry(option) -> tuple:
    return (
        tuple(round(v, 6) for v in option.size),
        tuple(
            (tuple(round(v, 6) for v in p.size), tuple(round(v, 6) for v in p.position))
            for p in option.placements
        ),
    )


@pytest.mark.parametrize("units", CASES)
def test_every_option_is_a_valid_tiling(units) -> None:
    result = layout_container(units)
    assert result.options
    for option in result.options:
        ok, problems = validate_option(option, units)
        assert ok, problems


@pytest.mark.parametrize("units", CASES)
def test_extents_reconstruct_container_size(units) -> None:
    for option in layout_container(units).options:
        right = max(p.right for p in option.placements)
        bottom = max(p.bottom for p in option.placements)
        assert right == pytest.approx(option.size[0])
        assert bottom == pytest.approx(option.size[1])
        area = sum(p.size[0] * p.size[1] for p in option.placements)
        assert area == pytest.approx(option.surface)


@pytest.mark.parametrize("units", CASES)
def test_normalization_is_idempotent(units) -> None:
    for option in layout_container(units).options:
        again = normalize_option(option)
        assert again == option
        assert again.size == pytest.approx(option.size)
        assert again.surface == pytest.approx(option.surface)


@pytest.mark.parametrize("units", CASES)
def test_same_input_same_signatures(units) -> None:
    a = {o.signature for o in layout_container(units).options}
    b = {o.signature for o in layout_container(units).options}
    assert a == b


@pytest.mark.parametrize("units", CASES)
def test_options_are_unique(units) -> None:
    options = layout_container(units).options
    assert len(set(options)) == len(options)


def test_scaled_units_give_same_geometry() -> None:
    small = _units((1, 1), (0.5, 1), (1, 1))
    large = _units((3, 3), (1.5, 3), (3, 3))
    a = {_geometry(o) for o in layout_container(small).options}
    b = {_geometry(o) for o in layout_container(large).options}
    assert a == b


@pytest.mark.parametrize("units", CASES)
def test_pruned_options_are_subset_of_unpruned(units) -> None:
    pruned = layout_container(units).options
    unpruned = layout_container(units, prune_factor=1e12).options
    assert {o.signature for o in pruned} <= {o.signature for o in unpruned}
    assert len(unpruned) >= len(pruned)
    best = min(o.surface for o in unpruned)
    assert min(o.surface for o in pruned) == pytest.approx(best)
    assert min(o.surface for o in pruned) <= 2 * best


@pytest.mark.parametrize("units", CASES)
def test_surface_bounded_by_running_minimum(units) -> None:
    """Each kept option is below twice the smallest surface kept up to that point."""
    running = float("inf")
    for option in layout_container(units).options:
        running = min(running, option.surface)
        assert option.surface / running < 2.0
