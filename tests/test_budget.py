# tests/test_budget.py
"""
Search budget: node counting, deadline, and partial results from the engine.
"""

from __future__ import annotations

import time

import pytest

from sitelen.core.budget import SearchBudget
from sitelen.core.config import KIND_WORD
from sitelen.core.error_codes import BUDGET_EXHAUSTED
from sitelen.core.layout import layout_container
from sitelen.core.types import Unit


def _row(n: int) -> list[Unit]:
    return [Unit(kind=KIND_WORD, size=(1.0, 1.0), token=f"w{i}") for i in range(n)]


def test_node_budget_stops_after_max_nodes() -> None:
    budget = SearchBudget(max_nodes=3)
    assert [budget.spend() for _ in range(4)] == [True, True, True, False]
    assert budget.exhausted is True
    assert budget.nodes == 3
    # stays exhausted
    assert budget.spend() is False


def test_deadline_exhausts_budget() -> None:
    budget = SearchBudget(timeout_s=0.01)
    time.sleep(0.02)
    assert budget.spend() is False
    assert budget.exhausted is True


def test_unbounded_budget_never_exhausts() -> None:
    budget = SearchBudget()
    assert all(budget.spend() for _ in range(1000))
    assert budget.remaining() == (None, None)


def test_negative_limits_rejected() -> None:
    with pytest.raises(ValueError):
        SearchBudget(max_nodes=-1)
    with pytest.raises(ValueError):
        SearchBudget(timeout_s=-0.5)


def test_child_budget_gets_what_is_left() -> None:
    budget = SearchBudget(max_nodes=10, timeout_s=5.0)
    budget.spend(4)
    child = budget.child()
    assert child.max_nodes == 6
    assert child.nodes == 0
    assert child.deadline == budget.deadline
    assert budget.child(max_nodes=2).max_nodes == 2
    assert budget.child(max_nodes=50).max_nodes == 6


def test_child_of_unbounded_budget_takes_the_share() -> None:
    budget = SearchBudget()
    assert budget.child().max_nodes is None
    assert budget.child(max_nodes=3).max_nodes == 3


def test_child_stops_at_parent_deadline() -> None:
    budget = SearchBudget(timeout_s=0.01)
    child = budget.child()
    time.sleep(0.02)
    assert child.spend() is False
    assert child.exhausted is True


def test_record_adds_child_nodes() -> None:
    budget = SearchBudget(max_nodes=10)
    budget.record(6)
    assert budget.nodes == 6
    assert budget.exhausted is False
    budget.record(5)
    assert budget.exhausted is True


def test_engine_returns_partial_result_when_budget_runs_out() -> None:
    units = _row(5)
    full = layout_container(units)
    partial = layout_container(units, budget=SearchBudget(max_nodes=5))
    assert full.incomplete is False
    assert partial.incomplete is True
    assert partial.reason == BUDGET_EXHAUSTED
    assert partial.nodes <= 5
    assert {o.signature for o in partial.options} <= {o.signature for o in full.options}


def test_engine_counts_nodes() -> None:
    result = layout_container(_row(3))
    # length-1 runs: 2 steps, each followed by 2 more; length-2 runs: 2 steps
    assert result.nodes == 8


def test_single_unit_with_spent_budget_is_flagged() -> None:
    budget = SearchBudget(max_nodes=0)
    assert budget.spend() is False
    result = layout_container(_row(1), budget=budget)
    assert len(result.options) == 1
    assert result.incomplete is True
    assert result.reason == BUDGET_EXHAUSTED
    assert layout_container(_row(1), budget=SearchBudget(max_nodes=0)).incomplete is False
