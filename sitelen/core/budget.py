"""
Search budget: node count and wall-clock deadline, passed explicitly through the
recursive search. No shared flags; each search owns its budget object.
The deadline is absolute (epoch seconds) so a child budget handed to a pool
worker stops at the same moment as its parent.
"""

from __future__ import annotations

import time

from sitelen.core.config import MAX_NODES, TIMEOUT_S


class SearchBudget:
    """
    Counts visited search nodes and checks an optional deadline.
    `spend()` returns False once the budget is exhausted; it stays exhausted.
    """

    def __init__(
        self,
        max_nodes: int | None = MAX_NODES,
        timeout_s: float | None = TIMEOUT_S,
        deadline: float | None = None,
    ) -> None:
        if max_nodes is not None and max_nodes < 0:
            raise ValueError("max_nodes must be >= 0")
        if timeout_s is not None and timeout_s < 0:
            raise ValueError("timeout_s must be >= 0")
        self.max_nodes = max_nodes
        self.timeout_s = timeout_s
        self.nodes = 0
        self.exhausted = False
        if deadline is None and timeout_s is not None:
            deadline = time.time() + timeout_s
        self.deadline = deadline

    def poll(self) -> bool:
        """Mark the budget exhausted if the deadline has passed; return `exhausted`."""
        if not self.exhausted and self.deadline is not None and time.time() > self.deadline:
            self.exhausted = True
        return self.exhausted

    def spend(self, n: int = 1) -> bool:
        """Account for n more nodes. Returns True while the search may continue."""
        if self.poll():
            return False
        if self.max_nodes is not None and self.nodes + n > self.max_nodes:
            self.exhausted = True
            return False
        self.nodes += n
        return True

    def record(self, n: int) -> None:
        """Add nodes already spent through a child budget."""
        self.nodes += n
        if self.max_nodes is not None and self.nodes > self.max_nodes:
            self.exhausted = True

    def remaining(self) -> tuple[int | None, float | None]:
        """(nodes left, seconds left); None where unbounded."""
        nodes_left = None if self.max_nodes is None else max(0, self.max_nodes - self.nodes)
        seconds_left = None
        if self.deadline is not None:
            seconds_left = max(0.0, self.deadline - time.time())
        return nodes_left, seconds_left

    def child(self, max_nodes: int | None = None) -> SearchBudget:
        """
        Fresh budget sharing this one's deadline, allowed at most `max_nodes`
        (and never more than is left here). Spent nodes come back via `record`.
        """
        nodes_left, _ = self.remaining()
        if max_nodes is not None:
            nodes_left = max_nodes if nodes_left is None else min(nodes_left, max_nodes)
        return SearchBudget(max_nodes=nodes_left, deadline=self.deadline)
