# sitelen/core/types.py
"""
Dataclasses for units, placements, search states, layout options and part trees.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Literal

from sitelen.core.config import (
    ANCHOR_DECIMALS,
    KIND_CONTAINER,
    PART_ROLES,
    ROLE_NORMAL,
    UNIT_KINDS,
)
from sitelen.core.error_codes import NON_POSITIVE_SIZE, UNKNOWN_KIND, PreconditionError


Size = tuple[float, float]
Point = tuple[float, float]
PartRole = Literal["normal", "punctuation", "proper-name"]


def _rounded(values: tuple[float, ...]) -> tuple[float, ...]:
    return tuple(round(float(v), ANCHOR_DECIMALS) for v in values)


@dataclass(frozen=True)
class Unit:
    """
    Atomic input to layout: a glyph or an already laid-out sub-container.
    `size` is the base (width, height); `option` is set for container/punctuation sub-layouts.
    """
    kind: str
    size: Size
    token: str | None = None
    separator: str | None = None
    option: LayoutOption | None = None

    def __post_init__(self) -> None:
        if self.kind not in UNIT_KINDS:
            raise PreconditionError(UNKNOWN_KIND, repr(self.kind))
        w, h = self.size
        if not (math.isfinite(w) and math.isfinite(h)) or w <= 0 or h <= 0:
            raise PreconditionError(NON_POSITIVE_SIZE, f"{self.token or self.kind}: {self.size!r}")
        object.__setattr__(self, "size", (float(w), float(h)))

    @cached_property
    def signature(self) -> tuple:
        nested = self.option.signature if self.option is not None else None
        return (self.kind, self.token, self.separator, _rounded(self.size), nested)


@dataclass(frozen=True)
class Placement:
    """Where a unit ended up: resolved size and top-left position in the container frame."""
    unit: Unit
    size: Size
    position: Point

    @property
    def right(self) -> float:
        return self.position[0] + self.size[0]

    @property
    def bottom(self) -> float:
        return self.position[1] + self.size[1]


@dataclass(frozen=True)
class LayoutState:
    """
    In-progress container. Immutable: extending returns a new state, so sibling
    branches share the parent's tuples instead of copying them.
    `forbidden` holds anchor keys where a new unit may not start.
    """
    placements: tuple[Placement, ...]
    size: Size
    forbidden: frozenset[Point] = frozenset()


@dataclass(frozen=True, eq=False)
class LayoutOption:
    """
    Completed tiling of all units. Equality and hashing use `signature`,
    so a set of options is deduplicated by canonical structure.
    """
    placements: tuple[Placement, ...]
    size: Size
    ratio: float
    normed_ratio: float
    surface: float

    @cached_property
    def signature(self) -> tuple:
        """Canonical structure: container size plus ordered (unit, size, position) per placement."""
        return (
            _rounded(self.size),
            tuple(
                (p.unit.signature, _rounded(p.size), _rounded(p.position))
                for p in self.placements
            ),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayoutOption):
            return NotImplemented
        return self.signature == other.signature

    def __hash__(self) -> int:
        return hash(self.signature)


@dataclass
class LayoutResult:
    """Options found by one search; `incomplete` is True when a budget stopped it early."""
    options: list[LayoutOption] = field(default_factory=list)
    incomplete: bool = False
    nodes: int = 0
    reason: str | None = None


@dataclass(frozen=True)
class Part:
    """
    Node of a structured sentence. Leaf parts carry `tokens`; internal parts carry `parts`.
    `name` is the parser's label (subject, objectMarker, ...), kept for callers.
    """
    tokens: tuple[str, ...] | None = None
    parts: tuple[Part, ...] | None = None
    role: PartRole = ROLE_NORMAL
    separator: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if (self.tokens is None) == (self.parts is None):
            raise ValueError("Part needs exactly one of tokens or parts")
        if self.role not in PART_ROLES:
            raise ValueError(f"Unknown part role: {self.role!r}")

    @property
    def is_leaf(self) -> bool:
        return self.tokens is not None


def container_unit(option: LayoutOption, kind: str = KIND_CONTAINER, separator: str | None = None) -> Unit:
    """Wrap a laid-out option as an opaque unit for the parent level."""
    return Unit(kind=kind, size=option.size, separator=separator, option=option)
