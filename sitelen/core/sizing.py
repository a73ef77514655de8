# sitelen/core/sizing.py
"""
Unit sizer: base (width, height) of a glyph from its token and kind.
Sizes come from an injected SizeTable; defaults mirror config.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from sitelen.core.config import (
    DEFAULT_SIZE,
    KIND_SYLLABLE,
    KIND_WORD,
    LARGE_PUNCTUATION,
    LARGE_PUNCTUATION_SIZE,
    NARROW_MODIFIER_SIZE,
    NARROW_MODIFIERS,
    NARROW_SYLLABLE_SIZE,
    NARROW_SYLLABLES,
    SENTENCE_PUNCTUATION,
    SENTENCE_PUNCTUATION_SIZE,
    SINGLE_PUNCTUATION,
    SINGLE_PUNCTUATION_SIZE,
    SMALL_MODIFIER_SIZE,
    SMALL_MODIFIERS,
)
from sitelen.core.types import Size, Unit


def _default_word_groups() -> tuple[tuple[frozenset[str], Size], ...]:
    # checked in order
    return (
        (frozenset(SINGLE_PUNCTUATION), SINGLE_PUNCTUATION_SIZE),
        (frozenset(SENTENCE_PUNCTUATION), SENTENCE_PUNCTUATION_SIZE),
        (frozenset(LARGE_PUNCTUATION), LARGE_PUNCTUATION_SIZE),
        (frozenset(SMALL_MODIFIERS), SMALL_MODIFIER_SIZE),
        (frozenset(NARROW_MODIFIERS), NARROW_MODIFIER_SIZE),
    )


def _default_syllable_groups() -> tuple[tuple[frozenset[str], Size], ...]:
    return ((frozenset(NARROW_SYLLABLES), NARROW_SYLLABLE_SIZE),)


@dataclass(frozen=True)
class SizeTable:
    """
    Token groups and their base sizes, per glyph kind. First matching group wins;
    tokens in no group get `default`.
    """
    word_groups: tuple[tuple[frozenset[str], Size], ...] = field(default_factory=_default_word_groups)
    syllable_groups: tuple[tuple[frozenset[str], Size], ...] = field(default_factory=_default_syllable_groups)
    default: Size = DEFAULT_SIZE

    def groups_for(self, kind: str) -> tuple[tuple[frozenset[str], Size], ...]:
        if kind == KIND_SYLLABLE:
            return self.syllable_groups
        return self.word_groups


DEFAULT_SIZE_TABLE = SizeTable()


def size_of(token: str, kind: str = KIND_WORD, table: SizeTable = DEFAULT_SIZE_TABLE) -> Size:
    """Base size of token for the given glyph kind. Pure: same inputs, same size."""
    for tokens, size in table.groups_for(kind):
        if token in tokens:
            return size
    return table.default


def units_for_tokens(
    tokens: Iterable[str],
    kind: str = KIND_WORD,
    table: SizeTable = DEFAULT_SIZE_TABLE,
) -> list[Unit]:
    """One sized unit per token, in order."""
    return [Unit(kind=kind, size=size_of(token, kind, table), token=token) for token in tokens]
