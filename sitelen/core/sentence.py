# sitelen/core/sentence.py
"""
Build Part trees from structured-sentence dicts as produced by the parser:
{"part": "subject", "tokens": [...]}, {"part": "objectMarker", "sep": "e", "tokens": [...]},
{"part": "punctuation", "tokens": ["period"]}, {"part": ..., "sep": ..., "parts": [...]}.
Malformed input raises ValueError.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sitelen.core.config import (
    CARTOUCHE_SEPARATOR,
    ROLE_NORMAL,
    ROLE_PROPER_NAME,
    ROLE_PUNCTUATION,
)
from sitelen.core.types import Part


def _role_for(name: str | None, sep: str | None) -> str:
    if name == "punctuation":
        return ROLE_PUNCTUATION
    if sep == CARTOUCHE_SEPARATOR:
        return ROLE_PROPER_NAME
    return ROLE_NORMAL


def part_from_dict(data: Mapping) -> Part:
    """
    Convert one parser dict into a Part. Leaves need a non-empty list of string tokens;
    internal nodes need a non-empty list of parts.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Part must be a mapping, got {type(data).__name__}")
    name = data.get("part")
    sep = data.get("sep")
    if sep is not None and not isinstance(sep, str):
        raise ValueError(f"Separator must be a string: {sep!r}")
    role = _role_for(name, sep)

    if "parts" in data and data["parts"] is not None:
        children = data["parts"]
        if isinstance(children, (str, bytes)) or not isinstance(children, Iterable):
            raise ValueError("'parts' must be a list of parts")
        nested = tuple(part_from_dict(child) for child in children)
        if not nested:
            raise ValueError(f"Part {name!r} has an empty 'parts' list")
        return Part(parts=nested, role=role, separator=sep, name=name)

    tokens = data.get("tokens")
    if tokens is None or isinstance(tokens, (str, bytes)) or not isinstance(tokens, Iterable):
        raise ValueError(f"Part {name!r} needs a list of tokens or parts")
    tokens = tuple(tokens)
    if not tokens:
        raise ValueError(f"Part {name!r} has no tokens")
    if not all(isinstance(t, str) and t for t in tokens):
        raise ValueError(f"Part {name!r} has a non-string or empty token")
    return Part(tokens=tokens, role=role, separator=sep, name=name)


def sentence_from_dicts(items: Iterable[Mapping]) -> list[Part]:
    """Convert a structured sentence (list of part dicts) into Parts."""
    return [part_from_dict(item) for item in items]
