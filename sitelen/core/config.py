# sitelen/core/config.py
"""
Central configuration for sitelen block layout.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Unit kinds -----
KIND_WORD: str = "word-glyph"
KIND_SYLLABLE: str = "syl-glyph"
KIND_PUNCTUATION: str = "punctuation"
KIND_CONTAINER: str = "container"

UNIT_KINDS: tuple[str, ...] = (KIND_WORD, KIND_SYLLABLE, KIND_PUNCTUATION, KIND_CONTAINER)

# ----- Part roles -----
ROLE_NORMAL: str = "normal"
ROLE_PUNCTUATION: str = "punctuation"
ROLE_PROPER_NAME: str = "proper-name"

PART_ROLES: tuple[str, ...] = (ROLE_NORMAL, ROLE_PUNCTUATION, ROLE_PROPER_NAME)

CARTOUCHE_SEPARATOR: str = "cartouche"
"""Separator the parser puts on proper-name parts; laid out as syllable glyphs."""

# ----- Base sizes (width, height) in scale-free units -----
DEFAULT_SIZE: tuple[float, float] = (1.0, 1.0)

SMALL_MODIFIERS: tuple[str, ...] = ("kon", "lili", "mute", "sin")
SMALL_MODIFIER_SIZE: tuple[float, float] = (1.0, 0.5)

NARROW_MODIFIERS: tuple[str, ...] = ("wan", "tu", "anu", "en", "kin")
NARROW_MODIFIER_SIZE: tuple[float, float] = (0.5, 1.0)

SINGLE_PUNCTUATION: tuple[str, ...] = ("comma", "colon")
SINGLE_PUNCTUATION_SIZE: tuple[float, float] = (4.0, 0.5)

SENTENCE_PUNCTUATION: tuple[str, ...] = ("period", "exclamation", "question")
SENTENCE_PUNCTUATION_SIZE: tuple[float, float] = (4.0, 0.75)

LARGE_PUNCTUATION: tuple[str, ...] = ("la", "banner")
LARGE_PUNCTUATION_SIZE: tuple[float, float] = (4.0, 1.0)

NARROW_SYLLABLES: tuple[str, ...] = (
    "li", "ni", "si", "lin", "nin", "sin",
    "le", "ne", "se", "len", "nen", "sen",
    "lo", "no", "so", "lon", "non", "son",
    "la", "na", "sa", "lan", "nan", "san",
    "lu", "nu", "su", "lun", "nun", "sun",
)
NARROW_SYLLABLE_SIZE: tuple[float, float] = (0.5, 1.0)

# ----- Search -----
SURFACE_PRUNE_FACTOR: float = 2.0
"""Keep an option only while surface / min_surface_so_far < this factor."""

INITIAL_MIN_SURFACE: float = 1e6
"""Starting value of the running minimum surface."""

ANCHOR_DECIMALS: int = 9
"""Rounding for forbidden anchor keys and signatures (absorbs float noise)."""

MAX_NODES: int | None = None
"""Default node budget per search; None = exhaustive."""

TIMEOUT_S: float | None = None
"""Default wall-clock budget per search in seconds; None = no deadline."""

# ----- Validation -----
AREA_TOLERANCE: float = 1e-6
"""Relative tolerance for coverage and overlap area checks."""

# ----- Selection (caller-side) -----
OPTIMAL_RATIO: float = 0.8
"""Preferred width/height ratio when choosing an option to display."""

MIN_RATIO: float = 0.0
MAX_RATIO: float = 100.0

# ----- Reporting -----
SCHEMA_VERSION: str = "1.0"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Level used by developer entrypoints. Set env LOG_LEVEL=DEBUG for branch statistics."""
