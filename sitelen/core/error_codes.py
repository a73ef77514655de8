"""
Structured error codes for layout preconditions and incomplete searches.
Use these keys in exceptions and results; map to user-facing messages at the caller.
"""

from __future__ import annotations

# Known error keys
EMPTY_UNITS = "empty_units"
NON_POSITIVE_SIZE = "non_positive_size"
UNKNOWN_KIND = "unknown_kind"
BUDGET_EXHAUSTED = "budget_exhausted"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    EMPTY_UNITS: "Nothing to lay out. Pass at least one unit.",
    NON_POSITIVE_SIZE: "Unit sizes must be positive in both dimensions.",
    UNKNOWN_KIND: "Unknown unit kind. Use a word, syllable, punctuation or container unit.",
    BUDGET_EXHAUSTED: "Layout search stopped early; only part of the options were found. Raise the node or time budget.",
}


class PreconditionError(ValueError):
    """Invalid input to the layout engine. `code` is one of the keys above."""

    def __init__(self, code: str, detail: str = "") -> None:
        self.code = code
        message = USER_MESSAGES.get(code, code)
        super().__init__(f"{message} {detail}".strip())


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
