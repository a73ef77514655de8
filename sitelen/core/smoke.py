# sitelen/core/smoke.py
"""
Single entrypoint to verify layout end-to-end on a default sentence:
parse dicts, split compounds, lay out, validate, choose, print a summary.
Does not run on import. Run: python -m sitelen.core.smoke
"""

from __future__ import annotations

import json
import logging

from sitelen.core.compound import layout_compound
from sitelen.core.config import LOG_LEVEL, OPTIMAL_RATIO
from sitelen.core.error_codes import user_message
from sitelen.core.reporting import option_to_dict
from sitelen.core.selection import choose_option, split_compounds
from sitelen.core.sentence import sentence_from_dicts
from sitelen.core.validate import validate_option

logger = logging.getLogger(__name__)

# "jan pona li moku e kili. mi lon tomo Keli."
DEFAULT_SENTENCE: list[dict] = [
    {"part": "subject", "tokens": ["jan", "pona"]},
    {"part": "objectMarker", "sep": "li", "tokens": ["moku"]},
    {"part": "objectMarker", "sep": "e", "tokens": ["kili"]},
    {"part": "punctuation", "tokens": ["period"]},
    {"part": "subject", "tokens": ["mi"]},
    {
        "part": "subject",
        "sep": "lon",
        "parts": [
            {"part": "subject", "tokens": ["tomo"]},
            {"part": "subject", "sep": "cartouche", "tokens": ["ke", "li"]},
        ],
    },
    {"part": "punctuation", "tokens": ["period"]},
]


def main() -> None:
    """Lay out DEFAULT_SENTENCE and print the chosen option of each compound as JSON."""
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    parts = sentence_from_dicts(DEFAULT_SENTENCE)
    chosen = []
    for i, compound in enumerate(split_compounds(parts)):
        result = layout_compound(compound)
        if result.incomplete:
            logger.warning("Compound %d: %s", i, user_message(result.reason))
        for option in result.options:
            ok, problems = validate_option(option)
            if not ok:
                raise RuntimeError(f"Invalid option in compound {i}: {problems}")
        best = choose_option(result.options, optimal_ratio=OPTIMAL_RATIO)
        logger.info("Compound %d: %d options, chosen ratio %s", i, len(result.options),
                    None if best is None else round(best.ratio, 3))
        chosen.append(None if best is None else option_to_dict(best))
    print(json.dumps(chosen, indent=2))


if __name__ == "__main__":
    main()
