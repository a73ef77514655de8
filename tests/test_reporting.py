# tests/test_reporting.py
"""
Validate option/result dicts have the shape a renderer expects and survive JSON.
Smoke test: lay out a small sentence end-to-end and serialize it.
"""

from __future__ import annotations

import json

from sitelen.core.compound import layout_compound
from sitelen.core.config import SCHEMA_VERSION
from sitelen.core.reporting import option_to_dict, result_to_dict
from sitelen.core.sentence import sentence_from_dicts
from sitelen.core.types import LayoutResult

REQUIRED_KEYS = [
    ("size", "width"),
    ("size", "height"),
    "ratio",
    "normed_ratio",
    "surface",
    "placements",
]


def _result():
    parts = sentence_from_dicts([
        {"part": "subject", "tokens": ["jan", "pona"]},
        {"part": "objectMarker", "sep": "li", "tokens": ["moku"]},
        {"part": "punctuation", "tokens": ["period"]},
    ])
    return layout_compound(parts)


def test_option_dict_required_keys_exist() -> None:
    data = option_to_dict(_result().options[0])
    for key in REQUIRED_KEYS:
        if isinstance(key, tuple):
            obj = data
            for k in key:
                assert k in obj, f"Missing key: {key}"
                obj = obj[k]
        else:
            assert key in data, f"Missing key: {key}"


def test_nested_units_embed_their_option() -> None:
    data = option_to_dict(_result().options[0])
    first = data["placements"][0]
    assert first["unit"]["kind"] == "container"
    inner = first["unit"]["option"]
    assert [p["unit"]["token"] for p in inner["placements"]] == ["jan", "pona"]
    second = data["placements"][1]
    assert second["unit"]["separator"] == "li"
    assert {"x", "y"} <= set(second["position"])


def test_result_dict_json_roundtrip() -> None:
    result = _result()
    loaded = json.loads(json.dumps(result_to_dict(result)))
    assert loaded["schema_version"] == SCHEMA_VERSION
    assert loaded["search"]["incomplete"] is False
    assert len(loaded["options"]) == len(result.options)


def test_incomplete_flag_is_serialized() -> None:
    data = result_to_dict(LayoutResult(options=[], incomplete=True, nodes=7, reason="budget_exhausted"))
    assert data["search"] == {
        "incomplete": True,
        "reason": "budget_exhausted",
        "nodes": 7,
        "prune_factor": 2.0,
    }
    assert data["options"] == []


def test_kind_and_separator_live_on_unit_dicts() -> None:
    data = option_to_dict(_result().options[0])
    assert "kind" not in data
    assert "separator" not in data
    units = [p["unit"] for p in data["placements"]]
    assert [u["kind"] for u in units] == ["container", "container", "punctuation"]
    assert units[1]["separator"] == "li"
    assert "separator" not in units[0]
