"""
Structural checks for analysis payloads.

Stored analyses come back from the database as plain dicts, so every check
accepts either pydantic models or mappings.
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping

from trichoscalp.domain.models.indicators import INDICATOR_KEYS


def field_value(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def indicator_set_problems(indicators: Any) -> List[str]:
    """Describe what is wrong with an indicator set; empty when it is well-formed."""
    if indicators is None:
        return ["indicator set is missing"]
    problems = []
    for key in INDICATOR_KEYS:
        value = field_value(indicators, key)
        if value is None:
            problems.append(f"{key} is missing")
        elif not _is_number(value):
            problems.append(f"{key} is not numeric ({value!r})")
    return problems


def validate_comparison_inputs(current: Any, previous: Any) -> bool:
    """True iff both indicator sets carry all five fields as numbers."""
    return not indicator_set_problems(current) and not indicator_set_problems(previous)


def validate_analysis_result(candidate: Any) -> bool:
    """True iff the quantitative, qualitative and interpretation sections are present
    and the five quantitative indicators are numeric."""
    if candidate is None:
        return False
    quantitative = field_value(candidate, "quantitative")
    qualitative = field_value(candidate, "qualitative")
    interpretation = field_value(candidate, "interpretation")
    if quantitative is None or qualitative is None or interpretation is None:
        return False
    return not indicator_set_problems(quantitative)
