from __future__ import annotations

import re

from trichoscalp.domain.models.indicators import Indicator
from trichoscalp.infrastructure.constants.indicator_constants import INDICATOR_PROFILES

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def format_indicator_name(key: str) -> str:
    """Turn an internal identifier into a label: "densidade_capilar" -> "Densidade Capilar"."""
    spaced = _CAMEL_BOUNDARY.sub(" ", str(key)).replace("_", " ")
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split())


def indicator_label(key: str) -> str:
    """Accented display label for known indicators, generic formatting otherwise."""
    try:
        return INDICATOR_PROFILES[Indicator(key)].label
    except ValueError:
        return format_indicator_name(key)
