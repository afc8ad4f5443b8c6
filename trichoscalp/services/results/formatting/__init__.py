from .numbers import clamp01, format_delta, round_to
from .indicators import format_indicator_name, indicator_label
from .summary import executive_summary
from .timeline import build_evolution_timeline

__all__ = [
    "clamp01",
    "format_delta",
    "round_to",
    "format_indicator_name",
    "indicator_label",
    "executive_summary",
    "build_evolution_timeline",
]
