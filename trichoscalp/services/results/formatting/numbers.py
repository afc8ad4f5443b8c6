from __future__ import annotations

MIN_DISPLAYED_DELTA = 0.01


def clamp01(value: float) -> float:
    """Bound a value to the closed interval [0, 1]."""
    return max(0.0, min(1.0, value))


def round_to(value: float, places: int) -> float:
    """Round to a fixed number of decimals, normalizing negative zero."""
    return round(value, places) + 0.0


def format_delta(value: float) -> str:
    """Signed two-decimal string ("+0.20", "-0.15"); tiny magnitudes render as "0.00"."""
    if abs(value) < MIN_DISPLAYED_DELTA:
        return "0.00"
    return f"{value:+.2f}"
