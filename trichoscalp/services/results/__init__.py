"""Results presentation package.

Structure:
- formatting/numbers.py: rounding, clamping and signed delta strings
- formatting/indicators.py: indicator display names
- formatting/summary.py: plain-text executive summary of a comparison
- formatting/timeline.py: chart points for a client's evolution
"""
