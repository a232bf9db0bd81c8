"""
Display formatting for solved values.

The solver returns full precision; the calculator form shows the interest
rate to 3 decimals and money amounts to 2 (configurable in Settings).
"""

from tvmcalc.calculations.tvm import TVMField
from tvmcalc.config import get_settings


def format_display(field: TVMField, value: float) -> str:
    """Round a solved value the way the calculator form shows it."""
    settings = get_settings()
    if field is TVMField.interest_rate:
        decimals = settings.rate_display_decimals
    else:
        decimals = settings.amount_display_decimals
    return f"{value:.{decimals}f}"
