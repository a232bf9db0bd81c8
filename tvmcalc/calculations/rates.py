"""
Rate Conversion

Maps a nominal annual rate (in percent) and a payment frequency to the
periodic rate the TVM formulas operate on.
"""

from enum import Enum
from types import MappingProxyType
from typing import Union

from tvmcalc.calculations.errors import InvalidFrequencyError


class PaymentFrequency(str, Enum):
    """Supported compounding / payment frequencies."""

    monthly = "monthly"
    yearly = "yearly"
    daily = "daily"
    weekly = "weekly"
    semi_monthly = "semi-monthly"
    bi_weekly = "bi-weekly"
    semi_annually = "semi-annually"


PERIODS_PER_YEAR = MappingProxyType(
    {
        PaymentFrequency.monthly: 12,
        PaymentFrequency.yearly: 1,
        PaymentFrequency.daily: 365,
        PaymentFrequency.weekly: 52,
        PaymentFrequency.semi_monthly: 24,
        PaymentFrequency.bi_weekly: 26,
        PaymentFrequency.semi_annually: 2,
    }
)


def parse_frequency(frequency: Union[PaymentFrequency, str]) -> PaymentFrequency:
    """
    Resolve a frequency token to a PaymentFrequency.

    Args:
        frequency: PaymentFrequency member or its token (e.g. "bi-weekly")

    Returns:
        The matching PaymentFrequency

    Raises:
        InvalidFrequencyError: If the token is not a supported frequency
    """
    if isinstance(frequency, PaymentFrequency):
        return frequency
    try:
        return PaymentFrequency(frequency)
    except ValueError:
        raise InvalidFrequencyError(
            f"Unknown payment frequency: {frequency!r}"
        ) from None


def periods_per_year(frequency: Union[PaymentFrequency, str]) -> int:
    """Number of compounding periods per year for a frequency."""
    return PERIODS_PER_YEAR[parse_frequency(frequency)]


def effective_rate(
    nominal_annual_rate_percent: float, frequency: Union[PaymentFrequency, str]
) -> float:
    """
    Convert a nominal annual rate to a periodic rate.

    Args:
        nominal_annual_rate_percent: Annual rate in percent (e.g., 12 for 12%)
        frequency: Compounding frequency

    Returns:
        Periodic rate as decimal (e.g., 0.01 for 12% compounded monthly)
    """
    return nominal_annual_rate_percent / 100 / periods_per_year(frequency)


def nominal_rate_percent(
    periodic_rate: float, frequency: Union[PaymentFrequency, str]
) -> float:
    """Convert a periodic rate back to a nominal annual rate in percent."""
    return periodic_rate * periods_per_year(frequency) * 100
