"""
Financial Calculation Engine

Time-value-of-money solver and rate conversion.
All calculations are designed to match financial calculator / Excel behavior.
"""

from tvmcalc.calculations import errors, rates, tvm

__all__ = ["errors", "rates", "tvm"]
