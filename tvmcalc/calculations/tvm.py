"""
Time Value of Money Solver

Solves for one of present value, future value, interest rate, number of
periods, or payment given the other four, matching a financial calculator's
TVM keys.

All formulas follow the ordinary-annuity identity

    pv * (1 + r)^n + pmt * ((1 + r)^n - 1) / r + fv = 0

where r is the periodic rate. Money paid out and money received carry
opposite signs. The closed-form branches work on fv negated, so the
future-value branch negates its result back.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from tvmcalc.calculations.errors import (
    DivisionSingularityError,
    InvalidInputsError,
    NonConvergenceError,
)
from tvmcalc.calculations.rates import (
    PaymentFrequency,
    effective_rate,
    nominal_rate_percent,
    parse_frequency,
)

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-6
DEFAULT_GUESS = 0.1
DERIVATIVE_EPSILON = 1e-12  # smallest |f'(r)| / |f(r)| accepted


class TVMField(str, Enum):
    """The five TVM quantities."""

    present_value = "present_value"
    future_value = "future_value"
    interest_rate = "interest_rate"
    number_of_periods = "number_of_periods"
    payment = "payment"


@dataclass(frozen=True)
class TVMInputs:
    """
    Inputs for a single solve.

    interest_rate is the nominal annual rate in percent. A field left as None
    is the quantity to solve for.
    """

    present_value: Optional[float] = None
    future_value: Optional[float] = None
    interest_rate: Optional[float] = None
    number_of_periods: Optional[float] = None
    payment: Optional[float] = None
    payment_frequency: PaymentFrequency = PaymentFrequency.monthly

    def value_of(self, field: TVMField) -> Optional[float]:
        return getattr(self, field.value)

    def unknown_fields(self):
        return [field for field in TVMField if self.value_of(field) is None]

    def with_value(self, field: TVMField, value: float) -> "TVMInputs":
        """Return a copy with one field filled in."""
        return replace(self, **{field.value: value})


def _parse_field(unknown: Union[TVMField, str]) -> TVMField:
    try:
        return TVMField(unknown)
    except ValueError:
        raise InvalidInputsError(f"Unknown TVM field: {unknown!r}") from None


def resolve_unknown(
    inputs: TVMInputs, unknown: Optional[Union[TVMField, str]] = None
) -> TVMField:
    """
    Work out which field to solve for and check the other four are usable.

    Args:
        inputs: The five quantities and payment frequency
        unknown: Field to solve for, or None for the single field left as None

    Returns:
        The field to solve for

    Raises:
        InvalidInputsError: Not exactly one unknown, or a non-finite known value
    """
    missing = inputs.unknown_fields()

    if unknown is None:
        if len(missing) != 1:
            raise InvalidInputsError(
                f"Exactly one field must be unknown, got {len(missing)}"
            )
        target = missing[0]
    else:
        target = _parse_field(unknown)
        others = [field for field in missing if field is not target]
        if others:
            names = ", ".join(field.value for field in others)
            raise InvalidInputsError(f"Missing values for: {names}")

    for field in TVMField:
        if field is target:
            continue
        value = inputs.value_of(field)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputsError(f"{field.value} must be a number")
        if not math.isfinite(value):
            raise InvalidInputsError(f"{field.value} must be a finite number")

    return target


def _log_growth(r: float, n: float) -> float:
    """n * ln(1 + r), accurate for rates near zero."""
    if 1 + r <= 0:
        raise InvalidInputsError("Periodic rate must be greater than -100%")
    return n * math.log1p(r)


def _growth(r: float, n: float) -> float:
    """(1 + r)^n for a closed-form branch."""
    try:
        return math.exp(_log_growth(r, n))
    except OverflowError:
        raise InvalidInputsError(
            "Growth factor is out of floating-point range"
        ) from None


def _annuity_factor(r: float, n: float) -> float:
    """((1 + r)^n - 1) / r, with its limit n at r == 0."""
    if r == 0:
        return n
    try:
        return math.expm1(_log_growth(r, n)) / r
    except OverflowError:
        raise InvalidInputsError(
            "Growth factor is out of floating-point range"
        ) from None


def solve_present_value(fv: float, r: float, n: float, pmt: float) -> float:
    """
    Present value for a periodic rate.

    Matches Excel's PV() function.

    Args:
        fv: Future value (sign convention: opposite to the outflows)
        r: Periodic rate as decimal
        n: Number of periods
        pmt: Periodic payment

    Returns:
        Present value

    Raises:
        DivisionSingularityError: If (1 + r)^n underflows to zero
    """
    fv = -fv
    growth = _growth(r, n)
    if growth == 0:
        raise DivisionSingularityError("Growth factor underflows to zero")
    return (fv - pmt * _annuity_factor(r, n)) / growth


def solve_future_value(pv: float, r: float, n: float, pmt: float) -> float:
    """Future value for a periodic rate. Matches Excel's FV() function."""
    return -(pv * _growth(r, n) + pmt * _annuity_factor(r, n))


def solve_payment(pv: float, fv: float, r: float, n: float) -> float:
    """
    Level end-of-period payment.

    Matches Excel's PMT() function.

    Raises:
        DivisionSingularityError: If n is zero
    """
    fv = -fv
    annuity = _annuity_factor(r, n)
    if annuity == 0:
        raise DivisionSingularityError("Payment is undefined over zero periods")
    return (fv - pv * _growth(r, n)) / annuity


def solve_number_of_periods(pv: float, fv: float, r: float, pmt: float) -> float:
    """
    Number of periods needed to move from pv to fv.

    Matches Excel's NPER() function.

    Raises:
        DivisionSingularityError: If r and pmt are both zero, or pv + pmt/r is zero
        InvalidInputsError: If no real number of periods satisfies the inputs
    """
    fv = -fv
    if 1 + r <= 0:
        raise InvalidInputsError("Periodic rate must be greater than -100%")

    if r == 0:
        # Linear limit: pv + pmt * n = fv
        if pmt == 0:
            raise DivisionSingularityError(
                "Number of periods is undefined with zero rate and zero payment"
            )
        return (fv - pv) / pmt

    # (1 + r)^n = (fv + pmt/r) / (pv + pmt/r), rewritten as 1 + x
    denominator = pv * r + pmt
    if denominator == 0:
        raise DivisionSingularityError("pv + pmt / r is zero")

    x = r * (fv - pv) / denominator
    if x <= -1:
        raise InvalidInputsError(
            "No number of periods reaches the future value; check the signs"
        )
    return math.log1p(x) / math.log1p(r)


def _rate_function(r: float, pv: float, fv: float, n: float, pmt: float):
    """Residual of the TVM identity and its derivative with respect to r."""
    log_growth = n * math.log1p(r)
    growth = math.exp(log_growth)
    growth_less_one = math.expm1(log_growth)
    growth_prev = growth / (1 + r)
    f = pv * growth + pmt * growth_less_one / r + fv
    df = n * pv * growth_prev + pmt * (n * growth_prev * r - growth_less_one) / r**2
    return f, df


def solve_periodic_rate(
    pv: float,
    fv: float,
    n: float,
    pmt: float,
    guess: float = DEFAULT_GUESS,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Periodic rate using the Newton-Raphson method.

    Args:
        pv: Present value
        fv: Future value
        n: Number of periods
        pmt: Periodic payment
        guess: Initial periodic rate (default 0.1 = 10%)
        tolerance: Stop when successive estimates differ by less than this
        max_iterations: Iteration budget

    Returns:
        Periodic rate as decimal

    Raises:
        DivisionSingularityError: If n is zero, the estimate hits zero, or the
            derivative vanishes
        NonConvergenceError: If the tolerance is not met within max_iterations
            or the estimate drops to -100% or below
    """
    if n == 0:
        raise DivisionSingularityError(
            "Interest rate is undefined over zero periods"
        )

    rate = guess

    for iteration in range(1, max_iterations + 1):
        if rate == 0:
            raise DivisionSingularityError(
                "Rate estimate reached zero; the annuity term divides by r"
            )
        if 1 + rate <= 0:
            logger.warning("Rate iteration left the domain at r=%s", rate)
            raise NonConvergenceError(
                "Interest rate calculation diverged below -100%"
            )

        try:
            f, df = _rate_function(rate, pv, fv, n, pmt)
        except ZeroDivisionError:
            raise DivisionSingularityError(
                "Rate estimate is indistinguishable from zero; the annuity term divides by r"
            ) from None
        except OverflowError:
            logger.warning("Rate iteration overflowed at r=%s", rate)
            raise NonConvergenceError(
                "Interest rate calculation diverged"
            ) from None

        if not math.isfinite(f) or not math.isfinite(df):
            raise NonConvergenceError("Interest rate calculation diverged")
        if df == 0 or abs(df) < DERIVATIVE_EPSILON * abs(f):
            raise DivisionSingularityError(
                "Interest rate calculation failed: derivative is zero"
            )

        new_rate = rate - f / df

        if abs(new_rate - rate) < tolerance:
            logger.debug("Rate converged to %s after %d iterations", new_rate, iteration)
            return new_rate

        rate = new_rate

    logger.warning("Rate did not converge after %d iterations", max_iterations)
    raise NonConvergenceError("Interest rate calculation did not converge")


def solve_interest_rate(
    pv: float,
    fv: float,
    n: float,
    pmt: float,
    frequency: Union[PaymentFrequency, str] = PaymentFrequency.monthly,
    *,
    guess: float = DEFAULT_GUESS,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Nominal annual interest rate in percent.

    Matches Excel's RATE() function, annualized by the payment frequency.
    """
    periodic = solve_periodic_rate(
        pv, fv, n, pmt,
        guess=guess, tolerance=tolerance, max_iterations=max_iterations,
    )
    return nominal_rate_percent(periodic, frequency)


def solve(
    inputs: TVMInputs,
    unknown: Optional[Union[TVMField, str]] = None,
    *,
    guess: float = DEFAULT_GUESS,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Solve for the unknown TVM quantity.

    Args:
        inputs: The five quantities and payment frequency
        unknown: Field to solve for. Defaults to the single field left as None;
            when given, that field's current value is ignored.
        guess, tolerance, max_iterations: Newton-Raphson settings for the
            interest rate branch

    Returns:
        Full-precision value of the unknown (interest rate as nominal annual %)

    Raises:
        InvalidFrequencyError: Unsupported payment frequency
        InvalidInputsError: Not exactly one unknown, or a non-finite known value
        DivisionSingularityError: The formula divides by zero for these inputs
        NonConvergenceError: The interest rate iteration failed
    """
    frequency = parse_frequency(inputs.payment_frequency)
    target = resolve_unknown(inputs, unknown)

    pv = inputs.present_value
    fv = inputs.future_value
    n = inputs.number_of_periods
    pmt = inputs.payment

    if target is TVMField.interest_rate:
        return solve_interest_rate(
            pv, fv, n, pmt, frequency,
            guess=guess, tolerance=tolerance, max_iterations=max_iterations,
        )

    r = effective_rate(inputs.interest_rate, frequency)

    if target is TVMField.present_value:
        result = solve_present_value(fv, r, n, pmt)
    elif target is TVMField.future_value:
        result = solve_future_value(pv, r, n, pmt)
    elif target is TVMField.number_of_periods:
        result = solve_number_of_periods(pv, fv, r, pmt)
    else:
        result = solve_payment(pv, fv, r, n)

    if not math.isfinite(result):
        raise DivisionSingularityError(f"{target.value} is not a finite number")
    return result
