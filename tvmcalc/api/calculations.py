"""
Financial calculation API endpoints.

These endpoints accept the calculator form's inputs and return solved values.
The solver returns full precision; responses add a display-rounded string.
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from tvmcalc.calculations import rates, tvm
from tvmcalc.calculations.errors import TVMError
from tvmcalc.calculations.formatting import format_display
from tvmcalc.calculations.rates import PaymentFrequency
from tvmcalc.calculations.tvm import TVMField, TVMInputs
from tvmcalc.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class TVMInput(BaseModel):
    """Input for a TVM solve. Leave the quantity to solve for as null."""

    present_value: Optional[float] = None
    future_value: Optional[float] = None
    interest_rate: Optional[float] = None  # nominal annual, percent
    number_of_periods: Optional[float] = None
    payment: Optional[float] = None
    payment_frequency: PaymentFrequency = PaymentFrequency.monthly

    # Solve for a filled-in field (its value is ignored)
    solve_for: Optional[TVMField] = None


class TVMResponse(BaseModel):
    """Solved value plus the completed set of inputs."""

    solved_for: TVMField
    value: float
    display: str
    periodic_rate: float

    present_value: float
    future_value: float
    interest_rate: float
    number_of_periods: float
    payment: float
    payment_frequency: PaymentFrequency


@router.post("/tvm", response_model=TVMResponse)
async def calculate_tvm(inputs: TVMInput):
    """Solve for the unknown TVM quantity."""
    settings = get_settings()

    tvm_inputs = TVMInputs(
        present_value=inputs.present_value,
        future_value=inputs.future_value,
        interest_rate=inputs.interest_rate,
        number_of_periods=inputs.number_of_periods,
        payment=inputs.payment,
        payment_frequency=inputs.payment_frequency,
    )

    try:
        target = tvm.resolve_unknown(tvm_inputs, inputs.solve_for)
        value = tvm.solve(
            tvm_inputs,
            target,
            guess=settings.solver_initial_guess,
            tolerance=settings.solver_tolerance,
            max_iterations=settings.solver_max_iterations,
        )
    except TVMError as e:
        logger.info("Rejected TVM solve: %s", e)
        raise HTTPException(
            status_code=400, detail={"error": e.code, "message": str(e)}
        )

    solved = tvm_inputs.with_value(target, value)

    return TVMResponse(
        solved_for=target,
        value=value,
        display=format_display(target, value),
        periodic_rate=rates.effective_rate(
            solved.interest_rate, solved.payment_frequency
        ),
        present_value=solved.present_value,
        future_value=solved.future_value,
        interest_rate=solved.interest_rate,
        number_of_periods=solved.number_of_periods,
        payment=solved.payment,
        payment_frequency=solved.payment_frequency,
    )


class EffectiveRateInput(BaseModel):
    """Input for periodic rate conversion."""

    interest_rate: float  # nominal annual, percent
    payment_frequency: PaymentFrequency = PaymentFrequency.monthly


class EffectiveRateResponse(BaseModel):
    """Periodic rate for a nominal annual rate."""

    periodic_rate: float
    periods_per_year: int


@router.post("/effective-rate", response_model=EffectiveRateResponse)
async def calculate_effective_rate(inputs: EffectiveRateInput):
    """Convert a nominal annual rate to the periodic rate."""
    return EffectiveRateResponse(
        periodic_rate=rates.effective_rate(
            inputs.interest_rate, inputs.payment_frequency
        ),
        periods_per_year=rates.periods_per_year(inputs.payment_frequency),
    )


@router.get("/frequencies")
async def list_frequencies() -> List[Dict]:
    """List supported payment frequencies and their periods per year."""
    return [
        {"frequency": frequency.value, "periods_per_year": periods}
        for frequency, periods in rates.PERIODS_PER_YEAR.items()
    ]
