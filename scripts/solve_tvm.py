#!/usr/bin/env python3
"""
Solve a time-value-of-money problem from the command line.

Pass four of the five quantities; the one left out is solved for.

Usage:
    python scripts/solve_tvm.py --pv -1000 --rate 12 --nper 12 --pmt 0
    python scripts/solve_tvm.py --pv -1000 --fv 1126.83 --nper 12 --pmt 0 --frequency monthly

Output is rounded for display (3 decimals for the rate, 2 otherwise).
"""

import sys
import os

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse

from tvmcalc.calculations.errors import TVMError
from tvmcalc.calculations.formatting import format_display
from tvmcalc.calculations.rates import PaymentFrequency
from tvmcalc.calculations.tvm import TVMField, TVMInputs, resolve_unknown, solve


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Time value of money solver")
    parser.add_argument("--pv", type=float, help="Present value")
    parser.add_argument("--fv", type=float, help="Future value")
    parser.add_argument("--rate", type=float, help="Nominal annual rate in percent")
    parser.add_argument("--nper", type=float, help="Number of periods")
    parser.add_argument("--pmt", type=float, help="Periodic payment")
    parser.add_argument(
        "--frequency",
        default=PaymentFrequency.monthly.value,
        choices=[f.value for f in PaymentFrequency],
        help="Payment frequency (default: monthly)",
    )
    parser.add_argument(
        "--solve",
        choices=[f.value for f in TVMField],
        help="Field to solve for (default: the one left out)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    inputs = TVMInputs(
        present_value=args.pv,
        future_value=args.fv,
        interest_rate=args.rate,
        number_of_periods=args.nper,
        payment=args.pmt,
        payment_frequency=PaymentFrequency(args.frequency),
    )

    try:
        target = resolve_unknown(inputs, args.solve)
        value = solve(inputs, target)
    except TVMError as e:
        print(f"Error: {e}")
        return 1

    print(f"{target.value}: {format_display(target, value)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
