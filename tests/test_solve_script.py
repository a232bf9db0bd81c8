"""
Tests for the command-line solver script.
"""

import importlib.util
import os

import pytest


SCRIPT_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "scripts",
    "solve_tvm.py",
)


@pytest.fixture(scope="module")
def script():
    """Load scripts/solve_tvm.py as a module."""
    spec = importlib.util.spec_from_file_location("solve_tvm", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSolveScript:
    def test_solves_missing_field(self, script, capsys):
        code = script.main(["--pv", "-1000", "--rate", "12", "--nper", "12", "--pmt", "0"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "future_value: 1126.83"

    def test_solves_rate(self, script, capsys):
        code = script.main(
            ["--pv", "-1000", "--fv", "1126.83", "--nper", "12", "--pmt", "0"]
        )
        assert code == 0
        assert capsys.readouterr().out.strip() == "interest_rate: 12.000"

    def test_reports_errors(self, script, capsys):
        code = script.main(["--pv", "-1000", "--rate", "12"])
        assert code == 1
        assert capsys.readouterr().out.startswith("Error:")
