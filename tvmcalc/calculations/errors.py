"""
Solver error taxonomy.

Every failure raised by the calculation engine derives from TVMError, which is
itself a ValueError so API handlers that catch ValueError keep working.
"""


class TVMError(ValueError):
    """Base class for time-value-of-money solver failures."""

    code = "tvm_error"


class InvalidFrequencyError(TVMError):
    """Payment frequency token is not one of the supported values."""

    code = "invalid_frequency"


class InvalidInputsError(TVMError):
    """Wrong number of unknowns, or a known value that is not a finite number."""

    code = "invalid_inputs"


class DivisionSingularityError(TVMError):
    """A formula would divide by zero for the given inputs."""

    code = "division_singularity"


class NonConvergenceError(TVMError):
    """Newton-Raphson iteration did not reach the tolerance."""

    code = "non_convergence"
