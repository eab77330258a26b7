"""
Exception hierarchy for coil winding calculations.

Two disjoint kinds of failure:

- ``ParameterValidationError``: the request violates a precondition. The
  caller can fix the input and retry.
- ``ComputationError``: the solver produced a non-finite value or hit its
  iteration guard. This points at a pathological input combination or a
  defect, and is reported differently from a validation error.
"""

from typing import Optional


class CoilCalculationError(Exception):
    """Base class for all calculator errors."""


class ParameterValidationError(CoilCalculationError, ValueError):
    """Raised when a request fails validation.

    Carries the first violated constraint only.
    """

    def __init__(self, code: str, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


class ComputationError(CoilCalculationError, ArithmeticError):
    """Raised when a solve fails for a request that passed validation."""


class NonConvergenceError(ComputationError):
    """Raised when a solver exceeds its layer limit."""

    def __init__(self, limit: int, detail: str = ""):
        message = f"calculation did not converge within {limit} layers"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.limit = limit


class NonFiniteValueError(ComputationError):
    """Raised when an input or intermediate value is NaN or infinite."""

    def __init__(self, quantity: str, value: float):
        super().__init__(f"{quantity} is not finite ({value!r})")
        self.quantity = quantity
        self.value = value
