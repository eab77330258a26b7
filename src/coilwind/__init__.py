"""
Coilwind - pipe and profile winding calculator for drums.

Computes either the maximum pipe length that fits a drum envelope, or the
envelope reached after winding a known pipe length.

Example:
    >>> from coilwind import WindingRequest, calculate, to_summary
    >>>
    >>> request = WindingRequest(
    ...     pipe_diameter_mm=20,
    ...     inner_diameter_mm=500,
    ...     bundle_width_mm=2000,
    ...     pipe_length_m=750,
    ...     mode="end_position",
    ... )
    >>> print(to_summary(calculate(request)))

Note: Imports are lazy-loaded so that ``import coilwind`` stays cheap; the
IO models (Pydantic) are only imported when first used.
"""

__version__ = "1.0.0"

# Define which names come from which submodule

_ENUMS = {"WindingMode", "WindingPattern"}

_CALCULATOR = {
    "calculate",
    "calculate_coil_length",
    "calculate_end_position",
    "coil_length_from_envelope",
    "end_position_from_length",
    "validate_request",
    "check_request",
    "check_result",
    "Severity",
    "ValidationMessage",
    "CoilCalculationError",
    "ParameterValidationError",
    "ComputationError",
    "NonConvergenceError",
    "NonFiniteValueError",
    "to_json",
    "to_markdown",
    "to_summary",
    "format_value",
}

_IO = {
    "WindingRequest",
    "CoilLengthResult",
    "EndPositionResult",
    "load_request_json",
    "save_request_json",
    "save_result_json",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    raise AttributeError(f"module 'coilwind' has no attribute {name!r}")


__all__ = [
    "__version__",
    *sorted(_ENUMS),
    *sorted(_CALCULATOR),
    *sorted(_IO),
]
