"""
Coil Winding Calculator - pipe and profile winding on drums.

This module provides the winding solvers, the request validator and output
formatters. Solvers return typed result models.

Example:
    >>> from coilwind.calculator import coil_length_from_envelope, to_summary
    >>>
    >>> result = coil_length_from_envelope(
    ...     pipe_diameter=20, inner_diameter=500, outer_diameter=800, bundle_width=2000
    ... )
    >>> round(result.coil_length_m)
    1603
    >>> print(to_summary(result))
"""

from ..constants import (
    HEX_PITCH_FACTOR,
    MAX_LAYERS,
    PIPE_STEP_FRACTION,
)

from .core import (
    # Solvers
    calculate,
    calculate_coil_length,
    calculate_end_position,

    # Keyword-argument convenience functions
    coil_length_from_envelope,
    end_position_from_length,
)

from .geometry import (
    LayerGeometry,
    layer_geometry,
    layer_centerline_diameter,
    helix_length_per_pipe,
    full_layer_capacity,
    realized_bundle_width,
    bundle_height,
)

from .validation import (
    validate_request,
    check_request,
    check_result,
    Severity,
    ValidationMessage,
)

from .errors import (
    CoilCalculationError,
    ParameterValidationError,
    ComputationError,
    NonConvergenceError,
    NonFiniteValueError,
)

from ..enums import WindingMode, WindingPattern

from .output import (
    to_json,
    to_markdown,
    to_summary,
    format_value,
)

from ..io import WindingRequest, CoilLengthResult, EndPositionResult, WindingResult


__all__ = [
    # Constants
    "HEX_PITCH_FACTOR",
    "MAX_LAYERS",
    "PIPE_STEP_FRACTION",

    # Enums
    "WindingMode",
    "WindingPattern",

    # Models
    "WindingRequest",
    "CoilLengthResult",
    "EndPositionResult",
    "WindingResult",

    # Solvers
    "calculate",
    "calculate_coil_length",
    "calculate_end_position",
    "coil_length_from_envelope",
    "end_position_from_length",

    # Geometry helpers
    "LayerGeometry",
    "layer_geometry",
    "layer_centerline_diameter",
    "helix_length_per_pipe",
    "full_layer_capacity",
    "realized_bundle_width",
    "bundle_height",

    # Validation
    "validate_request",
    "check_request",
    "check_result",
    "Severity",
    "ValidationMessage",

    # Errors
    "CoilCalculationError",
    "ParameterValidationError",
    "ComputationError",
    "NonConvergenceError",
    "NonFiniteValueError",

    # Output formatters
    "to_json",
    "to_markdown",
    "to_summary",
    "format_value",
]
