"""
Coil Winding Calculator - Validation Rules

Preconditions are checked in a fixed order and only the first violation is
reported, so the same bad request always produces the same message:

1. pipe diameter > 0
2. inner diameter > 0
3. pipe diameter < inner diameter
4. mode-specific: outer diameter > inner diameter (coil length) or
   pipe length > 0 (end position)
5. bundle width > 0
6. safety factor > 0 (end position)
7. at least one pipe fits across the bundle width
8. explicit pipes per layer >= 1 (end position)

Comparisons are written as ``not (x > 0)`` so NaN inputs fail the check
instead of slipping through.

After a solve, ``check_result`` reports non-blocking findings about the
realized winding (warnings and infos), using the same message type.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..constants import MIN_PIPES_PER_LAYER
from ..enums import WindingMode, WindingPattern
from ..io.loaders import CoilLengthResult, EndPositionResult, WindingRequest, WindingResult
from .errors import ParameterValidationError
from .geometry import full_layer_capacity, layer_capacity

logger = logging.getLogger(__name__)


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


def _error(code: str, message: str, suggestion: Optional[str] = None) -> ValidationMessage:
    return ValidationMessage(
        severity=Severity.ERROR,
        code=code,
        message=message,
        suggestion=suggestion
    )


def validate_request(request: WindingRequest) -> Optional[ValidationMessage]:
    """
    Check a request against the winding preconditions.

    Args:
        request: Request to check

    Returns:
        None if the request is acceptable, otherwise the first violated
        constraint as an ERROR message

    Raises:
        NonFiniteValueError: If bundle width / pipe diameter is infinite
    """
    message = _first_violation(request)
    if message is not None:
        logger.debug(f"Request rejected: {message.code} ({message.message})")
    return message


def check_request(request: WindingRequest) -> WindingRequest:
    """
    Validate a request, raising on the first violated constraint.

    Raises:
        ParameterValidationError: If any precondition fails
    """
    message = validate_request(request)
    if message is not None:
        raise ParameterValidationError(message.code, message.message, message.suggestion)
    return request


def _first_violation(request: WindingRequest) -> Optional[ValidationMessage]:
    nd = request.pipe_diameter_mm
    inner = request.inner_diameter_mm

    if not nd > 0:
        return _error(
            "PIPE_DIAMETER_NOT_POSITIVE",
            "pipe diameter must be greater than 0",
            "Enter the outer diameter of the pipe or profile in mm"
        )

    if not inner > 0:
        return _error(
            "INNER_DIAMETER_NOT_POSITIVE",
            "inner diameter must be greater than 0",
            "Enter the drum core diameter in mm"
        )

    if not nd < inner:
        return _error(
            "PIPE_DIAMETER_TOO_LARGE",
            "pipe diameter must be smaller than inner diameter",
            f"Use a drum larger than {nd:g} mm or a smaller pipe"
        )

    if request.mode is WindingMode.COIL_LENGTH:
        outer = request.outer_diameter_mm
        if outer is None:
            return _error(
                "OUTER_DIAMETER_MISSING",
                "outer diameter is required for coil length mode"
            )
        if not outer > inner:
            return _error(
                "OUTER_DIAMETER_TOO_SMALL",
                "outer diameter must be greater than inner diameter",
                f"Increase outer diameter above {inner:g} mm"
            )
    else:
        length = request.pipe_length_m
        if length is None:
            return _error(
                "PIPE_LENGTH_MISSING",
                "pipe length is required for end position mode"
            )
        if not length > 0:
            return _error(
                "PIPE_LENGTH_NOT_POSITIVE",
                "pipe length must be greater than 0"
            )

    if not request.bundle_width_mm > 0:
        return _error(
            "BUNDLE_WIDTH_NOT_POSITIVE",
            "bundle width must be greater than 0",
            "Enter the axial width available between the drum flanges in mm"
        )

    if request.mode is WindingMode.END_POSITION and not request.safety_factor > 0:
        return _error(
            "SAFETY_FACTOR_NOT_POSITIVE",
            "safety factor must be greater than 0",
            "Use 1.0 to wind exactly the requested length"
        )

    capacity = full_layer_capacity(request.bundle_width_mm, nd, request.pattern)
    if capacity < 1:
        minimum = nd if request.pattern is WindingPattern.UNEVEN_LAYERS else 1.5 * nd
        return _error(
            "BUNDLE_WIDTH_TOO_SMALL",
            "bundle width must hold at least one pipe",
            f"Increase bundle width to at least {minimum:g} mm for this pattern"
        )

    pipes = request.pipes_per_layer
    if request.mode is WindingMode.END_POSITION and pipes is not None and pipes < MIN_PIPES_PER_LAYER:
        return _error(
            "PIPES_PER_LAYER_NOT_POSITIVE",
            "pipes per layer must be at least 1",
            "Leave pipes per layer empty to derive it from the bundle width"
        )

    return None


def _effective_capacity(request: WindingRequest) -> int:
    pipes = request.pipes_per_layer if request.mode is WindingMode.END_POSITION else None
    return layer_capacity(request.bundle_width_mm, request.pipe_diameter_mm, request.pattern, pipes)


def check_result(request: WindingRequest, result: WindingResult) -> List[ValidationMessage]:
    """
    Non-blocking findings about a computed winding.

    Args:
        request: The request that was solved
        result: Result returned by the solver

    Returns:
        WARNING and INFO messages (never ERROR)
    """
    messages: List[ValidationMessage] = []

    if isinstance(result, CoilLengthResult) and request.outer_diameter_mm is not None:
        if result.realized_outer_diameter_mm > request.outer_diameter_mm:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="OUTER_DIAMETER_EXCEEDED",
                message=(
                    f"Realized outer diameter {result.realized_outer_diameter_mm} mm exceeds "
                    f"the requested {request.outer_diameter_mm:g} mm"
                ),
                suggestion="Increase outer diameter or use a smaller pipe"
            ))

    if isinstance(result, EndPositionResult):
        if request.pipes_per_layer is not None and result.bundle_width_mm > request.bundle_width_mm:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="PIPES_PER_LAYER_EXCEEDS_WIDTH",
                message=(
                    f"{request.pipes_per_layer} pipes per layer need {result.bundle_width_mm} mm, "
                    f"wider than the {request.bundle_width_mm:g} mm bundle width"
                ),
                suggestion="Reduce pipes per layer or increase bundle width"
            ))
        if result.bundle_height_mm == 0:
            messages.append(ValidationMessage(
                severity=Severity.INFO,
                code="BUNDLE_HEIGHT_ROUNDED_TO_ZERO",
                message=(
                    f"Bundle height of a {request.pipe_diameter_mm:g} mm pipe rounds to 0 mm, "
                    f"so the outer diameter equals the inner diameter"
                ),
                suggestion="Heights and diameters are reported to the nearest millimetre"
            ))

    if request.pattern is WindingPattern.UNEVEN_LAYERS:
        if _effective_capacity(request) == 1:
            messages.append(ValidationMessage(
                severity=Severity.INFO,
                code="EMPTY_EVEN_LAYERS",
                message="Only one pipe per layer, so even layers stay empty",
                suggestion="Consider a wider bundle or the offset pattern"
            ))

    return messages
