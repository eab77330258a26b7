"""
Coil Winding Calculator - Core Calculations

Pure functions for pipe/profile winding on a drum. Two modes:

- Coil length: wind outward from the drum core and count how much pipe fits
  before the next layer would exceed the outer-diameter envelope.
- End position: wind a known pipe length and report where the winding ends
  (layers, last-layer occupancy, rotations, bundle envelope).

All internal computation is in millimetres. Requests carry pipe length in
metres and results report coil length in metres; diameters, widths and heights
are rounded half-up to the nearest millimetre.
"""

import logging
from math import ceil
from typing import Optional, Union

from ..enums import WindingMode, WindingPattern
from ..io import CoilLengthResult, EndPositionResult, WindingRequest, WindingResult
from ..constants import DEFAULT_SAFETY_FACTOR, MAX_LAYERS, MM_PER_M, PIPE_STEP_FRACTION
from .errors import NonConvergenceError
from .geometry import (
    bundle_height,
    layer_centerline_diameter,
    layer_geometry,
    realized_bundle_width,
    require_finite,
    round_half_up,
)
from .validation import check_request

logger = logging.getLogger(__name__)


def _for_mode(request: WindingRequest, mode: WindingMode) -> WindingRequest:
    if request.mode is mode:
        return request
    return request.model_copy(update={"mode": mode})


def calculate_coil_length(
    request: WindingRequest,
    max_layers: int = MAX_LAYERS
) -> CoilLengthResult:
    """
    Maximum pipe length that fits inside the outer-diameter envelope.

    Layers are added while the layer after the current one would still fit
    (its centerline diameter + ND <= OD). The first layer is always counted,
    even if it alone overflows OD.

    Args:
        request: Winding request (mode is forced to COIL_LENGTH)
        max_layers: Iteration guard

    Returns:
        CoilLengthResult with coil length in metres and the realized envelope

    Raises:
        ParameterValidationError: If the request fails validation
        NonConvergenceError: If more than max_layers layers would be wound
        NonFiniteValueError: If an input or result is NaN or infinite
    """
    request = check_request(_for_mode(request, WindingMode.COIL_LENGTH))

    nd = require_finite("pipe diameter", request.pipe_diameter_mm)
    inner = require_finite("inner diameter", request.inner_diameter_mm)
    outer = require_finite("outer diameter", request.outer_diameter_mm)
    width = require_finite("bundle width", request.bundle_width_mm)
    pattern = request.pattern

    total_mm = 0.0
    index = 1
    while True:
        if index > max_layers:
            logger.warning(f"Coil length solve stopped after {max_layers} layers (OD={outer:g} mm)")
            raise NonConvergenceError(max_layers, f"outer diameter {outer:g} mm not reached")

        layer = layer_geometry(index, inner, nd, width, pattern)
        total_mm += layer.length_mm
        logger.debug(
            f"Layer {index}: diameter={layer.centerline_diameter_mm:.3f} mm, "
            f"pipes={layer.pipe_count}, length={layer.length_mm:.1f} mm"
        )

        next_diameter = layer_centerline_diameter(inner, nd, index + 1)
        if next_diameter + nd > outer:
            break
        index += 1

    require_finite("coil length", total_mm)
    coil_length_m = round_half_up(total_mm) / MM_PER_M

    result = CoilLengthResult(
        pattern=pattern,
        coil_length_m=coil_length_m,
        realized_outer_diameter_mm=round_half_up(layer.centerline_diameter_mm + nd),
        realized_bundle_width_mm=round_half_up(realized_bundle_width(width, nd, pattern)),
        number_of_layers=index,
    )
    logger.info(
        f"Coil length ({pattern.label}): {result.coil_length_m:.3f} m in {index} layers, "
        f"OD {result.realized_outer_diameter_mm} mm"
    )
    return result


def calculate_end_position(
    request: WindingRequest,
    max_layers: int = MAX_LAYERS
) -> EndPositionResult:
    """
    Envelope reached after winding a known pipe length.

    Each layer is filled in quarter-pipe steps until either the layer is full
    or the wound length reaches L x G. The quarter steps needed on the last
    layer are computed directly rather than by repeated addition.

    If the request gives ``pipes_per_layer`` it replaces the full-layer
    capacity derived from the bundle width; the pattern rules still apply
    (one pipe fewer on even layers for UNEVEN_LAYERS).

    Args:
        request: Winding request (mode is forced to END_POSITION)
        max_layers: Iteration guard

    Returns:
        EndPositionResult describing the final layer and bundle envelope

    Raises:
        ParameterValidationError: If the request fails validation
        NonConvergenceError: If the target length needs more than max_layers layers
        NonFiniteValueError: If an input or intermediate value is NaN or infinite
    """
    request = check_request(_for_mode(request, WindingMode.END_POSITION))

    nd = require_finite("pipe diameter", request.pipe_diameter_mm)
    inner = require_finite("inner diameter", request.inner_diameter_mm)
    width = require_finite("bundle width", request.bundle_width_mm)
    target_mm = require_finite(
        "target length",
        request.pipe_length_m * MM_PER_M * request.safety_factor
    )
    pattern = request.pattern
    pipes_per_layer = request.pipes_per_layer

    wound_mm = 0.0
    rotations = 0.0
    index = 0
    while True:
        index += 1
        if index > max_layers:
            logger.warning(f"End position solve stopped after {max_layers} layers ({target_mm:.0f} mm target)")
            raise NonConvergenceError(max_layers, f"{target_mm / MM_PER_M:g} m not wound")

        layer = layer_geometry(index, inner, nd, width, pattern, pipes_per_layer)
        remaining_mm = target_mm - wound_mm

        if layer.length_mm < remaining_mm:
            # Layer fills up without reaching the target
            wound_mm += layer.length_mm
            rotations += layer.pipe_count
            logger.debug(
                f"Layer {index}: full with {layer.pipe_count} pipes, wound={wound_mm:.1f} mm"
            )
            continue

        step_mm = PIPE_STEP_FRACTION * layer.length_per_pipe_mm
        max_steps = round(layer.pipe_count / PIPE_STEP_FRACTION)
        steps = min(ceil(remaining_mm / step_mm), max_steps)
        pipes_on_layer = steps * PIPE_STEP_FRACTION
        wound_mm += pipes_on_layer * layer.length_per_pipe_mm
        rotations += pipes_on_layer
        logger.debug(
            f"Layer {index}: {pipes_on_layer:.2f} of {layer.pipe_count} pipes, wound={wound_mm:.1f} mm"
        )
        break

    require_finite("wound length", wound_mm)
    height_mm = round_half_up(bundle_height(nd, index))

    result = EndPositionResult(
        pattern=pattern,
        outer_diameter_mm=round_half_up(inner + 2 * height_mm),
        bundle_width_mm=round_half_up(realized_bundle_width(width, nd, pattern, pipes_per_layer)),
        bundle_height_mm=height_mm,
        number_of_layers=index,
        pipes_on_last_layer=pipes_on_layer,
        last_layer_capacity=layer.pipe_count,
        number_of_rotations=rotations,
    )
    logger.info(
        f"End position ({pattern.label}): {index} layers, "
        f"{pipes_on_layer:.2f}/{layer.pipe_count} on last layer, OD {result.outer_diameter_mm} mm"
    )
    return result


def calculate(request: WindingRequest, max_layers: int = MAX_LAYERS) -> WindingResult:
    """
    Validate a request and run the solver selected by its mode.

    Raises:
        ParameterValidationError: If the request fails validation
        ComputationError: If the solve does not converge or yields non-finite values
    """
    if request.mode is WindingMode.COIL_LENGTH:
        return calculate_coil_length(request, max_layers=max_layers)
    return calculate_end_position(request, max_layers=max_layers)


def coil_length_from_envelope(
    pipe_diameter: float,
    inner_diameter: float,
    outer_diameter: float,
    bundle_width: float,
    pattern: Union[WindingPattern, str] = WindingPattern.UNEVEN_LAYERS
) -> CoilLengthResult:
    """
    Maximum coil length for a drum envelope.

    Args:
        pipe_diameter: Pipe/profile outer diameter ND (mm)
        inner_diameter: Drum inner diameter ID (mm)
        outer_diameter: Envelope outer diameter OD (mm)
        bundle_width: Axial bundle width W (mm)
        pattern: Winding pattern (enum, value or "BB1"/"BB0.5")

    Returns:
        CoilLengthResult
    """
    request = WindingRequest(
        pipe_diameter_mm=pipe_diameter,
        inner_diameter_mm=inner_diameter,
        outer_diameter_mm=outer_diameter,
        bundle_width_mm=bundle_width,
        pattern=pattern,
        mode=WindingMode.COIL_LENGTH,
    )
    return calculate_coil_length(request)


def end_position_from_length(
    pipe_diameter: float,
    inner_diameter: float,
    bundle_width: float,
    pipe_length: float,
    pattern: Union[WindingPattern, str] = WindingPattern.UNEVEN_LAYERS,
    safety_factor: float = DEFAULT_SAFETY_FACTOR,
    pipes_per_layer: Optional[int] = None
) -> EndPositionResult:
    """
    Winding end position for a known pipe length.

    Args:
        pipe_diameter: Pipe/profile outer diameter ND (mm)
        inner_diameter: Drum inner diameter ID (mm)
        bundle_width: Axial bundle width W (mm)
        pipe_length: Pipe length L (m)
        pattern: Winding pattern (enum, value or "BB1"/"BB0.5")
        safety_factor: Multiplier G applied to the pipe length
        pipes_per_layer: Explicit full-layer pipe count (default: from bundle width)

    Returns:
        EndPositionResult
    """
    request = WindingRequest(
        pipe_diameter_mm=pipe_diameter,
        inner_diameter_mm=inner_diameter,
        bundle_width_mm=bundle_width,
        pipe_length_m=pipe_length,
        pattern=pattern,
        mode=WindingMode.END_POSITION,
        safety_factor=safety_factor,
        pipes_per_layer=pipes_per_layer,
    )
    return calculate_end_position(request)
