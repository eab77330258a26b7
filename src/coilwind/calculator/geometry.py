"""
Coil Winding Calculator - Layer Geometry

Per-layer formulas shared by both solvers. All lengths in millimetres.

Layer model:
- Layer 1 sits directly on the drum, its centerline diameter is ID + ND.
- Each further layer nests in the grooves of the one beneath it, so the
  centerline radius grows by the hexagonal packing pitch ND * sqrt(3) / 2.
- One pipe on a layer is one helix turn of circumference pi * ODi and axial
  pitch ND.
"""

from dataclasses import dataclass
from math import floor, isfinite, pi, sqrt
from typing import Optional

from ..enums import WindingPattern
from ..constants import (
    HEX_PITCH_FACTOR,
    OFFSET_LAYER_WIDTH_FRACTION,
    UNEVEN_LAYER_PIPE_REDUCTION,
)
from .errors import NonFiniteValueError


@dataclass(frozen=True)
class LayerGeometry:
    """One wound layer (index counts from 1)."""
    index: int
    centerline_diameter_mm: float
    pipe_count: int
    length_per_pipe_mm: float

    @property
    def length_mm(self) -> float:
        return self.pipe_count * self.length_per_pipe_mm


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (782.5 -> 783)."""
    return int(floor(value + 0.5))


def require_finite(quantity: str, value: float) -> float:
    """Return value unchanged, or raise NonFiniteValueError for NaN/inf."""
    if not isfinite(value):
        raise NonFiniteValueError(quantity, value)
    return value


def hex_pitch(pipe_diameter_mm: float) -> float:
    """Radial distance between successive layer centerlines."""
    return pipe_diameter_mm * HEX_PITCH_FACTOR


def layer_centerline_diameter(
    inner_diameter_mm: float,
    pipe_diameter_mm: float,
    index: int
) -> float:
    """
    Centerline diameter of layer ``index``.

    Formula: ODi = ID + ND + 2 * (i - 1) * ND * sqrt(3) / 2
    """
    return inner_diameter_mm + pipe_diameter_mm + 2 * (index - 1) * hex_pitch(pipe_diameter_mm)


def helix_length_per_pipe(centerline_diameter_mm: float, pipe_diameter_mm: float) -> float:
    """
    Length of one helix turn.

    Formula: sqrt((pi * ODi)^2 + ND^2)
    """
    circumference = pi * centerline_diameter_mm
    return sqrt(circumference ** 2 + pipe_diameter_mm ** 2)


def full_layer_capacity(
    bundle_width_mm: float,
    pipe_diameter_mm: float,
    pattern: WindingPattern
) -> int:
    """
    Pipes on a full layer.

    - UNEVEN_LAYERS: N = floor(W / ND)
    - EVEN_LAYERS_OFFSET: Ni = floor(W / ND - 0.5)
    """
    pipes_across = require_finite("bundle width / pipe diameter", bundle_width_mm / pipe_diameter_mm)
    if pattern is WindingPattern.EVEN_LAYERS_OFFSET:
        return floor(pipes_across - OFFSET_LAYER_WIDTH_FRACTION)
    return floor(pipes_across)


def layer_capacity(
    bundle_width_mm: float,
    pipe_diameter_mm: float,
    pattern: WindingPattern,
    pipes_per_layer: Optional[int] = None
) -> int:
    """Full-layer capacity, or the explicit pipe count when one is given."""
    if pipes_per_layer is not None:
        return pipes_per_layer
    return full_layer_capacity(bundle_width_mm, pipe_diameter_mm, pattern)


def layer_pipe_count(
    index: int,
    bundle_width_mm: float,
    pipe_diameter_mm: float,
    pattern: WindingPattern,
    pipes_per_layer: Optional[int] = None
) -> int:
    """
    Pipes on layer ``index``.

    UNEVEN_LAYERS alternates N (odd layers) and N - 1 (even layers);
    EVEN_LAYERS_OFFSET uses Ni on every layer. An explicit
    ``pipes_per_layer`` takes the place of N / Ni.
    """
    capacity = layer_capacity(bundle_width_mm, pipe_diameter_mm, pattern, pipes_per_layer)
    if pattern is WindingPattern.UNEVEN_LAYERS and index % 2 == 0:
        return max(capacity - UNEVEN_LAYER_PIPE_REDUCTION, 0)
    return capacity


def realized_bundle_width(
    bundle_width_mm: float,
    pipe_diameter_mm: float,
    pattern: WindingPattern,
    pipes_per_layer: Optional[int] = None
) -> float:
    """
    Axial width actually occupied by the winding.

    - UNEVEN_LAYERS: N * ND
    - EVEN_LAYERS_OFFSET: Ni * ND + ND / 2
    """
    capacity = layer_capacity(bundle_width_mm, pipe_diameter_mm, pattern, pipes_per_layer)
    width = capacity * pipe_diameter_mm
    if pattern is WindingPattern.EVEN_LAYERS_OFFSET:
        width += pipe_diameter_mm * OFFSET_LAYER_WIDTH_FRACTION
    return width


def bundle_height(pipe_diameter_mm: float, number_of_layers: int) -> float:
    """
    Radial height of a bundle with the given number of layers.

    Formula: ND + (layers - 1) * ND * sqrt(3) / 2
    """
    return pipe_diameter_mm + (number_of_layers - 1) * hex_pitch(pipe_diameter_mm)


def layer_geometry(
    index: int,
    inner_diameter_mm: float,
    pipe_diameter_mm: float,
    bundle_width_mm: float,
    pattern: WindingPattern,
    pipes_per_layer: Optional[int] = None
) -> LayerGeometry:
    """Diameter, pipe count and per-pipe length of layer ``index``."""
    diameter = layer_centerline_diameter(inner_diameter_mm, pipe_diameter_mm, index)
    return LayerGeometry(
        index=index,
        centerline_diameter_mm=diameter,
        pipe_count=layer_pipe_count(index, bundle_width_mm, pipe_diameter_mm, pattern, pipes_per_layer),
        length_per_pipe_mm=helix_length_per_pipe(diameter, pipe_diameter_mm),
    )
