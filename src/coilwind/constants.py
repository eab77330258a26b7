"""
Engineering constants for coil winding calculations.

This module centralizes all numerical constants used by the calculator and
the request model defaults in coilwind.io.

MODIFICATION GUIDELINES:
- Add new constants here rather than hardcoding in functions
- Always include units in constant names (_MM, _M) where a unit applies

Constants are grouped by category:
- Packing geometry: hexagonal nesting of round pipes
- Winding patterns: per-layer capacity rules
- Units and rounding
- Solver limits
"""

from math import sqrt

# =============================================================================
# Packing Geometry
# =============================================================================

# Radial distance between successive layer centerlines is ND * sqrt(3) / 2.
# Each pipe sits in the groove between two pipes of the layer beneath it, so
# the centres form equilateral triangles of side ND.
HEX_PITCH_FACTOR: float = sqrt(3.0) / 2.0

# =============================================================================
# Winding Patterns
# =============================================================================

# BB1: even-indexed layers hold one pipe fewer than the full layer capacity
UNEVEN_LAYER_PIPE_REDUCTION: int = 1

# BB0.5: every layer is shifted by half a pipe width
OFFSET_LAYER_WIDTH_FRACTION: float = 0.5

# =============================================================================
# End-Position Stepping
# =============================================================================

# Pipe count on a layer advances in quarter-pipe increments
PIPE_STEP_FRACTION: float = 0.25

# Multiplier applied to the target pipe length (G)
DEFAULT_SAFETY_FACTOR: float = 1.0

# Smallest accepted explicit pipe count per layer (end position mode)
MIN_PIPES_PER_LAYER: int = 1

# =============================================================================
# Units and Rounding
# =============================================================================

MM_PER_M: float = 1000.0

# =============================================================================
# Solver Limits
# =============================================================================

# Upper bound on the number of layers either solver will wind before giving
# up. A 1 mm pipe reaches roughly 17 m diameter by then.
MAX_LAYERS: int = 10000
