"""Type-safe enums for the coil winding calculator.

The short labels used on winding data sheets ("BB1", "BB0.5") are accepted
as aliases when parsing user input, see ``WindingPattern.from_label``.
"""

from enum import Enum


class WindingMode(Enum):
    """What the calculation solves for"""
    COIL_LENGTH = "coil_length"  # Max pipe length inside an OD/width envelope
    END_POSITION = "end_position"  # Envelope reached after winding a known length

    @classmethod
    def from_label(cls, value: str) -> "WindingMode":
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        return cls(normalized)


class WindingPattern(Enum):
    """Layer nesting pattern"""
    UNEVEN_LAYERS = "uneven_layers"  # BB1: N pipes on odd layers, N-1 on even layers
    EVEN_LAYERS_OFFSET = "even_layers_offset"  # BB0.5: constant half-pipe offset on every layer

    @classmethod
    def from_label(cls, value: str) -> "WindingPattern":
        """Parse a pattern from its value, name or data-sheet label."""
        normalized = value.strip()
        if normalized.upper() in _PATTERN_LABELS:
            return _PATTERN_LABELS[normalized.upper()]
        return cls(normalized.lower().replace("-", "_").replace(" ", "_"))

    @property
    def label(self) -> str:
        """Data-sheet label for this pattern."""
        return "BB1" if self is WindingPattern.UNEVEN_LAYERS else "BB0.5"


_PATTERN_LABELS = {
    "BB1": WindingPattern.UNEVEN_LAYERS,
    "BB0.5": WindingPattern.EVEN_LAYERS_OFFSET,
    "UNEVEN_LAYERS": WindingPattern.UNEVEN_LAYERS,
    "EVEN_LAYERS_OFFSET": WindingPattern.EVEN_LAYERS_OFFSET,
}
