"""
JSON structure checks for winding request files.

This is a structural check only (keys present, numeric types, known enum
labels). Range checks such as "pipe diameter must be smaller than inner
diameter" belong to ``coilwind.calculator.validation``.

Note: the full JSON Schema is generated from the Pydantic models via
scripts/generate_schemas.py.
"""

from math import isfinite
from typing import Any, Dict, List

from ..enums import WindingMode, WindingPattern
from .loaders import SCHEMA_VERSION

_NUMERIC_FIELDS = (
    "pipe_diameter_mm",
    "inner_diameter_mm",
    "outer_diameter_mm",
    "bundle_width_mm",
    "pipe_length_m",
    "safety_factor",
)

_INTEGER_FIELDS = ("pipes_per_layer",)

_ALWAYS_REQUIRED = ("pipe_diameter_mm", "inner_diameter_mm", "bundle_width_mm")

_MODE_REQUIRED = {
    WindingMode.COIL_LENGTH: ("outer_diameter_mm",),
    WindingMode.END_POSITION: ("pipe_length_m",),
}


def validate_request_json(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate request JSON data against the expected structure.

    Args:
        data: Parsed JSON data

    Returns:
        {
            "valid": bool,
            "errors": List[str],
            "warnings": List[str],
            "schema_version": str
        }

    Example:
        >>> result = validate_request_json({"pipe_diameter_mm": 20})
        >>> result["valid"]
        False
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(data, dict):
        return {
            "valid": False,
            "errors": ["Root must be a JSON object/dict"],
            "warnings": [],
            "schema_version": "unknown",
        }

    if "request" in data and isinstance(data["request"], dict):
        schema_version = data.get("schema_version", "unknown")
        data = data["request"]
    else:
        schema_version = data.get("schema_version", "unknown")

    if schema_version == "unknown":
        warnings.append("Missing 'schema_version' field (assuming current format)")
    elif schema_version != SCHEMA_VERSION:
        warnings.append(f"Schema version {schema_version} != current {SCHEMA_VERSION}")

    mode = WindingMode.COIL_LENGTH
    if "mode" in data:
        try:
            mode = WindingMode.from_label(str(data["mode"]))
        except ValueError:
            valid_values = ", ".join(m.value for m in WindingMode)
            errors.append(f"Invalid mode '{data['mode']}'. Must be one of: {valid_values}")
            mode = None

    if "pattern" in data:
        try:
            WindingPattern.from_label(str(data["pattern"]))
        except ValueError:
            valid_values = ", ".join(
                [p.value for p in WindingPattern] + [p.label for p in WindingPattern]
            )
            errors.append(f"Invalid pattern '{data['pattern']}'. Must be one of: {valid_values}")

    required = list(_ALWAYS_REQUIRED)
    if mode is not None:
        required.extend(_MODE_REQUIRED[mode])
    for name in required:
        if data.get(name) is None:
            errors.append(f"Missing required field: '{name}'")

    for name in _NUMERIC_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        # bool is an int subclass but never a valid dimension
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append(f"Field '{name}' must be a number, got {type(value).__name__}")
        elif not isfinite(value):
            errors.append(f"Field '{name}' must be finite")

    for name in _INTEGER_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not float(value).is_integer():
            errors.append(f"Field '{name}' must be an integer, got {value!r}")

    if mode is WindingMode.COIL_LENGTH and data.get("pipe_length_m") is not None:
        warnings.append("'pipe_length_m' is ignored in coil_length mode")
    if mode is WindingMode.COIL_LENGTH and data.get("pipes_per_layer") is not None:
        warnings.append("'pipes_per_layer' is ignored in coil_length mode")
    if mode is WindingMode.END_POSITION and data.get("outer_diameter_mm") is not None:
        warnings.append("'outer_diameter_mm' is ignored in end_position mode")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "schema_version": schema_version,
    }
