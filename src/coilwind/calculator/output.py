"""Output formatters for coil winding results.

Converts typed result models to JSON, Markdown and plain-text summaries.

Uses Pydantic's model_dump(mode='json') for serialization, which converts
enums to their string values.
"""

import json
from math import isfinite
from typing import List, Optional, TYPE_CHECKING

from ..constants import DEFAULT_SAFETY_FACTOR
from ..io import CoilLengthResult, SCHEMA_VERSION, WindingRequest, WindingResult

if TYPE_CHECKING:
    from .validation import ValidationMessage


def _compact_number(text: str) -> str:
    """Drop a bare trailing point and exponent zeros ("1.00e+06" -> "1.00e+6")."""
    mantissa, sep, exponent = text.partition("e")
    if mantissa.endswith("."):
        mantissa = mantissa[:-1]
    if not sep:
        return mantissa
    digits = exponent[1:].lstrip("0") or "0"
    return f"{mantissa}e{exponent[0]}{digits}"


def format_value(value: float, unit: str, precision: int = 3) -> str:
    """Format a number with ``precision`` significant figures and a unit.

    Magnitudes <= 1e-6 (zero included) and >= 1e6 use scientific notation.
    Exponents carry no leading zeros. NaN and infinities format as "Invalid".

    Examples:
        >>> format_value(123.456, "m")
        '123 m'
        >>> format_value(1000000, "mm")
        '1.00e+6 mm'
        >>> format_value(0, "m")
        '0.00e+0 m'
    """
    if not isfinite(value):
        return "Invalid"

    if abs(value) <= 1e-6 or abs(value) >= 1e6:
        text = f"{value:.{precision - 1}e}"
    else:
        text = f"{value:#.{precision}g}"
    return f"{_compact_number(text)} {unit}"


def _messages_to_dicts(messages: List["ValidationMessage"]) -> List[dict]:
    return [
        {
            'severity': msg.severity.value,
            'code': msg.code,
            'message': msg.message,
            'suggestion': msg.suggestion
        }
        for msg in messages
    ]


def to_json(
    result: WindingResult,
    request: Optional[WindingRequest] = None,
    messages: Optional[List["ValidationMessage"]] = None,
    indent: int = 2
) -> str:
    """Convert a result to a JSON string.

    Args:
        result: CoilLengthResult or EndPositionResult
        request: Optional request to include under "request"
        messages: Optional findings from check_result()
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with schema version, result and optional extras
    """
    data = {
        'schema_version': SCHEMA_VERSION,
        'result': result.model_dump(mode='json'),
    }

    if request is not None:
        data['request'] = request.model_dump(mode='json', exclude_none=True)

    if messages:
        data['messages'] = _messages_to_dicts(messages)

    return json.dumps(data, indent=indent)


def _request_table(request: WindingRequest) -> str:
    md = "## Parameters\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Pattern | {request.pattern.label} ({request.pattern.value}) |\n"
    md += f"| Pipe Diameter (ND) | {request.pipe_diameter_mm:g} mm |\n"
    md += f"| Inner Diameter (ID) | {request.inner_diameter_mm:g} mm |\n"
    if request.outer_diameter_mm is not None:
        md += f"| Outer Diameter (OD) | {request.outer_diameter_mm:g} mm |\n"
    md += f"| Bundle Width (W) | {request.bundle_width_mm:g} mm |\n"
    if request.pipe_length_m is not None:
        md += f"| Pipe Length (L) | {request.pipe_length_m:g} m |\n"
    if request.safety_factor != DEFAULT_SAFETY_FACTOR:
        md += f"| Safety Factor (G) | {request.safety_factor:g} |\n"
    if request.pipes_per_layer is not None:
        md += f"| Pipes per Layer | {request.pipes_per_layer} |\n"
    md += "\n"
    return md


def to_markdown(
    result: WindingResult,
    request: Optional[WindingRequest] = None,
    messages: Optional[List["ValidationMessage"]] = None
) -> str:
    """Convert a result to a Markdown report.

    Args:
        result: CoilLengthResult or EndPositionResult
        request: Optional request, adds a parameter table
        messages: Optional findings from check_result()

    Returns:
        Markdown string
    """
    if isinstance(result, CoilLengthResult):
        md = "# Coil Length Calculation\n\n"
    else:
        md = "# Winding End Position\n\n"

    if request is not None:
        md += _request_table(request)

    md += "## Result\n\n"
    md += "| Quantity | Value |\n"
    md += "|----------|-------|\n"

    if isinstance(result, CoilLengthResult):
        md += f"| Coil Length | {result.coil_length_m:.3f} m |\n"
        md += f"| Outer Diameter | {result.realized_outer_diameter_mm} mm |\n"
        md += f"| Bundle Width | {result.realized_bundle_width_mm} mm |\n"
        md += f"| Layers | {result.number_of_layers} |\n"
    else:
        md += f"| Outer Diameter | {result.outer_diameter_mm} mm |\n"
        md += f"| Bundle Width | {result.bundle_width_mm} mm |\n"
        md += f"| Bundle Height | {result.bundle_height_mm} mm |\n"
        md += f"| Layers | {result.number_of_layers} |\n"
        md += f"| Pipes on Last Layer | {result.pipes_on_last_layer:.2f} / {result.last_layer_capacity} |\n"
        md += f"| Rotations | {result.number_of_rotations:.2f} |\n"
    md += "\n"

    if messages:
        warnings = [m for m in messages if m.severity.value == "warning"]
        infos = [m for m in messages if m.severity.value == "info"]

        if warnings:
            md += "### Warnings\n\n"
            for msg in warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if infos:
            md += "### Information\n\n"
            for msg in infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "## Notes\n\n"
    md += "- Diameters, widths and heights rounded to the nearest millimetre\n"
    md += "- Layers nest hexagonally, radial pitch ND x sqrt(3) / 2\n"
    if isinstance(result, CoilLengthResult):
        md += "- The first layer is always counted, even if it exceeds the outer diameter\n"
    else:
        md += "- Last-layer occupancy is resolved to a quarter pipe\n"
    md += "\n"

    md += "---\n"
    md += "*Generated by Coilwind Calculator*\n"

    return md


def to_summary(result: WindingResult) -> str:
    """Convert a result to a short multi-line text summary."""
    if isinstance(result, CoilLengthResult):
        lines = [
            f"═══ Coil Length ({result.pattern.label}) ═══",
            f"Coil length:     {result.coil_length_m:.3f} m",
            f"Outer diameter:  {result.realized_outer_diameter_mm} mm",
            f"Bundle width:    {result.realized_bundle_width_mm} mm",
            f"Layers:          {result.number_of_layers}",
        ]
    else:
        lines = [
            f"═══ End Position ({result.pattern.label}) ═══",
            f"Outer diameter:  {result.outer_diameter_mm} mm",
            f"Bundle width:    {result.bundle_width_mm} mm",
            f"Bundle height:   {result.bundle_height_mm} mm",
            f"Layers:          {result.number_of_layers}",
            f"Last layer:      {result.pipes_on_last_layer:.2f} / {result.last_layer_capacity} pipes",
            f"Rotations:       {result.number_of_rotations:.2f}",
        ]
    return "\n".join(lines)
