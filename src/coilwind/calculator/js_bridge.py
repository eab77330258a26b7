"""
JavaScript-Python bridge for Pyodide.

Provides a single entry point for calculator calls from a web front end.
Inputs are parsed via Pydantic models before processing, and every failure
is returned as JSON rather than raised.

Usage from JavaScript:
    pyodide.globals.set('input_json', JSON.stringify(inputs));
    const result = await pyodide.runPythonAsync(`
        from coilwind.calculator.js_bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..constants import DEFAULT_SAFETY_FACTOR
from ..enums import WindingMode, WindingPattern
from ..io import WindingRequest
from .core import calculate as calculate_winding
from .errors import ComputationError, ParameterValidationError
from .output import to_json, to_markdown, to_summary
from .validation import check_result

logger = logging.getLogger(__name__)


class BridgeMessage(BaseModel):
    """Validation finding sent to JavaScript."""
    severity: str  # "warning", "info"
    code: str  # e.g., "OUTER_DIAMETER_EXCEEDED"
    message: str
    suggestion: Optional[str] = None


# ============================================================================
# Input Models
# ============================================================================

class CalculatorInputs(BaseModel):
    """
    All inputs from the calculator UI.

    Field names follow the form fields; units are mm except pipe_length (m).
    """
    model_config = ConfigDict(extra='ignore')

    mode: str = "coil_length"  # "coil_length" | "end_position"
    pattern: str = "uneven_layers"  # "uneven_layers" | "even_layers_offset" | "BB1" | "BB0.5"

    pipe_diameter: float
    inner_diameter: float
    bundle_width: float
    outer_diameter: Optional[float] = None
    pipe_length: Optional[float] = None
    safety_factor: float = DEFAULT_SAFETY_FACTOR
    pipes_per_layer: Optional[int] = None

    def to_request(self) -> WindingRequest:
        return WindingRequest(
            pipe_diameter_mm=self.pipe_diameter,
            inner_diameter_mm=self.inner_diameter,
            outer_diameter_mm=self.outer_diameter,
            bundle_width_mm=self.bundle_width,
            pipe_length_m=self.pipe_length,
            pattern=WindingPattern.from_label(self.pattern),
            mode=WindingMode.from_label(self.mode),
            safety_factor=self.safety_factor,
            pipes_per_layer=self.pipes_per_layer,
        )


# ============================================================================
# Output Models
# ============================================================================

class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what JS expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None
    error_kind: Optional[str] = None  # "input" | "validation" | "computation"
    error_code: Optional[str] = None

    # Result data (JSON string for JS to parse)
    result_json: Optional[str] = None

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    messages: List[BridgeMessage] = Field(default_factory=list)


def _failure(kind: str, error: str, code: Optional[str] = None) -> str:
    return CalculatorOutput(
        success=False,
        error=error,
        error_kind=kind,
        error_code=code
    ).model_dump_json()


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for calculator operations from JavaScript.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(data)
        request = inputs.to_request()
    except json.JSONDecodeError as e:
        return _failure("input", f"Invalid JSON: {e}")
    except ValidationError as e:
        return _failure("input", f"Invalid input: {e.error_count()} field error(s): {e.errors()[0]['msg']}")
    except ValueError as e:
        # Unknown mode or pattern label
        return _failure("input", str(e))

    try:
        result = calculate_winding(request)
    except ParameterValidationError as e:
        return _failure("validation", e.message, e.code)
    except ComputationError as e:
        logger.warning(f"Computation failed for bridge request: {e}")
        return _failure("computation", str(e), type(e).__name__)

    messages = check_result(request, result)

    output = CalculatorOutput(
        success=True,
        result_json=to_json(result, request=request, messages=messages),
        summary=to_summary(result),
        markdown=to_markdown(result, request=request, messages=messages),
        messages=[
            BridgeMessage(
                severity=m.severity.value,
                code=m.code,
                message=m.message,
                suggestion=m.suggestion
            )
            for m in messages
        ],
    )

    return output.model_dump_json()
