"""
JSON input/output for coil winding requests and results.

Requests are plain data: range checks live in
``coilwind.calculator.validation`` so that the first violated constraint is
reported on its own, in a fixed order. Pydantic is used here for type
coercion (numbers, enum labels) only.
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ..constants import DEFAULT_SAFETY_FACTOR
from ..enums import WindingMode, WindingPattern

SCHEMA_VERSION = "1.0"


class WindingRequest(BaseModel):
    """Parameters for one winding calculation.

    Diameters and widths are in millimetres, pipe length in metres.
    """
    model_config = ConfigDict(extra='ignore')

    pipe_diameter_mm: float  # ND
    inner_diameter_mm: float  # ID
    outer_diameter_mm: Optional[float] = None  # OD, coil-length mode
    bundle_width_mm: float  # W
    pipe_length_m: Optional[float] = None  # L, end-position mode
    pattern: WindingPattern = WindingPattern.UNEVEN_LAYERS
    mode: WindingMode = WindingMode.COIL_LENGTH
    safety_factor: float = DEFAULT_SAFETY_FACTOR  # G, end-position mode
    pipes_per_layer: Optional[int] = None  # Overrides W-derived layer capacity, end-position mode

    @field_validator('pattern', mode='before')
    @classmethod
    def coerce_pattern(cls, v):
        if isinstance(v, str):
            return WindingPattern.from_label(v)
        return v

    @field_validator('mode', mode='before')
    @classmethod
    def coerce_mode(cls, v):
        if isinstance(v, str):
            return WindingMode.from_label(v)
        return v


class CoilLengthResult(BaseModel):
    """Maximum pipe length inside an outer-diameter envelope."""
    model_config = ConfigDict(frozen=True)

    mode: WindingMode = WindingMode.COIL_LENGTH
    pattern: WindingPattern
    coil_length_m: float
    realized_outer_diameter_mm: int
    realized_bundle_width_mm: int
    number_of_layers: int


class EndPositionResult(BaseModel):
    """Bundle envelope reached after winding a known pipe length."""
    model_config = ConfigDict(frozen=True)

    mode: WindingMode = WindingMode.END_POSITION
    pattern: WindingPattern
    outer_diameter_mm: int
    bundle_width_mm: int
    bundle_height_mm: int
    number_of_layers: int
    pipes_on_last_layer: float  # Quarter-pipe precision
    last_layer_capacity: int
    number_of_rotations: float


WindingResult = Union[CoilLengthResult, EndPositionResult]


def load_request_json(filepath: Union[str, Path]) -> WindingRequest:
    """
    Load a winding request from a JSON file.

    Args:
        filepath: Path to JSON file

    Returns:
        WindingRequest with coerced field types

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If fields are missing or have the wrong type
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Request file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    # Some exports wrap the request alongside the result
    if isinstance(data, dict) and 'request' in data:
        data = data['request']

    if not isinstance(data, dict):
        raise ValueError("Invalid request JSON - root must be an object")

    return WindingRequest.model_validate(data)


def save_request_json(request: WindingRequest, filepath: Union[str, Path]) -> None:
    """Save a winding request to a JSON file."""
    data = request.model_dump(mode='json', exclude_none=True)
    data['schema_version'] = SCHEMA_VERSION
    _write_json(data, filepath)


def save_result_json(
    result: WindingResult,
    filepath: Union[str, Path],
    request: Optional[WindingRequest] = None
) -> None:
    """
    Save a calculation result to a JSON file.

    If the request is given it is stored alongside the result under
    ``"request"``, so the file can be passed back to ``load_request_json``.
    """
    data = {
        'schema_version': SCHEMA_VERSION,
        'result': result.model_dump(mode='json'),
    }
    if request is not None:
        data['request'] = request.model_dump(mode='json', exclude_none=True)
    _write_json(data, filepath)


def _write_json(data: dict, filepath: Union[str, Path]) -> None:
    filepath = Path(filepath)
    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)
