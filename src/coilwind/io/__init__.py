"""
Coilwind IO - request/result models, JSON loaders and structure checks.

Example:
    >>> from coilwind.io import load_request_json, save_result_json
    >>> from coilwind.calculator import calculate
    >>>
    >>> request = load_request_json("request.json")
    >>> result = calculate(request)
    >>> save_result_json(result, "result.json", request=request)
"""

from .loaders import (
    SCHEMA_VERSION,
    WindingRequest,
    CoilLengthResult,
    EndPositionResult,
    WindingResult,
    load_request_json,
    save_request_json,
    save_result_json,
)

from .schema import validate_request_json

__all__ = [
    # Models
    "WindingRequest",
    "CoilLengthResult",
    "EndPositionResult",
    "WindingResult",

    # Loaders
    "load_request_json",
    "save_request_json",
    "save_result_json",

    # Schema
    "SCHEMA_VERSION",
    "validate_request_json",
]
