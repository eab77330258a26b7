#!/usr/bin/env python3
"""
Generate JSON Schemas from Pydantic models.

The Pydantic models in coilwind.io.loaders are the source of truth for the
request/result JSON format; front ends consume the generated schemas.

Usage (with the package installed, e.g. pip install -e .):
    python scripts/generate_schemas.py
"""

import json
from pathlib import Path

from pydantic import __version__ as PYDANTIC_VERSION

from coilwind.enums import WindingMode, WindingPattern
from coilwind.io.loaders import (
    SCHEMA_VERSION,
    WindingRequest,
    CoilLengthResult,
    EndPositionResult,
)

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def get_model_schema(model_class) -> dict:
    """Get JSON schema from a Pydantic model.

    Uses by_alias=False so the schema matches what model_dump() produces.
    """
    return model_class.model_json_schema(by_alias=False)


def main():
    output_dir = Path(__file__).parent.parent / "schemas"
    output_dir.mkdir(exist_ok=True)

    print("Generating JSON schemas from Pydantic models...")
    print(f"  Pydantic version: {PYDANTIC_VERSION}")

    models = {
        "winding-request": (WindingRequest, "Input parameters for one winding calculation"),
        "coil-length-result": (CoilLengthResult, "Result of a coil length calculation"),
        "end-position-result": (EndPositionResult, "Result of an end position calculation"),
    }

    for name, (model, description) in models.items():
        schema = get_model_schema(model)
        schema["$schema"] = SCHEMA_DIALECT
        schema["$id"] = f"coilwind/{name}-v{SCHEMA_VERSION}.json"
        schema["description"] = description

        schema_file = output_dir / f"{name}-v{SCHEMA_VERSION}.json"
        with open(schema_file, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"  Generated: {schema_file}")

    enums_schema = {
        "$schema": SCHEMA_DIALECT,
        "$id": f"coilwind/enums-v{SCHEMA_VERSION}.json",
        "title": "CoilwindEnums",
        "description": "Enum definitions for coilwind types",
        "definitions": {
            "WindingMode": {
                "type": "string",
                "enum": [e.value for e in WindingMode],
                "description": "Quantity to solve for"
            },
            "WindingPattern": {
                "type": "string",
                "enum": [e.value for e in WindingPattern],
                "description": "Layer nesting pattern (BB1 / BB0.5 accepted on input)"
            }
        }
    }

    enums_file = output_dir / f"enums-v{SCHEMA_VERSION}.json"
    with open(enums_file, "w") as f:
        json.dump(enums_schema, f, indent=2)
    print(f"  Generated: {enums_file}")

    print(f"\nAll schemas written to: {output_dir}/")


if __name__ == "__main__":
    main()
