"""
JSON schema definition and validation for instrument design documents.

This defines the contract between the saved design file and everything
that reads it (session, CLI, web bridge).

The authoritative schema is generated from the InstrumentParameters Pydantic
model; validate_json_schema() gives a non-raising structural report for
tools that want to list every problem at once.
"""

from numbers import Real
from typing import Any, Dict, List

from .loaders import InstrumentParameters

SCHEMA_VERSION = "1.0"

REQUIRED_FIELDS = ("length", "baseDiameter", "tipDiameter", "wallThickness", "toneHoles")

# Fields that must be integers; all others are reals
INTEGER_FIELDS = ("toneHoles",)


def get_design_schema() -> Dict[str, Any]:
    """
    Get the JSON schema of the persisted design document.

    Generated from the Pydantic model in serialization mode, so property names
    are the JSON keys (length, baseDiameter, ...).
    """
    schema = InstrumentParameters.model_json_schema(by_alias=True, mode='serialization')
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["version"] = SCHEMA_VERSION
    return schema


def _is_number(value) -> bool:
    # bool is an int subclass, but true/false are never valid dimensions
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_json_schema(data: Any) -> Dict[str, Any]:
    """
    Validate parsed JSON data against the design schema.

    Args:
        data: Parsed JSON data

    Returns:
        {
            "valid": bool,
            "errors": List[str],
            "warnings": List[str]
        }

    Example:
        >>> result = validate_json_schema(json.loads(text))
        >>> if not result["valid"]:
        ...     print(f"Errors: {result['errors']}")
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(data, dict):
        return {
            "valid": False,
            "errors": ["Root must be a JSON object"],
            "warnings": warnings,
        }

    for name in REQUIRED_FIELDS:
        if name not in data:
            errors.append(f"Missing required field: '{name}'")
            continue

        value = data[name]
        if not _is_number(value):
            errors.append(f"Field '{name}' must be a number, got {type(value).__name__}")
        elif name in INTEGER_FIELDS and isinstance(value, float) and not value.is_integer():
            errors.append(f"Field '{name}' must be an integer, got {value}")
        elif name in INTEGER_FIELDS and value < 0:
            errors.append(f"Field '{name}' must not be negative, got {value}")
        elif name not in INTEGER_FIELDS and not value > 0:
            errors.append(f"Field '{name}' must be positive, got {value}")

    unknown = sorted(set(data) - set(REQUIRED_FIELDS))
    if unknown:
        warnings.append(f"Unknown fields will be ignored: {', '.join(unknown)}")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }
