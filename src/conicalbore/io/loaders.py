"""
JSON input/output for conical instrument designs.

A design is the flat document written by "Save Design":

    {"length": 600, "baseDiameter": 20, "tipDiameter": 5,
     "wallThickness": 1, "toneHoles": 6}

Uses Pydantic for validation and coercion. Python attribute names carry
their units (length_mm, ...); the JSON keys are the model aliases.
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class DesignLoadError(ValueError):
    """Raised when a design document cannot be parsed or has the wrong shape.

    The message is suitable for showing to the user as-is.
    """


class InstrumentParameters(BaseModel):
    """The five user-adjustable instrument dimensions.

    Field order matches the saved document. base_diameter_mm >= tip_diameter_mm
    is assumed but not enforced (see validate_design).
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True, frozen=True)

    length_mm: float = Field(alias="length", gt=0, allow_inf_nan=False)
    base_diameter_mm: float = Field(alias="baseDiameter", gt=0, allow_inf_nan=False)
    tip_diameter_mm: float = Field(alias="tipDiameter", gt=0, allow_inf_nan=False)
    wall_thickness_mm: float = Field(alias="wallThickness", gt=0, allow_inf_nan=False)
    tone_hole_count: int = Field(alias="toneHoles", ge=0)

    @field_validator(
        "length_mm", "base_diameter_mm", "tip_diameter_mm", "wall_thickness_mm", "tone_hole_count",
        mode="before"
    )
    @classmethod
    def reject_booleans(cls, v):
        # bool is an int subclass, but true/false are never valid dimensions
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v

    @classmethod
    def defaults(cls) -> "InstrumentParameters":
        """Starting design of the interactive calculator."""
        # Lazy import to avoid circular dependency (io -> calculator -> io)
        from ..calculator.constants import (
            DEFAULT_LENGTH_MM,
            DEFAULT_BASE_DIAMETER_MM,
            DEFAULT_TIP_DIAMETER_MM,
            DEFAULT_TONE_HOLE_COUNT,
            DEFAULT_WALL_THICKNESS_MM,
        )

        return cls(
            length_mm=DEFAULT_LENGTH_MM,
            base_diameter_mm=DEFAULT_BASE_DIAMETER_MM,
            tip_diameter_mm=DEFAULT_TIP_DIAMETER_MM,
            wall_thickness_mm=DEFAULT_WALL_THICKNESS_MM,
            tone_hole_count=DEFAULT_TONE_HOLE_COUNT,
        )

    def to_document(self) -> dict:
        """Persistence shape, keyed by JSON names."""
        return self.model_dump(by_alias=True)


class ToneHole(BaseModel):
    """Calculated properties of one tone hole."""
    model_config = ConfigDict(frozen=True)

    index: int  # 1-based, counted from the tip end
    position_mm: float  # Distance from the tip-diameter end
    bore_diameter_mm: float
    frequency_hz: float  # Quarter-wave estimate
    note: str  # e.g. "B5"
    note_frequency_hz: float  # Exact equal-tempered frequency of note
    tuning_accuracy_percent: float
    hole_size_mm: float


def _format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "design"
        problems.append(f"{location}: {item['msg']}")
    return "Invalid design - " + "; ".join(problems)


def parse_design(data) -> InstrumentParameters:
    """
    Validate an already-parsed design document.

    Args:
        data: Parsed JSON value (normally a dict)

    Returns:
        InstrumentParameters

    Raises:
        DesignLoadError: If the document has the wrong shape or invalid values
    """
    # Some exports wrap the parameters in a 'design' object
    if isinstance(data, dict) and isinstance(data.get('design'), dict):
        data = data['design']

    if not isinstance(data, dict):
        raise DesignLoadError(
            f"Invalid design - expected a JSON object, got {type(data).__name__}"
        )

    try:
        return InstrumentParameters.model_validate(data)
    except ValidationError as e:
        raise DesignLoadError(_format_validation_error(e)) from e


def loads_design(text: Union[str, bytes]) -> InstrumentParameters:
    """
    Parse a design from a JSON string.

    Raises:
        DesignLoadError: If the text is not valid JSON or not a valid design
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DesignLoadError(f"Malformed design JSON: {e}") from e

    return parse_design(data)


def dumps_design(params: InstrumentParameters, indent: int = 2) -> str:
    """Serialize a design to the flat JSON document."""
    return json.dumps(params.to_document(), indent=indent)


def load_design_json(filepath: Union[str, Path]) -> InstrumentParameters:
    """
    Load an instrument design from a JSON file.

    Args:
        filepath: Path to a file written by save_design_json

    Returns:
        InstrumentParameters

    Raises:
        FileNotFoundError: If file doesn't exist
        DesignLoadError: If the JSON is malformed or has the wrong shape
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Design file not found: {filepath}")

    return loads_design(filepath.read_text(encoding="utf-8"))


def save_design_json(params: InstrumentParameters, filepath: Union[str, Path]) -> None:
    """
    Save an instrument design to a JSON file.

    Writes exactly the five persisted fields, nothing else.

    Args:
        params: Design to save
        filepath: Path to save JSON file
    """
    filepath = Path(filepath)
    filepath.write_text(dumps_design(params), encoding="utf-8")
