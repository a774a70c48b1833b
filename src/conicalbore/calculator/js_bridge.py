"""
JavaScript-Python bridge for Pyodide.

Provides a single, clean entry point for all JS->Python calculator calls.
The web UI calls it on every slider or input change and re-renders the hole
list from the result. All inputs are validated via Pydantic models before
processing.

Usage from JavaScript:
    pyodide.globals.set('input_json', JSON.stringify(inputs));
    const result = await pyodide.runPythonAsync(`
        from conicalbore.calculator.js_bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import TypedDict

from ..io import InstrumentParameters, ToneHole
from .constants import PARAMETER_RANGES, TAPER_PROFILE_SAMPLES, TAPER_PROFILE_MAX_SAMPLES
from .core import calculate_tone_holes, taper_profile
from .validation import validate_design
from .output import to_markdown, to_summary


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to JavaScript."""
    severity: str  # "error", "warning", "info"
    code: str  # e.g., "HOLES_OVERLAP"
    message: str
    suggestion: Optional[str]


# ============================================================================
# Input Models (Pydantic validation for JS inputs)
# ============================================================================

class CalculatorInputs(BaseModel):
    """
    All inputs from the calculator UI.

    Same keys as the saved design. Missing (or empty) values fall back to the
    calculator defaults.
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    length: Optional[float] = None
    base_diameter: Optional[float] = Field(default=None, alias="baseDiameter")
    tip_diameter: Optional[float] = Field(default=None, alias="tipDiameter")
    wall_thickness: Optional[float] = Field(default=None, alias="wallThickness")
    tone_holes: Optional[int] = Field(default=None, alias="toneHoles")

    # Number of points in the returned taper profile (for the bore chart)
    profile_samples: int = Field(default=TAPER_PROFILE_SAMPLES, ge=2, le=TAPER_PROFILE_MAX_SAMPLES)

    @field_validator(
        'length', 'base_diameter', 'tip_diameter', 'wall_thickness', 'tone_holes',
        mode='before'
    )
    @classmethod
    def blank_to_none(cls, v):
        v = sanitize_js_value(v)
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v

    def to_parameters(self) -> InstrumentParameters:
        """Merge with defaults and validate as a design."""
        defaults = InstrumentParameters.defaults()
        return InstrumentParameters(
            length_mm=defaults.length_mm if self.length is None else self.length,
            base_diameter_mm=(
                defaults.base_diameter_mm if self.base_diameter is None else self.base_diameter
            ),
            tip_diameter_mm=(
                defaults.tip_diameter_mm if self.tip_diameter is None else self.tip_diameter
            ),
            wall_thickness_mm=(
                defaults.wall_thickness_mm if self.wall_thickness is None else self.wall_thickness
            ),
            tone_hole_count=defaults.tone_hole_count if self.tone_holes is None else self.tone_holes,
        )


# ============================================================================
# Output Models
# ============================================================================

class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what JS expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None

    # Design document (same shape as the saved file)
    parameters: Optional[Dict[str, Any]] = None

    # One row per hole; the UI's play button uses frequency_hz
    tone_holes: List[ToneHole] = Field(default_factory=list)

    # (position_mm, bore_diameter_mm) pairs from tip to base
    profile: List[Tuple[float, float]] = Field(default_factory=list)

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)

    # Slider bounds for the UI
    ranges: Dict[str, Dict[str, Any]] = Field(default_factory=lambda: dict(PARAMETER_RANGES))


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for all calculator operations from JavaScript.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(sanitize_dict(data))
        params = inputs.to_parameters()

        holes = calculate_tone_holes(params)
        validation = validate_design(params, holes)

        output = CalculatorOutput(
            success=True,
            parameters=params.to_document(),
            tone_holes=holes,
            profile=taper_profile(params, samples=inputs.profile_samples),
            summary=to_summary(params, holes),
            markdown=to_markdown(params, holes, validation),
            valid=validation.valid,
            messages=[
                {
                    'severity': m.severity.value,
                    'message': m.message,
                    'code': m.code,
                    'suggestion': m.suggestion
                }
                for m in validation.messages
            ],
        )

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except Exception as e:
        return CalculatorOutput(
            success=False,
            error=str(e)
        ).model_dump_json()


# ============================================================================
# Sanitization of Pyodide values
# ============================================================================

def sanitize_js_value(value: Any) -> Any:
    """Convert JavaScript value to Python, handling Pyodide edge cases."""
    if value is None:
        return None

    class_name = str(value.__class__)
    if 'JsNull' in class_name or 'JsUndefined' in class_name:
        return None

    if isinstance(value, str) and value.strip() == '':
        return None

    return value


def sanitize_dict(js_dict: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Recursively sanitize a dictionary from JavaScript."""
    if js_dict is None:
        return {}

    if not isinstance(js_dict, dict):
        raise ValueError(f"Expected a JSON object, got {type(js_dict).__name__}")

    result: Dict[str, Any] = {}
    for key, value in js_dict.items():
        if isinstance(value, dict):
            result[key] = sanitize_dict(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_dict(v) if isinstance(v, dict) else sanitize_js_value(v)
                for v in value
            ]
        else:
            result[key] = sanitize_js_value(value)

    return result
