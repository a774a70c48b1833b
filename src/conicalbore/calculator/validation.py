"""
Conical Bore Calculator - Validation Rules

Plausibility checks for a design, based on:
- The interactive slider ranges (advisory bounds, not hard limits)
- Simple physical constraints (holes must fit the bore and each other)
- The tuning quality of the quarter-wave estimate

Validation reports; it never changes or rejects the design. Values the
model itself rejects (e.g. negative length) never get this far.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..io import InstrumentParameters, ToneHole
from .constants import PARAMETER_RANGES, WALL_THIN_WARNING_MM, TUNING_WARNING_PERCENT
from .core import calculate_tone_holes


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]


# Persistence key -> (attribute, message code prefix, unit)
_RANGE_FIELDS = (
    ("length", "length_mm", "LENGTH", "mm"),
    ("baseDiameter", "base_diameter_mm", "BASE_DIAMETER", "mm"),
    ("tipDiameter", "tip_diameter_mm", "TIP_DIAMETER", "mm"),
    ("toneHoles", "tone_hole_count", "TONE_HOLES", ""),
    ("wallThickness", "wall_thickness_mm", "WALL_THICKNESS", "mm"),
)


def validate_design(
    params: InstrumentParameters,
    holes: Optional[Sequence[ToneHole]] = None
) -> ValidationResult:
    """
    Validate an instrument design.

    Args:
        params: Instrument parameters
        holes: Tone holes already calculated for params (calculated if omitted)

    Returns:
        ValidationResult with all findings
    """
    if holes is None:
        holes = calculate_tone_holes(params)

    messages: List[ValidationMessage] = []

    messages.extend(_validate_ranges(params))
    messages.extend(_validate_taper(params))
    messages.extend(_validate_wall(params))
    messages.extend(_validate_hole_count(params))
    messages.extend(_validate_hole_fit(holes))
    messages.extend(_validate_hole_spacing(params, holes))
    messages.extend(_validate_tuning(holes))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_ranges(params: InstrumentParameters) -> List[ValidationMessage]:
    """Check each parameter against its slider range"""
    messages = []

    for key, attribute, code, unit in _RANGE_FIELDS:
        bounds = PARAMETER_RANGES[key]
        value = getattr(params, attribute)
        low, high = bounds["min"], bounds["max"]

        # Zero tone holes is reported separately by _validate_hole_count
        if key == "toneHoles" and value == 0:
            continue

        if value < low or value > high:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code=f"{code}_OUT_OF_RANGE",
                message=f"{bounds['label']} {value:g}{unit} is outside the supported range "
                        f"{low:g}-{high:g}{unit}",
                suggestion=f"Use a value between {low:g} and {high:g}{unit}"
            ))

    return messages


def _validate_taper(params: InstrumentParameters) -> List[ValidationMessage]:
    """Check the bore narrows from base to tip"""
    messages = []

    if params.tip_diameter_mm > params.base_diameter_mm:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="TIP_WIDER_THAN_BASE",
            message=f"Tip diameter ({params.tip_diameter_mm:g}mm) is larger than base diameter "
                    f"({params.base_diameter_mm:g}mm); the bore widens towards the tip",
            suggestion="Swap the diameters for a conventional conical bore"
        ))

    return messages


def _validate_wall(params: InstrumentParameters) -> List[ValidationMessage]:
    """Flag walls that are fragile when printed"""
    messages = []

    if params.wall_thickness_mm < WALL_THIN_WARNING_MM:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="WALL_THIN",
            message=f"Wall thickness {params.wall_thickness_mm:g}mm is thin for a printed instrument",
            suggestion=f"Consider at least {WALL_THIN_WARNING_MM:g}mm"
        ))

    return messages


def _validate_hole_count(params: InstrumentParameters) -> List[ValidationMessage]:
    messages = []

    if params.tone_hole_count == 0:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="NO_TONE_HOLES",
            message="Design has no tone holes; only the bore will be generated",
            suggestion=None
        ))

    return messages


def _validate_hole_fit(holes: Sequence[ToneHole]) -> List[ValidationMessage]:
    """Check each hole is no wider than the bore it is drilled into"""
    messages = []

    for hole in holes:
        if hole.hole_size_mm > hole.bore_diameter_mm:
            messages.append(ValidationMessage(
                severity=Severity.WARNING,
                code="HOLE_LARGER_THAN_BORE",
                message=f"Hole {hole.index} ({hole.hole_size_mm:.2f}mm) is wider than the bore "
                        f"at {hole.position_mm:.1f}mm ({hole.bore_diameter_mm:.2f}mm)",
                suggestion="Increase the tip diameter or reduce the number of holes"
            ))

    return messages


def _validate_hole_spacing(
    params: InstrumentParameters,
    holes: Sequence[ToneHole]
) -> List[ValidationMessage]:
    """Check neighbouring holes do not overlap"""
    messages = []

    for first, second in zip(holes, holes[1:]):
        gap = second.position_mm - first.position_mm
        needed = (first.hole_size_mm + second.hole_size_mm) / 2
        if needed > gap:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="HOLES_OVERLAP",
                message=f"Holes {first.index} and {second.index} overlap: "
                        f"{needed:.2f}mm needed, {gap:.2f}mm available",
                suggestion=f"Use fewer holes or a bore longer than {params.length_mm:g}mm"
            ))

    return messages


def _validate_tuning(holes: Sequence[ToneHole]) -> List[ValidationMessage]:
    """Report holes far from their nearest note"""
    messages = []

    for hole in holes:
        if hole.tuning_accuracy_percent > TUNING_WARNING_PERCENT:
            messages.append(ValidationMessage(
                severity=Severity.INFO,
                code="HOLE_OUT_OF_TUNE",
                message=f"Hole {hole.index} is {hole.tuning_accuracy_percent:.2f}% away from "
                        f"{hole.note} ({hole.note_frequency_hz:.2f}Hz)",
                suggestion=None
            ))

    return messages
