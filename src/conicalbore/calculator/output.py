"""Output formatters for instrument designs.

Converts InstrumentParameters plus calculated ToneHole models to JSON,
Markdown and plain-text output.

Uses Pydantic's model_dump(mode='json') for serialization of tone holes;
parameters are always written in the persisted (camelCase) shape.
"""

import json
from typing import Optional, Sequence, TYPE_CHECKING

from ..io import InstrumentParameters, ToneHole
from ..io.schema import SCHEMA_VERSION
from .core import calculate_tone_holes

if TYPE_CHECKING:
    from .validation import ValidationResult


def _resolve_holes(
    params: InstrumentParameters,
    holes: Optional[Sequence[ToneHole]]
) -> Sequence[ToneHole]:
    return calculate_tone_holes(params) if holes is None else holes


def _message_to_dict(msg) -> dict:
    return {
        'severity': msg.severity.value,
        'code': msg.code,
        'message': msg.message,
        'suggestion': msg.suggestion
    }


def format_hole_row(hole: ToneHole) -> str:
    """One tone hole in the calculator's list format."""
    return (
        f"Position: {hole.position_mm:.1f} mm, "
        f"Bore Diameter: {hole.bore_diameter_mm:.2f} mm, "
        f"Hole Size: {hole.hole_size_mm:.2f} mm, "
        f"Frequency: {hole.frequency_hz:.2f} Hz, "
        f"Note: {hole.note}, "
        f"Tuning Accuracy: {hole.tuning_accuracy_percent:.2f}%"
    )


def to_json(
    params: InstrumentParameters,
    holes: Optional[Sequence[ToneHole]] = None,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2
) -> str:
    """Convert a design and its tone holes to a JSON report.

    The 'parameters' section is exactly the saved design document, so it can
    be loaded back with loads_design().

    Args:
        params: Instrument parameters
        holes: Tone holes for params (calculated if omitted)
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with schema version, parameters, tone holes and extras
    """
    holes = _resolve_holes(params, holes)

    report = {
        'schema_version': SCHEMA_VERSION,
        'parameters': params.to_document(),
        'tone_holes': [hole.model_dump(mode='json') for hole in holes],
    }

    if validation:
        report['validation'] = {
            'valid': validation.valid,
            'errors': [_message_to_dict(msg) for msg in validation.errors],
            'warnings': [_message_to_dict(msg) for msg in validation.warnings],
            'infos': [_message_to_dict(msg) for msg in validation.infos],
        }

    return json.dumps(report, indent=indent)


def to_markdown(
    params: InstrumentParameters,
    holes: Optional[Sequence[ToneHole]] = None,
    validation: Optional["ValidationResult"] = None
) -> str:
    """Convert a design to a markdown design sheet.

    Args:
        params: Instrument parameters
        holes: Tone holes for params (calculated if omitted)
        validation: Optional validation results to include

    Returns:
        Markdown design sheet
    """
    holes = _resolve_holes(params, holes)

    md = "# Conical Wind Instrument Design\n\n"

    md += "## Instrument\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Length | {params.length_mm:.1f} mm |\n"
    md += f"| Base Diameter | {params.base_diameter_mm:.2f} mm |\n"
    md += f"| Tip Diameter | {params.tip_diameter_mm:.2f} mm |\n"
    md += f"| Wall Thickness | {params.wall_thickness_mm:.2f} mm |\n"
    md += f"| Tone Holes | {params.tone_hole_count} |\n\n"

    md += "## Tone Holes\n\n"
    if holes:
        md += "| # | Position | Bore Diameter | Hole Size | Frequency | Note | Tuning |\n"
        md += "|---|----------|---------------|-----------|-----------|------|--------|\n"
        for hole in holes:
            md += (
                f"| {hole.index} "
                f"| {hole.position_mm:.1f} mm "
                f"| {hole.bore_diameter_mm:.2f} mm "
                f"| {hole.hole_size_mm:.2f} mm "
                f"| {hole.frequency_hz:.2f} Hz "
                f"| {hole.note} "
                f"| {hole.tuning_accuracy_percent:.2f}% |\n"
            )
        md += "\n"
    else:
        md += "*No tone holes.*\n\n"

    if validation:
        md += "## Validation\n\n"

        if validation.valid:
            md += "**Status:** ✅ Design is valid\n\n"
        else:
            md += "**Status:** ❌ Design has errors\n\n"

        if validation.errors:
            md += "### Errors\n\n"
            for msg in validation.errors:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.warnings:
            md += "### Warnings\n\n"
            for msg in validation.warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "## Notes\n\n"
    md += "- All dimensions in millimeters; positions measured from the tip end\n"
    md += "- Frequencies use a quarter-wavelength estimate with c = 343 m/s\n"
    md += "- Notes are 12-tone equal temperament, A4 = 440 Hz\n"
    md += "- Hole sizes are a heuristic starting point, not a finished voicing\n"
    md += "\n"

    md += "---\n"
    md += "*Generated by Conical Bore Calculator*\n"

    return md


def to_summary(
    params: InstrumentParameters,
    holes: Optional[Sequence[ToneHole]] = None,
    validation: Optional["ValidationResult"] = None
) -> str:
    """Convert a design to a formatted text summary.

    Args:
        params: Instrument parameters
        holes: Tone holes for params (calculated if omitted)
        validation: Optional validation results; issues are listed at the end

    Returns:
        Multi-line formatted summary string
    """
    holes = _resolve_holes(params, holes)

    lines = [
        "═══ Conical Wind Instrument ═══",
        f"Length:         {params.length_mm:.1f} mm",
        f"Base diameter:  {params.base_diameter_mm:.2f} mm",
        f"Tip diameter:   {params.tip_diameter_mm:.2f} mm",
        f"Wall thickness: {params.wall_thickness_mm:.2f} mm",
        f"Tone holes:     {params.tone_hole_count}",
        "",
        "Tone Hole Positions:",
    ]

    if holes:
        lines.extend(f"  {hole.index:>2}. {format_hole_row(hole)}" for hole in holes)
    else:
        lines.append("  (none)")

    if validation and validation.messages:
        lines.extend(["", "Validation:"])
        for msg in validation.messages:
            lines.append(f"  [{msg.severity.value}] {msg.code}: {msg.message}")

    return "\n".join(lines)
