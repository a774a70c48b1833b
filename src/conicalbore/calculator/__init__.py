"""
Conical Bore Calculator - tone-hole placement for conical wind instruments.

This module provides calculator functions for conical bore design.
All calculations return ToneHole models for type safety.

Example:
    >>> from conicalbore.calculator import calculate_tone_holes
    >>> from conicalbore.io import InstrumentParameters
    >>>
    >>> params = InstrumentParameters.defaults()
    >>> for hole in calculate_tone_holes(params):
    ...     print(hole.note, hole.position_mm)
"""

from .constants import (
    # Physical and tuning constants
    SPEED_OF_SOUND_MM_PER_S,
    A4_FREQUENCY_HZ,
    NOTE_NAMES,

    # UI ranges
    PARAMETER_RANGES,
)

from .core import (
    # Note naming
    semitones_from_a4,
    frequency_to_note,
    frequency_to_note_name,
    note_frequency,
    parse_note_name,
    note_name_to_frequency,

    # Low-level calculation functions
    bore_diameter_at,
    estimate_frequency,
    tuning_accuracy_percent,
    calculate_hole_size,

    # High-level design functions
    calculate_tone_holes,
    taper_profile,
)

from .validation import (
    # Validation
    validate_design,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from .output import (
    # Output formatters
    format_hole_row,
    to_json,
    to_markdown,
    to_summary,
)

# Convenience imports
from ..io import InstrumentParameters, ToneHole


__all__ = [
    # Constants
    "SPEED_OF_SOUND_MM_PER_S",
    "A4_FREQUENCY_HZ",
    "NOTE_NAMES",
    "PARAMETER_RANGES",

    # Models
    "InstrumentParameters",
    "ToneHole",

    # Note naming
    "semitones_from_a4",
    "frequency_to_note",
    "frequency_to_note_name",
    "note_frequency",
    "parse_note_name",
    "note_name_to_frequency",

    # Low-level calculation functions
    "bore_diameter_at",
    "estimate_frequency",
    "tuning_accuracy_percent",
    "calculate_hole_size",

    # High-level design functions
    "calculate_tone_holes",
    "taper_profile",

    # Validation
    "validate_design",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "format_hole_row",
    "to_json",
    "to_markdown",
    "to_summary",
]
