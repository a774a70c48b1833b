"""
Physical and musical constants for conical bore calculations.

This module centralizes all numerical constants used in the calculator,
validation, geometry and audio modules. Each constant carries its unit in
its name (_MM, _HZ, _S, _PERCENT).

MODIFICATION GUIDELINES:
- The acoustic constants define the reference tuning; changing them changes
  every note name and tuning figure
- Parameter ranges mirror the interactive slider bounds; they are advisory
  and only checked by validation, never by the calculator itself
- Add new constants here rather than hardcoding in functions

Constants are grouped by category:
- Acoustics: Quarter-wave resonance model
- Equal temperament: Note naming (A4 = 440 Hz)
- Tone hole sizing: Heuristic hole diameter
- Parameters: Defaults and UI ranges
- Validation thresholds
- Audio playback
- Mesh export
"""

from typing import Any, Dict, Tuple

# =============================================================================
# Acoustics - Quarter-Wave Resonance Model
# =============================================================================

# Speed of sound in air at ~20°C, expressed in mm/s to match bore dimensions
SPEED_OF_SOUND_MM_PER_S: float = 343000.0

# Quarter-wave resonator: wavelength = 4 × sounding length
QUARTER_WAVE_FACTOR: float = 4.0

# =============================================================================
# Equal Temperament
# =============================================================================

# Concert pitch reference
A4_FREQUENCY_HZ: float = 440.0

SEMITONES_PER_OCTAVE: int = 12

NOTE_NAMES: Tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"
)

# Added to the rounded semitone offset from A4 so that index 0 is C0.
# A4 sits at index 57 = 4 × 12 + 9.
NOTE_INDEX_OFFSET: int = 57

# Reference octave and pitch-class index of A4, used to invert a note name
A4_OCTAVE: int = 4
A4_PITCH_CLASS_INDEX: int = 9

# =============================================================================
# Tone Hole Sizing (heuristic, not physically derived)
# =============================================================================

# hole_size = (frequency / A4) × bore_diameter × factor
HOLE_SIZE_FACTOR: float = 0.3
MIN_HOLE_SIZE_MM: float = 1.0

# Decimal places kept for tuning accuracy and hole size
RESULT_DECIMALS: int = 2

# =============================================================================
# Parameters - Defaults and UI Ranges
# =============================================================================

DEFAULT_LENGTH_MM: float = 600.0
DEFAULT_BASE_DIAMETER_MM: float = 20.0
DEFAULT_TIP_DIAMETER_MM: float = 5.0
DEFAULT_TONE_HOLE_COUNT: int = 6
DEFAULT_WALL_THICKNESS_MM: float = 1.0

# Slider bounds (min, max, step), keyed by persistence field name
PARAMETER_RANGES: Dict[str, Dict[str, Any]] = {
    "length": {"label": "Instrument Length", "min": 200.0, "max": 1000.0, "step": 10.0},
    "baseDiameter": {"label": "Base Diameter", "min": 10.0, "max": 50.0, "step": 1.0},
    "tipDiameter": {"label": "Tip Diameter", "min": 1.0, "max": 20.0, "step": 1.0},
    "toneHoles": {"label": "Tone Holes", "min": 1, "max": 30, "step": 1},
    "wallThickness": {"label": "Wall Thickness", "min": 0.5, "max": 5.0, "step": 0.1},
}

# =============================================================================
# Validation Thresholds
# =============================================================================

WALL_THIN_WARNING_MM: float = 1.0
# Nearest-note error tops out near 2.9% (half a semitone), so flag from 2.5%
TUNING_WARNING_PERCENT: float = 2.5

# =============================================================================
# Audio Playback
# =============================================================================

TONE_DURATION_S: float = 1.5
TONE_SAMPLE_RATE_HZ: int = 44100
TONE_AMPLITUDE: float = 0.3

# Linear fade at each end of a tone, avoids clicks at start/stop
TONE_FADE_S: float = 0.01

# =============================================================================
# Mesh Export
# =============================================================================

# STL tessellation tolerances
STL_LINEAR_TOLERANCE_MM: float = 0.01
STL_ANGULAR_TOLERANCE_RAD: float = 0.1

# Bore cut extends past each end so the boolean never meets coplanar faces
BORE_CUT_MARGIN_MM: float = 1.0

# Number of points in the 2D taper profile
TAPER_PROFILE_SAMPLES: int = 50
TAPER_PROFILE_MAX_SAMPLES: int = 2000

DEFAULT_EXPORT_BASENAME: str = "conical_instrument"
