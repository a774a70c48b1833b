"""
Conical Bore Calculator - Core Calculations

Pure mathematical functions for tone-hole placement on a conical bore.
Returns typed ToneHole models for type safety.

Model:
- Holes are evenly spaced along the bore, excluding both ends
- Bore diameter tapers linearly from the tip diameter (position 0) to the
  base diameter (position = length)
- Each hole is treated as a quarter-wave resonator whose sounding length is
  its position
- Notes are named in 12-tone equal temperament, A4 = 440 Hz

The position convention (measured from the tip-diameter end and used as the
sounding length) is a deliberate simplification of the acoustics.
"""

from math import floor, log2
from typing import List, Optional, Tuple

from ..io import InstrumentParameters, ToneHole
from .constants import (
    SPEED_OF_SOUND_MM_PER_S,
    QUARTER_WAVE_FACTOR,
    A4_FREQUENCY_HZ,
    A4_OCTAVE,
    A4_PITCH_CLASS_INDEX,
    SEMITONES_PER_OCTAVE,
    NOTE_NAMES,
    NOTE_INDEX_OFFSET,
    HOLE_SIZE_FACTOR,
    MIN_HOLE_SIZE_MM,
    RESULT_DECIMALS,
    TAPER_PROFILE_SAMPLES,
)


def _round_half_up(value: float) -> int:
    """Round to nearest integer, ties towards +inf (Python's round() is banker's)."""
    return floor(value + 0.5)


def semitones_from_a4(frequency_hz: float) -> float:
    """Signed distance from A4 in (fractional) equal-tempered semitones."""
    return SEMITONES_PER_OCTAVE * log2(frequency_hz / A4_FREQUENCY_HZ)


def frequency_to_note(frequency_hz: float) -> Tuple[int, int]:
    """
    Find the nearest equal-tempered note.

    Args:
        frequency_hz: Frequency in Hz (must be positive)

    Returns:
        Tuple of (pitch_class_index, octave); pitch class 0 is C
    """
    note_index = _round_half_up(semitones_from_a4(frequency_hz)) + NOTE_INDEX_OFFSET
    octave = floor(note_index / SEMITONES_PER_OCTAVE)
    pitch_class = note_index % SEMITONES_PER_OCTAVE
    return pitch_class, octave


def frequency_to_note_name(frequency_hz: float) -> str:
    """Name of the nearest equal-tempered note, e.g. 440.0 -> "A4"."""
    pitch_class, octave = frequency_to_note(frequency_hz)
    return f"{NOTE_NAMES[pitch_class]}{octave}"


def note_frequency(pitch_class: int, octave: int) -> float:
    """Exact equal-tempered frequency of a pitch class in an octave."""
    semitones = (
        pitch_class
        + (octave - A4_OCTAVE) * SEMITONES_PER_OCTAVE
        - A4_PITCH_CLASS_INDEX
    )
    return A4_FREQUENCY_HZ * 2 ** (semitones / SEMITONES_PER_OCTAVE)


def parse_note_name(name: str) -> Tuple[int, int]:
    """
    Split a note name into pitch class and octave.

    Accepts names as produced by frequency_to_note_name ("C5", "F#3", "A-1").

    Raises:
        ValueError: If the name is not a known pitch class followed by an octave
    """
    text = name.strip()
    # Longest match first so "C#4" is not read as "C" + "#4"
    for pitch_name in sorted(NOTE_NAMES, key=len, reverse=True):
        if text.upper().startswith(pitch_name):
            octave_text = text[len(pitch_name):]
            try:
                octave = int(octave_text)
            except ValueError:
                break
            return NOTE_NAMES.index(pitch_name), octave

    raise ValueError(f"Invalid note name: {name!r}")


def note_name_to_frequency(name: str) -> float:
    """Exact equal-tempered frequency of a note name, e.g. "A4" -> 440.0."""
    pitch_class, octave = parse_note_name(name)
    return note_frequency(pitch_class, octave)


def bore_diameter_at(
    position_mm: float,
    length_mm: float,
    base_diameter_mm: float,
    tip_diameter_mm: float
) -> float:
    """Bore diameter at a position, linear from tip (0) to base (length)."""
    return tip_diameter_mm + ((base_diameter_mm - tip_diameter_mm) * position_mm) / length_mm


def estimate_frequency(sounding_length_mm: float) -> float:
    """
    Estimate resonant frequency of a quarter-wave resonator.

    f = c / (4 × L)

    Args:
        sounding_length_mm: Effective length from the open end (mm)

    Returns:
        Frequency in Hz
    """
    wavelength_mm = QUARTER_WAVE_FACTOR * sounding_length_mm
    return SPEED_OF_SOUND_MM_PER_S / wavelength_mm


def tuning_accuracy_percent(frequency_hz: float, target_hz: float) -> float:
    """Relative deviation from the target frequency, in percent (2 decimals)."""
    return round(100 * abs(frequency_hz - target_hz) / target_hz, RESULT_DECIMALS)


def calculate_hole_size(frequency_hz: float, bore_diameter_mm: float) -> float:
    """
    Heuristic tone-hole diameter.

    Scales with pitch relative to A4 and with the local bore, never below
    MIN_HOLE_SIZE_MM. Not derived from acoustics.
    """
    size = round((frequency_hz / A4_FREQUENCY_HZ) * bore_diameter_mm * HOLE_SIZE_FACTOR, RESULT_DECIMALS)
    return max(MIN_HOLE_SIZE_MM, size)


def _resolve_params(
    params: Optional[InstrumentParameters],
    length_mm: Optional[float],
    base_diameter_mm: Optional[float],
    tip_diameter_mm: Optional[float],
    tone_hole_count: Optional[int]
) -> Tuple[float, float, float, int]:
    if params is not None:
        return (
            params.length_mm,
            params.base_diameter_mm,
            params.tip_diameter_mm,
            params.tone_hole_count,
        )

    missing = [
        name for name, value in (
            ("length_mm", length_mm),
            ("base_diameter_mm", base_diameter_mm),
            ("tip_diameter_mm", tip_diameter_mm),
            ("tone_hole_count", tone_hole_count),
        )
        if value is None
    ]
    if missing:
        raise TypeError(f"Missing parameters: {', '.join(missing)}")

    return length_mm, base_diameter_mm, tip_diameter_mm, tone_hole_count


def calculate_tone_holes(
    params: Optional[InstrumentParameters] = None,
    *,
    length_mm: Optional[float] = None,
    base_diameter_mm: Optional[float] = None,
    tip_diameter_mm: Optional[float] = None,
    tone_hole_count: Optional[int] = None
) -> List[ToneHole]:
    """
    Calculate all tone holes for an instrument.

    Pure function: no state, no I/O, identical inputs give equal output.
    Wall thickness does not take part in the calculation.

    Args:
        params: Instrument parameters, or pass the four values as keywords
        length_mm: Total bore length (mm)
        base_diameter_mm: Diameter at the wide end (mm)
        tip_diameter_mm: Diameter at the narrow end (mm)
        tone_hole_count: Number of holes to place

    Returns:
        List of tone_hole_count ToneHole models ordered by position;
        empty when tone_hole_count <= 0

    Raises:
        ValueError: If length_mm is not positive
    """
    length, base, tip, count = _resolve_params(
        params, length_mm, base_diameter_mm, tip_diameter_mm, tone_hole_count
    )

    if count <= 0:
        return []

    if length <= 0:
        raise ValueError(f"Bore length must be positive, got {length}")

    holes = []
    spacing = length / (count + 1)

    for i in range(1, count + 1):
        position = spacing * i
        bore_diameter = bore_diameter_at(position, length, base, tip)

        # Position doubles as the sounding length from the open end
        frequency = estimate_frequency(position)

        pitch_class, octave = frequency_to_note(frequency)
        target = note_frequency(pitch_class, octave)

        holes.append(ToneHole(
            index=i,
            position_mm=position,
            bore_diameter_mm=bore_diameter,
            frequency_hz=frequency,
            note=f"{NOTE_NAMES[pitch_class]}{octave}",
            note_frequency_hz=target,
            tuning_accuracy_percent=tuning_accuracy_percent(frequency, target),
            hole_size_mm=calculate_hole_size(frequency, bore_diameter),
        ))

    return holes


def taper_profile(
    params: InstrumentParameters,
    samples: int = TAPER_PROFILE_SAMPLES
) -> List[Tuple[float, float]]:
    """
    Sample the 2D bore profile from tip to base.

    Args:
        params: Instrument parameters
        samples: Number of points, including both ends (at least 2)

    Returns:
        List of (position_mm, bore_diameter_mm), first at 0, last at length
    """
    if samples < 2:
        raise ValueError(f"Taper profile needs at least 2 samples, got {samples}")

    length = params.length_mm
    step = length / (samples - 1)
    profile = []
    for i in range(samples):
        position = length if i == samples - 1 else step * i
        profile.append((
            position,
            bore_diameter_at(position, length, params.base_diameter_mm, params.tip_diameter_mm),
        ))
    return profile
