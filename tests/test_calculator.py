"""
Tests for calculator module.
"""

import math
import pytest
from conicalbore.calculator import (
    calculate_tone_holes,
    frequency_to_note,
    frequency_to_note_name,
    note_frequency,
    parse_note_name,
    note_name_to_frequency,
    semitones_from_a4,
    bore_diameter_at,
    estimate_frequency,
    tuning_accuracy_percent,
    calculate_hole_size,
    taper_profile,
)
from conicalbore.calculator.core import _round_half_up
from conicalbore import InstrumentParameters, ToneHole


class TestDefaultInstrument:
    """Tone holes for the calculator's starting design (600mm, 20 -> 5mm, 6 holes)."""

    def test_hole_count(self, default_holes):
        assert len(default_holes) == 6
        assert all(isinstance(h, ToneHole) for h in default_holes)

    def test_indices_are_one_based(self, default_holes):
        assert [h.index for h in default_holes] == [1, 2, 3, 4, 5, 6]

    def test_positions_evenly_spaced(self, default_holes):
        for i, hole in enumerate(default_holes, start=1):
            assert hole.position_mm == pytest.approx(600 / 7 * i)

    def test_first_hole(self, default_holes):
        first = default_holes[0]

        assert first.position_mm == pytest.approx(85.714286, abs=1e-6)
        assert first.bore_diameter_mm == pytest.approx(7.142857, abs=1e-6)
        assert first.frequency_hz == pytest.approx(1000.416667, abs=1e-6)
        assert first.note == "B5"
        assert first.note_frequency_hz == pytest.approx(987.7666, abs=1e-3)
        assert first.tuning_accuracy_percent == 1.28
        assert first.hole_size_mm == 4.87

    def test_notes(self, default_holes):
        assert [h.note for h in default_holes] == ["B5", "B4", "E4", "B3", "G3", "E3"]

    def test_tuning(self, default_holes):
        assert [h.tuning_accuracy_percent for h in default_holes] == [
            1.28, 1.28, 1.17, 1.28, 2.08, 1.17
        ]

    def test_hole_sizes(self, default_holes):
        assert [h.hole_size_mm for h in default_holes] == [
            4.87, 3.17, 2.6, 2.31, 2.14, 2.03
        ]

    def test_frequencies_fall_along_bore(self, default_holes):
        freqs = [h.frequency_hz for h in default_holes]
        assert freqs == sorted(freqs, reverse=True)

    def test_bore_widens_along_bore(self, default_holes):
        bores = [h.bore_diameter_mm for h in default_holes]
        assert bores == sorted(bores)

    def test_positions_strictly_inside_bore(self, default_holes):
        for hole in default_holes:
            assert 0 < hole.position_mm < 600


class TestCalculateToneHoles:
    """Tests for calculate_tone_holes function."""

    def test_keyword_form_matches_model_form(self, default_params):
        by_model = calculate_tone_holes(default_params)
        by_keywords = calculate_tone_holes(
            length_mm=600, base_diameter_mm=20, tip_diameter_mm=5, tone_hole_count=6
        )
        assert by_model == by_keywords

    def test_pure(self, default_params):
        assert calculate_tone_holes(default_params) == calculate_tone_holes(default_params)

    def test_wall_thickness_ignored(self, default_params):
        thick = default_params.model_copy(update={"wall_thickness_mm": 4.0})
        assert calculate_tone_holes(thick) == calculate_tone_holes(default_params)

    def test_count_matches_request(self):
        for count in (1, 2, 10, 30):
            holes = calculate_tone_holes(
                length_mm=800, base_diameter_mm=30, tip_diameter_mm=8, tone_hole_count=count
            )
            assert len(holes) == count

    def test_zero_holes_returns_empty(self):
        holes = calculate_tone_holes(
            length_mm=600, base_diameter_mm=20, tip_diameter_mm=5, tone_hole_count=0
        )
        assert holes == []

    def test_negative_count_returns_empty(self):
        holes = calculate_tone_holes(
            length_mm=600, base_diameter_mm=20, tip_diameter_mm=5, tone_hole_count=-3
        )
        assert holes == []

    def test_non_positive_length_raises(self):
        with pytest.raises(ValueError, match="length"):
            calculate_tone_holes(
                length_mm=0, base_diameter_mm=20, tip_diameter_mm=5, tone_hole_count=6
            )

    def test_missing_keywords_raise(self):
        with pytest.raises(TypeError, match="tone_hole_count"):
            calculate_tone_holes(length_mm=600, base_diameter_mm=20, tip_diameter_mm=5)

    def test_single_hole_at_midpoint(self):
        holes = calculate_tone_holes(
            length_mm=400, base_diameter_mm=20, tip_diameter_mm=10, tone_hole_count=1
        )
        assert len(holes) == 1
        assert holes[0].position_mm == pytest.approx(200)
        assert holes[0].bore_diameter_mm == pytest.approx(15)

    def test_cylindrical_bore(self):
        holes = calculate_tone_holes(
            length_mm=500, base_diameter_mm=12, tip_diameter_mm=12, tone_hole_count=4
        )
        assert all(h.bore_diameter_mm == pytest.approx(12) for h in holes)

    def test_sharp_note_has_exact_frequency(self):
        """Sharps get a real target frequency, not NaN."""
        holes = calculate_tone_holes(
            length_mm=368, base_diameter_mm=20, tip_diameter_mm=5, tone_hole_count=1
        )
        hole = holes[0]

        assert hole.note == "A#4"
        assert hole.note_frequency_hz == pytest.approx(466.1638, abs=1e-3)
        assert hole.tuning_accuracy_percent == 0.03
        assert not math.isnan(hole.tuning_accuracy_percent)

    def test_hole_on_exact_note_has_zero_tuning(self):
        # Single hole at 343000/1760 mm sounds exactly A4
        holes = calculate_tone_holes(
            length_mm=343000 / 880, base_diameter_mm=20, tip_diameter_mm=5, tone_hole_count=1
        )
        hole = holes[0]

        assert hole.frequency_hz == pytest.approx(440.0)
        assert hole.note == "A4"
        assert hole.note_frequency_hz == pytest.approx(440.0)
        assert hole.tuning_accuracy_percent == 0.0

    def test_tuning_is_error_from_nearest_note(self, default_holes):
        for hole in default_holes:
            exact = note_frequency(*frequency_to_note(hole.frequency_hz))
            assert hole.note_frequency_hz == pytest.approx(exact)
            assert hole.tuning_accuracy_percent == tuning_accuracy_percent(hole.frequency_hz, exact)

    def test_every_hole_has_finite_tuning(self):
        holes = calculate_tone_holes(
            length_mm=1000, base_diameter_mm=50, tip_diameter_mm=1, tone_hole_count=30
        )
        for hole in holes:
            assert math.isfinite(hole.note_frequency_hz)
            assert 0 <= hole.tuning_accuracy_percent <= 3.0

    def test_hole_size_never_below_minimum(self):
        holes = calculate_tone_holes(
            length_mm=1000, base_diameter_mm=2, tip_diameter_mm=1, tone_hole_count=10
        )
        assert all(h.hole_size_mm >= 1.0 for h in holes)


class TestNoteNaming:
    """Tests for equal-tempered note naming."""

    def test_a4(self):
        assert frequency_to_note_name(440.0) == "A4"
        assert frequency_to_note(440.0) == (9, 4)

    def test_c5(self):
        assert frequency_to_note_name(523.25) == "C5"

    @pytest.mark.parametrize("freq", [440.0, 880.0, 261.6255653005986])
    def test_exact_note_has_zero_tuning(self, freq):
        exact = note_frequency(*frequency_to_note(freq))
        assert exact == pytest.approx(freq)
        assert tuning_accuracy_percent(freq, exact) == 0.0

    def test_lowest_a(self):
        assert frequency_to_note_name(27.5) == "A0"

    def test_octave_boundary(self):
        """B4 and C5 are adjacent but in different octaves."""
        assert frequency_to_note_name(493.88) == "B4"
        assert frequency_to_note_name(523.25) == "C5"

    def test_below_c0(self):
        assert frequency_to_note_name(15.0) == "B-1"

    def test_sharp(self):
        assert frequency_to_note_name(466.16) == "A#4"

    def test_semitones_from_a4(self):
        assert semitones_from_a4(880.0) == pytest.approx(12.0)
        assert semitones_from_a4(220.0) == pytest.approx(-12.0)

    def test_round_half_up(self):
        assert _round_half_up(2.5) == 3
        assert _round_half_up(-0.5) == 0
        assert _round_half_up(-1.5) == -1
        assert _round_half_up(0.49) == 0

    def test_note_frequency(self):
        assert note_frequency(9, 4) == pytest.approx(440.0)
        assert note_frequency(0, 4) == pytest.approx(261.6256, abs=1e-3)
        assert note_frequency(10, 4) == pytest.approx(466.1638, abs=1e-3)

    def test_parse_note_name(self):
        assert parse_note_name("C4") == (0, 4)
        assert parse_note_name("C#4") == (1, 4)
        assert parse_note_name("A-1") == (9, -1)
        assert parse_note_name(" g#3 ") == (8, 3)

    @pytest.mark.parametrize("name", ["", "H4", "C", "C#", "4C", "Cb4"])
    def test_parse_invalid_note_name(self, name):
        with pytest.raises(ValueError):
            parse_note_name(name)

    def test_note_name_to_frequency(self):
        assert note_name_to_frequency("A4") == pytest.approx(440.0)
        assert note_name_to_frequency("A5") == pytest.approx(880.0)

    @pytest.mark.parametrize("freq", [30.0, 100.0, 261.0, 440.0, 1000.42, 5000.0])
    def test_nearest_note_within_half_semitone(self, freq):
        exact = note_name_to_frequency(frequency_to_note_name(freq))
        assert abs(semitones_from_a4(freq) - semitones_from_a4(exact)) <= 0.5 + 1e-9


class TestLowLevelFunctions:
    """Tests for the individual formulas."""

    def test_bore_diameter_at_ends(self):
        assert bore_diameter_at(0, 600, 20, 5) == pytest.approx(5)
        assert bore_diameter_at(600, 600, 20, 5) == pytest.approx(20)

    def test_bore_diameter_at_middle(self):
        assert bore_diameter_at(300, 600, 20, 5) == pytest.approx(12.5)

    def test_estimate_frequency(self):
        # 4 × 85.75mm = 343mm, one wavelength of 1kHz
        assert estimate_frequency(85.75) == pytest.approx(1000.0)

    def test_estimate_frequency_inverse_to_length(self):
        assert estimate_frequency(200) == pytest.approx(estimate_frequency(100) / 2)

    def test_tuning_accuracy_percent(self):
        assert tuning_accuracy_percent(450, 440) == 2.27
        assert tuning_accuracy_percent(430, 440) == 2.27
        assert tuning_accuracy_percent(440, 440) == 0.0

    def test_hole_size(self):
        assert calculate_hole_size(880, 10) == pytest.approx(6.0)

    def test_hole_size_floor(self):
        assert calculate_hole_size(100, 2) == 1.0


class TestTaperProfile:
    """Tests for taper_profile function."""

    def test_endpoints(self, default_params):
        profile = taper_profile(default_params)
        assert profile[0] == (0.0, pytest.approx(5.0))
        assert profile[-1][0] == 600
        assert profile[-1][1] == pytest.approx(20.0)

    def test_sample_count(self, default_params):
        assert len(taper_profile(default_params)) == 50
        assert len(taper_profile(default_params, samples=2)) == 2

    def test_linear(self, default_params):
        profile = taper_profile(default_params, samples=7)
        for position, diameter in profile:
            assert diameter == pytest.approx(5 + 15 * position / 600)

    def test_too_few_samples(self, default_params):
        with pytest.raises(ValueError):
            taper_profile(default_params, samples=1)


class TestInstrumentParameters:
    """Tests for the parameter model."""

    def test_defaults(self):
        params = InstrumentParameters.defaults()
        assert params.length_mm == 600
        assert params.base_diameter_mm == 20
        assert params.tip_diameter_mm == 5
        assert params.wall_thickness_mm == 1
        assert params.tone_hole_count == 6

    def test_accepts_json_keys_and_attribute_names(self, default_document):
        by_alias = InstrumentParameters.model_validate(default_document)
        by_name = InstrumentParameters(
            length_mm=600, base_diameter_mm=20, tip_diameter_mm=5,
            wall_thickness_mm=1, tone_hole_count=6
        )
        assert by_alias == by_name

    def test_frozen(self, default_params):
        with pytest.raises(Exception):
            default_params.length_mm = 100

    @pytest.mark.parametrize("field,value", [
        ("length", 0),
        ("length", -10),
        ("baseDiameter", 0),
        ("tipDiameter", -1),
        ("wallThickness", 0),
        ("toneHoles", -1),
        ("toneHoles", 2.5),
        ("length", float("nan")),
        ("length", True),
        ("toneHoles", True),
    ])
    def test_rejects_invalid_values(self, default_document, field, value):
        default_document[field] = value
        with pytest.raises(ValueError):
            InstrumentParameters.model_validate(default_document)
