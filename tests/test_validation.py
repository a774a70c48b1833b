"""
Tests for validation module.
"""

import pytest
from conicalbore.calculator import (
    calculate_tone_holes,
    validate_design,
    Severity,
    ValidationResult,
)
from conicalbore.io import InstrumentParameters


def _codes(result: ValidationResult):
    return [m.code for m in result.messages]


def _params(**changes):
    return InstrumentParameters.defaults().model_copy(update=changes)


class TestValidateDesign:
    """Tests for validate_design function."""

    def test_default_design_is_clean(self, default_params):
        result = validate_design(default_params)

        assert result.valid is True
        assert result.messages == []

    def test_accepts_precalculated_holes(self, default_params, default_holes):
        assert validate_design(default_params, default_holes) == validate_design(default_params)

    def test_crowded_design_overlaps(self, crowded_params):
        result = validate_design(crowded_params)

        assert result.valid is False
        assert "HOLES_OVERLAP" in _codes(result)
        assert "HOLE_LARGER_THAN_BORE" in _codes(result)
        assert all(m.code == "HOLES_OVERLAP" for m in result.errors)

    def test_never_raises_for_extreme_values(self):
        result = validate_design(_params(length_mm=5000.0, tone_hole_count=200))
        assert isinstance(result, ValidationResult)


class TestRangeChecks:
    """Slider ranges are advisory: warnings, never errors."""

    @pytest.mark.parametrize("changes,code", [
        ({"length_mm": 150.0}, "LENGTH_OUT_OF_RANGE"),
        ({"length_mm": 1200.0}, "LENGTH_OUT_OF_RANGE"),
        ({"base_diameter_mm": 60.0}, "BASE_DIAMETER_OUT_OF_RANGE"),
        ({"tip_diameter_mm": 0.5}, "TIP_DIAMETER_OUT_OF_RANGE"),
        ({"wall_thickness_mm": 6.0}, "WALL_THICKNESS_OUT_OF_RANGE"),
        ({"tone_hole_count": 31}, "TONE_HOLES_OUT_OF_RANGE"),
    ])
    def test_out_of_range(self, changes, code):
        result = validate_design(_params(**changes))

        matching = [m for m in result.messages if m.code == code]
        assert len(matching) == 1
        assert matching[0].severity == Severity.WARNING
        assert matching[0].suggestion

    def test_range_edges_are_inside(self):
        result = validate_design(_params(length_mm=1000.0, wall_thickness_mm=5.0))
        assert "LENGTH_OUT_OF_RANGE" not in _codes(result)
        assert "WALL_THICKNESS_OUT_OF_RANGE" not in _codes(result)

    def test_zero_holes_is_info_not_range_warning(self):
        result = validate_design(_params(tone_hole_count=0))

        assert _codes(result) == ["NO_TONE_HOLES"]
        assert result.infos[0].severity == Severity.INFO
        assert result.valid is True


class TestGeometryChecks:
    """Taper, wall and hole fit."""

    def test_tip_wider_than_base(self):
        result = validate_design(_params(tip_diameter_mm=18.0, base_diameter_mm=12.0))

        assert "TIP_WIDER_THAN_BASE" in _codes(result)
        assert result.valid is True

    def test_thin_wall(self):
        result = validate_design(_params(wall_thickness_mm=0.6))

        assert _codes(result) == ["WALL_THIN"]
        assert result.messages[0].severity == Severity.INFO

    def test_wall_at_threshold_not_thin(self):
        assert "WALL_THIN" not in _codes(validate_design(_params(wall_thickness_mm=1.0)))

    def test_hole_larger_than_bore(self):
        params = _params(
            length_mm=200.0, tip_diameter_mm=1.0, base_diameter_mm=10.0, tone_hole_count=10
        )
        holes = calculate_tone_holes(params)
        result = validate_design(params, holes)

        oversize = [h for h in holes if h.hole_size_mm > h.bore_diameter_mm]
        flagged = [m for m in result.messages if m.code == "HOLE_LARGER_THAN_BORE"]
        assert len(flagged) == len(oversize) > 0
        assert all(m.severity == Severity.WARNING for m in flagged)


class TestTuningCheck:
    """Holes close to half a semitone from their note are reported."""

    def test_out_of_tune_hole(self):
        # Single hole at 189.5mm sounds ~452.5Hz, almost a quarter tone above A4
        params = _params(length_mm=379.0, tone_hole_count=1)
        holes = calculate_tone_holes(params)
        result = validate_design(params, holes)

        assert holes[0].note == "A4"
        assert holes[0].tuning_accuracy_percent == 2.84
        assert "HOLE_OUT_OF_TUNE" in _codes(result)
        assert result.valid is True

    def test_in_tune_hole(self):
        params = _params(length_mm=368.0, tone_hole_count=1)
        assert "HOLE_OUT_OF_TUNE" not in _codes(validate_design(params))


class TestValidationResult:
    """Tests for the result container."""

    def test_severity_partitions(self, crowded_params):
        result = validate_design(crowded_params)
        total = len(result.errors) + len(result.warnings) + len(result.infos)
        assert total == len(result.messages)

    def test_severity_values(self):
        assert Severity.ERROR.value == "error"
        assert Severity.WARNING.value == "warning"
        assert Severity.INFO.value == "info"
