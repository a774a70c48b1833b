"""
Pytest configuration and shared fixtures for conicalbore tests.
"""

import json
import pytest

from conicalbore.io import InstrumentParameters
from conicalbore.calculator import calculate_tone_holes


# ─── Raw design dicts ────────────────────────────────────────────────────


def _default_document():
    """Default calculator design in its saved shape."""
    return {
        "length": 600,
        "baseDiameter": 20,
        "tipDiameter": 5,
        "wallThickness": 1,
        "toneHoles": 6,
    }


def _crowded_document():
    """Short, narrow bore with far too many holes."""
    return {
        "length": 200,
        "baseDiameter": 10,
        "tipDiameter": 1,
        "wallThickness": 1,
        "toneHoles": 30,
    }


@pytest.fixture
def default_document():
    return _default_document()


@pytest.fixture
def crowded_document():
    return _crowded_document()


# ─── Typed params ────────────────────────────────────────────────────────


@pytest.fixture
def default_params():
    return InstrumentParameters.model_validate(_default_document())


@pytest.fixture
def crowded_params():
    return InstrumentParameters.model_validate(_crowded_document())


@pytest.fixture
def default_holes(default_params):
    return calculate_tone_holes(default_params)


@pytest.fixture(scope="module")
def small_params():
    """Few holes and a short bore, quick to build as geometry."""
    return InstrumentParameters(
        length_mm=300.0,
        base_diameter_mm=20.0,
        tip_diameter_mm=10.0,
        wall_thickness_mm=2.0,
        tone_hole_count=3,
    )


# ─── Files ───────────────────────────────────────────────────────────────


@pytest.fixture
def design_file(tmp_path):
    """Default design saved to a temporary file."""
    path = tmp_path / "design.json"
    path.write_text(json.dumps(_default_document(), indent=2))
    return path


@pytest.fixture
def malformed_design_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not valid json")
    return path
