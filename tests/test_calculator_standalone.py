"""Tests to verify the calculator works without geometry or audio dependencies.

The web interface (Pyodide) loads only the calculator; build123d and
sounddevice are not available there. The calculator must never import from
conicalbore.core or conicalbore.audio.
"""

import subprocess
import sys
import textwrap


def _run_isolated(code: str) -> subprocess.CompletedProcess:
    """Run code in a fresh interpreter with build123d, numpy and sounddevice blocked."""
    prelude = textwrap.dedent("""
        import sys
        for name in ("build123d", "numpy", "sounddevice"):
            sys.modules[name] = None
    """)
    return subprocess.run(
        [sys.executable, "-c", prelude + textwrap.dedent(code)],
        capture_output=True,
        text=True
    )


def test_calculator_imports_without_geometry():
    result = _run_isolated("""
        from conicalbore.calculator import calculate_tone_holes
        from conicalbore.io import InstrumentParameters
        holes = calculate_tone_holes(InstrumentParameters.defaults())
        assert len(holes) == 6
    """)
    assert result.returncode == 0, result.stderr


def test_js_bridge_without_geometry():
    result = _run_isolated("""
        import json
        from conicalbore.calculator.js_bridge import calculate
        output = json.loads(calculate('{"toneHoles": 4}'))
        assert output["success"], output
        assert len(output["tone_holes"]) == 4
    """)
    assert result.returncode == 0, result.stderr


def test_top_level_lazy_imports():
    result = _run_isolated("""
        import conicalbore
        assert conicalbore.calculate_tone_holes is not None
        assert conicalbore.InstrumentParameters.defaults().tone_hole_count == 6
        assert "conicalbore.core" not in sys.modules
        assert "conicalbore.audio" not in sys.modules
    """)
    assert result.returncode == 0, result.stderr


def test_unknown_top_level_name():
    result = _run_isolated("""
        import conicalbore
        try:
            conicalbore.no_such_thing
        except AttributeError:
            pass
        else:
            raise SystemExit(1)
    """)
    assert result.returncode == 0, result.stderr
