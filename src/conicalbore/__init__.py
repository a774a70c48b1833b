"""
Conicalbore - tone-hole calculator for conical wind instruments.

From a bore's length, end diameters and hole count to hole positions,
pitches and sizes, a printable STL and an audible preview of each hole.

Example:
    >>> from conicalbore.calculator import calculate_tone_holes
    >>> from conicalbore.core import BoreGeometry
    >>> from conicalbore.io import InstrumentParameters, save_design_json
    >>>
    >>> # Calculate tone holes
    >>> params = InstrumentParameters.defaults()
    >>> holes = calculate_tone_holes(params)
    >>>
    >>> # Generate 3D model
    >>> BoreGeometry(params, holes).export_stl("conical_instrument.stl")
    >>>
    >>> # Save design
    >>> save_design_json(params, "design.json")

Note: All imports are lazy-loaded for fast startup. The calculator can be
imported without triggering geometry (build123d) or audio (numpy) imports.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"OutputFormat", "StlEncoding"}

_CALCULATOR = {
    "calculate_tone_holes",
    "frequency_to_note_name",
    "note_name_to_frequency",
    "bore_diameter_at",
    "estimate_frequency",
    "taper_profile",
    "validate_design",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",
}

_IO = {
    "InstrumentParameters",
    "ToneHole",
    "DesignLoadError",
    "load_design_json",
    "save_design_json",
}

_CORE = {
    "BoreGeometry",
}

_AUDIO = {
    "synthesize_tone",
    "write_wav",
    "SoundDeviceTonePlayer",
}

_SESSION = {
    "DesignSession",
    "LocalFileStore",
}

_SOURCES = (
    (_ENUMS, "enums"),
    (_CALCULATOR, "calculator"),
    (_IO, "io"),
    (_CORE, "core"),
    (_AUDIO, "audio"),
    (_SESSION, "session"),
)

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    for names, module_name in _SOURCES:
        if name in names:
            if module_name not in _modules:
                from importlib import import_module
                _modules[module_name] = import_module(f".{module_name}", __name__)
            return getattr(_modules[module_name], name)

    raise AttributeError(f"module 'conicalbore' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "OutputFormat",
    "StlEncoding",

    # Calculator (lazy loaded from calculator)
    "calculate_tone_holes",
    "frequency_to_note_name",
    "note_name_to_frequency",
    "bore_diameter_at",
    "estimate_frequency",
    "taper_profile",
    "validate_design",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",

    # Models and IO (lazy loaded from io)
    "InstrumentParameters",
    "ToneHole",
    "DesignLoadError",
    "load_design_json",
    "save_design_json",

    # Geometry (lazy loaded from core)
    "BoreGeometry",

    # Audio (lazy loaded from audio)
    "synthesize_tone",
    "write_wav",
    "SoundDeviceTonePlayer",

    # Session (lazy loaded from session)
    "DesignSession",
    "LocalFileStore",
]
