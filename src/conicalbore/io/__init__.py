"""
Conicalbore IO - design models, JSON schema and loaders.

This module handles JSON serialization/deserialization of designs.
Mesh export lives in conicalbore.io.package (requires build123d) and is not
imported here, so the calculator works with only Pydantic installed.

Example:
    >>> from conicalbore.io import InstrumentParameters, load_design_json, save_design_json
    >>>
    >>> params = InstrumentParameters.defaults()
    >>>
    >>> # Save to JSON
    >>> save_design_json(params, "design.json")
    >>>
    >>> # Load back
    >>> loaded = load_design_json("design.json")
"""

from .loaders import (
    DesignLoadError,
    InstrumentParameters,
    ToneHole,
    parse_design,
    loads_design,
    dumps_design,
    load_design_json,
    save_design_json,
)

from .schema import (
    SCHEMA_VERSION,
    get_design_schema,
    validate_json_schema,
)

__all__ = [
    # Models
    "InstrumentParameters",
    "ToneHole",

    # Loaders
    "DesignLoadError",
    "parse_design",
    "loads_design",
    "dumps_design",
    "load_design_json",
    "save_design_json",

    # Schema
    "SCHEMA_VERSION",
    "get_design_schema",
    "validate_json_schema",
]
