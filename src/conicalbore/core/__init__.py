"""
Conicalbore Core - 3D geometry generation engine.

Builds the instrument body with build123d. The calculator does not import
this package, so it runs without build123d installed.

Example:
    >>> from conicalbore.core import BoreGeometry
    >>> from conicalbore.io import InstrumentParameters
    >>>
    >>> bore = BoreGeometry(InstrumentParameters.defaults())
    >>> bore.build()
    >>> bore.export_stl("conical_instrument.stl")
"""

from .geometry_base import BaseGeometry
from .bore import BoreGeometry

__all__ = [
    "BaseGeometry",
    "BoreGeometry",
]
