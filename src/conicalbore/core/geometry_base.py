"""
Base class for conicalbore geometry classes.

Provides shared export methods used by BoreGeometry.
"""

import logging

logger = logging.getLogger(__name__)


class BaseGeometry:
    """Base class providing shared export methods for geometry classes.

    Subclasses must:
    - Set self._part = None in __init__
    - Implement build() -> Part
    - Set _part_name class attribute for log messages
    """

    _part_name: str = "part"

    def export_step(self, filepath: str):
        """Export to STEP file (builds if not already built)."""
        if self._part is None:
            self.build()

        from build123d import export_step as b3d_export_step

        logger.info(f"Exporting {self._part_name}: volume={self._part.volume:.2f} mm³")
        b3d_export_step(self._part, filepath)
        logger.info(f"Exported {self._part_name} to {filepath}")

    def export_stl(self, filepath: str, ascii: bool = True):
        """Export to STL file (builds if not already built).

        Args:
            filepath: Output path
            ascii: Write ASCII STL (default) instead of binary
        """
        if self._part is None:
            self.build()

        from build123d import export_stl as b3d_export_stl
        from ..calculator.constants import STL_LINEAR_TOLERANCE_MM, STL_ANGULAR_TOLERANCE_RAD

        ok = b3d_export_stl(
            self._part, filepath,
            tolerance=STL_LINEAR_TOLERANCE_MM,
            angular_tolerance=STL_ANGULAR_TOLERANCE_RAD,
            ascii_format=ascii,
        )
        if ok is False:
            raise RuntimeError(f"STL export of {self._part_name} to {filepath} failed")
        logger.info(f"Exported {self._part_name} to {filepath}")
