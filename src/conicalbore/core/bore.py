"""
Conical bore geometry generation using build123d.

Creates a printable instrument body: a hollow truncated cone with the tone
holes drilled radially through the wall.

Coordinate system:
- Bore axis along Z
- Tip (narrow) end at Z=0, base (wide) end at Z=length
- Tone holes drilled along +X, through one wall only
"""

import logging
from typing import Optional, Sequence

from build123d import Part, Cone, Cylinder, Align, Pos, Rot

from ..io import InstrumentParameters, ToneHole
from ..calculator.constants import BORE_CUT_MARGIN_MM
from ..calculator.core import calculate_tone_holes, bore_diameter_at
from .geometry_base import BaseGeometry

logger = logging.getLogger(__name__)

# Smallest radius passed to OCC; a zero radius cone degenerates to a point
_MIN_RADIUS_MM = 0.01


class BoreGeometry(BaseGeometry):
    """
    Generates 3D geometry for a conical instrument body.

    The inner surface follows the calculator's bore taper exactly; the outer
    surface is offset radially by the wall thickness.
    """

    _part_name = "instrument"

    def __init__(
        self,
        params: InstrumentParameters,
        holes: Optional[Sequence[ToneHole]] = None
    ):
        """
        Initialize bore geometry generator.

        Args:
            params: Instrument parameters
            holes: Tone holes to drill (calculated from params if omitted)
        """
        self.params = params
        self.holes = list(calculate_tone_holes(params) if holes is None else holes)

        # Cache for built geometry (avoids rebuilding on export)
        self._part = None

    def _inner_radius_at(self, z: float) -> float:
        """Bore radius at z, extrapolated linearly past either end."""
        p = self.params
        diameter = bore_diameter_at(z, p.length_mm, p.base_diameter_mm, p.tip_diameter_mm)
        return max(_MIN_RADIUS_MM, diameter / 2)

    def _create_body(self) -> Part:
        p = self.params
        wall = p.wall_thickness_mm

        outer = Cone(
            bottom_radius=p.tip_diameter_mm / 2 + wall,
            top_radius=p.base_diameter_mm / 2 + wall,
            height=p.length_mm,
            align=(Align.CENTER, Align.CENTER, Align.MIN),
        )

        # Overshoot both ends so the bore opens cleanly
        z_start = -BORE_CUT_MARGIN_MM
        z_end = p.length_mm + BORE_CUT_MARGIN_MM
        inner = Pos(0, 0, z_start) * Cone(
            bottom_radius=self._inner_radius_at(z_start),
            top_radius=self._inner_radius_at(z_end),
            height=z_end - z_start,
            align=(Align.CENTER, Align.CENTER, Align.MIN),
        )

        return outer - inner

    def _create_hole_cutter(self, hole: ToneHole) -> Part:
        """Cylinder from the axis out through the +X wall at the hole position."""
        p = self.params
        outer_radius = bore_diameter_at(
            hole.position_mm, p.length_mm, p.base_diameter_mm, p.tip_diameter_mm
        ) / 2 + p.wall_thickness_mm

        cutter = Cylinder(
            radius=hole.hole_size_mm / 2,
            height=outer_radius + BORE_CUT_MARGIN_MM,
            align=(Align.CENTER, Align.CENTER, Align.MIN),
        )
        return Pos(0, 0, hole.position_mm) * Rot(0, 90, 0) * cutter

    def build(self) -> Part:
        """
        Build the complete instrument body.

        Returns:
            build123d Part object ready for export
        """
        if self._part is not None:
            return self._part

        logger.info(
            f"Building bore: length={self.params.length_mm}mm, "
            f"{self.params.tip_diameter_mm}->{self.params.base_diameter_mm}mm, "
            f"{len(self.holes)} holes"
        )

        body = self._create_body()
        for hole in self.holes:
            body = body - self._create_hole_cutter(hole)

        self._part = body
        return self._part
