"""
Shared export and packaging logic for conical instrument geometry.

Used by the CLI (generate.py) and the design session to produce identical
output: STL, optional STEP, design.json and design.md.
"""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from build123d import Part, export_step, export_stl

from .loaders import InstrumentParameters, ToneHole

logger = logging.getLogger(__name__)


def export_part_step(part: Part, name: str = "part") -> bytes:
    """Export Part to STEP bytes.

    Args:
        part: build123d Part to export.
        name: Label for log messages.

    Returns:
        STEP file contents as bytes.
    """
    with tempfile.NamedTemporaryFile(suffix=".step", delete=False) as tmp:
        tmp_path = Path(tmp.name)

    try:
        export_step(part, str(tmp_path))
        data = tmp_path.read_bytes()
        logger.info(f"Exported {name} STEP ({len(data)} bytes)")
        return data
    finally:
        tmp_path.unlink(missing_ok=True)


def export_part_stl(part: Part, ascii: bool = True) -> bytes:
    """Export Part to STL bytes (ASCII by default)."""
    # Lazy import to avoid circular dependency (io -> calculator -> io)
    from ..calculator.constants import STL_LINEAR_TOLERANCE_MM, STL_ANGULAR_TOLERANCE_RAD

    with tempfile.NamedTemporaryFile(suffix=".stl", delete=False) as tmp:
        tmp_path = Path(tmp.name)

    try:
        ok = export_stl(
            part,
            str(tmp_path),
            tolerance=STL_LINEAR_TOLERANCE_MM,
            angular_tolerance=STL_ANGULAR_TOLERANCE_RAD,
            ascii_format=ascii,
        )
        if ok is False:
            raise RuntimeError("STL export failed")
        return tmp_path.read_bytes()
    finally:
        tmp_path.unlink(missing_ok=True)


class Build123dMeshExporter:
    """Mesh exporter for the design session, backed by BoreGeometry."""

    def __init__(self, ascii: bool = True):
        self.ascii = ascii

    def export(self, params: InstrumentParameters, holes: Sequence[ToneHole]) -> bytes:
        from ..core.bore import BoreGeometry

        part = BoreGeometry(params, holes).build()
        return export_part_stl(part, ascii=self.ascii)


@dataclass
class PackageFiles:
    """Container for all output files from geometry generation."""

    instrument_stl: Optional[bytes] = None
    instrument_step: Optional[bytes] = None
    design_json: Optional[str] = None
    design_md: Optional[str] = None


def generate_package(
    params: InstrumentParameters,
    part: Optional[Part] = None,
    holes: Optional[Sequence[ToneHole]] = None,
    include_stl: bool = True,
    include_step: bool = False,
    ascii: bool = True,
    validation=None,
    log: Optional[Callable[[str], None]] = None,
) -> PackageFiles:
    """Generate all output files for an instrument design.

    Args:
        params: Instrument parameters.
        part: Built instrument Part (built from params when a mesh is
            requested and this is None).
        holes: Tone holes for params (calculated if omitted).
        include_stl: Generate the STL mesh (default True).
        include_step: Generate a STEP file (default False).
        ascii: Write ASCII STL rather than binary.
        validation: Optional ValidationResult for design.json/md output.
        log: Optional logging callback (e.g. print).

    Returns:
        PackageFiles with all generated file data.
    """
    # Lazy import to avoid circular dependency (io -> calculator -> io)
    from ..calculator.core import calculate_tone_holes
    from ..calculator.output import to_json, to_markdown

    files = PackageFiles()

    def _log(msg: str):
        if log:
            log(msg)

    if holes is None:
        holes = calculate_tone_holes(params)

    if part is None and (include_stl or include_step):
        from ..core.bore import BoreGeometry

        _log("Building instrument geometry...")
        part = BoreGeometry(params, holes).build()

    if include_stl:
        _log("Exporting instrument STL...")
        files.instrument_stl = export_part_stl(part, ascii=ascii)
        _log(f"  STL: {len(files.instrument_stl) / 1024:.1f} KB")

    if include_step:
        _log("Exporting instrument STEP...")
        files.instrument_step = export_part_step(part, "instrument")
        _log(f"  STEP: {len(files.instrument_step) / 1024:.1f} KB")

    _log("Generating design.json and design.md...")
    files.design_json = to_json(params, holes, validation=validation)
    files.design_md = to_markdown(params, holes, validation=validation)

    return files


def save_package_to_dir(
    files: PackageFiles,
    output_dir: Path,
    basename: Optional[str] = None,
) -> list[Path]:
    """Write all PackageFiles to a directory with standard naming.

    Args:
        files: PackageFiles from generate_package().
        output_dir: Directory to write files into (created if needed).
        basename: Mesh file stem (default: conical_instrument).

    Returns:
        List of Paths written.
    """
    from ..calculator.constants import DEFAULT_EXPORT_BASENAME

    stem = basename or DEFAULT_EXPORT_BASENAME
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    file_map = {
        f"{stem}.stl": files.instrument_stl,
        f"{stem}.step": files.instrument_step,
    }

    for name, data in file_map.items():
        if data is not None:
            path = output_dir / name
            path.write_bytes(data)
            written.append(path)

    if files.design_json is not None:
        path = output_dir / "design.json"
        path.write_text(files.design_json, encoding="utf-8")
        written.append(path)

    if files.design_md is not None:
        path = output_dir / "design.md"
        path.write_text(files.design_md, encoding="utf-8")
        written.append(path)

    return written
