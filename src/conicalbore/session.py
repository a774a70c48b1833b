"""
Interactive design session.

Holds the current instrument parameters and keeps the calculated tone holes
and validation in step with them. Every change recomputes everything and
notifies subscribers, so a front-end only has to re-render from the session.

File access, mesh export and audio go through small Protocol interfaces so
the session can run headless or under test with stand-ins.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Union

from .calculator.core import calculate_tone_holes
from .calculator.validation import ValidationResult, validate_design
from .io import DesignLoadError, InstrumentParameters, ToneHole, dumps_design, loads_design

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileStore(Protocol):
    """Where saved designs and exported meshes go."""

    def read_text(self, path: PathLike) -> str:
        ...

    def write_text(self, path: PathLike, text: str) -> None:
        ...

    def write_bytes(self, path: PathLike, data: bytes) -> None:
        ...


class MeshExporter(Protocol):
    """Turns a design into printable mesh bytes."""

    def export(self, params: InstrumentParameters, holes: Sequence[ToneHole]) -> bytes:
        ...


class TonePlayer(Protocol):
    """Plays a single sine tone without blocking."""

    def play(self, frequency_hz: float) -> None:
        ...

    def stop(self) -> None:
        ...


class LocalFileStore:
    """FileStore on the local filesystem."""

    def read_text(self, path: PathLike) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: PathLike, text: str) -> None:
        Path(path).write_text(text, encoding="utf-8")

    def write_bytes(self, path: PathLike, data: bytes) -> None:
        Path(path).write_bytes(data)


def _field_names() -> Dict[str, str]:
    """Map both attribute names and JSON keys to attribute names."""
    names = {}
    for attribute, info in InstrumentParameters.model_fields.items():
        names[attribute] = attribute
        if info.alias:
            names[info.alias] = attribute
    return names


Listener = Callable[["DesignSession"], None]


class DesignSession:
    """
    Current design plus derived results.

    Args:
        params: Starting design (defaults if omitted)
        file_store: Backing store for save/load/export (local files if omitted)
        mesh_exporter: STL generator (build123d, created on first export)
        tone_player: Audio output (sounddevice, created on first play)
        on_error: Called with a user-facing message when load or playback fails
    """

    def __init__(
        self,
        params: Optional[InstrumentParameters] = None,
        file_store: Optional[FileStore] = None,
        mesh_exporter: Optional[MeshExporter] = None,
        tone_player: Optional[TonePlayer] = None,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        self._file_store = file_store or LocalFileStore()
        self._mesh_exporter = mesh_exporter
        self._tone_player = tone_player
        self._on_error = on_error
        self._listeners: List[Listener] = []

        self._params = params or InstrumentParameters.defaults()
        self._holes: List[ToneHole] = []
        self._validation = ValidationResult(valid=True)
        self._recompute()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> InstrumentParameters:
        return self._params

    @property
    def tone_holes(self) -> List[ToneHole]:
        return list(self._holes)

    @property
    def validation(self) -> ValidationResult:
        return self._validation

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Call callback after every recompute. Returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _recompute(self) -> None:
        self._holes = calculate_tone_holes(self._params)
        self._validation = validate_design(self._params, self._holes)
        for listener in list(self._listeners):
            listener(self)

    def _set_params(self, params: InstrumentParameters) -> None:
        self._params = params
        self._recompute()

    def update(self, **changes) -> InstrumentParameters:
        """
        Change one or more parameters and recompute.

        Keys may be attribute names (length_mm) or JSON keys (length).

        Raises:
            TypeError: For an unknown parameter name
            pydantic.ValidationError: For an invalid value; state is unchanged
        """
        names = _field_names()
        values = self._params.model_dump()
        for key, value in changes.items():
            if key not in names:
                raise TypeError(f"Unknown instrument parameter: {key!r}")
            values[names[key]] = value

        self._set_params(InstrumentParameters.model_validate(values))
        return self._params

    def reset(self) -> None:
        """Return to the default design."""
        self._set_params(InstrumentParameters.defaults())

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _report(self, message: str) -> None:
        if self._on_error is not None:
            self._on_error(message)

    def save(self, path: PathLike) -> None:
        """Write the current parameters as a design document."""
        self._file_store.write_text(path, dumps_design(self._params))
        logger.info(f"Saved design to {path}")

    def load(self, path: PathLike) -> bool:
        """
        Replace the parameters with a saved design.

        Returns:
            True on success. On failure the error is logged and passed to
            on_error, and the current design is kept.
        """
        try:
            params = loads_design(self._file_store.read_text(path))
        except (DesignLoadError, OSError) as e:
            message = f"Error loading design: {e}"
            logger.error(message)
            self._report(message)
            return False

        self._set_params(params)
        logger.info(f"Loaded design from {path}")
        return True

    # ------------------------------------------------------------------
    # Export and audio
    # ------------------------------------------------------------------

    def export_stl(self, path: PathLike) -> None:
        """Mesh the current design and write it to path."""
        if self._mesh_exporter is None:
            from .io.package import Build123dMeshExporter
            self._mesh_exporter = Build123dMeshExporter()

        data = self._mesh_exporter.export(self._params, self._holes)
        self._file_store.write_bytes(path, data)
        logger.info(f"Exported STL to {path} ({len(data)} bytes)")

    def play_frequency(self, frequency_hz: float) -> bool:
        """Play a tone; returns False (and reports) if the audio device fails."""
        if self._tone_player is None:
            from .audio.tone import SoundDeviceTonePlayer
            self._tone_player = SoundDeviceTonePlayer()

        try:
            self._tone_player.play(frequency_hz)
        except Exception as e:
            message = f"Could not play tone: {e}"
            logger.warning(message)
            self._report(message)
            return False
        return True

    def play(self, hole_index: int) -> bool:
        """
        Play the estimated frequency of a hole.

        Args:
            hole_index: 1-based hole index, as in ToneHole.index

        Raises:
            IndexError: If there is no such hole
        """
        if not 1 <= hole_index <= len(self._holes):
            raise IndexError(
                f"Hole {hole_index} out of range (design has {len(self._holes)} holes)"
            )
        return self.play_frequency(self._holes[hole_index - 1].frequency_hz)
