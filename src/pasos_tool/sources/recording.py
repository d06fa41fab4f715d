"""Lectura de grabaciones CSV del acelerometro (timestamp, x, y, z)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from pasos_tool.config import get_logger
from pasos_tool.rollover import LOCAL_TZ
from pasos_tool.sources.base import SampleSource, SourcePaths

logger = get_logger()

REQUIRED_COLUMNS: tuple[str, ...] = ("timestamp", "x", "y", "z")


@dataclass(frozen=True)
class RecordingPaths(SourcePaths):
    """Paths for accelerometer recordings."""

    # root: folder containing *.csv recordings


class RecordingSource(SampleSource):
    """Recorded accelerometer samples, one CSV per session."""

    def __init__(self, paths: RecordingPaths) -> None:
        self._paths = paths

    def validate(self) -> None:
        """Validate that the recordings directory exists."""
        if not self._paths.root.exists():
            raise FileNotFoundError(str(self._paths.root))

    def recording_files(self) -> list[Path]:
        """Return the CSV recordings sorted by name."""
        files = sorted(self._paths.root.glob("*.csv"))
        if not files:
            raise FileNotFoundError(f"No hay grabaciones *.csv en {self._paths.root}")
        return files

    def load_samples(self, csv_paths: list[Path]) -> pd.DataFrame:
        """Load and merge recordings.

        Timestamps are converted to naive local wall time so that grouping by
        date matches the device calendar.

        Returns DataFrame columns:
            timestamp, x, y, z

        Raises:
            ValueError: If a recording lacks one of the required columns.
        """
        frames = [_read_recording(path) for path in csv_paths]
        frames = [frame for frame in frames if not frame.empty]
        if not frames:
            return pd.DataFrame(columns=list(REQUIRED_COLUMNS))
        out = pd.concat(frames, ignore_index=True)
        return out.sort_values("timestamp", kind="stable").reset_index(drop=True)


def _read_recording(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path)
    df = df.rename(columns={c: c.strip().lower() for c in df.columns})
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"{path.name}: faltan columnas {missing}")

    out = df.loc[:, list(REQUIRED_COLUMNS)].copy()
    out["timestamp"] = _to_local_naive(out["timestamp"])
    for axis in ("x", "y", "z"):
        out[axis] = pd.to_numeric(out[axis], errors="coerce")

    valid = out.notna().all(axis=1)
    dropped = int((~valid).sum())
    if dropped:
        logger.warning("%s: %d filas invalidas descartadas", path.name, dropped)
    return out.loc[valid].reset_index(drop=True)


def _to_local_naive(raw: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(raw, errors="coerce", utc=_has_offset(raw))
    if parsed.dt.tz is not None:
        parsed = parsed.dt.tz_convert(LOCAL_TZ).dt.tz_localize(None)
    return parsed


def _has_offset(raw: pd.Series) -> bool:
    """True if any timestamp text carries a UTC offset or Z suffix."""
    text = raw.astype(str)
    return bool(text.str.contains(r"(?:Z|[+-]\d{2}:?\d{2})$", regex=True).any())
