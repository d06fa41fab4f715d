"""Modelos tipados para muestras del acelerometro y pasos diarios."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class AccelSample:
    """One accelerometer reading (in g per axis)."""

    x: float
    y: float
    z: float
    timestamp: datetime | None = None


@dataclass(frozen=True)
class DayRecord:
    """Steps archived for one calendar day."""

    day: date
    steps: int
