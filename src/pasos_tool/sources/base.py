"""Clases base para fuentes de muestras del acelerometro."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourcePaths:
    """Container for source directories."""

    root: Path


class SampleSource(ABC):
    """Abstract accelerometer sample source."""

    @abstractmethod
    def validate(self) -> None:
        """Validate that the source can deliver samples.

        Raises:
            FileNotFoundError: If required files or the sensor are missing.
        """
