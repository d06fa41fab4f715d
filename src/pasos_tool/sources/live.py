"""Lectura en vivo del acelerometro del dispositivo via plyer."""

from __future__ import annotations

from typing import Any

from pasos_tool.config import get_logger
from pasos_tool.model import AccelSample
from pasos_tool.rollover import local_now
from pasos_tool.sources.base import SampleSource

logger = get_logger()

STANDARD_GRAVITY = 9.80665


class LiveAccelerometer(SampleSource):
    """Device accelerometer, polled by the app clock.

    plyer reports m/s^2; readings are divided by ``STANDARD_GRAVITY`` so the
    step threshold is expressed in g.
    """

    def __init__(
        self,
        sensor: Any | None = None,
        scale: float = 1 / STANDARD_GRAVITY,
    ) -> None:
        self._sensor = sensor
        self._scale = scale
        self.active = False

    def _device(self) -> Any:
        if self._sensor is None:
            from plyer import accelerometer

            self._sensor = accelerometer
        return self._sensor

    def validate(self) -> None:
        """Load the platform sensor facade (ImportError if plyer is missing)."""
        self._device()

    def start(self) -> None:
        """Enable the sensor.

        Raises:
            RuntimeError: If the platform has no accelerometer support.
        """
        try:
            self._device().enable()
        except NotImplementedError as exc:
            raise RuntimeError("Acelerometro no disponible en esta plataforma") from exc
        self.active = True
        logger.info("Acelerometro activado")

    def stop(self) -> None:
        if not self.active:
            return
        self._device().disable()
        self.active = False
        logger.info("Acelerometro desactivado")

    def read(self) -> AccelSample | None:
        """Current reading, or None while the sensor has no value yet."""
        if not self.active:
            return None
        values = self._device().acceleration
        if values is None or any(v is None for v in values):
            return None
        x, y, z = (float(v) * self._scale for v in values[:3])
        return AccelSample(x=x, y=y, z=z, timestamp=local_now())
