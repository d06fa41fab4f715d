"""Deteccion de pasos por umbral sobre la variacion del acelerometro."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from pasos_tool.model import AccelSample

STEP_THRESHOLD = 1.2
AXES: tuple[str, ...] = ("x", "y", "z")


class StepDetector:
    """Counts one step whenever any axis jumps more than ``threshold``.

    The comparison is made against the previous sample, starting from the
    origin ``(0, 0, 0)``. The previous vector is updated on every sample.
    """

    def __init__(self, threshold: float = STEP_THRESHOLD) -> None:
        """Create a detector.

        Args:
            threshold: Per-axis delta (in g) that must be exceeded.

        Raises:
            ValueError: If threshold is not positive.
        """
        self.threshold = _check_threshold(threshold)
        self.count = 0
        self.last = AccelSample(0.0, 0.0, 0.0)

    def feed(self, sample: AccelSample) -> bool:
        """Process one reading. Returns True if it counted as a step."""
        delta_x = abs(sample.x - self.last.x)
        delta_y = abs(sample.y - self.last.y)
        delta_z = abs(sample.z - self.last.z)
        self.last = sample
        if (
            delta_x > self.threshold
            or delta_y > self.threshold
            or delta_z > self.threshold
        ):
            self.count += 1
            return True
        return False

    def reset_count(self) -> None:
        """Zero the counter; the last vector is kept."""
        self.count = 0


def step_mask(
    samples: pd.DataFrame,
    threshold: float = STEP_THRESHOLD,
    initial: Sequence[float] = (0.0, 0.0, 0.0),
) -> pd.Series:
    """Boolean Series: True on every sample that counts as a step.

    Args:
        samples: Frame with ``x``, ``y`` and ``z`` columns, in reading order.
        threshold: Per-axis delta that must be exceeded.
        initial: Vector the first sample is compared against.

    Returns:
        Boolean Series aligned with ``samples``.

    Raises:
        ValueError: If columns are missing or threshold is not positive.
    """
    threshold = _check_threshold(threshold)
    missing = [axis for axis in AXES if axis not in samples.columns]
    if missing:
        raise ValueError(f"Faltan columnas del acelerometro: {missing}")
    if samples.empty:
        return pd.Series([], dtype=bool, index=samples.index)

    values = samples.loc[:, list(AXES)].astype(float)
    deltas = values.diff().abs()
    origin = pd.Series(list(initial), index=list(AXES), dtype=float)
    deltas.iloc[0] = (values.iloc[0] - origin).abs()
    return (deltas > threshold).any(axis=1)


def count_steps(
    samples: pd.DataFrame,
    threshold: float = STEP_THRESHOLD,
    initial: Sequence[float] = (0.0, 0.0, 0.0),
) -> int:
    """Count steps in a batch of samples (same result as StepDetector.feed)."""
    return int(step_mask(samples, threshold, initial).sum())


def _check_threshold(threshold: float) -> float:
    value = float(threshold)
    if not value > 0:
        raise ValueError(f"El umbral debe ser positivo: {threshold}")
    return value
