"""Procesamiento por lotes de grabaciones: pasos por dia."""

from __future__ import annotations

import pandas as pd

from pasos_tool.pedometer import STEP_THRESHOLD, step_mask


def daily_steps(
    samples: pd.DataFrame,
    threshold: float = STEP_THRESHOLD,
) -> pd.DataFrame:
    """Run step detection over a recording and total the steps per day.

    Detection runs over the whole recording in order, so the comparison
    vector carries over midnight and only the count is split by date, the
    same way the live tracker rolls over.

    Args:
        samples: Frame with timestamp, x, y, z (local wall time).
        threshold: Per-axis delta that must be exceeded.

    Returns:
        DataFrame with ``date`` and ``steps`` columns, one row per recorded day.
    """
    if samples.empty:
        return pd.DataFrame(columns=["date", "steps"])

    ordered = samples.sort_values("timestamp", kind="stable").reset_index(drop=True)
    mask = step_mask(ordered, threshold)
    days = pd.to_datetime(ordered["timestamp"]).dt.date
    out = (
        mask.astype(int)
        .groupby(days)
        .sum()
        .rename_axis("date")
        .reset_index(name="steps")
    )
    out["steps"] = out["steps"].astype(int)
    return out.sort_values("date").reset_index(drop=True)
