"""Contador de pasos del dia y archivo por fecha al cambiar de dia."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, timedelta

import pandas as pd
from dateutil import tz

from pasos_tool.config import get_logger
from pasos_tool.model import DayRecord

logger = get_logger()

LOCAL_TZ = tz.tzlocal()


def local_now() -> datetime:
    """Current wall-clock time in the device timezone."""
    return datetime.now(tz=LOCAL_TZ)


def seconds_until_midnight(now: datetime) -> int:
    """Whole seconds left until the next local midnight.

    Aware datetimes are subtracted in UTC; naive ones as wall-clock time.
    """
    tomorrow = datetime.combine(
        now.date() + timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo
    )
    if now.tzinfo is None:
        return math.floor((tomorrow - now).total_seconds())
    tomorrow = tz.resolve_imaginary(tomorrow)
    delta = tomorrow.astimezone(tz.UTC) - now.astimezone(tz.UTC)
    return math.floor(delta.total_seconds())


class StepTracker:
    """Running step count for today plus the archive of previous days.

    The archive is keyed by ISO date (``YYYY-MM-DD``) and only grows.
    """

    def __init__(
        self,
        today: date,
        steps: int = 0,
        history: Mapping[str, int] | None = None,
    ) -> None:
        if steps < 0:
            raise ValueError(f"Pasos negativos: {steps}")
        self.current_day = today
        self.steps = steps
        self.history: dict[str, int] = dict(history or {})

    def add_steps(self, count: int = 1) -> None:
        """Add detected steps to today's count."""
        if count < 0:
            raise ValueError(f"Pasos negativos: {count}")
        self.steps += count

    def archive_day(self, day: date) -> DayRecord:
        """Store today's running count under ``day``."""
        self.history[day.isoformat()] = self.steps
        return DayRecord(day=day, steps=self.steps)

    def check_for_new_day(self, now: datetime) -> DayRecord | None:
        """Archive and reset if ``now`` falls on a later day.

        Returns:
            The archived record, or None when the day did not change.
        """
        new_day = now.date()
        if new_day <= self.current_day:
            return None
        record = self.archive_day(self.current_day)
        logger.info(
            "Cambio de dia: %s -> %s (%s pasos)", record.day, new_day, record.steps
        )
        self.steps = 0
        self.current_day = new_day
        return record

    def steps_for(self, day: date) -> int:
        """Steps for a day: live count for today, archived value otherwise."""
        if day == self.current_day:
            return self.steps
        return self.history.get(day.isoformat(), 0)

    def history_frame(self) -> pd.DataFrame:
        """Archived days as a DataFrame with ``date`` and ``steps`` columns."""
        if not self.history:
            return pd.DataFrame(columns=["date", "steps"])
        out = pd.DataFrame(
            {
                "date": [date.fromisoformat(key) for key in self.history],
                "steps": list(self.history.values()),
            }
        )
        return out.sort_values("date").reset_index(drop=True)
