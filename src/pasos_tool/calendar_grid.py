"""Grilla mensual del calendario (semanas de domingo a sabado)."""

from __future__ import annotations

from datetime import date

import pandas as pd

WEEKDAY_NAMES: tuple[str, ...] = ("dom", "lun", "mar", "mie", "jue", "vie", "sab")

_MESES: tuple[str, ...] = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)


def days_in_month(month: int, year: int) -> int:
    """Number of days of ``month`` (1-12) in ``year``."""
    return int(_first_of_month(year, month).days_in_month)


def _first_of_month(year: int, month: int) -> pd.Timestamp:
    if not 1 <= month <= 12:
        raise ValueError(f"Mes invalido: {month}")
    return pd.Timestamp(year=year, month=month, day=1)


def _sunday_column(ts: pd.Timestamp) -> int:
    """Column index 0-6 with Sunday first (pandas uses Monday=0)."""
    return (ts.dayofweek + 1) % 7


def generate_calendar(month: int, year: int) -> list[int | None]:
    """Cells of the month grid, padded with None to full weeks.

    Args:
        month: Month number 1-12.
        year: Four digit year.

    Returns:
        Flat list of 7-column rows: leading None cells before day 1, the
        day numbers, then trailing None cells up to Saturday.
    """
    first = _first_of_month(year, month)
    total = int(first.days_in_month)
    last = first + pd.Timedelta(days=total - 1)

    cells: list[int | None] = [None] * _sunday_column(first)
    cells.extend(range(1, total + 1))
    cells.extend([None] * (6 - _sunday_column(last)))
    return cells


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move ``offset`` months from (year, month), crossing years as needed."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def is_future_day(year: int, month: int, day: int | None, today: date) -> bool:
    """True when the cell's date is after ``today``. Empty cells are not."""
    if day is None:
        return False
    return date(year, month, day) > today


def month_title(year: int, month: int) -> str:
    """Header text, e.g. ``Marzo 2025``."""
    return f"{_MESES[month - 1]} {year}"
