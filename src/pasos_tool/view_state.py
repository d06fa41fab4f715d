"""Estado de la pantalla de calendario, independiente de Kivy."""

from __future__ import annotations

from datetime import date

from pasos_tool.calendar_grid import (
    generate_calendar,
    is_future_day,
    month_title,
    shift_month,
)
from pasos_tool.rollover import StepTracker


def format_day_label(day: date) -> str:
    """Label shown for a selected day, e.g. ``5.3.2025``."""
    return f"{day.day}.{day.month}.{day.year}"


class CalendarState:
    """Displayed month plus the currently selected day."""

    def __init__(self, today: date) -> None:
        self.today = today
        self.year = today.year
        self.month = today.month
        self.selected: date | None = None

    @property
    def title(self) -> str:
        return month_title(self.year, self.month)

    def cells(self) -> list[int | None]:
        return generate_calendar(self.month, self.year)

    def can_go_forward(self) -> bool:
        """Navigation stops at the month that contains today."""
        return (self.year, self.month) < (self.today.year, self.today.month)

    def change_month(self, offset: int) -> bool:
        """Move the displayed month. Returns False if the move was refused."""
        year, month = shift_month(self.year, self.month, offset)
        if (year, month) > (self.today.year, self.today.month):
            return False
        self.year, self.month = year, month
        return True

    def is_today(self, day: int | None) -> bool:
        if day is None:
            return False
        return date(self.year, self.month, day) == self.today

    def is_future(self, day: int | None) -> bool:
        return is_future_day(self.year, self.month, day, self.today)

    def select_day(self, day: int | None) -> bool:
        """Select a cell of the displayed month; empty and future cells are ignored."""
        if day is None or self.is_future(day):
            return False
        self.selected = date(self.year, self.month, day)
        return True

    def refresh_today(self, today: date) -> None:
        """Follow a day rollover; keeps the displayed month."""
        self.today = today

    def steps_caption(self, tracker: StepTracker) -> str:
        """Text under the calendar: today's live count or the selected day."""
        if self.selected is None or self.selected == tracker.current_day:
            return f"Pasos de hoy: {tracker.steps}"
        steps = tracker.steps_for(self.selected)
        return f"Pasos del {format_day_label(self.selected)}: {steps}"
