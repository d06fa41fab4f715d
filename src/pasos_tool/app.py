"""App Kivy: calendario mensual y contador de pasos con persistencia SQLite."""

from __future__ import annotations

import traceback
from datetime import datetime
from pathlib import Path

from pasos_tool.calendar_grid import WEEKDAY_NAMES
from pasos_tool.config import get_logger
from pasos_tool.excel_writer import ExcelLayout, write_steps_xlsx
from pasos_tool.pedometer import StepDetector
from pasos_tool.rollover import local_now, seconds_until_midnight
from pasos_tool.sources.live import LiveAccelerometer
from pasos_tool.storage import (
    SQLiteStore,
    persist_tracker,
    restore_tracker,
    roll_over,
)
from pasos_tool.view_state import CalendarState

logger = get_logger()

TODAY_COLOR = (0.0, 0.478, 1.0, 1.0)
DISABLED_TEXT_COLOR = (0.827, 0.827, 0.827, 1.0)
TEXT_COLOR = (1.0, 1.0, 1.0, 1.0)


def format_countdown(seconds: int) -> str:
    """HH:MM:SS until midnight."""
    hours, rest = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def run_app() -> int:
    """Lanza la app Kivy."""
    from kivy.app import App
    from kivy.clock import Clock
    from kivy.core.window import Window
    from kivy.uix.boxlayout import BoxLayout
    from kivy.uix.button import Button
    from kivy.uix.gridlayout import GridLayout
    from kivy.uix.label import Label

    class PasosApp(App):
        """Main Kivy app."""

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self.store = SQLiteStore(Path.cwd() / "pasos_tool.sqlite3")
            self.app_config = self.store.load_config()
            now = local_now()
            self.tracker = restore_tracker(self.store, now.date())
            self.detector = StepDetector(self.app_config.threshold)
            self.state = CalendarState(now.date())
            self.sensor = LiveAccelerometer()
            self.title_label: Label | None = None
            self.next_btn: Button | None = None
            self.grid: GridLayout | None = None
            self.steps_label: Label | None = None
            self.status: Label | None = None
            self._seconds_left: int | None = None

        def build(self) -> BoxLayout:
            Window.bind(on_key_down=self._on_key_down)

            root = BoxLayout(orientation="vertical", spacing=8, padding=10)

            header = BoxLayout(orientation="horizontal", size_hint_y=None, height=44)
            prev_btn = Button(text="<", size_hint_x=0.2)
            self.next_btn = Button(text=">", size_hint_x=0.2)
            self.title_label = Label(text=self.state.title, bold=True, font_size=20)
            prev_btn.bind(on_press=lambda *_args: self._on_change_month(-1))
            self.next_btn.bind(on_press=lambda *_args: self._on_change_month(1))
            header.add_widget(prev_btn)
            header.add_widget(self.title_label)
            header.add_widget(self.next_btn)
            root.add_widget(header)

            self.grid = GridLayout(cols=7, spacing=1)
            root.add_widget(self.grid)

            self.steps_label = Label(
                text="", bold=True, font_size=18, size_hint_y=None, height=40
            )
            root.add_widget(self.steps_label)

            actions = BoxLayout(
                orientation="horizontal", spacing=8, size_hint_y=None, height=40
            )
            export_btn = Button(text="Exportar Excel")
            exit_btn = Button(text="Salir")
            export_btn.bind(on_press=self._on_export)
            exit_btn.bind(on_press=lambda *_args: self.stop())
            actions.add_widget(export_btn)
            actions.add_widget(exit_btn)
            root.add_widget(actions)

            self.status = Label(text="", size_hint_y=None, height=30)
            root.add_widget(self.status)

            self._refresh_calendar()
            self._refresh_steps()
            return root

        def on_start(self) -> None:
            try:
                self.sensor.validate()
                self.sensor.start()
            except (ImportError, RuntimeError) as exc:
                self._show_error("activar el acelerometro", exc)
            interval = self.app_config.sample_interval_ms / 1000
            Clock.schedule_interval(self._on_sample, interval)
            Clock.schedule_interval(self._on_tick, 1.0)

        def on_stop(self) -> None:
            self.sensor.stop()
            persist_tracker(self.store, self.tracker)
            logger.info("Estado guardado al salir")

        def _on_key_down(
            self,
            _window: object,
            keycode: int,
            _scancode: int,
            _text: str,
            _modifiers: list[str],
        ) -> bool:
            # Esc/back de Android: cerrar app.
            if keycode != 27:
                return False
            self.stop()
            return True

        def _on_sample(self, _dt: float) -> None:
            sample = self.sensor.read()
            if sample is None:
                return
            if self.detector.feed(sample):
                self.tracker.add_steps(1)
                self._refresh_steps()

        def _on_tick(self, _dt: float) -> None:
            now = local_now()
            if roll_over(self.store, self.tracker, now) is not None:
                self.detector.reset_count()
                self.state.refresh_today(now.date())
                self._refresh_calendar()
            self._seconds_left = seconds_until_midnight(now)
            self._refresh_steps()

        def _on_change_month(self, offset: int) -> None:
            if self.state.change_month(offset):
                self._refresh_calendar()

        def _on_day_press(self, day: int) -> None:
            if self.state.select_day(day):
                self._refresh_steps()

        def _on_export(self, _: object) -> None:
            persist_tracker(self.store, self.tracker)
            daily = self.tracker.history_frame()
            if daily.empty:
                if self.status is not None:
                    self.status.text = "No hay dias archivados para exportar."
                return
            export_dir = self.app_config.export_dir
            out_dir = (
                Path(export_dir).expanduser() if export_dir else Path.cwd() / "salidas"
            )
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            out_path = out_dir / f"pasos_diarios_gui_{timestamp}.xlsx"
            try:
                write_steps_xlsx(daily, out_path, ExcelLayout())
            except OSError as exc:
                self._show_error("exportar", exc)
                return
            if self.status is not None:
                self.status.text = f"Excel generado: {out_path}"

        def _refresh_calendar(self) -> None:
            if self.grid is None:
                return
            if self.title_label is not None:
                self.title_label.text = self.state.title
            if self.next_btn is not None:
                self.next_btn.disabled = not self.state.can_go_forward()

            self.grid.clear_widgets()
            for name in WEEKDAY_NAMES:
                self.grid.add_widget(Label(text=name, bold=True))
            for day in self.state.cells():
                btn = Button(text=str(day) if day is not None else "")
                future = self.state.is_future(day)
                btn.disabled = day is None or future
                btn.color = DISABLED_TEXT_COLOR if future else TEXT_COLOR
                if self.state.is_today(day):
                    btn.background_normal = ""
                    btn.background_color = TODAY_COLOR
                if day is not None:
                    btn.bind(on_press=lambda _btn, d=day: self._on_day_press(d))
                self.grid.add_widget(btn)

        def _refresh_steps(self) -> None:
            if self.steps_label is None:
                return
            text = self.state.steps_caption(self.tracker)
            if self._seconds_left is not None:
                countdown = format_countdown(self._seconds_left)
                text = f"{text}   (nuevo dia en {countdown})"
            self.steps_label.text = text

        def _show_error(self, action: str, exc: Exception) -> None:
            error_type = type(exc).__name__
            logger.error("Error al %s (%s): %s", action, error_type, exc)
            if self.status is not None:
                self.status.text = f"Error al {action} ({error_type}): {exc}"
            logger.debug(traceback.format_exc())

    PasosApp().run()
    return 0
