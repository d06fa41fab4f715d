"""Persistencia SQLite para configuracion y pasos por dia."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from pasos_tool.config import get_logger
from pasos_tool.model import DayRecord
from pasos_tool.pedometer import STEP_THRESHOLD
from pasos_tool.rollover import StepTracker

logger = get_logger()

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS app_config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS day_steps (
    day TEXT PRIMARY KEY,
    steps INTEGER NOT NULL CHECK (steps >= 0),
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS today_steps (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    day TEXT NOT NULL,
    steps INTEGER NOT NULL CHECK (steps >= 0)
);
"""

DEFAULT_SAMPLE_INTERVAL_MS = 100


@dataclass(frozen=True)
class AppConfig:
    """Configuracion persistida de la app."""

    threshold: float = STEP_THRESHOLD
    sample_interval_ms: int = DEFAULT_SAMPLE_INTERVAL_MS
    export_dir: str = ""


class SQLiteStore:
    """Repositorio SQLite para la app."""

    def __init__(self, db_path: Path) -> None:
        """Create store and ensure schema exists."""
        self._db_path = db_path
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def load_config(self) -> AppConfig:
        """Devuelve configuracion guardada o defaults."""
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value FROM app_config").fetchall()
        values = {row["key"]: row["value"] for row in rows}
        defaults = AppConfig()
        return AppConfig(
            threshold=_parse_positive(
                values.get("threshold"), float, defaults.threshold
            ),
            sample_interval_ms=_parse_positive(
                values.get("sample_interval_ms"), int, defaults.sample_interval_ms
            ),
            export_dir=values.get("export_dir", defaults.export_dir),
        )

    def save_config(self, config: AppConfig) -> None:
        """Guarda la configuracion en tabla key/value."""
        payload = {
            "threshold": repr(config.threshold),
            "sample_interval_ms": str(config.sample_interval_ms),
            "export_dir": config.export_dir,
        }
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO app_config(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                payload.items(),
            )
            conn.commit()

    def save_day(self, day: date, steps: int) -> None:
        """Guarda (o reemplaza) los pasos archivados de un dia."""
        updated_at = datetime.now().isoformat(timespec="seconds")
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO day_steps(day, steps, updated_at) VALUES(?, ?, ?)
                ON CONFLICT(day) DO UPDATE SET
                    steps=excluded.steps, updated_at=excluded.updated_at
                """,
                (day.isoformat(), int(steps), updated_at),
            )
            conn.commit()
        logger.info("Dia %s guardado con %s pasos", day.isoformat(), steps)

    def save_history(self, history: dict[str, int]) -> None:
        """Guarda todos los dias del historial en una transaccion."""
        if not history:
            return
        updated_at = datetime.now().isoformat(timespec="seconds")
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO day_steps(day, steps, updated_at) VALUES(?, ?, ?)
                ON CONFLICT(day) DO UPDATE SET
                    steps=excluded.steps, updated_at=excluded.updated_at
                """,
                [(day, int(steps), updated_at) for day, steps in history.items()],
            )
            conn.commit()

    def load_history(self) -> dict[str, int]:
        """Devuelve el historial {YYYY-MM-DD: pasos} ordenado por fecha."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT day, steps FROM day_steps ORDER BY day"
            ).fetchall()
        return {str(row["day"]): int(row["steps"]) for row in rows}

    def save_today(self, day: date, steps: int) -> None:
        """Guarda el contador en curso para retomarlo tras reiniciar."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO today_steps(id, day, steps) VALUES(1, ?, ?)
                ON CONFLICT(id) DO UPDATE SET day=excluded.day, steps=excluded.steps
                """,
                (day.isoformat(), int(steps)),
            )
            conn.commit()

    def load_today(self) -> tuple[date, int] | None:
        """Ultimo contador en curso guardado, o None."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT day, steps FROM today_steps WHERE id = 1"
            ).fetchone()
        if row is None:
            return None
        return date.fromisoformat(row["day"]), int(row["steps"])


def _parse_positive(raw: str | None, kind: type, default: float) -> float:
    if raw is None:
        return default
    try:
        value = kind(raw)
    except ValueError:
        logger.warning("Valor de configuracion invalido: %r", raw)
        return default
    return value if value > 0 else default


def restore_tracker(store: SQLiteStore, today: date) -> StepTracker:
    """Rebuild the tracker from SQLite.

    A running count saved on an earlier day is archived under that day, as
    the rollover would have done had the app been running at midnight. A
    count saved on a later day (clock moved back) stays the running count of
    that day, as check_for_new_day never rolls back.
    """
    history = store.load_history()
    saved = store.load_today()
    if saved is None:
        return StepTracker(today=today, history=history)
    saved_day, saved_steps = saved
    if saved_day < today:
        history[saved_day.isoformat()] = saved_steps
        store.save_day(saved_day, saved_steps)
        return StepTracker(today=today, history=history)
    return StepTracker(today=saved_day, steps=saved_steps, history=history)


def persist_tracker(store: SQLiteStore, tracker: StepTracker) -> None:
    """Save archived days and the running count."""
    store.save_history(tracker.history)
    store.save_today(tracker.current_day, tracker.steps)


def roll_over(
    store: SQLiteStore, tracker: StepTracker, now: datetime
) -> DayRecord | None:
    """Run the midnight check and save the archived day right away.

    Returns:
        The archived record, or None when the day did not change.
    """
    record = tracker.check_for_new_day(now)
    if record is None:
        return None
    store.save_day(record.day, record.steps)
    store.save_today(tracker.current_day, tracker.steps)
    return record
