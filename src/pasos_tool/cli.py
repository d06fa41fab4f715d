"""CLI para procesar grabaciones del acelerometro y exportar pasos diarios."""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path

from pasos_tool.config import get_logger, get_version
from pasos_tool.excel_writer import ExcelLayout, write_steps_xlsx
from pasos_tool.pedometer import STEP_THRESHOLD
from pasos_tool.replay import daily_steps
from pasos_tool.rollover import LOCAL_TZ
from pasos_tool.sources.recording import RecordingPaths, RecordingSource

logger = get_logger()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Pasos diarios a partir de grabaciones del acelerómetro."
    )
    parser.add_argument(
        "--recordings",
        default=str(Path.home() / "pasos" / "grabaciones"),
        help="Carpeta con CSV timestamp,x,y,z (default: ~/pasos/grabaciones).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=STEP_THRESHOLD,
        help=f"Umbral por eje en g (default: {STEP_THRESHOLD}).",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Carpeta de salida (default: <recordings>/salidas).",
    )
    parser.add_argument("--version", action="version", version=get_version())
    return parser.parse_args()


def main() -> int:
    """Run the replay CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args()
    root = Path(ns.recordings).expanduser().resolve()

    source = RecordingSource(RecordingPaths(root=root))
    source.validate()

    files = source.recording_files()
    samples = source.load_samples(files)
    logger.info("%d muestras leidas de %d archivos", len(samples), len(files))

    daily = daily_steps(samples, threshold=ns.threshold)

    out_dir = Path(ns.out).expanduser() if ns.out else root / "salidas"
    ts = datetime.now(tz=LOCAL_TZ).strftime("%Y-%m-%d_%H-%M-%S")
    out_path = out_dir / f"pasos_diarios_{ts}.xlsx"

    write_steps_xlsx(daily, out_path, ExcelLayout())

    print(f"OK: Grabaciones: {len(files)}")
    print(f"OK: Dias: {len(daily)}, pasos: {int(daily['steps'].sum())}")
    print(f"OK: Output: {out_path}")
    return 0
