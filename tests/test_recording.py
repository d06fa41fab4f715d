"""Tests for accelerometer CSV recordings."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from pasos_tool.sources.recording import RecordingPaths, RecordingSource


def _write_csv(path: Path, data: dict[str, list[object]]) -> None:
    pd.DataFrame(data).to_csv(path, index=False)


def test_validate_and_files_errors(tmp_path: Path) -> None:
    source = RecordingSource(RecordingPaths(root=tmp_path / "missing"))
    with pytest.raises(FileNotFoundError):
        source.validate()

    source = RecordingSource(RecordingPaths(root=tmp_path))
    source.validate()
    with pytest.raises(FileNotFoundError):
        source.recording_files()


def test_recording_files_sorted(tmp_path: Path) -> None:
    for name in ("b.csv", "a.csv", "notes.txt"):
        (tmp_path / name).write_text("timestamp,x,y,z\n", encoding="utf-8")
    source = RecordingSource(RecordingPaths(root=tmp_path))
    assert source.recording_files() == [tmp_path / "a.csv", tmp_path / "b.csv"]


def test_load_samples_merges_and_sorts(tmp_path: Path) -> None:
    late = tmp_path / "late.csv"
    early = tmp_path / "early.csv"
    _write_csv(
        late,
        {
            "timestamp": ["2025-03-02 08:00:00", "2025-03-02 08:00:01"],
            "x": [0.1, 0.2],
            "y": [0.0, 0.0],
            "z": [1.0, 2.5],
        },
    )
    _write_csv(
        early,
        {
            " Timestamp ": ["2025-03-01 08:00:00"],
            "X": [0.3],
            "Y": [0.1],
            "Z": [1.1],
        },
    )

    source = RecordingSource(RecordingPaths(root=tmp_path))
    out = source.load_samples([late, early])

    assert list(out.columns) == ["timestamp", "x", "y", "z"]
    assert list(out["timestamp"]) == [
        pd.Timestamp("2025-03-01 08:00:00"),
        pd.Timestamp("2025-03-02 08:00:00"),
        pd.Timestamp("2025-03-02 08:00:01"),
    ]
    assert list(out["z"]) == [1.1, 1.0, 2.5]


def test_load_samples_drops_invalid_rows(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "rec.csv"
    _write_csv(
        path,
        {
            "timestamp": ["2025-03-01 08:00:00", "not a date", "2025-03-01 08:00:02"],
            "x": [0.1, 0.2, "bad"],
            "y": [0.0, 0.0, 0.0],
            "z": [1.0, 1.0, 1.0],
        },
    )
    source = RecordingSource(RecordingPaths(root=tmp_path))
    out = source.load_samples([path])
    assert len(out) == 1
    assert "2 filas invalidas" in caplog.text


def test_load_samples_missing_column(tmp_path: Path) -> None:
    path = tmp_path / "rec.csv"
    _write_csv(path, {"timestamp": ["2025-03-01 08:00:00"], "x": [0.1]})
    source = RecordingSource(RecordingPaths(root=tmp_path))
    with pytest.raises(ValueError):
        source.load_samples([path])


def test_load_samples_converts_offsets_to_naive_local(tmp_path: Path) -> None:
    path = tmp_path / "rec.csv"
    _write_csv(
        path,
        {
            "timestamp": ["2025-03-01T08:00:00Z", "2025-03-01T08:00:01Z"],
            "x": [0.0, 0.0],
            "y": [0.0, 0.0],
            "z": [1.0, 1.0],
        },
    )
    source = RecordingSource(RecordingPaths(root=tmp_path))
    out = source.load_samples([path])
    assert out["timestamp"].dt.tz is None
    assert len(out) == 2


def test_load_samples_no_rows(tmp_path: Path) -> None:
    path = tmp_path / "rec.csv"
    path.write_text("timestamp,x,y,z\n", encoding="utf-8")
    source = RecordingSource(RecordingPaths(root=tmp_path))
    out = source.load_samples([path])
    assert out.empty
    assert list(out.columns) == ["timestamp", "x", "y", "z"]
