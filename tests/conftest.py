from __future__ import annotations

import os
from pathlib import Path

import pytest

from batterylog.discovery import history_path


def _history_line(data_name: str, value: str) -> str:
    return (
        f"10-19 12:00:00.000 # [SS][BattInfo]{data_name} saveInfoHistory"
        f"  efsValue:{value}"
    )


@pytest.fixture()
def log_dir(tmp_path) -> Path:
    path = tmp_path / "log"
    path.mkdir()
    return path


@pytest.fixture()
def write_history(log_dir):
    def _write(lines: list[str], trailing_newline: bool = True) -> Path:
        path = history_path(log_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = "\n".join(lines)
        if trailing_newline:
            text += "\n"
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture()
def write_dumpstate(log_dir):
    def _write(name: str, lines: list[str], mtime: float | None = None) -> Path:
        path = log_dir / name
        path.write_bytes(("\n".join(lines) + "\n").encode("utf-8"))
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _write


@pytest.fixture()
def history_line():
    return _history_line
