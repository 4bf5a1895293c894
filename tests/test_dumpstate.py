from __future__ import annotations

import threading

import pytest

from batterylog.battery import ABSENT, BatteryStats
from batterylog.dumpstate import DumpStateParser, parse_dumpstate_log
from batterylog.errors import ScanCancelled


def test_bracketed_values(write_dumpstate) -> None:
    path = write_dumpstate(
        "dumpState_a.log",
        [
            "------ DUMPSYS battery ------",
            "  mSavedBatteryAsoc: [85]",
            "  mSavedBatteryUsage: [1234]",
        ],
    )
    stats = BatteryStats()
    assert parse_dumpstate_log(path, stats)
    assert stats == BatteryStats(None, 85, 12)


def test_first_occurrence_wins(write_dumpstate) -> None:
    path = write_dumpstate(
        "dumpState_a.log",
        [
            "  battery FirstUseDate: [20210704]",
            "  mSavedBatteryAsoc: [90]",
            "  battery FirstUseDate: [20230101]",
            "  mSavedBatteryAsoc: [60]",
        ],
    )
    stats = BatteryStats()
    assert parse_dumpstate_log(path, stats)
    assert stats.first_use_date == "20210704"
    assert stats.health_percentage == 90


def test_colon_values_without_brackets(write_dumpstate) -> None:
    path = write_dumpstate(
        "dumpState_a.log",
        ["mSavedBatteryAsoc: 77", "mSavedBatteryUsage: 99"],
    )
    stats = BatteryStats()
    assert parse_dumpstate_log(path, stats)
    assert stats.health_percentage == 77
    assert stats.charge_cycles == 0


def test_short_date_is_rejected(write_dumpstate) -> None:
    path = write_dumpstate(
        "dumpState_a.log",
        ["battery FirstUseDate: [2024]", "battery FirstUseDate: [20240229]"],
    )
    stats = BatteryStats()
    assert parse_dumpstate_log(path, stats)
    assert stats.first_use_date == "20240229"


def test_malformed_values_leave_fields_absent(write_dumpstate) -> None:
    path = write_dumpstate(
        "dumpState_a.log",
        [
            "battery FirstUseDate: [2024]",
            "mSavedBatteryAsoc: [unknown]",
            "mSavedBatteryUsage: []",
        ],
    )
    stats = BatteryStats()
    assert not parse_dumpstate_log(path, stats)
    assert stats == BatteryStats(None, ABSENT, ABSENT)


def test_underscored_numbers_are_rejected(write_dumpstate) -> None:
    path = write_dumpstate(
        "dumpState_a.log",
        ["mSavedBatteryAsoc: [8_5]", "mSavedBatteryUsage: [1_000]"],
    )
    stats = BatteryStats()
    assert not parse_dumpstate_log(path, stats)
    assert stats == BatteryStats(None, ABSENT, ABSENT)


def test_existing_values_are_not_overwritten(write_dumpstate) -> None:
    path = write_dumpstate("dumpState_a.log", ["mSavedBatteryAsoc: [40]"])
    stats = BatteryStats(health_percentage=95)
    assert DumpStateParser().parse(path, stats)
    assert stats.health_percentage == 95


def test_non_utf8_content_is_tolerated(log_dir) -> None:
    path = log_dir / "dumpState_bin.log"
    path.write_bytes(b"\xff\xfe garbage\r\nmSavedBatteryAsoc: [81]\r\n")
    stats = BatteryStats()
    assert parse_dumpstate_log(path, stats)
    assert stats.health_percentage == 81


def test_missing_file_raises(log_dir) -> None:
    with pytest.raises(FileNotFoundError):
        parse_dumpstate_log(log_dir / "dumpState_gone.log", BatteryStats())


def test_cancel_aborts_scan(write_dumpstate) -> None:
    path = write_dumpstate("dumpState_a.log", ["mSavedBatteryAsoc: [40]"])
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(ScanCancelled):
        parse_dumpstate_log(path, BatteryStats(), cancel=cancel)
