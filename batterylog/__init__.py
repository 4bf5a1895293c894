"""Battery health facts from Android battery service and dumpstate logs."""

from batterylog.battery import BatteryStats
from batterylog.reader import ReadResult, read_battery_stats
from batterylog.reader.background import BatteryLogReader

__all__ = [
    "BatteryLogReader",
    "BatteryStats",
    "ReadResult",
    "read_battery_stats",
]
