import threading
from pathlib import Path

from batterylog.base import LogParser, check_cancelled
from batterylog.battery import FIELDS, BatteryStats
from batterylog.helper import extract_value
from batterylog.helper.logging import LOGGER


def parse_dumpstate_log(
    path: str | Path,
    stats: BatteryStats,
    cancel: threading.Event | None = None,
) -> bool:
    """
    Parses a dumpState_*.log snapshot.

    The file is streamed forward and the first occurrence of each label
    wins. Values are taken from the first bracket pair of the line, or from
    what follows its first colon.

    Returns:
        True if stats holds at least one value after the pass.

    Raises:
        OSError: the file cannot be opened. Read errors past that point are
            logged and end the pass.
    """
    LOGGER.info("Parsing \"%s\" dumpstate file...", path)

    with open(path, 'rb') as handle:
        try:
            for line in handle:
                check_cancelled(cancel, path)
                _fill_from_line(line.rstrip(b'\r\n'), stats)
        except OSError:
            LOGGER.warning("Unable to read dumpstate file %s", path, exc_info=True)

    return stats.is_valid()


def _fill_from_line(line: bytes, stats: BatteryStats):
    for battery_field in FIELDS:
        if stats.is_set(battery_field.name):
            continue

        raw = extract_value(line, battery_field.marker)
        if not raw:
            continue

        if not battery_field.accepts(raw):
            LOGGER.debug("Rejecting %s value %r", battery_field.name, raw)
            continue
        try:
            value = battery_field.convert(raw)
        except ValueError:
            LOGGER.debug("Ignoring malformed %s value %r", battery_field.name, raw)
            continue
        stats.fill(battery_field.name, value)


class DumpStateParser(LogParser):
    name = 'dumpstate'

    def parse(self, path, stats, cancel=None) -> bool:
        return parse_dumpstate_log(path, stats, cancel=cancel)
