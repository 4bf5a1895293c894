import threading
from pathlib import Path

from batterylog.base import LogParser, check_cancelled
from batterylog.battery import FIELDS, BatteryStats
from batterylog.helper.backward import DEFAULT_BLOCK_SIZE, iter_lines_backward
from batterylog.helper.logging import LOGGER


def parse_battery_history(
    path: str | Path,
    stats: BatteryStats,
    cancel: threading.Event | None = None,
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> bool:
    """
    Parses a battery_service_main_history file.

    The file is append-only, so it is scanned from its end and the first
    match met for a field is the most recently written value. Scanning
    stops once every field is known.

    Args:
        path: Path to the history file.
        stats: Record to fill. Fields already set are left untouched.
        cancel: Event that aborts the scan when set.
        block_size: Number of bytes read per backward step.

    Returns:
        True if stats holds at least one value after the scan.

    Raises:
        OSError: the file cannot be opened. Read errors past that point are
            logged and end the scan.
    """
    LOGGER.info("Parsing \"%s\" history file...", path)

    with open(path, 'rb') as handle:
        try:
            for line in iter_lines_backward(handle, block_size=block_size):
                check_cancelled(cancel, path)

                for battery_field in FIELDS:
                    if stats.is_set(battery_field.name):
                        continue
                    match = battery_field.history_pattern.search(line)
                    if not match:
                        continue
                    try:
                        value = battery_field.convert(match.group(1))
                    except ValueError:
                        LOGGER.debug(
                            "Ignoring malformed %s value %r",
                            battery_field.name,
                            match.group(1),
                        )
                        continue
                    stats.fill(battery_field.name, value)

                if stats.is_complete():
                    break
        except OSError:
            LOGGER.warning("Unable to read history file %s", path, exc_info=True)

    return stats.is_valid()


class HistoryLogParser(LogParser):
    name = 'history'

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE):
        self.block_size = block_size

    def parse(self, path, stats, cancel=None) -> bool:
        return parse_battery_history(
            path, stats, cancel=cancel, block_size=self.block_size
        )
