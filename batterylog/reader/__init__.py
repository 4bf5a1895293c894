import enum
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from batterylog.base import LogParser
from batterylog.battery import BatteryStats
from batterylog.config import resolve_block_size, resolve_log_dir
from batterylog.discovery import find_dumpstate_files, history_path
from batterylog.dumpstate import DumpStateParser
from batterylog.errors import ScanCancelled
from batterylog.helper.logging import LOGGER
from batterylog.history import HistoryLogParser

MISSING = 'missing'
ERROR = 'error'
NO_MATCH = 'no-match'
VALID = 'valid'
CANCELLED = 'cancelled'


class StrategyState(enum.Enum):
    NOT_STARTED = 'not-started'
    TRYING_HISTORY = 'trying-history'
    TRYING_DUMPSTATE = 'trying-dumpstate'
    DONE = 'done'


@dataclass
class ParseAttempt:
    """One file handed to one parser."""

    path: Path
    parser: str
    outcome: str

    def to_dict(self) -> dict[str, str]:
        return {
            'path': str(self.path),
            'parser': self.parser,
            'outcome': self.outcome,
        }


@dataclass
class ReadResult:
    """Outcome of a whole read: the record plus how it was obtained."""

    stats: BatteryStats = field(default_factory=BatteryStats)
    success: bool = False
    source: Path | None = None
    attempts: list[ParseAttempt] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'success': self.success,
            'source': str(self.source) if self.source else None,
            'stats': self.stats.to_dict(),
            'attempts': [attempt.to_dict() for attempt in self.attempts],
        }


def _attempt(
    parser: LogParser,
    path: Path,
    result: ReadResult,
    cancel: threading.Event | None,
) -> bool:
    """Runs one parser on one file and records the outcome."""
    if not path.is_file():
        LOGGER.info("No %s candidate at %s", parser.name, path)
        result.attempts.append(ParseAttempt(path, parser.name, MISSING))
        return False

    try:
        valid = parser.parse(path, result.stats, cancel=cancel)
    except ScanCancelled:
        result.attempts.append(ParseAttempt(path, parser.name, CANCELLED))
        raise
    except OSError:
        LOGGER.warning("Unable to open %s", path, exc_info=True)
        result.attempts.append(ParseAttempt(path, parser.name, ERROR))
        return False

    if valid:
        result.attempts.append(ParseAttempt(path, parser.name, VALID))
        result.source = path
        return True

    result.attempts.append(ParseAttempt(path, parser.name, NO_MATCH))
    return False


def read_battery_stats(
    base_dir: str | Path | None = None,
    cancel: threading.Event | None = None,
    block_size: int | None = None,
) -> ReadResult:
    """
    Reads battery health facts from the device log directory.

    The battery service history file is tried first. When it is missing or
    yields nothing, the dumpState_*.log snapshots are tried from newest to
    oldest until one of them yields at least one value. Unreadable files
    and files without any match are skipped alike.

    Args:
        base_dir: Log directory; defaults to BATTERYLOG_LOG_DIR.
        cancel: Event that abandons the read when set.
        block_size: Backward read step for the history file.

    Returns:
        A ReadResult. result.success is False when no file yielded a value
        or the read was cancelled.
    """
    base = Path(base_dir if base_dir is not None else resolve_log_dir())
    if block_size is None:
        block_size = resolve_block_size()

    result = ReadResult()
    state = StrategyState.NOT_STARTED
    LOGGER.info("Reading battery logs from %s", base)

    try:
        state = StrategyState.TRYING_HISTORY
        if _attempt(HistoryLogParser(block_size), history_path(base), result, cancel):
            result.success = True
        else:
            state = StrategyState.TRYING_DUMPSTATE
            dumpstate_parser = DumpStateParser()
            for candidate in find_dumpstate_files(base):
                if _attempt(dumpstate_parser, candidate, result, cancel):
                    result.success = True
                    break
    except ScanCancelled as exc:
        LOGGER.info("%s (%s)", exc, state.value)
        result.success = False

    state = StrategyState.DONE
    LOGGER.info(
        "Battery log read %s after %d attempt(s), success=%s",
        state.value,
        len(result.attempts),
        result.success,
    )
    return result
