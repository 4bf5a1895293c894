import threading
from abc import ABC, abstractmethod
from pathlib import Path

from batterylog.battery import BatteryStats
from batterylog.errors import ScanCancelled


class LogParser(ABC):
    name: str

    @abstractmethod
    def parse(
        self,
        path: str | Path,
        stats: BatteryStats,
        cancel: threading.Event | None = None,
    ) -> bool:
        """
        Fill the still-unset fields of stats from one file.

        Returns stats.is_valid() after the pass. Raises OSError when the
        file cannot be opened.
        """
        raise NotImplementedError


def check_cancelled(cancel: threading.Event | None, path) -> None:
    if cancel is not None and cancel.is_set():
        raise ScanCancelled(path)
