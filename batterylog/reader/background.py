import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from batterylog.helper.logging import LOGGER
from batterylog.reader import ReadResult, read_battery_stats


class BatteryLogReader:
    """Runs battery log reads on a worker thread.

    Each submitted read is one unit of work: all candidate files are tried
    on the worker and only the final ReadResult is handed back through the
    returned Future. close() abandons an in-flight read without waiting
    for it.
    """

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = base_dir
        self._cancel = threading.Event()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="batterylog-reader"
        )
        self._closed = False

    def submit(self, base_dir: str | Path | None = None) -> Future:
        if self._closed:
            raise RuntimeError("BatteryLogReader is closed")
        target = base_dir if base_dir is not None else self.base_dir
        return self._executor.submit(self._read, target)

    def _read(self, base_dir) -> ReadResult:
        return read_battery_stats(base_dir, cancel=self._cancel)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        LOGGER.debug("Closing battery log reader")
        self._cancel.set()
        self._executor.shutdown(wait=False, cancel_futures=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
