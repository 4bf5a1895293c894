import os

from batterylog.helper.backward import DEFAULT_BLOCK_SIZE

DEFAULT_LOG_DIR = "/storage/emulated/0/log"


def resolve_log_dir() -> str:
    return os.environ.get("BATTERYLOG_LOG_DIR", DEFAULT_LOG_DIR)


def resolve_block_size() -> int:
    raw = os.environ.get("BATTERYLOG_BLOCK_SIZE", "").strip()
    if not raw:
        return DEFAULT_BLOCK_SIZE
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"BATTERYLOG_BLOCK_SIZE must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError("BATTERYLOG_BLOCK_SIZE must be positive")
    return value
