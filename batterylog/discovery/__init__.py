import os
from pathlib import Path

from batterylog.helper.logging import LOGGER

HISTORY_RELATIVE_PATH = Path('battery_service') / 'battery_service_main_history'
DUMPSTATE_PREFIX = 'dumpState_'
DUMPSTATE_SUFFIX = '.log'


def history_path(base_dir: str | os.PathLike) -> Path:
    """Location of the battery service history file under the log directory."""
    return Path(base_dir) / HISTORY_RELATIVE_PATH


def is_dumpstate_name(name: str) -> bool:
    return name.startswith(DUMPSTATE_PREFIX) and name.endswith(DUMPSTATE_SUFFIX)


def find_dumpstate_files(base_dir: str | os.PathLike) -> list[Path]:
    """
    Lists the dumpState_*.log snapshots directly under base_dir.

    Returns:
        Newest snapshot first (by modification time). An empty list when
        the directory is missing, unreadable or holds no snapshot.
    """
    candidates: list[tuple[float, str, Path]] = []

    try:
        with os.scandir(base_dir) as entries:
            for entry in entries:
                if not is_dumpstate_name(entry.name):
                    continue
                try:
                    if not entry.is_file():
                        continue
                    mtime = entry.stat().st_mtime
                except OSError:
                    LOGGER.debug("Skipping unreadable entry %s", entry.path)
                    continue
                candidates.append((mtime, entry.name, Path(entry.path)))
    except FileNotFoundError:
        LOGGER.info("Log directory %s does not exist", base_dir)
        return []
    except OSError:
        LOGGER.warning("Unable to list log directory %s", base_dir, exc_info=True)
        return []

    candidates.sort(key=lambda candidate: (candidate[0], candidate[1]), reverse=True)
    LOGGER.info(
        "Found %d dumpstate file(s) in %s", len(candidates), base_dir
    )
    return [path for _, _, path in candidates]
