"""Field extraction"""

import re

_FIRST_USE_DATE = re.compile(rb'\d{8}')


def extract_value(line: bytes, marker: bytes) -> bytes | None:
    """
    Extracts the value associated with a marker from a single log line.

    The first bracket pair anywhere in the line wins, even when it does not
    follow the marker. Without brackets, everything after the first colon
    of the line is used.

    Args:
        line: A raw log line, without its line terminator.
        marker: Literal label announcing the field (e.g. b'mSavedBatteryAsoc:').

    Returns:
        None if the marker is not in the line, b'' if the line has no value,
        the stripped value otherwise.
    """
    if marker not in line:
        return None

    opening = line.find(b'[')
    if opening != -1:
        closing = line.find(b']', opening + 1)
        if closing != -1:
            return line[opening + 1 : closing].strip()

    if b':' in line:
        return line.split(b':', 1)[1].strip()
    return b''


def is_first_use_date(value: bytes) -> bool:
    """Checks for a YYYYMMDD token (exactly eight digits)."""
    return _FIRST_USE_DATE.fullmatch(value) is not None
