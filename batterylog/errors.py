class BatteryLogError(Exception):
    """Base class for batterylog errors."""


class ScanCancelled(BatteryLogError):
    """Raised inside a parser when the caller abandoned the read."""

    def __init__(self, path=None):
        self.path = path
        message = "Scan cancelled"
        if path is not None:
            message += f" while reading {path}"
        super().__init__(message)
