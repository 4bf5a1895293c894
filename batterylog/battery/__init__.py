import re
from collections.abc import Callable
from dataclasses import asdict, dataclass, fields
from typing import Any

from batterylog.helper import is_first_use_date

ABSENT = -1


@dataclass
class BatteryStats:
    """Battery health facts gathered from the log files.

    Integer fields hold ABSENT (-1) until found, first_use_date holds None.
    """

    first_use_date: str | None = None
    health_percentage: int = ABSENT
    charge_cycles: int = ABSENT

    def is_set(self, name: str) -> bool:
        value = getattr(self, name)
        return value is not None and value != ABSENT

    def fill(self, name: str, value: Any) -> bool:
        """Stores a value unless the field already holds one."""
        if self.is_set(name):
            return False
        setattr(self, name, value)
        return self.is_set(name)

    def is_valid(self) -> bool:
        """True as soon as any field has been found."""
        return any(self.is_set(f.name) for f in fields(self))

    def is_complete(self) -> bool:
        return all(self.is_set(f.name) for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _to_date(raw: bytes) -> str:
    return raw.decode('ascii')


def _to_percentage(raw: bytes) -> int:
    if not raw.isdigit():
        raise ValueError(f"Not a percentage: {raw!r}")
    return int(raw)


def _to_cycles(raw: bytes) -> int:
    # The counter is stored in hundredths of a cycle
    if not raw.isdigit():
        raise ValueError(f"Not a discharge counter: {raw!r}")
    return int(raw) // 100


@dataclass(frozen=True)
class BatteryField:
    """Describes how one BatteryStats field is found in both log formats."""

    name: str
    marker: bytes
    history_pattern: re.Pattern
    convert: Callable[[bytes], Any]
    strict: Callable[[bytes], bool] | None = None

    def accepts(self, raw: bytes) -> bool:
        return self.strict is None or self.strict(raw)


def _history_pattern(data_name: bytes) -> re.Pattern:
    return re.compile(
        rb'# \[SS\]\[BattInfo\]'
        + data_name
        + rb' saveInfoHistory\s+efsValue:(\d+)'
    )


FIRST_USE_DATE = BatteryField(
    name='first_use_date',
    marker=b'battery FirstUseDate:',
    history_pattern=_history_pattern(b'FirstUseDateData'),
    convert=_to_date,
    strict=is_first_use_date,
)

HEALTH_PERCENTAGE = BatteryField(
    name='health_percentage',
    marker=b'mSavedBatteryAsoc:',
    history_pattern=_history_pattern(b'AsocData'),
    convert=_to_percentage,
)

CHARGE_CYCLES = BatteryField(
    name='charge_cycles',
    marker=b'mSavedBatteryUsage:',
    history_pattern=_history_pattern(b'DischargeLevelData'),
    convert=_to_cycles,
)

FIELDS: tuple[BatteryField, ...] = (
    FIRST_USE_DATE,
    HEALTH_PERCENTAGE,
    CHARGE_CYCLES,
)
