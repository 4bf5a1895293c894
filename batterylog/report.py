from datetime import datetime

from batterylog.battery import BatteryStats

GOOD_HEALTH = 80
FAIR_HEALTH = 70
NOT_AVAILABLE = "Not available"


def format_first_use(value: str) -> str:
    """YYYYMMDD -> 'Mon DD, YYYY'; unparsable values are returned as is."""
    try:
        return datetime.strptime(value, "%Y%m%d").strftime("%b %d, %Y")
    except ValueError:
        return value


def health_band(percentage: int) -> str:
    if percentage >= GOOD_HEALTH:
        return "good"
    if percentage >= FAIR_HEALTH:
        return "fair"
    return "poor"


def render_text(stats: BatteryStats) -> list[str]:
    if stats.first_use_date is not None:
        first_use = format_first_use(stats.first_use_date)
    else:
        first_use = NOT_AVAILABLE

    if stats.is_set("health_percentage"):
        pct = stats.health_percentage
        health = f"{pct}% ({health_band(pct)})"
    else:
        health = NOT_AVAILABLE

    if stats.is_set("charge_cycles"):
        cycles = str(stats.charge_cycles)
    else:
        cycles = NOT_AVAILABLE

    return [
        f"First Use: {first_use}",
        f"Battery Health: {health}",
        f"Charge Cycles: {cycles}",
    ]
