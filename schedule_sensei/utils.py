# schedule_sensei/utils.py
import re
from typing import Optional

HOURS_PER_WORKDAY = 8.0

_ISO_DURATION = re.compile(
    r"^(?P<sign>-)?P"
    r"(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?"
    r")?$"
)


def parse_iso_duration(value: str) -> Optional[float]:
    """
    Convert an MS Project style ISO-8601 duration ("PT64H0M0S", "P2DT4H")
    into hours. Returns None when the string is empty or not a duration.
    A "D" component counts as one calendar day (24h), the way the XML
    export writes it.
    """
    if not value:
        return None
    match = _ISO_DURATION.match(value.strip())
    if not match or value.strip() in ("P", "-P", "PT", "-PT"):
        return None
    parts = match.groupdict()
    hours = (
        float(parts["days"] or 0) * 24
        + float(parts["hours"] or 0)
        + float(parts["minutes"] or 0) / 60
        + float(parts["seconds"] or 0) / 3600
    )
    return -hours if parts["sign"] else hours


def to_work_days(value: str, hours_per_day: float = HOURS_PER_WORKDAY) -> Optional[float]:
    hours = parse_iso_duration(value)
    if hours is None:
        return None
    return round(hours / hours_per_day, 2)


def lag_to_iso(tenths_of_minute: int) -> str:
    # LinkLag is stored in tenths of a minute: 4800 == 8h
    total_seconds = abs(int(tenths_of_minute)) * 6
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    sign = "-" if tenths_of_minute < 0 else ""
    return f"{sign}PT{hours}H{minutes}M{seconds}S"
