from __future__ import annotations
from datetime import date, datetime, time, timezone
from typing import Union

from .models import validate_hhmm


def local_now() -> datetime:
    """Naive local wall-clock time; the default clock of the tick loop."""
    return datetime.now()


def parse_hhmm(s: str) -> time:
    validate_hhmm(s)
    hh, mm = s.split(":")
    return time(int(hh), int(mm))


def to_hhmm(t: Union[datetime, time]) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"


def date_key(d: Union[date, datetime]) -> str:
    if isinstance(d, datetime):
        d = d.date()
    return d.isoformat()


def sunday_weekday(d: Union[date, datetime]) -> int:
    """Weekday with 0=Sunday ... 6=Saturday."""
    return (d.weekday() + 1) % 7


def seconds_since_midnight(t: Union[datetime, time]) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


def format_countdown(seconds: float) -> str:
    s = int(seconds)
    hours = s // 3600
    minutes = (s % 3600) // 60
    secs = s % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def epoch_now() -> float:
    return datetime.now(timezone.utc).timestamp()
