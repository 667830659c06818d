from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Union


class InvalidTimeError(ValueError):
    """Raised for a time-of-day that is not a valid 24h HH:MM string."""


_HHMM_RE = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


def validate_hhmm(value: str) -> str:
    if not isinstance(value, str) or not _HHMM_RE.fullmatch(value):
        raise InvalidTimeError(f"invalid time {value!r}, expected HH:MM (00:00-23:59)")
    return value


class Priority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"


class AlarmState(str, Enum):
    IDLE = "idle"
    FIRING = "firing"


@dataclass(frozen=True)
class Daily:
    pass


@dataclass(frozen=True)
class Interval:
    every_n_days: int

    def __post_init__(self) -> None:
        if int(self.every_n_days) < 1:
            raise ValueError(f"every_n_days must be >= 1, got {self.every_n_days}")


@dataclass(frozen=True)
class SpecificDays:
    # 0=Sun ... 6=Sat
    days_of_week: FrozenSet[int] = frozenset()

    def __post_init__(self) -> None:
        days = frozenset(int(d) for d in self.days_of_week)
        bad = sorted(d for d in days if not 0 <= d <= 6)
        if bad:
            raise ValueError(f"weekday out of range 0..6: {bad}")
        object.__setattr__(self, "days_of_week", days)


Recurrence = Union[Daily, Interval, SpecificDays]


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    recurrence: Recurrence = field(default_factory=Daily)

    # HH:MM local wall clock; None = no alarm, due all day
    time: Optional[str] = None

    # YYYY-MM-DD local dates
    completed_dates: FrozenSet[str] = frozenset()
    streak: int = 0

    group_id: str = "default"
    priority: Priority = Priority.NORMAL
    created_at: Optional[float] = None
    last_completed_at: Optional[float] = None

    def __post_init__(self) -> None:
        if self.time is not None:
            validate_hhmm(self.time)
        if not isinstance(self.completed_dates, frozenset):
            object.__setattr__(self, "completed_dates", frozenset(self.completed_dates))


@dataclass(frozen=True)
class ScheduleGroup:
    id: str
    name: str


DEFAULT_GROUP = ScheduleGroup(id="default", name="GENERAL")


@dataclass(frozen=True)
class AppSettings:
    sound_enabled: bool = True
    alarms_enabled: bool = True
    notifications_enabled: bool = True
