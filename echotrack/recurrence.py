from __future__ import annotations
from datetime import date, datetime
from typing import Union

from .models import Daily, Interval, Recurrence, SpecificDays, Task
from .periods import date_key, sunday_weekday

DAY_LABELS = ["SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT"]

Day = Union[date, datetime]


def is_active_on(recurrence: Recurrence, day: Day) -> bool:
    """
    Whether the recurrence rule matches the calendar date.

    Interval is not gated on an anchor date: it is active every day, and
    every_n_days is only carried for display.
    """
    if isinstance(recurrence, Daily):
        return True
    if isinstance(recurrence, Interval):
        return True
    if isinstance(recurrence, SpecificDays):
        return sunday_weekday(day) in recurrence.days_of_week
    raise TypeError(f"unknown recurrence variant: {type(recurrence).__name__}")


def is_satisfied_on(task: Task, day: Day) -> bool:
    return date_key(day) in task.completed_dates


def is_due_today(task: Task, today: Day) -> bool:
    return is_active_on(task.recurrence, today) and not is_satisfied_on(task, today)


def is_armed(task: Task, today: Day) -> bool:
    """Due today and carries an alarm time."""
    return task.time is not None and is_due_today(task, today)


def recurrence_label(recurrence: Recurrence) -> str:
    if isinstance(recurrence, Daily):
        return "DAILY"
    if isinstance(recurrence, Interval):
        return f"EVERY {recurrence.every_n_days} DAYS"
    if isinstance(recurrence, SpecificDays):
        if not recurrence.days_of_week:
            return "NO DAYS"
        return " ".join(DAY_LABELS[d] for d in sorted(recurrence.days_of_week))
    raise TypeError(f"unknown recurrence variant: {type(recurrence).__name__}")
