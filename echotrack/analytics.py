from __future__ import annotations
from datetime import date, timedelta
from typing import List, Sequence, Tuple

from .models import Task
from .periods import date_key


def total_completions(tasks: Sequence[Task]) -> int:
    return sum(len(t.completed_dates) for t in tasks)


def completions_on(tasks: Sequence[Task], day: date) -> int:
    key = date_key(day)
    return sum(1 for t in tasks if key in t.completed_dates)


def consistency(tasks: Sequence[Task], today: date, days: int = 7) -> List[Tuple[date, int]]:
    """Completion counts for the last `days` days, oldest first."""
    return [
        (d, completions_on(tasks, d))
        for d in (today - timedelta(days=i) for i in range(days - 1, -1, -1))
    ]


def heatmap(tasks: Sequence[Task], today: date, days: int = 85) -> List[Tuple[date, int]]:
    return consistency(tasks, today, days=days)


def global_streak(tasks: Sequence[Task], today: date) -> int:
    """
    Consecutive days with at least one completion, counted back from today.
    A day that is not done yet does not break the run, so counting starts
    from yesterday in that case.
    """
    d = today
    if not completions_on(tasks, d):
        d -= timedelta(days=1)

    streak = 0
    while completions_on(tasks, d):
        streak += 1
        d -= timedelta(days=1)
    return streak
