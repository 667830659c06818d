from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from .models import Task
from .periods import format_countdown, parse_hhmm, seconds_since_midnight
from .recurrence import is_armed


@dataclass(frozen=True)
class Countdown:
    task: Task
    seconds_remaining: int

    @property
    def display(self) -> str:
        return format_countdown(self.seconds_remaining)


def next_due(tasks: Sequence[Task], now: datetime) -> Optional[Countdown]:
    """Nearest armed task later today. Recomputed from scratch on every tick."""
    today = now.date()
    now_s = seconds_since_midnight(now)

    best: Optional[Countdown] = None
    for task in tasks:
        if not is_armed(task, today):
            continue
        diff = seconds_since_midnight(parse_hhmm(task.time)) - now_s
        if diff <= 0:
            continue
        # strict < keeps the first task on ties
        if best is None or diff < best.seconds_remaining:
            best = Countdown(task=task, seconds_remaining=diff)
    return best
