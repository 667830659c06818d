from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from .models import Task
from .periods import date_key, epoch_now
from .recurrence import Day

log = logging.getLogger(__name__)


def toggle_completion(
    task: Task,
    day: Day,
    on_complete: Optional[Callable[[], None]] = None,
    stamp: Callable[[], float] = epoch_now,
) -> Task:
    """
    Flip completion of `task` for `day`.

    The streak is an incrementally maintained counter: +1 when the date is
    added, -1 (floored at zero) when it is removed. It is not recomputed from
    completed_dates, so toggling non-adjacent dates can make it drift from a
    true consecutive-day count.
    """
    key = date_key(day)

    if key in task.completed_dates:
        return replace(
            task,
            completed_dates=task.completed_dates - {key},
            streak=max(0, task.streak - 1),
        )

    if on_complete is not None:
        try:
            on_complete()
        except Exception:
            log.exception("Completion sound failed")

    log.info("Completed %s for %s", task.title, key)
    return replace(
        task,
        completed_dates=task.completed_dates | {key},
        streak=task.streak + 1,
        last_completed_at=stamp(),
    )


def toggle_in(
    tasks: Sequence[Task],
    task_id: str,
    day: Day,
    on_complete: Optional[Callable[[], None]] = None,
    stamp: Callable[[], float] = epoch_now,
) -> List[Task]:
    out: List[Task] = []
    found = False
    for t in tasks:
        if t.id == task_id:
            t = toggle_completion(t, day, on_complete=on_complete, stamp=stamp)
            found = True
        out.append(t)
    if not found:
        raise KeyError(task_id)
    return out
