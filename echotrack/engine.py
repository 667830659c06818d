from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from .alarm import AlarmClock, AlarmEvent
from .countdown import Countdown, next_due
from .models import Task
from .periods import local_now
from .recurrence import is_active_on, is_satisfied_on, recurrence_label
from .repository import Repository


@dataclass(frozen=True)
class TaskState:
    task_id: str
    title: str

    active_today: bool
    done: bool
    due: bool
    armed: bool

    streak: int
    recurrence_text: str

    # UI display
    status_text: str


def compute_task_state(task: Task, now: datetime) -> TaskState:
    """
    Single source of truth for the DONE / DUE / OFF TODAY status of a task,
    and whether it is eligible to arm the alarm clock today.
    """
    today = now.date()
    active_today = is_active_on(task.recurrence, today)
    done = is_satisfied_on(task, today)
    due = active_today and not done
    armed = due and task.time is not None

    if done:
        status_text = "DONE"
    elif not active_today:
        status_text = "OFF TODAY"
    elif task.time:
        status_text = f"DUE {task.time}"
    else:
        status_text = "DUE"

    return TaskState(
        task_id=task.id,
        title=task.title,

        active_today=active_today,
        done=done,
        due=due,
        armed=armed,

        streak=task.streak,
        recurrence_text=recurrence_label(task.recurrence),

        status_text=status_text,
    )


@dataclass(frozen=True)
class TickResult:
    now: datetime
    tasks: List[Task]
    fired: Optional[AlarmEvent]
    countdown: Optional[Countdown]


class TickEngine:
    """
    One pass of the per-second loop: reload the store, let the alarm clock
    look for a trigger, then project the countdown to the next due task.
    """

    def __init__(self, repo: Repository, alarm_clock: AlarmClock, clock: Callable[[], datetime] = local_now):
        self.repo = repo
        self.alarm_clock = alarm_clock
        self.clock = clock

    def tick(self) -> TickResult:
        now = self.clock()
        # Full reload so edits made elsewhere are seen on the next tick
        tasks = self.repo.load_tasks()
        settings = self.repo.get_settings()

        fired = self.alarm_clock.process(now, tasks, settings)
        countdown = next_due(tasks, now)
        return TickResult(now=now, tasks=tasks, fired=fired, countdown=countdown)

    def dismiss(self) -> Optional[Task]:
        return self.alarm_clock.dismiss()
