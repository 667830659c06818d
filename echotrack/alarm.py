from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional, Protocol, Sequence, Tuple

from .models import AlarmState, AppSettings, Task
from .periods import date_key, to_hhmm
from .recurrence import is_armed

log = logging.getLogger(__name__)

NOTIFICATION_TITLE = "EchoTrack EXECUTE"


class SoundLoop(Protocol):
    def start_loop(self) -> None: ...
    def stop_loop(self) -> None: ...


@dataclass(frozen=True)
class AlarmEvent:
    task: Task
    minute: str
    message: str


class AlarmClock:
    """
    Single global alarm slot, re-armed once per wall-clock minute.

    The driving loop may call process() every second; trigger evaluation only
    runs when the HH:MM of `now` differs from the last processed minute.
    When several tasks share a minute, the first one in collection order
    fires and the others are skipped for that occurrence. A task fires at
    most once per day for a given time, so a wall-clock hour repeated by a
    DST fall-back does not ring it again.
    """

    def __init__(self, sound: Optional[SoundLoop] = None, notify: Optional[Callable[[str, str], None]] = None):
        self.sound = sound
        self.notify = notify
        self.last_minute: Optional[str] = None
        self._firing: Optional[Task] = None
        # task id -> (date, HH:MM) it last fired for
        self._fired_for: Dict[str, Tuple[str, str]] = {}

    @property
    def firing(self) -> Optional[Task]:
        return self._firing

    @property
    def state(self) -> AlarmState:
        return AlarmState.FIRING if self._firing is not None else AlarmState.IDLE

    def process(self, now: datetime, tasks: Sequence[Task], settings: Optional[AppSettings] = None) -> Optional[AlarmEvent]:
        settings = settings or AppSettings()
        minute = to_hhmm(now)
        if minute == self.last_minute:
            return None
        self.last_minute = minute

        if not settings.alarms_enabled or self._firing is not None:
            return None

        today = now.date()
        day = date_key(today)
        for task in tasks:
            if task.time != minute or not is_armed(task, today):
                continue
            if self._fired_for.get(task.id) == (day, minute):
                continue
            self._fired_for = {k: v for k, v in self._fired_for.items() if v[0] == day}
            self._fired_for[task.id] = (day, minute)
            return self._fire(task, minute, settings)
        return None

    def dismiss(self) -> Optional[Task]:
        task = self._firing
        if task is None:
            return None
        self._firing = None
        if self.sound is not None:
            try:
                self.sound.stop_loop()
            except Exception:
                log.exception("Failed to stop alarm sound")
        log.info("Alarm dismissed: %s", task.title)
        return task

    def _fire(self, task: Task, minute: str, settings: AppSettings) -> AlarmEvent:
        self._firing = task
        message = f"PROTOCOL: {task.title}"
        log.info("Alarm firing at %s: %s", minute, task.title)

        if settings.sound_enabled and self.sound is not None:
            try:
                self.sound.start_loop()
            except Exception:
                log.exception("Failed to start alarm sound")

        if settings.notifications_enabled and self.notify is not None:
            try:
                self.notify(NOTIFICATION_TITLE, message)
            except Exception:
                log.exception("Failed to show alarm notification")

        return AlarmEvent(task=task, minute=minute, message=message)
