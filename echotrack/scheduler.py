from __future__ import annotations
import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from .engine import TickEngine, TickResult

log = logging.getLogger(__name__)


class Scheduler(QObject):
    alarm_fired = Signal(object)  # AlarmEvent
    alarm_dismissed = Signal(object)  # Task
    countdown_changed = Signal(object)  # Optional[Countdown]
    ticked = Signal(object)  # TickResult

    def __init__(self, engine: TickEngine, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.engine = engine
        self.timer = QTimer(self)
        self.timer.setInterval(1_000)  # 1s tick, alarms checked once per minute
        self.timer.timeout.connect(self.tick)

    def start(self) -> None:
        self.timer.start()
        self.tick()

    def stop(self) -> None:
        self.timer.stop()

    def tick(self) -> Optional[TickResult]:
        try:
            result = self.engine.tick()
        except Exception:
            # keep the loop alive; the next tick reloads everything anyway
            log.exception("Tick failed")
            return None

        if result.fired is not None:
            self.alarm_fired.emit(result.fired)
        self.countdown_changed.emit(result.countdown)
        self.ticked.emit(result)
        return result

    def dismiss(self) -> None:
        task = self.engine.dismiss()
        if task is not None:
            self.alarm_dismissed.emit(task)
