from __future__ import annotations
import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer
from PySide6.QtWidgets import QApplication

log = logging.getLogger(__name__)


class AlarmSound(QObject):
    """Alarm pulse repeated every second until stopped."""

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.timer = QTimer(self)
        self.timer.setInterval(1_000)
        self.timer.timeout.connect(self._pulse)

    def is_playing(self) -> bool:
        return self.timer.isActive()

    def start_loop(self) -> None:
        if self.timer.isActive():
            return
        self._pulse()
        self.timer.start()

    def stop_loop(self) -> None:
        if self.timer.isActive():
            self.timer.stop()

    def play_completion(self) -> None:
        self._pulse()

    def _pulse(self) -> None:
        try:
            QApplication.beep()
        except Exception:
            log.warning("Audio output unavailable", exc_info=True)
