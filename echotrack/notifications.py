from __future__ import annotations
import logging
from typing import Optional

from PySide6.QtWidgets import QSystemTrayIcon

log = logging.getLogger(__name__)


class Notifier:
    def __init__(self, tray: Optional[QSystemTrayIcon]):
        self.tray = tray

    def notify(self, title: str, message: str) -> None:
        # Best effort: no tray / no message support is not an error
        if self.tray is None or not QSystemTrayIcon.supportsMessages():
            log.debug("System notifications unavailable, dropping %r", title)
            return
        try:
            self.tray.showMessage(title, message, QSystemTrayIcon.MessageIcon.Critical, 10_000)
        except Exception:
            log.warning("Could not show notification %r", title, exc_info=True)
