from __future__ import annotations
import logging
import os
import signal
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication, QSystemTrayIcon, QMenu
from PySide6.QtGui import QAction
from PySide6.QtCore import QTimer

from .alarm import AlarmClock, AlarmEvent
from .countdown import Countdown
from .db import connect, migrate
from .engine import TickEngine
from .log_utils import setup_logging
from .notifications import Notifier
from .repository import Repository
from .resources import tray_icon
from .scheduler import Scheduler
from .sound import AlarmSound
from .store import SqliteStore
from .ui.alarm_dialog import AlarmDialog
from .ui.panel import TrayPanel
from .ui.settings import SettingsDialog

log = logging.getLogger(__name__)

APP_NAME = "EchoTrack"


def main() -> int:
    setup_logging(os.environ.get("ECHOTRACK_LOG_LEVEL", "INFO"))

    app = QApplication(sys.argv)
    app.setWindowIcon(tray_icon())
    app.setQuitOnLastWindowClosed(False)

    # Let Ctrl-C quit while the Qt event loop is running
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    _sig_timer = QTimer()
    _sig_timer.start(250)
    _sig_timer.timeout.connect(lambda: None)

    conn = connect()
    migrate(conn)
    repo = Repository(SqliteStore(conn))

    tray = QSystemTrayIcon()
    tray.setIcon(tray_icon())
    tray.setToolTip(APP_NAME)

    sound = AlarmSound()
    notifier = Notifier(tray if QSystemTrayIcon.isSystemTrayAvailable() else None)

    def completion_chime() -> None:
        if repo.get_settings().sound_enabled:
            sound.play_completion()

    panel = TrayPanel(repo, on_complete=completion_chime)
    alarm_dialog = AlarmDialog()

    engine = TickEngine(repo, AlarmClock(sound=sound, notify=notifier.notify))
    scheduler = Scheduler(engine)

    scheduler.alarm_fired.connect(lambda ev: _on_alarm(ev, alarm_dialog, panel))
    scheduler.alarm_dismissed.connect(lambda _task: panel.refresh())
    scheduler.countdown_changed.connect(lambda cd: _update_tooltip(tray, cd))
    scheduler.ticked.connect(panel.on_tick)
    alarm_dialog.dismissed.connect(scheduler.dismiss)

    tray.messageClicked.connect(lambda: _show_panel(panel))

    menu = QMenu()

    act_open = QAction("Open")
    act_open.triggered.connect(lambda: _show_panel(panel))
    menu.addAction(act_open)

    menu.addSeparator()

    act_settings = QAction("Settings…")
    act_settings.triggered.connect(lambda: _open_settings(repo, panel))
    menu.addAction(act_settings)

    menu.addSeparator()

    def quit_cleanly():
        scheduler.stop()
        sound.stop_loop()
        tray.hide()
        panel.close()
        app.quit()

    act_quit = QAction("Quit")
    act_quit.triggered.connect(quit_cleanly)
    menu.addAction(act_quit)

    tray.setContextMenu(menu)
    tray.activated.connect(lambda reason: _tray_click(reason, panel))

    scheduler.start()
    tray.show()
    log.info("%s started, data in %s", APP_NAME, conn.execute("PRAGMA database_list").fetchone()["file"])
    return app.exec()


def _tray_click(reason: QSystemTrayIcon.ActivationReason, panel: TrayPanel) -> None:
    if reason in (
        QSystemTrayIcon.ActivationReason.Trigger,
        QSystemTrayIcon.ActivationReason.DoubleClick,
    ):
        _show_panel(panel)


def _show_panel(panel: TrayPanel) -> None:
    panel.refresh()
    panel.show()
    panel.raise_()
    panel.activateWindow()


def _on_alarm(ev: AlarmEvent, dialog: AlarmDialog, panel: TrayPanel) -> None:
    dialog.show_alarm(ev)
    panel.refresh()


def _update_tooltip(tray: QSystemTrayIcon, cd: Optional[Countdown]) -> None:
    if cd is None:
        tray.setToolTip(APP_NAME)
    else:
        tray.setToolTip(f"{APP_NAME}\n{cd.task.title} T-{cd.display}")


def _open_settings(repo: Repository, panel: TrayPanel) -> None:
    dlg = SettingsDialog(repo, parent=panel)
    if dlg.exec():
        panel.refresh()
