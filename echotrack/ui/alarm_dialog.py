from __future__ import annotations
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QDialog, QLabel, QPushButton, QVBoxLayout

from ..alarm import AlarmEvent


class AlarmDialog(QDialog):
    """Stays up until the user dismisses it; closing the window counts as dismissing."""

    dismissed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Alarm")
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.setMinimumWidth(360)

        layout = QVBoxLayout(self)

        self.header = QLabel("PROTOCOL DUE")
        self.header.setAlignment(Qt.AlignCenter)
        self.header.setStyleSheet("QLabel { color: #ef4444; font-weight: bold; letter-spacing: 2px; }")
        layout.addWidget(self.header)

        self.title = QLabel("")
        self.title.setAlignment(Qt.AlignCenter)
        self.title.setStyleSheet("QLabel { font-size: 22px; font-weight: bold; }")
        self.title.setWordWrap(True)
        layout.addWidget(self.title)

        self.btn_dismiss = QPushButton("DISMISS ALARM")
        self.btn_dismiss.clicked.connect(self._dismiss)
        layout.addWidget(self.btn_dismiss)

    def show_alarm(self, event: AlarmEvent) -> None:
        self.title.setText(event.task.title)
        self.header.setText(f"PROTOCOL DUE {event.minute}")
        self.show()
        self.raise_()
        self.activateWindow()

    def _dismiss(self) -> None:
        self.hide()
        self.dismissed.emit()

    def closeEvent(self, event):
        event.ignore()
        self._dismiss()
