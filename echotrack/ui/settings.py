from __future__ import annotations
from PySide6.QtWidgets import QDialog, QVBoxLayout, QCheckBox, QHBoxLayout, QPushButton
from ..repository import Repository


class SettingsDialog(QDialog):
    def __init__(self, repo: Repository, parent=None):
        super().__init__(parent)
        self.repo = repo
        self.setWindowTitle("Settings")
        self.setMinimumWidth(320)

        layout = QVBoxLayout(self)
        settings = self.repo.get_settings()

        self.sound = QCheckBox("Sound")
        self.sound.setChecked(settings.sound_enabled)
        layout.addWidget(self.sound)

        self.alarms = QCheckBox("Alarms")
        self.alarms.setChecked(settings.alarms_enabled)
        layout.addWidget(self.alarms)

        self.notifications = QCheckBox("Notifications")
        self.notifications.setChecked(settings.notifications_enabled)
        layout.addWidget(self.notifications)

        btns = QHBoxLayout()
        save = QPushButton("Save")
        save.clicked.connect(self.save)
        btns.addWidget(save)

        cancel = QPushButton("Cancel")
        cancel.clicked.connect(self.reject)
        btns.addWidget(cancel)

        layout.addLayout(btns)

    def save(self) -> None:
        self.repo.set_setting("sound_enabled", self.sound.isChecked())
        self.repo.set_setting("alarms_enabled", self.alarms.isChecked())
        self.repo.set_setting("notifications_enabled", self.notifications.isChecked())
        self.accept()
