from __future__ import annotations
from dataclasses import replace
from typing import Optional, List
from PySide6.QtCore import QTime
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QCheckBox, QSpinBox, QTimeEdit, QComboBox, QMessageBox
)

from ..models import Daily, Interval, Priority, Recurrence, SpecificDays, Task
from ..periods import epoch_now, parse_hhmm
from ..recurrence import DAY_LABELS
from ..repository import Repository, new_id


class TaskEditor(QDialog):
    def __init__(self, repo: Repository, task_id: Optional[str] = None, group_id: str = "default", parent=None):
        super().__init__(parent)
        self.repo = repo
        self.task_id = task_id
        self.group_id = group_id
        self.setWindowTitle("Edit Task" if task_id else "Add Task")
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)

        self.title = QLineEdit()
        layout.addWidget(QLabel("Title"))
        layout.addWidget(self.title)

        self.high_priority = QCheckBox("High priority")
        layout.addWidget(self.high_priority)

        self.recurrence_type = QComboBox()
        self.recurrence_type.addItem("Daily", "daily")
        self.recurrence_type.addItem("Every N days", "interval")
        self.recurrence_type.addItem("Specific days", "specific_days")
        self.recurrence_type.currentIndexChanged.connect(self._toggle_fields)
        layout.addWidget(QLabel("Recurrence"))
        layout.addWidget(self.recurrence_type)

        self.interval_days = QSpinBox()
        self.interval_days.setRange(1, 365)
        self.interval_days.setValue(2)
        layout.addWidget(QLabel("Interval (days)"))
        layout.addWidget(self.interval_days)

        layout.addWidget(QLabel("Active weekdays"))
        wd_row = QHBoxLayout()
        self.weekday_checks: List[QCheckBox] = []
        for lab in DAY_LABELS:
            cb = QCheckBox(lab.title())
            self.weekday_checks.append(cb)
            wd_row.addWidget(cb)
        layout.addLayout(wd_row)

        self.has_alarm = QCheckBox("Alarm time")
        self.has_alarm.toggled.connect(self._toggle_fields)
        layout.addWidget(self.has_alarm)
        self.alarm_time = QTimeEdit()
        self.alarm_time.setDisplayFormat("HH:mm")
        layout.addWidget(self.alarm_time)

        btns = QHBoxLayout()
        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self.reject)
        btns.addWidget(self.btn_cancel)

        self.btn_save = QPushButton("Save")
        self.btn_save.clicked.connect(self.save)
        btns.addWidget(self.btn_save)
        layout.addLayout(btns)

        if task_id is not None:
            self._load(task_id)

        self._toggle_fields()

    def _toggle_fields(self) -> None:
        kind = self.recurrence_type.currentData()
        self.interval_days.setEnabled(kind == "interval")
        for cb in self.weekday_checks:
            cb.setEnabled(kind == "specific_days")
        self.alarm_time.setEnabled(self.has_alarm.isChecked())

    def _load(self, task_id: str) -> None:
        t = self.repo.get_task(task_id)
        self.title.setText(t.title)
        self.high_priority.setChecked(t.priority == Priority.HIGH)

        r = t.recurrence
        if isinstance(r, Interval):
            self.recurrence_type.setCurrentIndex(1)
            self.interval_days.setValue(r.every_n_days)
        elif isinstance(r, SpecificDays):
            self.recurrence_type.setCurrentIndex(2)
            for i, cb in enumerate(self.weekday_checks):
                cb.setChecked(i in r.days_of_week)
        else:
            self.recurrence_type.setCurrentIndex(0)

        if t.time:
            at = parse_hhmm(t.time)
            self.has_alarm.setChecked(True)
            self.alarm_time.setTime(QTime(at.hour, at.minute))

    def _recurrence(self) -> Recurrence:
        kind = self.recurrence_type.currentData()
        if kind == "interval":
            return Interval(every_n_days=int(self.interval_days.value()))
        if kind == "specific_days":
            days = [i for i, cb in enumerate(self.weekday_checks) if cb.isChecked()]
            return SpecificDays(days_of_week=frozenset(days))
        return Daily()

    def save(self) -> None:
        title = self.title.text().strip()
        if not title:
            QMessageBox.information(self, "Missing title", "Give the task a title.")
            return

        hhmm = None
        if self.has_alarm.isChecked():
            qt = self.alarm_time.time()
            hhmm = f"{qt.hour():02d}:{qt.minute():02d}"
        priority = Priority.HIGH if self.high_priority.isChecked() else Priority.NORMAL

        if self.task_id is None:
            self.repo.add_task(
                Task(
                    id=new_id(),
                    title=title,
                    time=hhmm,
                    recurrence=self._recurrence(),
                    priority=priority,
                    group_id=self.group_id,
                    created_at=epoch_now(),
                )
            )
        else:
            t = self.repo.get_task(self.task_id)
            self.repo.update_task(
                replace(t, title=title, time=hhmm, recurrence=self._recurrence(), priority=priority)
            )
        self.accept()
