from __future__ import annotations
from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QListWidget, QListWidgetItem,
    QMessageBox, QMenu, QLineEdit, QComboBox, QInputDialog
)

from ..analytics import global_streak, total_completions
from ..engine import TickResult, compute_task_state
from ..intents import apply_intents, parse_intents
from ..models import DEFAULT_GROUP, InvalidTimeError, Priority
from ..periods import local_now
from ..repository import Repository
from .task_editor import TaskEditor


class TrayPanel(QDialog):
    def __init__(self, repo: Repository, on_complete: Optional[Callable[[], None]] = None, parent=None):
        super().__init__(parent)
        self.repo = repo
        self.on_complete = on_complete
        self.setWindowTitle("EchoTrack")
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.setMinimumWidth(520)
        self.setAttribute(Qt.WA_DeleteOnClose, False)

        self.layout = QVBoxLayout(self)

        header_row = QHBoxLayout()
        self.header = QLabel("Schedule")
        header_row.addWidget(self.header)
        self.countdown = QLabel("")
        self.countdown.setAlignment(Qt.AlignRight)
        self.countdown.setStyleSheet("QLabel { font-family: monospace; font-weight: bold; }")
        header_row.addWidget(self.countdown)
        self.layout.addLayout(header_row)

        group_row = QHBoxLayout()
        self.group = QComboBox()
        self.group.currentIndexChanged.connect(self.refresh)
        group_row.addWidget(self.group, 1)
        self.btn_add_group = QPushButton("New group…")
        self.btn_add_group.clicked.connect(self.add_group)
        group_row.addWidget(self.btn_add_group)
        self.btn_delete_group = QPushButton("Delete group")
        self.btn_delete_group.clicked.connect(self.delete_group)
        group_row.addWidget(self.btn_delete_group)
        self.layout.addLayout(group_row)

        self.command = QLineEdit()
        self.command.setPlaceholderText('Task actions, e.g. [{"type": "create", "data": {"title": "Gym", "time": "07:00", "recurrence": "daily"}}]')
        self.command.returnPressed.connect(self.run_command)
        self.layout.addWidget(self.command)

        self.list = QListWidget()
        self.list.itemDoubleClicked.connect(lambda _item: self.toggle_complete())
        self.list.setContextMenuPolicy(Qt.CustomContextMenu)
        self.list.customContextMenuRequested.connect(self._show_task_menu_at)
        self.layout.addWidget(self.list)

        # --- Manage tasks row ---
        manage_row = QHBoxLayout()

        self.btn_toggle = QPushButton("Done / Undo")
        self.btn_toggle.clicked.connect(self.toggle_complete)
        manage_row.addWidget(self.btn_toggle)

        self.btn_add_task = QPushButton("Add task…")
        self.btn_add_task.clicked.connect(self.add_task)
        manage_row.addWidget(self.btn_add_task)

        self.btn_edit_task = QPushButton("Edit task…")
        self.btn_edit_task.clicked.connect(self.edit_task)
        manage_row.addWidget(self.btn_edit_task)

        self.btn_delete_task = QPushButton("Delete task")
        self.btn_delete_task.clicked.connect(self.delete_task)
        manage_row.addWidget(self.btn_delete_task)

        self.layout.addLayout(manage_row)

        self.footer = QLabel("")
        self.footer.setStyleSheet("""
            QLabel {
                color: #888;
                font-size: 11px;
                padding-top: 6px;
            }
        """)
        self.footer.setAlignment(Qt.AlignCenter)
        self.layout.addWidget(self.footer)

        self._reload_groups()
        self.refresh()

    def selected_task_id(self) -> Optional[str]:
        item = self.list.currentItem()
        if not item:
            return None
        return str(item.data(Qt.UserRole))

    def active_group_id(self) -> str:
        return self.group.currentData() or DEFAULT_GROUP.id

    def _reload_groups(self, select: Optional[str] = None) -> None:
        select = select or self.active_group_id()
        self.group.blockSignals(True)
        try:
            self.group.clear()
            for g in self.repo.list_groups():
                self.group.addItem(g.name, g.id)
            idx = self.group.findData(select)
            self.group.setCurrentIndex(max(0, idx))
        finally:
            self.group.blockSignals(False)

    def refresh(self) -> None:
        selected_id = self.selected_task_id()
        now = local_now()
        tasks = self.repo.load_tasks()
        group_id = self.active_group_id()

        self.list.blockSignals(True)
        try:
            self.list.clear()
            selected_row = None

            for t in (t for t in tasks if t.group_id == group_id):
                state = compute_task_state(t, now)
                flag = " !" if t.priority == Priority.HIGH else ""
                text = f"{t.title}{flag} — {state.recurrence_text} — {state.status_text} — streak {state.streak}"

                it = QListWidgetItem(text)
                it.setData(Qt.UserRole, t.id)
                if state.done:
                    it.setForeground(QBrush(QColor("#888")))
                self.list.addItem(it)

                if selected_id is not None and t.id == selected_id:
                    selected_row = self.list.count() - 1

            if selected_row is not None:
                self.list.setCurrentRow(selected_row)
        finally:
            self.list.blockSignals(False)

        self.footer.setText(
            f"{total_completions(tasks)} completions · global streak {global_streak(tasks, now.date())} days"
        )

    def on_tick(self, result: TickResult) -> None:
        cd = result.countdown
        self.countdown.setText(f"{cd.task.title}  T-{cd.display}" if cd else "")

    def _show_task_menu_at(self, pos) -> None:
        item = self.list.itemAt(pos)
        if item is None:
            return

        # Ensure the right-clicked item becomes selected
        self.list.setCurrentItem(item)

        menu = QMenu(self)
        menu.addAction("Done / Undo (today)").triggered.connect(self.toggle_complete)
        menu.addSeparator()
        menu.addAction("Edit…").triggered.connect(self.edit_task)
        menu.addAction("Delete").triggered.connect(self.delete_task)
        menu.exec(self.list.mapToGlobal(pos))

    # -------- actions ----------
    def toggle_complete(self) -> None:
        tid = self.selected_task_id()
        if tid is None:
            return
        self.repo.toggle_completion(tid, local_now().date(), on_complete=self.on_complete)
        self.refresh()

    def run_command(self) -> None:
        text = self.command.text().strip()
        if not text:
            return
        today = local_now().date()
        intents = parse_intents(text, today)
        if intents is None:
            QMessageBox.warning(self, "Command", "Could not understand those task actions.")
            return
        try:
            tasks = apply_intents(self.repo.load_tasks(), intents, today, group_id=self.active_group_id())
        except (InvalidTimeError, ValueError) as e:
            QMessageBox.warning(self, "Command", str(e))
            return
        self.repo.save_tasks(tasks)
        self.command.clear()
        self.refresh()

    def add_group(self) -> None:
        name, ok = QInputDialog.getText(self, "New group", "Group name")
        if not ok or not name.strip():
            return
        group = self.repo.add_group(name)
        self._reload_groups(select=group.id)
        self.refresh()

    def delete_group(self) -> None:
        gid = self.active_group_id()
        if gid == DEFAULT_GROUP.id:
            return
        confirm = QMessageBox.question(self, "Delete group", f"Delete group? Tasks will move to {DEFAULT_GROUP.name}.")
        if confirm == QMessageBox.StandardButton.Yes:
            self.repo.delete_group(gid)
            self._reload_groups(select=DEFAULT_GROUP.id)
            self.refresh()

    def add_task(self) -> None:
        dlg = TaskEditor(self.repo, task_id=None, group_id=self.active_group_id(), parent=self)
        if dlg.exec():
            self.refresh()

    def edit_task(self) -> None:
        tid = self.selected_task_id()
        if tid is None:
            QMessageBox.information(self, "No selection", "Select a task first.")
            return
        dlg = TaskEditor(self.repo, task_id=tid, parent=self)
        if dlg.exec():
            self.refresh()

    def delete_task(self) -> None:
        tid = self.selected_task_id()
        if tid is None:
            QMessageBox.information(self, "No selection", "Select a task first.")
            return

        confirm = QMessageBox.question(self, "Delete task", "Delete the selected task and its history?")
        if confirm == QMessageBox.StandardButton.Yes:
            self.repo.delete_task(tid)
            self.refresh()

    def closeEvent(self, event):
        event.ignore()
        self.hide()
