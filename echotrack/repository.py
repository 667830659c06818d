from __future__ import annotations
import logging
import uuid
from dataclasses import asdict, replace
from typing import Any, Callable, Dict, List, Optional

from .ledger import toggle_in
from .models import (
    DEFAULT_GROUP, AppSettings, Daily, Interval, Priority, Recurrence,
    ScheduleGroup, SpecificDays, Task,
)
from .recurrence import Day
from .store import KeyValueStore

log = logging.getLogger(__name__)

TASKS_KEY = "echotrack_tasks"
GROUPS_KEY = "echotrack_groups"
SETTINGS_KEY = "echotrack_settings"


def _list_of(value: Any, kind: type, field: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, kind) and not isinstance(v, bool) for v in value):
        raise TypeError(f"{field} must be a list of {kind.__name__}, got {value!r}")
    return value


def recurrence_to_dict(r: Recurrence) -> Dict[str, Any]:
    if isinstance(r, Daily):
        return {"type": "daily"}
    if isinstance(r, Interval):
        return {"type": "interval", "intervalDays": r.every_n_days}
    if isinstance(r, SpecificDays):
        return {"type": "specific_days", "daysOfWeek": sorted(r.days_of_week)}
    raise TypeError(f"unknown recurrence variant: {type(r).__name__}")


def recurrence_from_dict(d: Dict[str, Any]) -> Recurrence:
    kind = d.get("type", "daily")
    if kind == "daily":
        return Daily()
    if kind == "interval":
        return Interval(every_n_days=int(d.get("intervalDays") or 1))
    if kind == "specific_days":
        return SpecificDays(days_of_week=frozenset(_list_of(d.get("daysOfWeek"), int, "daysOfWeek")))
    raise ValueError(f"unknown recurrence type {kind!r}")


def task_to_dict(t: Task) -> Dict[str, Any]:
    return {
        "id": t.id,
        "title": t.title,
        "time": t.time,
        "groupId": t.group_id,
        "recurrence": recurrence_to_dict(t.recurrence),
        "completedDates": sorted(t.completed_dates),
        "lastCompletedAt": t.last_completed_at,
        "streak": t.streak,
        "priority": t.priority.value,
        "createdAt": t.created_at,
    }


def task_from_dict(d: Dict[str, Any]) -> Task:
    return Task(
        id=str(d["id"]),
        title=str(d.get("title", "")),
        time=d.get("time") or None,
        # older records had no group
        group_id=d.get("groupId") or DEFAULT_GROUP.id,
        recurrence=recurrence_from_dict(d.get("recurrence") or {}),
        completed_dates=frozenset(_list_of(d.get("completedDates"), str, "completedDates")),
        last_completed_at=d.get("lastCompletedAt"),
        streak=max(0, int(d.get("streak") or 0)),
        priority=Priority(d.get("priority") or Priority.NORMAL.value),
        created_at=d.get("createdAt"),
    )


def new_id() -> str:
    return uuid.uuid4().hex


class Repository:
    def __init__(self, store: KeyValueStore):
        self.store = store

    # ---------- Tasks ----------
    def load_tasks(self) -> List[Task]:
        out: List[Task] = []
        for raw in self.store.load(TASKS_KEY):
            try:
                out.append(task_from_dict(raw))
            except (KeyError, TypeError, ValueError):
                log.warning("Skipping malformed task record: %r", raw, exc_info=True)
        return out

    def save_tasks(self, tasks: List[Task]) -> None:
        self.store.save(TASKS_KEY, [task_to_dict(t) for t in tasks])

    def get_task(self, task_id: str) -> Task:
        for t in self.load_tasks():
            if t.id == task_id:
                return t
        raise KeyError(task_id)

    def add_task(self, task: Task) -> Task:
        # newest first
        self.save_tasks([task] + self.load_tasks())
        return task

    def update_task(self, task: Task) -> None:
        tasks = self.load_tasks()
        for i, t in enumerate(tasks):
            if t.id == task.id:
                tasks[i] = task
                self.save_tasks(tasks)
                return
        raise KeyError(task.id)

    def delete_task(self, task_id: str) -> None:
        self.save_tasks([t for t in self.load_tasks() if t.id != task_id])

    def toggle_completion(self, task_id: str, day: Day, on_complete: Optional[Callable[[], None]] = None) -> Task:
        tasks = toggle_in(self.load_tasks(), task_id, day, on_complete=on_complete)
        self.save_tasks(tasks)
        return next(t for t in tasks if t.id == task_id)

    # ---------- Groups ----------
    def list_groups(self) -> List[ScheduleGroup]:
        groups: List[ScheduleGroup] = []
        for raw in self.store.load(GROUPS_KEY):
            try:
                groups.append(ScheduleGroup(id=str(raw["id"]), name=str(raw["name"])))
            except (KeyError, TypeError):
                log.warning("Skipping malformed group record: %r", raw)
        if not any(g.id == DEFAULT_GROUP.id for g in groups):
            groups.insert(0, DEFAULT_GROUP)
        return groups

    def add_group(self, name: str) -> ScheduleGroup:
        group = ScheduleGroup(id=new_id(), name=name.strip().upper())
        self._save_groups(self.list_groups() + [group])
        return group

    def delete_group(self, group_id: str) -> None:
        if group_id == DEFAULT_GROUP.id:
            raise ValueError("the default group cannot be deleted")
        self._save_groups([g for g in self.list_groups() if g.id != group_id])
        tasks = [
            replace(t, group_id=DEFAULT_GROUP.id) if t.group_id == group_id else t
            for t in self.load_tasks()
        ]
        self.save_tasks(tasks)

    def _save_groups(self, groups: List[ScheduleGroup]) -> None:
        self.store.save(GROUPS_KEY, [asdict(g) for g in groups])

    # ---------- Settings ----------
    def get_settings(self) -> AppSettings:
        rows = self.store.load(SETTINGS_KEY)
        values = rows[0] if rows and isinstance(rows[0], dict) else {}
        defaults = AppSettings()
        return AppSettings(
            sound_enabled=bool(values.get("sound_enabled", defaults.sound_enabled)),
            alarms_enabled=bool(values.get("alarms_enabled", defaults.alarms_enabled)),
            notifications_enabled=bool(values.get("notifications_enabled", defaults.notifications_enabled)),
        )

    def set_setting(self, name: str, value: bool) -> AppSettings:
        current = asdict(self.get_settings())
        if name not in current:
            raise KeyError(name)
        current[name] = bool(value)
        self.store.save(SETTINGS_KEY, [current])
        return AppSettings(**current)
