from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Union

from .models import Daily, Interval, Priority, Recurrence, SpecificDays, Task, validate_hhmm
from .periods import epoch_now, sunday_weekday
from .recurrence import Day, is_satisfied_on
from .repository import new_id, recurrence_from_dict

log = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class CreateIntent:
    title: str
    recurrence: Recurrence
    time: Optional[str] = None
    priority: Priority = Priority.NORMAL


@dataclass(frozen=True)
class UpdateIntent:
    query: str
    updates: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteIntent:
    query: str


Intent = Union[CreateIntent, UpdateIntent, DeleteIntent]


def _recurrence_from_words(spec: Any, specific_days: Any, specific_day: Any, today: Day) -> Recurrence:
    if isinstance(spec, dict):
        return recurrence_from_dict(spec)
    today_idx = sunday_weekday(today)
    if specific_day is not None:
        return SpecificDays(days_of_week=frozenset([int(specific_day)]))
    if spec == "daily":
        return Daily()
    if spec in ("none", "weekly"):
        return SpecificDays(days_of_week=frozenset([today_idx]))
    if spec == "specific_days":
        return SpecificDays(days_of_week=frozenset(int(d) for d in (specific_days or [])))
    return Interval(every_n_days=7)


def _priority(value: Any) -> Priority:
    try:
        return Priority(value or Priority.NORMAL.value)
    except ValueError:
        return Priority.NORMAL


def _intent_from_obj(obj: Dict[str, Any], today: Day) -> Optional[Intent]:
    kind = obj.get("type", "create")
    if kind == "create":
        data = obj.get("data", obj)
        if not isinstance(data, dict):
            return None
        title = str(data.get("title") or "").strip()
        if not title:
            return None
        return CreateIntent(
            title=title,
            time=data.get("time") or None,
            priority=_priority(data.get("priority")),
            recurrence=_recurrence_from_words(
                data.get("recurrence"), data.get("specificDays"), data.get("specificDay"), today
            ),
        )
    if kind == "update":
        updates = obj.get("updates")
        return UpdateIntent(query=str(obj.get("query") or ""), updates=dict(updates) if isinstance(updates, dict) else {})
    if kind == "delete":
        return DeleteIntent(query=str(obj.get("query") or ""))
    return None


def parse_intents(text: Optional[str], today: Day) -> Optional[List[Intent]]:
    """
    Turn the text returned for a parse-command request into intents.

    Returns None when nothing usable came back; the caller shows that as a
    failed command rather than an error.
    """
    if not text or not text.strip():
        return None
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        parsed = json.loads(cleaned)
    except ValueError:
        log.warning("Unparseable command response: %.200s", cleaned)
        return None

    items = parsed if isinstance(parsed, list) else [parsed]
    intents: List[Intent] = []
    for obj in items:
        if not isinstance(obj, dict):
            continue
        try:
            intent = _intent_from_obj(obj, today)
        except (TypeError, ValueError):
            log.warning("Skipping malformed command action: %r", obj, exc_info=True)
            continue
        if intent is not None:
            intents.append(intent)
    return intents or None


def _matches(task: Task, query: str, today: Day) -> bool:
    q = query.strip().lower()
    if not q:
        return False
    if q == "completed":
        return is_satisfied_on(task, today)
    return q in task.title.lower()


def _apply_updates(task: Task, updates: Dict[str, Any], today: Day) -> Task:
    changes: Dict[str, Any] = {}
    if "title" in updates and updates["title"]:
        changes["title"] = str(updates["title"])
    if "time" in updates:
        changes["time"] = validate_hhmm(updates["time"]) if updates["time"] else None
    if "priority" in updates:
        changes["priority"] = _priority(updates["priority"])
    if "recurrence" in updates and updates["recurrence"]:
        changes["recurrence"] = _recurrence_from_words(
            updates["recurrence"], updates.get("specificDays"), updates.get("specificDay"), today
        )
    return replace(task, **changes)


def apply_intents(
    tasks: List[Task],
    intents: List[Intent],
    today: Day,
    group_id: str = "default",
    make_id: Callable[[], str] = new_id,
    stamp: Callable[[], float] = epoch_now,
) -> List[Task]:
    """Apply intents in order. Created tasks go to the front of the list."""
    out = list(tasks)
    for intent in intents:
        if isinstance(intent, CreateIntent):
            task = Task(
                id=make_id(),
                title=intent.title,
                time=intent.time,
                recurrence=intent.recurrence,
                priority=intent.priority,
                group_id=group_id,
                created_at=stamp(),
            )
            out.insert(0, task)
        elif isinstance(intent, UpdateIntent):
            out = [_apply_updates(t, intent.updates, today) if _matches(t, intent.query, today) else t for t in out]
        elif isinstance(intent, DeleteIntent):
            out = [t for t in out if not _matches(t, intent.query, today)]
        else:
            raise TypeError(f"unknown intent: {type(intent).__name__}")
    return out
