from datetime import datetime

from echotrack.countdown import next_due
from echotrack.models import SpecificDays, Task

MONDAY = "2026-10-19"


def _at(hh, mm, ss=0):
    return datetime(2026, 10, 19, hh, mm, ss)


def test_picks_nearest_undone_timed_task():
    a = Task(id="a", title="A", time="10:00")
    b = Task(id="b", title="B", time="09:30", completed_dates=frozenset({MONDAY}))
    c = Task(id="c", title="C")

    cd = next_due([a, b, c], _at(8, 0))

    assert cd is not None
    assert cd.task == a
    assert cd.seconds_remaining == 7200
    assert cd.display == "02:00:00"


def test_none_when_everything_done_or_untimed():
    tasks = [
        Task(id="a", title="A", time="10:00", completed_dates=frozenset({MONDAY})),
        Task(id="b", title="B"),
    ]
    assert next_due(tasks, _at(8, 0)) is None


def test_none_when_nothing_later_today():
    tasks = [Task(id="a", title="A", time="07:00")]
    assert next_due(tasks, _at(8, 0)) is None


def test_current_minute_is_not_upcoming():
    tasks = [Task(id="a", title="A", time="08:00")]
    assert next_due(tasks, _at(8, 0, 0)) is None


def test_counts_seconds_within_minute():
    tasks = [Task(id="a", title="A", time="08:01")]
    cd = next_due(tasks, _at(8, 0, 15))
    assert cd.seconds_remaining == 45
    assert cd.display == "00:00:45"


def test_ties_keep_collection_order():
    first = Task(id="a", title="First", time="12:00")
    second = Task(id="b", title="Second", time="12:00")
    assert next_due([first, second], _at(11, 0)).task == first
    assert next_due([second, first], _at(11, 0)).task == second


def test_skips_tasks_inactive_today():
    weekend = Task(id="a", title="Weekend", time="09:00", recurrence=SpecificDays(days_of_week=frozenset({0, 6})))
    later = Task(id="b", title="Later", time="18:00")
    assert next_due([weekend, later], _at(8, 0)).task == later
