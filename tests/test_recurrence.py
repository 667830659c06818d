from datetime import date, timedelta

import pytest

from echotrack.ledger import toggle_completion
from echotrack.models import Daily, Interval, InvalidTimeError, SpecificDays, Task
from echotrack.recurrence import (
    is_active_on, is_armed, is_due_today, is_satisfied_on, recurrence_label,
)

MON = date(2026, 10, 19)
SUN = date(2026, 10, 18)


def _probe(start=date(2027, 9, 1), days=400):
    # window crosses 2028-02-29
    return [start + timedelta(days=i) for i in range(days)]


@pytest.mark.parametrize("days", [frozenset(), frozenset({0}), frozenset({1, 3, 5}), frozenset(range(7))])
def test_specific_days_matches_weekday_over_probe_window(days):
    r = SpecificDays(days_of_week=days)
    for d in _probe():
        assert is_active_on(r, d) == ((d.weekday() + 1) % 7 in days)


def test_probe_window_covers_leap_day():
    assert date(2028, 2, 29) in _probe()


def test_daily_is_always_active():
    assert all(is_active_on(Daily(), d) for d in _probe())


def test_interval_behaves_like_daily():
    r = Interval(every_n_days=3)
    assert all(is_active_on(r, d) for d in _probe())


def test_empty_specific_days_is_never_active():
    r = SpecificDays(days_of_week=frozenset())
    assert not any(is_active_on(r, d) for d in _probe(days=14))


def test_sunday_is_zero():
    r = SpecificDays(days_of_week=frozenset({0}))
    assert is_active_on(r, SUN) is True
    assert is_active_on(r, MON) is False


def test_unknown_variant_is_rejected():
    with pytest.raises(TypeError):
        is_active_on("daily", MON)


def test_specific_days_out_of_range():
    with pytest.raises(ValueError):
        SpecificDays(days_of_week=frozenset({7}))


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        Interval(every_n_days=0)


def test_malformed_time_fails_fast():
    with pytest.raises(InvalidTimeError):
        Task(id="t", title="Bad", time="7:00")
    with pytest.raises(InvalidTimeError):
        Task(id="t", title="Bad", time="24:00")


def test_satisfied_only_by_exact_date():
    t = Task(id="t", title="Read", completed_dates=frozenset({"2026-10-19"}))
    assert is_satisfied_on(t, MON) is True
    assert is_satisfied_on(t, SUN) is False


def test_due_today_requires_active_and_not_done():
    t = Task(id="t", title="Gym", recurrence=SpecificDays(days_of_week=frozenset({1})))
    assert is_due_today(t, MON) is True
    assert is_due_today(t, SUN) is False

    done = Task(id="t", title="Gym", completed_dates=frozenset({"2026-10-19"}))
    assert is_due_today(done, MON) is False


def test_not_due_after_completion_and_due_again_next_active_day():
    for r in (Daily(), Interval(every_n_days=2), SpecificDays(days_of_week=frozenset({1, 2}))):
        t = Task(id="t", title="x", recurrence=r)
        t = toggle_completion(t, MON, stamp=lambda: 0.0)
        assert is_due_today(t, MON) is False
        tomorrow = MON + timedelta(days=1)
        assert is_due_today(t, tomorrow) is is_active_on(r, tomorrow)


def test_task_without_time_is_due_but_not_armed():
    t = Task(id="t", title="Stretch")
    assert is_due_today(t, MON) is True
    assert is_armed(t, MON) is False
    assert is_armed(Task(id="u", title="Run", time="06:30"), MON) is True


def test_recurrence_labels():
    assert recurrence_label(Daily()) == "DAILY"
    assert recurrence_label(Interval(every_n_days=3)) == "EVERY 3 DAYS"
    assert recurrence_label(SpecificDays(days_of_week=frozenset({5, 1}))) == "MON FRI"
    assert recurrence_label(SpecificDays()) == "NO DAYS"
