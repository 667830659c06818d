from datetime import date
from itertools import count

import pytest

from echotrack.intents import CreateIntent, DeleteIntent, UpdateIntent, apply_intents, parse_intents
from echotrack.models import Daily, Interval, InvalidTimeError, Priority, SpecificDays, Task

TODAY = date(2026, 10, 19)  # Monday


def _ids():
    c = count(1)
    return lambda: f"t{next(c)}"


def test_parses_fenced_create_array():
    text = '```json\n[{"type": "create", "data": {"title": "Gym", "time": "07:00", "priority": "high", "recurrence": "daily"}}]\n```'
    intents = parse_intents(text, TODAY)
    assert intents == [CreateIntent(title="Gym", time="07:00", priority=Priority.HIGH, recurrence=Daily())]


def test_single_object_is_accepted():
    intents = parse_intents('{"type": "delete", "query": "Yoga"}', TODAY)
    assert intents == [DeleteIntent(query="Yoga")]


def test_bare_task_objects_are_creates():
    intents = parse_intents('[{"title": "Call mum", "recurrence": "weekly", "specificDay": 0}]', TODAY)
    assert intents[0].recurrence == SpecificDays(days_of_week=frozenset({0}))


@pytest.mark.parametrize(
    "word, expected",
    [
        ("daily", Daily()),
        ("none", SpecificDays(days_of_week=frozenset({1}))),
        ("weekly", SpecificDays(days_of_week=frozenset({1}))),
        ("monthly", Interval(every_n_days=7)),
    ],
)
def test_recurrence_words(word, expected):
    intents = parse_intents(f'{{"type": "create", "data": {{"title": "x", "recurrence": "{word}"}}}}', TODAY)
    assert intents[0].recurrence == expected


def test_specific_days_list():
    text = '{"type": "create", "data": {"title": "Work", "recurrence": "specific_days", "specificDays": [1,2,3,4,5]}}'
    assert parse_intents(text, TODAY)[0].recurrence == SpecificDays(days_of_week=frozenset({1, 2, 3, 4, 5}))


@pytest.mark.parametrize("text", [None, "", "   ", "Sorry, I can't help", "[]", '[{"type": "create", "data": {}}]', '["x", 3]',
     '{"type": "create", "data": "Gym at 7"}', '{"type": "create", "data": []}'])
def test_unusable_responses_give_sentinel(text):
    assert parse_intents(text, TODAY) is None


def test_apply_create_update_delete():
    tasks = [
        Task(id="g", title="Gym", time="06:00"),
        Task(id="y", title="Yoga class"),
        Task(id="r", title="Read", completed_dates=frozenset({"2026-10-19"})),
    ]
    intents = [
        CreateIntent(title="Walk", time="18:00", recurrence=Daily()),
        UpdateIntent(query="gym", updates={"time": "08:00", "title": "Gym AM"}),
        DeleteIntent(query="YOGA"),
    ]

    out = apply_intents(tasks, intents, TODAY, group_id="fit", make_id=_ids(), stamp=lambda: 5.0)

    assert [t.title for t in out] == ["Walk", "Gym AM", "Read"]
    walk = out[0]
    assert (walk.id, walk.group_id, walk.created_at, walk.streak) == ("t1", "fit", 5.0, 0)
    assert out[1].time == "08:00"
    assert out[1].id == "g"


def test_delete_completed_query_uses_today():
    tasks = [Task(id="a", title="Done", completed_dates=frozenset({"2026-10-19"})), Task(id="b", title="Open")]
    out = apply_intents(tasks, [DeleteIntent(query="completed")], TODAY)
    assert [t.id for t in out] == ["b"]


def test_empty_query_matches_nothing():
    tasks = [Task(id="a", title="A")]
    assert apply_intents(tasks, [DeleteIntent(query="  ")], TODAY) == tasks


def test_invalid_time_is_rejected():
    with pytest.raises(InvalidTimeError):
        apply_intents([], [CreateIntent(title="x", time="7am", recurrence=Daily())], TODAY, make_id=_ids())
    with pytest.raises(InvalidTimeError):
        apply_intents([Task(id="a", title="Gym")], [UpdateIntent(query="gym", updates={"time": "25:00"})], TODAY)
