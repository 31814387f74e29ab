# tests/test_normalizer.py

from __future__ import annotations

import json

import pytest

from ai_todos.decompose.models import CandidateTask
from ai_todos.decompose.normalizer import normalize_tasks, parse_and_normalize, parse_model_output
from ai_todos.errors import MalformedModelOutput


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "",
        "[1, 2",
        '{"title": "x"}',
        '"[]"',
        "null",
        "42",
        '[{"title": "a", "is_done": NaN}]',
        "[Infinity]",
        "[-Infinity]",
    ],
)
def test_non_array_output_is_malformed_and_keeps_raw_text(raw: str) -> None:
    with pytest.raises(MalformedModelOutput) as ei:
        parse_model_output(raw)
    assert ei.value.raw_text == raw
    assert ei.value.to_payload()["raw_json"] == raw


def test_valid_items_keep_order_and_force_is_done_false() -> None:
    raw = json.dumps(
        [
            {"title": "Buy milk", "is_done": True},
            {"title": "  Call mom  "},
            {"title": "Finish report", "is_done": "yes"},
        ]
    )
    tasks = parse_and_normalize(raw)
    assert [t.title for t in tasks] == ["Buy milk", "Call mom", "Finish report"]
    assert all(t.is_done is False for t in tasks)


def test_bad_elements_are_dropped_not_fatal() -> None:
    items = [
        {"title": ""},
        {"title": "   "},
        {"is_done": False},
        {"title": 7},
        {"title": None},
        "just a string",
        None,
        ["title", "x"],
        {"title": "Keep me"},
    ]
    assert normalize_tasks(items) == [CandidateTask(title="Keep me")]


def test_titles_are_truncated() -> None:
    tasks = normalize_tasks([{"title": "x" * 300}])
    assert len(tasks[0].title) == 120


def test_truncation_does_not_leave_trailing_space() -> None:
    title = "a" * 119 + " " + "b" * 10
    (task,) = normalize_tasks([{"title": title}])
    assert task.title == "a" * 119


def test_more_than_max_keeps_first_in_order() -> None:
    items = [{"title": f"Task {i}"} for i in range(20)]
    tasks = normalize_tasks(items)
    assert [t.title for t in tasks] == [f"Task {i}" for i in range(12)]


def test_empty_titles_do_not_use_up_slots() -> None:
    items = [{"title": ""}] * 5 + [{"title": f"T{i}"} for i in range(12)]
    tasks = normalize_tasks(items)
    assert len(tasks) == 12
    assert tasks[0].title == "T0"


def test_empty_array_is_fine() -> None:
    assert parse_and_normalize("[]") == []


def test_normalization_is_idempotent() -> None:
    items = [{"title": "  " + "word " * 40}, {"title": "Short"}] + [
        {"title": f" t{i} "} for i in range(15)
    ]
    once = normalize_tasks(items)
    twice = normalize_tasks(once)
    assert twice == once
    assert normalize_tasks([t.to_dict() for t in once]) == once


def test_custom_bounds() -> None:
    items = [{"title": "abcdefgh"}, {"title": "ijkl"}, {"title": "mnop"}]
    tasks = normalize_tasks(items, max_tasks=2, max_title_length=4)
    assert [t.title for t in tasks] == ["abcd", "ijkl"]


def test_deeply_nested_output_is_malformed_not_a_crash() -> None:
    raw = "[" * 5000
    with pytest.raises(MalformedModelOutput) as ei:
        parse_model_output(raw)
    assert ei.value.raw_text == raw
