"""Additional workflow condition matching."""

import pytest

from app.application.services.conditions import conditions_met

TASK = {"task_id": "task-1", "task_priority": "high", "assigned_to": "user-1"}


@pytest.mark.parametrize(
    ("conditions", "expected"),
    [
        (None, True),
        ({}, True),
        ({"priority": "high"}, True),
        ({"priority": "low"}, False),
        ({"assigned_to": "user-1"}, True),
        ({"assigned_to": "user-2"}, False),
        ({"priority": "high", "assigned_to": "user-2"}, False),
        ({"priority": "", "assigned_to": None}, True),
        ({"unknown_key": "x"}, True),
    ],
)
def test_conditions_against_task_snapshot(conditions, expected) -> None:
    assert conditions_met(conditions, TASK) is expected


def test_missing_snapshot_field_is_a_mismatch() -> None:
    assert conditions_met({"assigned_to": "user-1"}, {"task_id": "task-1"}) is False


def test_conditions_ignored_without_a_task() -> None:
    scheduled = {"type": "scheduled", "project_id": "proj-1"}
    assert conditions_met({"priority": "urgent"}, scheduled) is True
