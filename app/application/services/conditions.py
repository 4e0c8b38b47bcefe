"""Additional workflow conditions checked against the task in a trigger snapshot.

    {"priority": "high", "assigned_to": "<profile id>"}

Conditions only apply to task triggers; an empty mapping or a snapshot
without a task_id always matches. A key the snapshot does not carry counts
as a mismatch.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# condition key -> trigger snapshot key
_TASK_FIELDS = {
    "priority": "task_priority",
    "assigned_to": "assigned_to",
}


def conditions_met(conditions: Mapping[str, Any] | None, trigger_data: Mapping[str, Any]) -> bool:
    if not conditions or not trigger_data.get("task_id"):
        return True
    for key, snapshot_key in _TASK_FIELDS.items():
        expected = conditions.get(key)
        if expected and expected != trigger_data.get(snapshot_key):
            return False
    return True
