"""TaskStatusChangedTrigger unit tests."""

from datetime import UTC, datetime

import pytest

from app.application.dtos.scheduler import TaskStatusChangedEvent
from app.application.use_cases.workflows import TaskStatusChangedTrigger, WorkflowExecutor
from app.application.use_cases.workflows.task_status_changed import matches_transition
from app.infrastructure.services.workflow_template_renderer import WorkflowTemplateRenderer
from app.shared.utils.datetime import SchedulerCalendar
from tests.fakes import (
    FakeExecutionRepo,
    FakeNotificationRepo,
    FakeWorkflowRepo,
    make_workflow,
)

NOW = datetime(2025, 6, 2, 14, 30, tzinfo=UTC)


def _event(**overrides) -> TaskStatusChangedEvent:
    fields = {
        "task_id": "task-1",
        "project_id": "proj-1",
        "from_status": "in_progress",
        "to_status": "review",
        "user_id": "mover-1",
        "task_title": "Tile the bathroom floor",
    }
    fields.update(overrides)
    return TaskStatusChangedEvent(**fields)


def _status_workflow(workflow_id: str, **trigger_config) -> object:
    return make_workflow(
        workflow_id,
        trigger_type="task_status_changed",
        trigger_config=trigger_config,
        actions=[{"type": "send_notification", "config": {"title": "{{ task_title }} moved"}}],
    )


@pytest.fixture
def harness():
    execution_repo = FakeExecutionRepo()
    notification_repo = FakeNotificationRepo()
    workflow_repo = FakeWorkflowRepo()
    executor = WorkflowExecutor(
        execution_repo=execution_repo,
        notification_repo=notification_repo,
        calendar=SchedulerCalendar.from_name("UTC"),
        template_renderer=WorkflowTemplateRenderer(),
    )
    trigger = TaskStatusChangedTrigger(workflow_repo, executor)
    return trigger, workflow_repo, execution_repo, notification_repo


@pytest.mark.parametrize(
    ("config", "expected"),
    [
        ({}, True),
        ({"to_status": "review"}, True),
        ({"to_status": "done"}, False),
        ({"from_status": "in_progress"}, True),
        ({"from_status": "todo"}, False),
        ({"from_status": "in_progress", "to_status": "review"}, True),
        ({"from_status": "", "to_status": None}, True),
    ],
)
def test_matches_transition(config, expected) -> None:
    assert matches_transition(config, "in_progress", "review") is expected


async def test_matching_workflows_execute_with_status_payload(harness) -> None:
    trigger, workflow_repo, execution_repo, notification_repo = harness
    workflow_repo.workflows = [
        _status_workflow("wf-any"),
        _status_workflow("wf-review", to_status="review"),
        _status_workflow("wf-done", to_status="done"),
    ]

    executions = await trigger.process(_event(), NOW)

    assert [e.workflow_id for e in executions] == ["wf-any", "wf-review"]
    payload = execution_repo.executions[0].trigger_data
    assert payload == {
        "type": "task_status_changed",
        "project_id": "proj-1",
        "task_id": "task-1",
        "task_title": "Tile the bathroom floor",
        "task_priority": None,
        "assigned_to": None,
        "from_status": "in_progress",
        "to_status": "review",
        "user_id": "mover-1",
        "timestamp": NOW.isoformat(),
    }
    assert {n.user_id for n in notification_repo.of_type("automated_action")} == {"mover-1"}
    assert notification_repo.of_type("automated_action")[0].title == "Tile the bathroom floor moved"


async def test_other_projects_are_ignored(harness) -> None:
    trigger, workflow_repo, execution_repo, _ = harness
    workflow_repo.workflows = [
        make_workflow("wf-other", project_id="proj-2", trigger_type="task_status_changed")
    ]
    assert await trigger.process(_event(), NOW) == []
    assert execution_repo.executions == []


async def test_same_status_is_a_no_op(harness) -> None:
    trigger, workflow_repo, execution_repo, _ = harness
    workflow_repo.workflows = [_status_workflow("wf-any")]
    assert await trigger.process(_event(to_status="in_progress"), NOW) == []
    assert execution_repo.executions == []


async def test_status_change_fires_every_time(harness) -> None:
    trigger, workflow_repo, execution_repo, _ = harness
    workflow_repo.workflows = [_status_workflow("wf-any")]
    await trigger.process(_event(), NOW)
    await trigger.process(_event(), NOW)
    assert len(execution_repo.executions) == 2


async def test_one_failing_workflow_does_not_block_others(harness, monkeypatch) -> None:
    trigger, workflow_repo, execution_repo, _ = harness
    workflow_repo.workflows = [_status_workflow("wf-broken"), _status_workflow("wf-ok")]
    executor = trigger._executor
    original = executor.execute

    async def flaky(workflow, trigger_data, *, now=None):
        if workflow.id == "wf-broken":
            raise RuntimeError("boom")
        return await original(workflow, trigger_data, now=now)

    monkeypatch.setattr(executor, "execute", flaky)

    executions = await trigger.process(_event(), NOW)

    assert [e.workflow_id for e in executions] == ["wf-ok"]


async def test_conditions_filter_on_reported_priority_and_assignee(harness) -> None:
    trigger, workflow_repo, execution_repo, _ = harness
    workflow_repo.workflows = [
        make_workflow(
            "wf-urgent",
            trigger_type="task_status_changed",
            conditions={"priority": "urgent"},
        ),
        make_workflow(
            "wf-mine",
            trigger_type="task_status_changed",
            conditions={"assigned_to": "user-9"},
        ),
    ]

    executions = await trigger.process(_event(task_priority="urgent", assigned_to="user-3"), NOW)

    assert [e.workflow_id for e in executions] == ["wf-urgent"]
    assert [e.workflow_id for e in execution_repo.executions] == ["wf-urgent"]
