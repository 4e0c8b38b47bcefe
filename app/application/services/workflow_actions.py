"""Workflow action parsing: closed set of action kinds with an explicit unsupported path.

A definition stores actions as JSON records `{"type": ..., "config": {...}}`
(fields may also sit at the top level next to `type`). parse_action turns a
record into a typed action or raises, so a new action type fails loudly until
the executor learns to run it.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from app.domain.exceptions import InvalidActionConfigException, UnsupportedActionException
from app.shared.enums import NotificationPriority, NotificationType, WorkflowActionType


def _action_config(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Merge top-level fields with the nested config (nested wins)."""
    merged = {k: v for k, v in raw.items() if k not in ("type", "config")}
    nested = raw.get("config")
    if isinstance(nested, Mapping):
        merged.update(nested)
    return merged


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class SendNotificationAction:
    """Insert an in-app notification for the contextually relevant user."""

    type: ClassVar[str] = WorkflowActionType.SEND_NOTIFICATION.value

    title: str | None = None
    message: str | None = None
    priority: str = NotificationPriority.MEDIUM.value
    recipient_id: str | None = None
    notification_type: str = NotificationType.AUTOMATED_ACTION.value

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "SendNotificationAction":
        priority = _optional_str(config.get("priority")) or NotificationPriority.MEDIUM.value
        if priority not in NotificationPriority.values():
            raise InvalidActionConfigException(
                cls.type, f"priority must be one of {NotificationPriority.values()}, got {priority!r}"
            )
        notification_type = (
            _optional_str(config.get("notification_type"))
            or NotificationType.AUTOMATED_ACTION.value
        )
        if notification_type not in NotificationType.values():
            raise InvalidActionConfigException(
                cls.type,
                f"notification_type must be one of {NotificationType.values()}, got {notification_type!r}",
            )
        return cls(
            title=_optional_str(config.get("title")),
            message=_optional_str(config.get("message")),
            priority=priority,
            recipient_id=_optional_str(config.get("recipient_id")),
            notification_type=notification_type,
        )


# Every runnable action kind. Add the class here and a handler in the executor.
WorkflowAction = SendNotificationAction

_PARSERS: dict[str, Callable[[Mapping[str, Any]], WorkflowAction]] = {
    SendNotificationAction.type: SendNotificationAction.from_config,
}


def parse_action(raw: Any, *, workflow_id: str | None = None) -> WorkflowAction:
    """Parse one stored action record.

    Raises:
        UnsupportedActionException: record is not a mapping or its type is unknown.
        InvalidActionConfigException: known type with an unusable config.
    """
    if not isinstance(raw, Mapping):
        raise UnsupportedActionException(None, workflow_id)
    action_type = raw.get("type")
    parser = _PARSERS.get(action_type) if isinstance(action_type, str) else None
    if parser is None:
        raise UnsupportedActionException(action_type, workflow_id)
    return parser(_action_config(raw))


def supported_action_types() -> list[str]:
    return sorted(_PARSERS)
