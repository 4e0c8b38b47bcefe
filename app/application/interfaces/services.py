"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Protocol


class ITemplateRenderer(Protocol):
    """Protocol for rendering notification title/message templates."""

    def render(self, template: str, context: dict[str, Any]) -> str:
        """Render template with context; return the raw template if it cannot be rendered."""


class ISchedulerLock(Protocol):
    """Protocol for single-flight protection of scheduler ticks."""

    async def try_acquire(self) -> bool:
        """Return True if this tick may run; False if another tick holds the lock."""


# Factory for a per-item isolation scope (a savepoint in production). An
# exception raised inside the scope undoes the item's writes and propagates.
IsolationScope = Callable[[], AbstractAsyncContextManager[Any]]
