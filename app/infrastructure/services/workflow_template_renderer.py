"""Workflow notification templates: title/message text rendered with Jinja."""

from __future__ import annotations

from typing import Any

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class WorkflowTemplateRenderer:
    """Renders `{{ task.title }}`-style placeholders in action title/message.

    Templates come from user-authored workflow definitions, so they run in a
    sandbox. Unknown variables render as empty strings; a template that fails
    to parse or render is returned unchanged.
    """

    def __init__(self) -> None:
        self._env = SandboxedEnvironment(autoescape=False)

    def render(self, template: str, context: dict[str, Any]) -> str:
        if "{" not in template:
            return template
        try:
            return self._env.from_string(template).render(**context)
        except TemplateError as exc:
            logger.warning("Workflow template could not be rendered (%s); using raw text", exc)
            return template
