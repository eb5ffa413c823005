"""Operation router exposing JSON specs and validated dispatch.

Specs are generated from each operation's Pydantic input schema, so the
parameters an outer layer advertises always match what dispatch accepts.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from hunkwise.config import Settings
from hunkwise.tools import get_tool_registrations
from hunkwise.tools.base import ToolRequest, ToolResponse


def tool_specs(settings: Settings | None = None) -> list[dict[str, Any]]:
    """Return function specs derived from the request models."""

    specs: list[dict[str, Any]] = []
    for reg in get_tool_registrations(settings):
        params = reg.input_model.model_json_schema()
        if isinstance(params, dict):
            params.setdefault("additionalProperties", False)
        specs.append(
            {
                "type": "function",
                "function": {
                    "name": reg.name,
                    "description": reg.description,
                    "parameters": params,
                },
            }
        )
    return specs


class ToolRouter:
    """Dispatch operations by name with input validation and logging."""

    def __init__(self, settings: Settings | None = None, logger: logging.Logger | None = None) -> None:
        self.settings = settings or Settings()
        self.logger = logger
        self.events: list[dict[str, Any]] = []
        self._registrations = get_tool_registrations(self.settings)
        self._spec_index = {reg.name: reg for reg in self._registrations}
        self._handlers: dict[str, Callable[[ToolRequest], ToolResponse]] = {
            reg.name: reg.handler for reg in self._registrations
        }

    @property
    def names(self) -> list[str]:
        return [reg.name for reg in self._registrations]

    def dispatch(self, name: str, **kwargs: Any) -> Any:
        spec = self._spec_index.get(name)
        handler = self._handlers.get(name)
        if spec is None or handler is None:
            raise ValueError(f"unknown tool {name}")

        self._emit_event("start", name, {})
        self._log_request(name, kwargs)

        try:
            validated = spec.input_model.model_validate(kwargs)
            output_model = handler(validated)
            result = spec.result_adapter(output_model) if spec.result_adapter else output_model.model_dump(mode="json")
        except Exception as exc:
            self._log_response(name, {"error": str(exc)})
            raise

        end_builder = spec.end_event_builder
        end_data = end_builder(validated, output_model) if end_builder else {}
        self._emit_event("end", name, end_data)
        self._log_response(name, result)
        return result

    def _emit_event(self, phase: str, tool_name: str, data: dict[str, Any]) -> None:
        self.events.append({"phase": phase, "tool": tool_name, **data})

    def _log_request(self, name: str, kwargs: dict[str, Any]) -> None:
        if not self.logger:
            return
        self.logger.info("tool request: %s args=%s", name, self._stringify(kwargs))

    def _log_response(self, name: str, result: Any) -> None:
        if not self.logger:
            return
        self.logger.debug("tool response: %s result=%s", name, self._stringify(result))

    @staticmethod
    def _stringify(obj: Any) -> str:
        try:
            text = json.dumps(obj, default=str)
        except (TypeError, ValueError):
            text = repr(obj)

        if len(text) > 2000:
            return f"{text[:2000]}... [truncated]"
        return text


__all__ = ["tool_specs", "ToolRouter"]
