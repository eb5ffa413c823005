"""Operation registry and aggregation.

Each operation module exports ``tool_registrations`` which yields one or more
``ToolRegistration`` instances; ``get_tool_registrations`` aggregates them for
the router.
"""

from __future__ import annotations

from hunkwise.config import Settings
from hunkwise.tools.base import ToolRegistration
from hunkwise.tools.line_edit import tool_registrations as line_edit_registrations
from hunkwise.tools.patch import tool_registrations as patch_registrations


def get_tool_registrations(settings: Settings | None = None) -> list[ToolRegistration]:
    effective = settings or Settings()
    registrations: list[ToolRegistration] = []
    registrations.extend(patch_registrations(effective))
    registrations.extend(line_edit_registrations())
    return registrations


__all__ = ["get_tool_registrations", "ToolRegistration"]
