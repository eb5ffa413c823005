"""Typed operation base classes and registrations.

Every operation declares a Pydantic request and response model. The router
validates incoming keyword arguments against the request model, runs the
handler and serialises the response model.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

Req = TypeVar("Req", bound=BaseModel)
Res = TypeVar("Res", bound=BaseModel)


class ToolRequest(BaseModel):
    """Marker base class for operation requests."""


class ToolResponse(BaseModel):
    """Marker base class for operation responses."""


class Tool(Generic[Req, Res], ABC):
    name: ClassVar[str]
    description: ClassVar[str]
    InputModel: ClassVar[type[Req]]
    OutputModel: ClassVar[type[Res]]

    @abstractmethod
    def execute(self, request: Req) -> Res:
        """Run the operation and return a response."""


@dataclass(frozen=True)
class ToolRegistration:
    name: str
    description: str
    input_model: type[ToolRequest]
    output_model: type[ToolResponse]
    handler: Callable[[ToolRequest], ToolResponse]
    result_adapter: Callable[[ToolResponse], Any] | None = None
    end_event_builder: Callable[[ToolRequest, ToolResponse], dict[str, Any]] | None = None

    @classmethod
    def from_tool(cls, tool: Tool[Any, Any], **extra: Any) -> ToolRegistration:
        return cls(
            name=tool.name,
            description=tool.description,
            input_model=tool.InputModel,
            output_model=tool.OutputModel,
            handler=tool.execute,
            **extra,
        )


__all__ = ["ToolRequest", "ToolResponse", "Tool", "ToolRegistration", "Req", "Res"]
