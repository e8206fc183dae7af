"""Tool definitions and the read-only tool registry."""

from __future__ import annotations

from collections.abc import Awaitable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict

from weather_mcp.protocol import ToolDescriptor


class ToolParameters(BaseModel):
    """Base parameters schema for tools.

    Arguments are loosely typed on the wire, so unknown keys are ignored rather
    than rejected.
    """

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class ToolSuccess:
    """Text produced by a tool that ran to completion."""

    text: str


@dataclass(frozen=True)
class ToolFailure:
    """A tool that could not produce its result.

    Attributes:
        kind: Short machine-friendly category, e.g. ``"provider"``.
        message: Human-readable explanation.

    """

    kind: str
    message: str


ToolOutcome = Union[ToolSuccess, ToolFailure]
ToolHandler = Callable[[Any], Awaitable[ToolOutcome]]


def _strip_titles(schema: dict[str, Any]) -> dict[str, Any]:
    schema.pop("title", None)
    for field_schema in schema.get("properties", {}).values():
        field_schema.pop("title", None)
    return schema


@dataclass(frozen=True)
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model that coerces incoming arguments and
            documents them through its JSON schema.
        handler: Coroutine function receiving the coerced parameters model.
    """

    name: str
    description: str
    parameters_model: type[ToolParameters]
    handler: ToolHandler

    def validate(self, arguments: Mapping[str, Any]) -> ToolParameters:
        """Coerce incoming arguments into the parameters model."""
        return self.parameters_model.model_validate(dict(arguments))

    async def invoke(self, arguments: Mapping[str, Any]) -> ToolOutcome:
        """Coerce ``arguments`` and run the handler."""
        return await self.handler(self.validate(arguments))

    def input_schema(self) -> dict[str, Any]:
        """Return the declarative input schema advertised by ``tools/list``."""
        return _strip_titles(self.parameters_model.model_json_schema())

    def descriptor(self) -> ToolDescriptor:
        """Return a discovery-friendly description of the tool."""
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema(),
        )


class ToolRegistry:
    """Immutable, ordered catalog of tools.

    The registry is built once; descriptors are computed at construction and
    the same sequence is returned on every call to :meth:`list`.
    """

    def __init__(self, tools: Sequence[ToolDefinition]) -> None:
        """Build the registry.

        Raises:
            ValueError: If two tools share a name.

        """
        by_name: dict[str, ToolDefinition] = {}
        for tool in tools:
            if tool.name in by_name:
                raise ValueError(f"Tool '{tool.name}' is already registered")
            by_name[tool.name] = tool
        self._tools = by_name
        self._descriptors = tuple(tool.descriptor() for tool in tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolDefinition | None:
        """Look up a tool by name."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        """List tool names in registration order."""
        return list(self._tools)

    def list(self) -> list[ToolDescriptor]:
        """Return descriptors for every tool in registration order."""
        return list(self._descriptors)
