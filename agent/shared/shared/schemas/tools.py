"""Tool and module manifest schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ToolParameter(BaseModel):
    """Parameter definition for a tool."""

    name: str
    type: str  # string, integer, boolean, number, array, object, any
    description: str
    required: bool = True
    enum: list[str] | None = None
    default: Any = None
    # Nested JSON schema fragments for array items / object properties
    items: dict[str, Any] | None = None
    properties: dict[str, Any] | None = None

    def json_schema(self) -> dict[str, Any]:
        """Render this parameter as a JSON-schema property."""
        prop: dict[str, Any] = {"description": self.description}
        if self.type != "any":
            prop["type"] = self.type
        if self.enum:
            prop["enum"] = self.enum
        if self.default is not None:
            prop["default"] = self.default
        if self.items is not None:
            prop["items"] = self.items
        if self.properties is not None:
            prop["properties"] = self.properties
        return prop


class ToolDefinition(BaseModel):
    """Definition of a single tool exposed by a module."""

    name: str  # e.g. "vf.prompt_receipt.create"
    description: str
    parameters: list[ToolParameter]
    required_permission: str = "guest"  # minimum permission level

    def input_schema(self) -> dict[str, Any]:
        """JSON-schema object describing the tool's arguments."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }


class ModuleManifest(BaseModel):
    """Manifest describing a module and its tools."""

    module_name: str
    description: str
    tools: list[ToolDefinition]


class ToolCall(BaseModel):
    """A tool call request."""

    tool_name: str
    arguments: dict = {}


class ToolResult(BaseModel):
    """Result from a tool execution.

    Exactly one of ``result`` (on success) or ``error`` (on failure) is
    meaningful; ``success`` is the explicit error flag.
    """

    tool_name: str
    success: bool
    result: Any = None
    error: str | None = None
