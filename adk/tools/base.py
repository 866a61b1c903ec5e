"""
Tool Contract
=============

Every tool the agent can call implements the `Tool` base class:

- `name`: unique identifier the model uses to request the tool
- `description`: tells the model when the tool is useful
- `parameter_schema()`: JSON Schema for the arguments
- `execute(context, arguments)`: does the work and returns a ToolResult

Tools signal failure by raising a ToolError subclass. The agent never lets
those end a run; they are shown to the model as an error tool result.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from adk.context import RunContext


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Static identity of a tool, as shown to the model.

    Attributes:
        name: Unique identifier for the tool
        description: What the tool does
        parameters: JSON Schema for the arguments
    """
    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)

    def to_openai_function(self) -> dict:
        """Convert to the OpenAI chat-completions `tools` format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters or {"type": "object", "properties": {}},
            },
        }


@dataclass
class ToolResult:
    """
    Outcome of one tool execution.

    Attributes:
        tool_name: The tool that produced the result
        output: Text or JSON-like structured data; the error text on failure
        is_error: Whether the tool failed
    """
    tool_name: str
    output: Any = None
    is_error: bool = False

    @property
    def success(self) -> bool:
        return not self.is_error

    @classmethod
    def ok(cls, tool_name: str, output: Any) -> "ToolResult":
        return cls(tool_name=tool_name, output=output)

    @classmethod
    def failure(cls, tool_name: str, error: str) -> "ToolResult":
        return cls(tool_name=tool_name, output=error, is_error=True)

    def to_message(self) -> str:
        """Format as the content of a tool-result message."""
        if self.is_error:
            return f"Error: {self.output}"
        if isinstance(self.output, str):
            return self.output
        return json.dumps(self.output, default=str)


class Tool(ABC):
    """
    Base class for all tools.

    Subclasses set `name` and `description` and implement
    `parameter_schema()` and `execute()`.

    Example:
        class EchoTool(Tool):
            name = "echo"
            description = "Repeat the given text"

            def parameter_schema(self) -> dict:
                return {
                    "type": "object",
                    "properties": {"text": {"type": "string"}},
                    "required": ["text"],
                }

            async def execute(self, context, arguments) -> ToolResult:
                return ToolResult.ok(self.name, arguments["text"])
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def parameter_schema(self) -> dict[str, Any]:
        """Return the JSON Schema describing accepted arguments."""
        ...

    @abstractmethod
    async def execute(self, context: RunContext, arguments: Any) -> ToolResult:
        """
        Run the tool.

        Args:
            context: The run's context; tools may append messages or use
                scratch data
            arguments: The raw payload the model sent

        Returns:
            ToolResult with the output

        Raises:
            ToolError: If the arguments are invalid or the tool fails
        """
        ...

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            parameters=self.parameter_schema(),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
