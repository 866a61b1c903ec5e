"""
Tool Registry
=============

Name -> tool lookup for one agent. The builder fills a registry and then
freezes it; after that the set of tools never changes, which is what lets
many runs share one agent.
"""

from typing import Iterator

from adk.errors import BuildError, DuplicateToolError, ToolNotFoundError
from adk.tools.base import Tool, ToolDescriptor
from adk.utils.logger import Logger

logger = Logger("Tools")


class ToolRegistry:
    """
    Registry of the tools available to an agent.

    Example:
        registry = ToolRegistry()
        registry.register(calculator_tool())
        registry.freeze()

        tool = registry.resolve("calculator")
        descriptors = registry.descriptors()
    """

    def __init__(self, tools: list[Tool] | None = None):
        self._tools: dict[str, Tool] = {}
        self._frozen = False
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """
        Register a tool.

        Raises:
            BuildError: If the registry is frozen or the tool has no name
            DuplicateToolError: If a tool with this name already exists
        """
        if self._frozen:
            raise BuildError("Cannot register tools on a frozen registry")
        if not isinstance(tool.name, str) or not tool.name.strip():
            raise BuildError(f"Tool name must be a non-empty string, got {tool.name!r}")
        if not isinstance(tool.description, str) or not tool.description.strip():
            raise BuildError(f"Tool '{tool.name}' needs a non-empty description")
        if tool.name in self._tools:
            raise DuplicateToolError(tool.name)

        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Tool | None:
        """Get a tool by name, or None if not found."""
        return self._tools.get(name)

    def resolve(self, name: str) -> Tool:
        """
        Get a tool by name.

        Raises:
            ToolNotFoundError: If no tool has this name
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name, self.list_names())
        return tool

    def get_all(self) -> list[Tool]:
        return list(self._tools.values())

    def descriptors(self) -> list[ToolDescriptor]:
        """Descriptors of all tools in registration order."""
        return [tool.descriptor() for tool in self._tools.values()]

    def list_names(self) -> list[str]:
        return list(self._tools.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[Tool]:
        return iter(list(self._tools.values()))

    def __repr__(self) -> str:
        return f"ToolRegistry(tools={self.list_names()}, frozen={self._frozen})"
