"""
Agent Builder
=============

Collects an agent's configuration and validates it before any run, so a
run can only fail for reasons that come from the model or its tools,
never from missing configuration.

Example:
    agent = (
        AgentBuilder("math_agent")
        .instructions("Use the calculator tool for arithmetic.")
        .model(model)
        .add_tool(CalculatorTool())
        .max_turns(5)
        .build()
    )
"""

from typing import Iterable

from adk.agent.core import DEFAULT_MAX_TURNS, Agent
from adk.errors import BuildError, InvalidAgentNameError, MissingModelError
from adk.models.base import Model
from adk.tools.base import Tool
from adk.tools.registry import ToolRegistry
from adk.utils.config import Config
from adk.utils.logger import Logger

logger = Logger("AgentBuilder")


class AgentBuilder:
    """
    Fluent builder for Agent.

    build() raises:
        InvalidAgentNameError: If the name is empty
        MissingModelError: If no model was set
        DuplicateToolError: If two tools share a name
        BuildError: If max_turns or timeout are out of range
    """

    def __init__(self, name: str | None = None):
        self._name = name
        self._instructions: str | None = None
        self._model: Model | None = None
        self._tools: list[Tool] = []
        self._max_turns = DEFAULT_MAX_TURNS
        self._timeout: float | None = None

    @classmethod
    def from_config(cls, config: Config, name: str | None = None) -> "AgentBuilder":
        """Start a builder with the agent defaults from configuration."""
        builder = cls(name).max_turns(config.agent.max_turns)
        if config.agent.timeout_seconds is not None:
            builder.timeout(config.agent.timeout_seconds)
        if config.agent.default_instructions:
            builder.instructions(config.agent.default_instructions)
        return builder

    def name(self, name: str) -> "AgentBuilder":
        self._name = name
        return self

    def instructions(self, instructions: str | None) -> "AgentBuilder":
        self._instructions = instructions
        return self

    def model(self, model: Model) -> "AgentBuilder":
        self._model = model
        return self

    def add_tool(self, tool: Tool) -> "AgentBuilder":
        self._tools.append(tool)
        return self

    def add_tools(self, tools: Iterable[Tool]) -> "AgentBuilder":
        self._tools.extend(tools)
        return self

    def max_turns(self, max_turns: int) -> "AgentBuilder":
        """Maximum number of model calls in one run."""
        self._max_turns = max_turns
        return self

    def timeout(self, seconds: float | None) -> "AgentBuilder":
        """Wall-clock limit for one run; None disables it."""
        self._timeout = seconds
        return self

    def build(self) -> Agent:
        """
        Validate the configuration and create the agent.

        Every call creates a new registry, so agents built from the same
        builder share no mutable state.
        """
        if not isinstance(self._name, str) or not self._name.strip():
            raise InvalidAgentNameError(self._name)
        if self._model is None:
            raise MissingModelError(self._name)
        if not isinstance(self._max_turns, int) or self._max_turns < 1:
            raise BuildError(f"max_turns must be a positive integer, got {self._max_turns!r}")
        if self._timeout is not None and self._timeout <= 0:
            raise BuildError(f"timeout must be positive, got {self._timeout!r}")

        registry = ToolRegistry()
        for tool in self._tools:
            registry.register(tool)

        agent = Agent(
            name=self._name,
            instructions=self._instructions,
            model=self._model,
            registry=registry,
            max_turns=self._max_turns,
            timeout=self._timeout,
        )
        logger.debug(f"Built agent '{self._name}' with tools: {registry.list_names()}")
        return agent
