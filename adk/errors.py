"""
Error Taxonomy
==============

Two families of errors exist:

    AgentError  - fatal. Raised to the caller of Agent.run() or
                  AgentBuilder.build(). A run that raises one of these
                  produces no answer.
    ToolError   - recoverable. Raised by tools and the registry, caught by
                  the tool executor and folded into the conversation as an
                  error tool-result message, so the model can react to it.

Hierarchy:

    AgentError
    ├── BuildError
    │   ├── InvalidAgentNameError
    │   ├── MissingModelError
    │   └── DuplicateToolError
    ├── ModelError
    │   ├── ProviderError
    │   └── MalformedResponseError
    ├── RunError
    │   ├── MaxTurnsExceededError
    │   └── RunTimeoutError
    ├── ConfigurationError
    └── ContextError

    ToolError
    ├── InvalidArgumentsError
    ├── ToolExecutionError
    └── ToolNotFoundError
"""


class AgentError(Exception):
    """Base class for errors that end a run or prevent an agent from existing."""


# ==============================================================================
# Construction
# ==============================================================================

class BuildError(AgentError):
    """The agent configuration is invalid."""


class InvalidAgentNameError(BuildError):
    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f"Agent name must be a non-empty string, got {name!r}")


class MissingModelError(BuildError):
    def __init__(self, agent_name: str | None = None):
        self.agent_name = agent_name
        super().__init__("Model not set")


class DuplicateToolError(BuildError):
    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool '{tool_name}' is already registered")


# ==============================================================================
# Model backend
# ==============================================================================

class ModelError(AgentError):
    """The model backend could not produce a usable turn."""


class ProviderError(ModelError):
    """Network or backend failure while calling the provider."""

    def __init__(self, message: str, provider: str | None = None):
        self.provider = provider
        prefix = f"{provider}: " if provider else ""
        super().__init__(f"{prefix}{message}")


class MalformedResponseError(ModelError):
    """The provider answered with neither a final answer nor tool calls."""


# ==============================================================================
# Run orchestration
# ==============================================================================

class RunError(AgentError):
    """The run loop itself gave up."""


class MaxTurnsExceededError(RunError):
    def __init__(self, max_turns: int):
        self.max_turns = max_turns
        super().__init__(
            f"Model still requested tool calls after {max_turns} turns"
        )


class RunTimeoutError(RunError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Run did not finish within {timeout} seconds")


class ConfigurationError(AgentError):
    """Environment configuration is missing or malformed."""


class ContextError(AgentError):
    """A value cannot be stored in the context scratch space."""


# ==============================================================================
# Tools (recoverable)
# ==============================================================================

class ToolError(Exception):
    """Base class for tool failures that become conversation content."""

    def __init__(self, message: str, tool_name: str | None = None):
        self.message = message
        self.tool_name = tool_name
        super().__init__(message)


class InvalidArgumentsError(ToolError):
    """The argument payload does not match the tool's parameter schema."""


class ToolExecutionError(ToolError):
    """The tool's own logic failed."""


class ToolNotFoundError(ToolError):
    def __init__(self, tool_name: str, available: list[str] | None = None):
        self.available = list(available or [])
        message = f"Tool '{tool_name}' not found"
        if self.available:
            message += f". Available tools: {', '.join(self.available)}"
        super().__init__(message, tool_name=tool_name)


__all__ = [
    "AgentError",
    "BuildError",
    "ConfigurationError",
    "ContextError",
    "DuplicateToolError",
    "InvalidAgentNameError",
    "InvalidArgumentsError",
    "MalformedResponseError",
    "MaxTurnsExceededError",
    "MissingModelError",
    "ModelError",
    "ProviderError",
    "RunError",
    "RunTimeoutError",
    "ToolError",
    "ToolExecutionError",
    "ToolNotFoundError",
]
