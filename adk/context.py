"""
Conversation Context
====================

Holds everything a run knows about its conversation:

- Messages: the ordered, append-only history (system, user, assistant, tool)
- Scratch data: a key/value space tools can read and write during a run

Scratch values are restricted to JSON-like data (None, bool, int, float,
str, lists and string-keyed dicts of those). Anything else is rejected when
it is stored, so data exchanged between tools stays inspectable and
serializable.

Two classes are involved:

    Context     - created by the caller, mutated in place by a run, kept by
                  the caller afterwards
    RunContext  - the per-run view handed to the model and to every tool;
                  wraps a Context and adds run metadata (run id, turn)

Example:
    context = Context().with_data("user_id", "U123")
    answer = await agent.run("What is 2 + 2?", context)

    for message in context.messages:
        print(message.role, message.content)
"""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union

from adk.errors import ContextError

ContextValue = Union[
    None, bool, int, float, str, list["ContextValue"], dict[str, "ContextValue"]
]

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"
TOOL = "tool"

ROLES = frozenset({SYSTEM, USER, ASSISTANT, TOOL})


@dataclass(frozen=True)
class ToolInvocationRequest:
    """
    A single tool call requested by the model.

    Attributes:
        id: Identifier used to correlate the result message
        name: The requested tool name
        arguments: Opaque payload; a dict when the provider sent valid JSON,
            otherwise the raw string
    """
    id: str
    name: str
    arguments: Any = field(default_factory=dict)


@dataclass(frozen=True)
class Message:
    """
    A single message in the conversation. Never modified once created.

    Attributes:
        role: "system", "user", "assistant" or "tool"
        content: The message text
        tool_name: For tool results, the tool that produced it
        tool_call_id: For tool results, the id of the originating request
        tool_calls: For assistant messages, the tool calls it requested
        is_error: For tool results, whether the tool failed
        timestamp: When the message was created
    """
    role: str
    content: str
    tool_name: str | None = None
    tool_call_id: str | None = None
    tool_calls: tuple[ToolInvocationRequest, ...] = ()
    is_error: bool = False
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Provider-neutral dict representation."""
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_name:
            data["tool_name"] = self.tool_name
        if self.tool_call_id:
            data["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            data["tool_calls"] = [
                {"id": tc.id, "name": tc.name, "arguments": tc.arguments}
                for tc in self.tool_calls
            ]
        if self.is_error:
            data["is_error"] = True
        return data


def validate_value(value: Any, path: str = "value") -> None:
    """
    Check that a value fits the ContextValue shape.

    Raises:
        ContextError: If the value (or anything nested in it) is not JSON-like
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            validate_value(item, f"{path}[{index}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ContextError(f"{path} has a non-string key: {key!r}")
            validate_value(item, f"{path}[{key!r}]")
        return
    raise ContextError(
        f"{path} has unsupported type {type(value).__name__}; "
        "expected None, bool, int, float, str, list or dict"
    )


class Context:
    """
    Conversation history plus shared scratch data.

    Messages can only be appended. The `messages` property returns a tuple
    snapshot, so existing history cannot be reordered or replaced.
    """

    def __init__(
        self,
        messages: list[Message] | None = None,
        data: dict[str, ContextValue] | None = None,
    ):
        self._messages: list[Message] = []
        self._data: dict[str, ContextValue] = {}

        for message in messages or []:
            self.append(message)
        for key, value in (data or {}).items():
            self.set(key, value)

    # --- messages ---

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def last_message(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def append(self, message: Message) -> Message:
        """Append an already-built message."""
        if message.role not in ROLES:
            raise ContextError(f"Unknown message role: {message.role!r}")
        self._messages.append(message)
        return message

    def add_message(self, role: str, content: str) -> Message:
        return self.append(Message(role=role, content=content))

    def add_assistant_message(
        self,
        content: str,
        tool_calls: list[ToolInvocationRequest] | tuple[ToolInvocationRequest, ...] = (),
    ) -> Message:
        return self.append(
            Message(role=ASSISTANT, content=content, tool_calls=tuple(tool_calls))
        )

    def add_tool_message(
        self,
        tool_name: str,
        content: str,
        tool_call_id: str | None = None,
        is_error: bool = False,
    ) -> Message:
        """Append a tool-result message correlated to its request id."""
        return self.append(
            Message(
                role=TOOL,
                content=content,
                tool_name=tool_name,
                tool_call_id=tool_call_id,
                is_error=is_error,
            )
        )

    def messages_with_role(self, role: str) -> list[Message]:
        return [m for m in self._messages if m.role == role]

    # --- scratch data ---

    def get(self, key: str, default: ContextValue = None) -> ContextValue:
        """A copy of the stored value; changes only take effect through set()."""
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: ContextValue) -> None:
        """
        Store a scratch value.

        Raises:
            ContextError: If the key is not a string or the value is not JSON-like
        """
        if not isinstance(key, str) or not key:
            raise ContextError(f"Context keys must be non-empty strings, got {key!r}")
        validate_value(value, key)
        self._data[key] = copy.deepcopy(value)

    def has(self, key: str) -> bool:
        return key in self._data

    def delete(self, key: str) -> bool:
        """Remove a key. Returns False if it was not present."""
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def with_data(self, key: str, value: ContextValue) -> "Context":
        """Fluent variant of set() for building a context before a run."""
        self.set(key, value)
        return self

    @property
    def data(self) -> dict[str, ContextValue]:
        """A deep copy of the scratch data."""
        return copy.deepcopy(self._data)

    def __repr__(self) -> str:
        return f"Context(messages={len(self._messages)}, keys={sorted(self._data)})"


class RunContext:
    """
    The view of a Context that one run hands to its model and tools.

    Attributes:
        context: The caller's Context (mutated in place)
        agent_name: Name of the agent executing the run
        run_id: Unique identifier of this run
        turn: Number of Deciding steps taken so far
    """

    def __init__(self, context: Context, agent_name: str = "", run_id: str | None = None):
        self.context = context
        self.agent_name = agent_name
        self.run_id = run_id or uuid.uuid4().hex
        self.turn = 0

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.context.messages

    def add_message(self, role: str, content: str) -> Message:
        return self.context.add_message(role, content)

    def add_assistant_message(self, content, tool_calls=()) -> Message:
        return self.context.add_assistant_message(content, tool_calls)

    def add_tool_message(self, tool_name, content, tool_call_id=None, is_error=False) -> Message:
        return self.context.add_tool_message(tool_name, content, tool_call_id, is_error)

    def get(self, key: str, default: ContextValue = None) -> ContextValue:
        return self.context.get(key, default)

    def set(self, key: str, value: ContextValue) -> None:
        self.context.set(key, value)

    def has(self, key: str) -> bool:
        return self.context.has(key)

    def delete(self, key: str) -> bool:
        return self.context.delete(key)

    @property
    def data(self) -> dict[str, ContextValue]:
        return self.context.data

    def __repr__(self) -> str:
        return f"RunContext(agent={self.agent_name!r}, run_id={self.run_id}, turn={self.turn})"
