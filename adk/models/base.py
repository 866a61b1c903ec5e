"""
Model Contract
==============

A model backend turns the current conversation plus the available tools
into a decision for the next step. The decision is structural, never free
text the agent would have to parse:

    FinalAnswer(text)        - the model is done; `text` is the answer
    ToolCalls(requests)      - the model wants these tools run, in order

Backends raise ModelError subclasses (ProviderError, MalformedResponseError)
when they cannot produce either. Those end the run.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Union

from adk.context import RunContext, ToolInvocationRequest
from adk.tools.base import ToolDescriptor


@dataclass(frozen=True)
class FinalAnswer:
    text: str


@dataclass(frozen=True)
class ToolCalls:
    """
    One or more tool calls requested in a single model turn.

    Attributes:
        requests: The calls, in the order the model emitted them
        content: Any text the model produced alongside the calls
    """
    requests: tuple[ToolInvocationRequest, ...]
    content: str = ""

    def __post_init__(self):
        object.__setattr__(self, "requests", tuple(self.requests))


ModelTurn = Union[FinalAnswer, ToolCalls]


class Model(ABC):
    """
    Base class for language model backends.

    Implementations must not execute tools themselves; they only report
    which tools the model asked for.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def generate_response(
        self,
        context: RunContext,
        tools: Sequence[ToolDescriptor],
    ) -> ModelTurn:
        """
        Produce the next step of the conversation.

        Args:
            context: The run's context with the full message history
            tools: Descriptors of the tools the model may request

        Returns:
            FinalAnswer or ToolCalls

        Raises:
            ModelError: If the backend fails or answers with neither
        """
        ...
