"""
Agent Core
==========

The agent ties a model and a set of tools together and runs the
conversation until the model gives a final answer.

Agent Loop:
    Task + Context
         │
         ▼
    Start: append instructions (system) and task (user)
         │
         ▼
    Deciding: ask the model ◄─────────────┐
         │                                │
    ┌─── FinalAnswer or ToolCalls? ───┐   │
    │                                 │   │
    FinalAnswer                  ToolCalls│
    │                                 │   │
    ▼                                 ▼   │
    Return text            Executing: run each tool in order,
                           append one tool message per call

Failure policy:
- Tool failures never end a run; the model sees them as error results.
- Model failures end the run and reach the caller unchanged.
- The loop is bounded by max_turns (MaxTurnsExceededError) and, optionally,
  by a wall-clock timeout (RunTimeoutError).
- Cancellation propagates. A tool result is only appended once its tool
  finished, so a cancelled turn never leaves a half-recorded result.

An Agent is immutable once built. All run state lives in the run's
Context, so one agent can serve many concurrent runs.
"""

import asyncio

from adk.agent.tools_executor import ToolExecutor
from adk.context import SYSTEM, USER, Context, RunContext
from adk.errors import (
    AgentError,
    MalformedResponseError,
    MaxTurnsExceededError,
    ProviderError,
    RunTimeoutError,
)
from adk.models.base import FinalAnswer, Model, ToolCalls
from adk.tools.base import Tool, ToolDescriptor
from adk.tools.registry import ToolRegistry
from adk.utils.logger import Logger

logger = Logger("Agent")

DEFAULT_MAX_TURNS = 10


def _model_name(model: Model) -> str:
    return getattr(model, "name", None) or type(model).__name__


class Agent:
    """
    A configured agent. Use AgentBuilder to create one.

    Example:
        agent = (
            AgentBuilder("math_agent")
            .instructions("You are a helpful math assistant.")
            .model(OpenAIModel.from_config(get_config()))
            .add_tool(CalculatorTool())
            .build()
        )

        answer = await agent.run("What is 15.7 * 9.2?")
    """

    __slots__ = (
        "_name",
        "_instructions",
        "_model",
        "_registry",
        "_executor",
        "_descriptors",
        "_max_turns",
        "_timeout",
    )

    def __init__(
        self,
        name: str,
        instructions: str | None,
        model: Model,
        registry: ToolRegistry,
        max_turns: int = DEFAULT_MAX_TURNS,
        timeout: float | None = None,
    ):
        registry.freeze()
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_instructions", instructions)
        object.__setattr__(self, "_model", model)
        object.__setattr__(self, "_registry", registry)
        object.__setattr__(self, "_executor", ToolExecutor(registry))
        object.__setattr__(self, "_descriptors", tuple(registry.descriptors()))
        object.__setattr__(self, "_max_turns", max_turns)
        object.__setattr__(self, "_timeout", timeout)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def instructions(self) -> str | None:
        return self._instructions

    @property
    def model(self) -> Model:
        return self._model

    @property
    def tools(self) -> tuple[Tool, ...]:
        return tuple(self._registry.get_all())

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def tool_descriptors(self) -> tuple[ToolDescriptor, ...]:
        return self._descriptors

    @property
    def max_turns(self) -> int:
        return self._max_turns

    @property
    def timeout(self) -> float | None:
        return self._timeout

    async def run(self, task: str, context: Context | None = None) -> str:
        """
        Run the agent on a task and return the final answer.

        Args:
            task: The user's request
            context: Conversation state to continue; mutated in place. A new
                empty Context is used when omitted.

        Returns:
            The model's final answer text

        Raises:
            ModelError: If the model backend fails
            MaxTurnsExceededError: If the model keeps requesting tools
            RunTimeoutError: If the run exceeds the configured timeout
        """
        context = context if context is not None else Context()
        run_context = RunContext(context, agent_name=self._name)
        run_logger = logger.child(run_context.run_id[:8])
        run_logger.info(f"Run started for '{self._name}': {task[:50]}")

        try:
            if self._timeout is None:
                answer = await self._run_loop(task, run_context)
            else:
                try:
                    answer = await asyncio.wait_for(
                        self._run_loop(task, run_context), self._timeout
                    )
                except asyncio.TimeoutError:
                    raise RunTimeoutError(self._timeout) from None
        except AgentError as e:
            run_logger.error(f"Run failed after {run_context.turn} turns", e)
            raise
        except asyncio.CancelledError:
            run_logger.warning(f"Run cancelled during turn {run_context.turn}")
            raise

        run_logger.info(
            f"Run finished after {run_context.turn} turns ({len(answer)} chars)"
        )
        return answer

    def _seed(self, task: str, context: RunContext) -> None:
        """Start: append the instruction preamble and the task."""
        if self._instructions and not self._has_preamble(context):
            context.add_message(SYSTEM, self._instructions)
        context.add_message(USER, task)

    def _has_preamble(self, context: RunContext) -> bool:
        # A continued conversation already starts with these instructions
        messages = context.messages
        if not messages:
            return False
        return messages[0].role == SYSTEM and messages[0].content == self._instructions

    async def _run_loop(self, task: str, context: RunContext) -> str:
        self._seed(task, context)

        while True:
            context.turn += 1
            if context.turn > self._max_turns:
                raise MaxTurnsExceededError(self._max_turns)

            turn = await self._decide(context)

            if isinstance(turn, FinalAnswer):
                context.add_assistant_message(turn.text)
                return turn.text

            context.add_assistant_message(turn.content, turn.requests)
            logger.debug(f"Turn {context.turn}: {len(turn.requests)} tool calls")
            await self._executor.execute_all(turn.requests, context)

    async def _decide(self, context: RunContext) -> FinalAnswer | ToolCalls:
        """Deciding: ask the model for the next step."""
        try:
            turn = await self._model.generate_response(context, self._descriptors)
        except AgentError:
            raise
        except Exception as e:
            raise ProviderError(
                f"{type(e).__name__}: {e}", provider=_model_name(self._model)
            ) from e

        if not isinstance(turn, (FinalAnswer, ToolCalls)):
            raise MalformedResponseError(
                f"Model returned {type(turn).__name__}, expected FinalAnswer or ToolCalls"
            )
        if isinstance(turn, ToolCalls) and not turn.requests:
            raise MalformedResponseError("Model returned neither a final answer nor tool calls")
        return turn

    def __repr__(self) -> str:
        return (
            f"Agent(name={self._name!r}, model={_model_name(self._model)!r}, "
            f"tools={self._registry.list_names()})"
        )
