"""
Tool Executor
=============

Runs the tool calls the model requested during one turn.

The executor:
1. Resolves each requested tool by name in the agent's registry
2. Executes it against the run's context
3. Turns every failure (unknown tool, invalid arguments, tool error) into
   an error ToolResult instead of letting it end the run
4. Appends one tool-result message per request, correlated by request id

Requests are executed sequentially, in the order the model emitted them.
A later call may depend on scratch data or messages written by an earlier
one in the same turn, and the conversation order must be deterministic.
"""

import asyncio
import copy
from dataclasses import dataclass
from typing import Sequence

from adk.context import Message, RunContext, ToolInvocationRequest
from adk.errors import ToolError, ToolNotFoundError
from adk.tools.base import ToolResult
from adk.tools.registry import ToolRegistry
from adk.utils.logger import Logger

logger = Logger("ToolExecutor")

CANCELLED_MESSAGE = "Run cancelled before the tool finished"


@dataclass
class ToolCallResult:
    """
    Result of executing one tool call.

    Attributes:
        request: The originating request
        result: The tool result (success or error)
        message: The tool-result message appended to the context
    """
    request: ToolInvocationRequest
    result: ToolResult
    message: Message | None = None

    @property
    def tool_call_id(self) -> str:
        return self.request.id


class ToolExecutor:
    """
    Executes tool calls against a registry.

    The executor holds no per-run state and can be shared by concurrent runs.

    Example:
        executor = ToolExecutor(registry)
        results = await executor.execute_all(turn.requests, run_context)
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def execute_one(
        self,
        request: ToolInvocationRequest,
        context: RunContext,
    ) -> ToolCallResult:
        """
        Execute a single tool call without touching the conversation.

        Never raises ToolError; failures are returned as error results.
        """
        try:
            tool = self.registry.resolve(request.name)
        except ToolNotFoundError as e:
            logger.warning(f"Model requested unknown tool: {request.name}")
            return ToolCallResult(request, ToolResult.failure(request.name, e.message))

        logger.info(f"Executing tool: {request.name}")
        try:
            # The request is also recorded on the assistant message; keep it intact
            result = await tool.execute(context, copy.deepcopy(request.arguments))
        except ToolError as e:
            logger.warning(f"Tool {request.name} failed: {e.message}")
            result = ToolResult.failure(request.name, e.message)
        except Exception as e:
            logger.error(f"Tool execution failed: {request.name}", e)
            result = ToolResult.failure(request.name, f"{type(e).__name__}: {e}")
        else:
            if not isinstance(result, ToolResult):
                result = ToolResult.ok(request.name, result)
            logger.debug(f"Tool {request.name} succeeded")

        return ToolCallResult(request, result)

    def record(self, call: ToolCallResult, context: RunContext) -> ToolCallResult:
        """Append the tool-result message for a finished call."""
        call.message = context.add_tool_message(
            tool_name=call.request.name,
            content=call.result.to_message(),
            tool_call_id=call.request.id,
            is_error=call.result.is_error,
        )
        return call

    async def execute_all(
        self,
        requests: Sequence[ToolInvocationRequest],
        context: RunContext,
    ) -> list[ToolCallResult]:
        """
        Execute tool calls one after another, recording each result.

        Each result message is appended as soon as its tool finishes, so the
        next tool already sees it. If the run is cancelled (or times out)
        mid-turn, the tool that was running never gets a result of its own;
        it and every request after it are closed with a cancellation error,
        so each request id on the assistant message still has an answer.

        Returns:
            ToolCallResults in request order
        """
        results = []
        try:
            for request in requests:
                call = await self.execute_one(request, context)
                results.append(self.record(call, context))
        except asyncio.CancelledError:
            self.close_unanswered(requests[len(results):], context)
            raise
        return results

    def close_unanswered(
        self,
        requests: Sequence[ToolInvocationRequest],
        context: RunContext,
    ) -> None:
        """Record a cancellation error for requests that never completed."""
        for request in requests:
            logger.warning(f"Tool {request.name} cancelled before completion")
            self.record(
                ToolCallResult(request, ToolResult.failure(request.name, CANCELLED_MESSAGE)),
                context,
            )
