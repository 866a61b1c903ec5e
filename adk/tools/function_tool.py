"""
Function Tools
==============

Wrap a plain function as a tool without writing a Tool subclass:

    def add(a: float, b: float) -> float:
        return a + b

    adder = function_tool(
        name="add",
        description="Add two numbers",
        schema={
            "type": "object",
            "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
            "required": ["a", "b"],
        },
        function=add,
    )

The schema may also be a pydantic model class. Arguments are validated
against it before the function is called, and passed as keyword arguments.
Functions may be sync or async. A function whose first parameter is named
`context` also receives the RunContext.

A sync function runs on the event loop, so while it works every other run
sharing the loop waits. Pass `blocking=True` for functions that wait on
I/O or compute for long: they then run in a worker thread via
`asyncio.to_thread`, and only the calling run waits for them.
"""

import asyncio
import functools
import inspect
from typing import Any, Callable

from pydantic import BaseModel

from adk.context import RunContext
from adk.tools.base import Tool, ToolResult
from adk.tools.schema import empty_schema, model_from_schema, schema_from_model, validate_arguments


def _wants_context(function: Callable) -> bool:
    try:
        params = list(inspect.signature(function).parameters)
    except (TypeError, ValueError):
        return False
    return bool(params) and params[0] == "context"


class FunctionTool(Tool):
    """A tool backed by a plain function and an explicit schema."""

    def __init__(
        self,
        name: str,
        description: str,
        schema: dict[str, Any] | type[BaseModel] | None,
        function: Callable[..., Any],
        blocking: bool = False,
    ):
        self.name = name
        self.description = description
        self.function = function

        if isinstance(schema, type) and issubclass(schema, BaseModel):
            self._arguments_model = schema
            self._schema = schema_from_model(schema)
        else:
            self._schema = dict(schema) if schema else empty_schema()
            self._arguments_model = model_from_schema(name or "tool", self._schema)

        self._pass_context = _wants_context(function)
        self.blocking = blocking and not inspect.iscoroutinefunction(function)

    def parameter_schema(self) -> dict[str, Any]:
        return dict(self._schema)

    async def execute(self, context: RunContext, arguments: Any) -> ToolResult:
        kwargs = validate_arguments(self._arguments_model, arguments, tool_name=self.name)

        args = (context,) if self._pass_context else ()
        call = functools.partial(self.function, *args, **kwargs)

        if self.blocking:
            result = await asyncio.to_thread(call)
        else:
            result = call()
        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, ToolResult):
            return result
        return ToolResult.ok(self.name, result)


def function_tool(
    name: str,
    description: str,
    schema: dict[str, Any] | type[BaseModel] | None,
    function: Callable[..., Any],
    blocking: bool = False,
) -> FunctionTool:
    """
    Create a FunctionTool; see the module docstring.

    Args:
        blocking: Run a sync function in a worker thread instead of on the
            event loop
    """
    return FunctionTool(name, description, schema, function, blocking=blocking)
