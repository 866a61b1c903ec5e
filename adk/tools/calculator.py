"""
Calculator Tool
===============

Basic arithmetic for math assistants: add, subtract, multiply, divide.

Results are rounded to 10 decimal places so binary float noise does not
leak into the conversation (15.7 * 9.2 -> "144.44"), and integral results
render without a trailing ".0".
"""

import operator
from typing import Any, Callable

from adk.context import RunContext
from adk.errors import ToolExecutionError
from adk.tools.base import Tool, ToolResult
from adk.tools.schema import model_from_schema, validate_arguments

OPERATIONS: dict[str, Callable[[float, float], float]] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}


def format_number(value: float) -> str:
    value = round(float(value), 10)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def calculate(a: float, b: float, operation: str) -> float:
    """
    Apply one arithmetic operation.

    Raises:
        ToolExecutionError: On division by zero or an unknown operation
    """
    if operation not in OPERATIONS:
        raise ToolExecutionError(f"Invalid operation '{operation}'", tool_name="calculator")
    if operation == "divide" and b == 0:
        raise ToolExecutionError("Division by zero", tool_name="calculator")
    return OPERATIONS[operation](a, b)


class CalculatorTool(Tool):
    name = "calculator"
    description = (
        "A simple calculator that can perform basic arithmetic operations "
        "(add, subtract, multiply, divide)"
    )

    SCHEMA = {
        "type": "object",
        "properties": {
            "operation": {
                "type": "string",
                "enum": list(OPERATIONS),
                "description": "The operation to apply",
            },
            "a": {"type": "number", "description": "First operand"},
            "b": {"type": "number", "description": "Second operand"},
        },
        "required": ["operation", "a", "b"],
    }

    def __init__(self):
        self._arguments_model = model_from_schema(self.name, self.SCHEMA)

    def parameter_schema(self) -> dict[str, Any]:
        return dict(self.SCHEMA)

    async def execute(self, context: RunContext, arguments: Any) -> ToolResult:
        args = validate_arguments(self._arguments_model, arguments, tool_name=self.name)
        result = calculate(args["a"], args["b"], args["operation"])
        return ToolResult.ok(self.name, format_number(result))
