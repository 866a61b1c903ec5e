"""
Tools
=====

Tools are the actions an agent can take. Each tool has a name, a
description and a JSON Schema for its parameters; the model decides which
tool to call and with what arguments, and the agent executes it.

How a tool call flows:
1. The model returns one or more tool invocation requests
2. The agent resolves each name in the agent's ToolRegistry
3. The tool validates its arguments and runs
4. The ToolResult is appended to the conversation as a tool message
5. The model sees the result on its next turn

This package provides:
- Tool / ToolDescriptor / ToolResult: the tool contract
- ToolRegistry: name -> tool lookup
- FunctionTool / function_tool: wrap a plain function as a tool
- CalculatorTool: a ready-made arithmetic tool
"""

from adk.tools.base import Tool, ToolDescriptor, ToolResult
from adk.tools.calculator import CalculatorTool
from adk.tools.function_tool import FunctionTool, function_tool
from adk.tools.registry import ToolRegistry

__all__ = [
    "CalculatorTool",
    "FunctionTool",
    "Tool",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolResult",
    "function_tool",
]
