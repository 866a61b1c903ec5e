"""
ADK - Agent Development Kit
===========================

Build a conversational agent that can call tools while talking to a
language model, and get back its final answer.

    from adk import AgentBuilder, CalculatorTool, OpenAIModel

    agent = (
        AgentBuilder("math_agent")
        .instructions("You are a helpful math assistant.")
        .model(OpenAIModel(model="gpt-4o-mini"))
        .add_tool(CalculatorTool())
        .build()
    )
    answer = await agent.run("What is 15.7 * 9.2?")

This package provides:
- Agent / AgentBuilder: the tool-calling conversation loop
- Context / RunContext / Message: conversation state
- Tool / ToolRegistry / function_tool: the tool contract and helpers
- Model / OpenAIModel: language model backends
"""

from adk.agent import Agent, AgentBuilder
from adk.context import Context, Message, RunContext, ToolInvocationRequest
from adk.errors import (
    AgentError,
    BuildError,
    ModelError,
    ToolError,
)
from adk.models import FinalAnswer, Model, ModelTurn, OpenAIModel, ToolCalls
from adk.tools import (
    CalculatorTool,
    FunctionTool,
    Tool,
    ToolDescriptor,
    ToolRegistry,
    ToolResult,
    function_tool,
)

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "AgentBuilder",
    "AgentError",
    "BuildError",
    "CalculatorTool",
    "Context",
    "FinalAnswer",
    "FunctionTool",
    "Message",
    "Model",
    "ModelError",
    "ModelTurn",
    "OpenAIModel",
    "RunContext",
    "Tool",
    "ToolCalls",
    "ToolDescriptor",
    "ToolError",
    "ToolInvocationRequest",
    "ToolRegistry",
    "ToolResult",
    "function_tool",
    "__version__",
]
