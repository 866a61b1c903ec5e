"""
Agent System
============

The agent runs the conversation loop:
1. Seeds the conversation with instructions and the task
2. Asks the model for the next step
3. Executes requested tools and records their results
4. Repeats until the model gives a final answer

This module provides:
- Agent: the immutable, runnable agent
- AgentBuilder: validates configuration and creates agents
- ToolExecutor: sequential tool execution for one turn
"""

from adk.agent.builder import AgentBuilder
from adk.agent.core import DEFAULT_MAX_TURNS, Agent
from adk.agent.tools_executor import ToolCallResult, ToolExecutor

__all__ = ["Agent", "AgentBuilder", "DEFAULT_MAX_TURNS", "ToolCallResult", "ToolExecutor"]
