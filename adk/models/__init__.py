"""
Models
======

Language model backends behind one contract:

    turn = await model.generate_response(run_context, descriptors)

This package provides:
- Model: the backend base class
- FinalAnswer / ToolCalls / ModelTurn: the structural decision of one turn
- ToolInvocationRequest: one requested tool call
- OpenAIModel: OpenAI chat-completions backend
"""

from adk.context import ToolInvocationRequest
from adk.models.base import FinalAnswer, Model, ModelTurn, ToolCalls
from adk.models.openai_model import OpenAIModel

__all__ = [
    "FinalAnswer",
    "Model",
    "ModelTurn",
    "OpenAIModel",
    "ToolCalls",
    "ToolInvocationRequest",
]
