"""
OpenAI Model
============

Chat-completions backend using the official `openai` async client.

Conversation messages are converted to the chat-completions format:
assistant messages keep the tool calls they requested, and tool results
are sent as `tool` messages correlated by `tool_call_id`. Tool descriptors
become the `tools` parameter with `tool_choice="auto"`.

Example:
    model = OpenAIModel(api_key="sk-...", model="gpt-4o-mini")

    # or from environment / .env
    model = OpenAIModel.from_config(get_config())
"""

import json
from typing import Any, Sequence

import openai
from openai import AsyncOpenAI

from adk.context import ASSISTANT, TOOL, Message, RunContext, ToolInvocationRequest
from adk.errors import ConfigurationError, MalformedResponseError, ProviderError
from adk.models.base import FinalAnswer, Model, ModelTurn, ToolCalls
from adk.tools.base import ToolDescriptor
from adk.utils.config import Config
from adk.utils.logger import Logger

logger = Logger("OpenAIModel")


def _encode_arguments(arguments: Any) -> str:
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments, default=str)


def _parse_arguments(raw: str | None) -> Any:
    """Decode tool-call arguments; the raw string is kept if it is not JSON."""
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Tool arguments are not valid JSON: {e}")
        return raw


def message_to_openai(message: Message) -> dict[str, Any]:
    """Convert one conversation message to chat-completions format."""
    if message.role == ASSISTANT and message.tool_calls:
        return {
            "role": "assistant",
            "content": message.content or None,
            "tool_calls": [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {
                        "name": tc.name,
                        "arguments": _encode_arguments(tc.arguments),
                    },
                }
                for tc in message.tool_calls
            ],
        }
    if message.role == TOOL:
        if message.tool_call_id:
            return {
                "role": "tool",
                "tool_call_id": message.tool_call_id,
                "content": message.content,
            }
        # No request to correlate with (e.g. history supplied by the caller)
        label = message.tool_name or "tool"
        return {"role": "user", "content": f"[{label} result] {message.content}"}
    return {"role": message.role, "content": message.content}


class OpenAIModel(Model):
    """
    OpenAI chat-completions model.

    Args:
        api_key: OpenAI API key (falls back to OPENAI_API_KEY in the client)
        model: Model name
        temperature: Sampling temperature
        max_tokens: Optional completion token limit
        base_url: Optional OpenAI-compatible endpoint
        client: Pre-built AsyncOpenAI client (mostly for tests)
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int | None = None,
        base_url: str | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=base_url)

    @classmethod
    def from_config(cls, config: Config) -> "OpenAIModel":
        """
        Build a model from configuration.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not config.openai.api_key:
            raise ConfigurationError(
                "Missing required environment variable: OPENAI_API_KEY\n"
                "Please ensure OPENAI_API_KEY is set in your .env file."
            )
        return cls(
            api_key=config.openai.api_key,
            model=config.openai.model,
            temperature=config.openai.temperature,
            max_tokens=config.openai.max_tokens,
            base_url=config.openai.base_url,
        )

    @property
    def name(self) -> str:
        return f"openai:{self.model}"

    def build_request(
        self,
        context: RunContext,
        tools: Sequence[ToolDescriptor],
    ) -> dict[str, Any]:
        """Assemble the keyword arguments for chat.completions.create()."""
        request: dict[str, Any] = {
            "model": self.model,
            "messages": [message_to_openai(m) for m in context.messages],
            "temperature": self.temperature,
        }
        if self.max_tokens is not None:
            request["max_tokens"] = self.max_tokens
        if tools:
            request["tools"] = [descriptor.to_openai_function() for descriptor in tools]
            request["tool_choice"] = "auto"
        return request

    async def generate_response(
        self,
        context: RunContext,
        tools: Sequence[ToolDescriptor],
    ) -> ModelTurn:
        request = self.build_request(context, tools)
        logger.debug(
            f"Requesting completion ({len(request['messages'])} messages, {len(tools)} tools)"
        )

        try:
            response = await self.client.chat.completions.create(**request)
        except openai.OpenAIError as e:
            logger.error("OpenAI request failed", e)
            raise ProviderError(str(e), provider="openai") from e

        return self.parse_response(response)

    def parse_response(self, response: Any) -> ModelTurn:
        """
        Turn a chat completion into a ModelTurn.

        Raises:
            MalformedResponseError: If there is no choice, or the message has
                neither content nor tool calls
        """
        if not getattr(response, "choices", None):
            raise MalformedResponseError("No response from model")

        message = response.choices[0].message

        if message.tool_calls:
            requests = []
            for tc in message.tool_calls:
                function = getattr(tc, "function", None)
                if function is None or not function.name:
                    raise MalformedResponseError(
                        f"Tool call {getattr(tc, 'id', '?')} has no function name"
                    )
                requests.append(
                    ToolInvocationRequest(
                        id=tc.id,
                        name=function.name,
                        arguments=_parse_arguments(function.arguments),
                    )
                )
            logger.debug(f"Model requested {len(requests)} tool calls")
            return ToolCalls(requests=tuple(requests), content=message.content or "")

        if message.content is None:
            raise MalformedResponseError("Model returned neither text nor tool calls")

        return FinalAnswer(message.content)
