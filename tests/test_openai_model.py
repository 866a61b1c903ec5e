"""Tests for the OpenAI backend against a mocked chat-completions client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import openai
import pytest

from adk.context import Context, Message, RunContext, ToolInvocationRequest
from adk.errors import ConfigurationError, MalformedResponseError, ProviderError
from adk.models import FinalAnswer, OpenAIModel, ToolCalls
from adk.models.openai_model import message_to_openai
from adk.tools import CalculatorTool
from adk.utils.config import AgentConfig, Config, OpenAIConfig


def completion(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def openai_tool_call(call_id, name, arguments):
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


@pytest.fixture
def client():
    mock = MagicMock()
    mock.chat.completions.create = AsyncMock()
    return mock


@pytest.fixture
def model(client):
    return OpenAIModel(api_key="sk-test", model="gpt-4o-mini", client=client)


@pytest.fixture
def run_context():
    context = Context()
    context.add_message("system", "You are a helpful math assistant.")
    context.add_message("user", "What is 2 + 2?")
    return RunContext(context, agent_name="math_agent")


class TestMessageConversion:
    def test_plain_messages(self):
        assert message_to_openai(Message(role="user", content="Hi")) == {
            "role": "user",
            "content": "Hi",
        }

    def test_assistant_tool_calls(self):
        message = Message(
            role="assistant",
            content="",
            tool_calls=(ToolInvocationRequest("call_1", "calculator", {"a": 1}),),
        )
        converted = message_to_openai(message)

        assert converted["content"] is None
        assert converted["tool_calls"] == [
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": "calculator", "arguments": '{"a": 1}'},
            }
        ]

    def test_raw_string_arguments_are_sent_back_unchanged(self):
        message = Message(
            role="assistant",
            content="",
            tool_calls=(ToolInvocationRequest("call_1", "calculator", "{oops"),),
        )
        assert message_to_openai(message)["tool_calls"][0]["function"]["arguments"] == "{oops"

    def test_tool_result(self):
        message = Message(role="tool", content="4", tool_name="calculator", tool_call_id="call_1")
        assert message_to_openai(message) == {
            "role": "tool",
            "tool_call_id": "call_1",
            "content": "4",
        }

    def test_uncorrelated_tool_result(self):
        message = Message(role="tool", content="4", tool_name="calculator")
        assert message_to_openai(message) == {
            "role": "user",
            "content": "[calculator result] 4",
        }


class TestBuildRequest:
    def test_with_tools(self, model, run_context):
        request = model.build_request(run_context, [CalculatorTool().descriptor()])

        assert request["model"] == "gpt-4o-mini"
        assert request["temperature"] == 0.7
        assert [m["role"] for m in request["messages"]] == ["system", "user"]
        assert request["tools"][0]["function"]["name"] == "calculator"
        assert request["tool_choice"] == "auto"
        assert "max_tokens" not in request

    def test_without_tools(self, client, run_context):
        model = OpenAIModel(model="gpt-4o", max_tokens=256, client=client)
        request = model.build_request(run_context, [])

        assert "tools" not in request
        assert "tool_choice" not in request
        assert request["max_tokens"] == 256

    def test_name(self, model):
        assert model.name == "openai:gpt-4o-mini"


class TestGenerateResponse:
    @pytest.mark.asyncio
    async def test_final_answer(self, model, client, run_context):
        client.chat.completions.create.return_value = completion(content="4")

        turn = await model.generate_response(run_context, [])

        assert turn == FinalAnswer("4")
        client.chat.completions.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_text_is_a_final_answer(self, model, client, run_context):
        client.chat.completions.create.return_value = completion(content="")
        assert await model.generate_response(run_context, []) == FinalAnswer("")

    @pytest.mark.asyncio
    async def test_tool_calls(self, model, client, run_context):
        client.chat.completions.create.return_value = completion(
            tool_calls=[
                openai_tool_call("call_1", "calculator", '{"a": 2, "b": 2, "operation": "add"}'),
                openai_tool_call("call_2", "calculator", "{oops"),
            ]
        )

        turn = await model.generate_response(run_context, [CalculatorTool().descriptor()])

        assert isinstance(turn, ToolCalls)
        assert turn.content == ""
        assert turn.requests == (
            ToolInvocationRequest("call_1", "calculator", {"a": 2, "b": 2, "operation": "add"}),
            ToolInvocationRequest("call_2", "calculator", "{oops"),
        )

    @pytest.mark.asyncio
    async def test_provider_failure(self, model, client, run_context):
        client.chat.completions.create.side_effect = openai.OpenAIError("boom")

        with pytest.raises(ProviderError, match="boom") as exc_info:
            await model.generate_response(run_context, [])

        assert exc_info.value.provider == "openai"

    @pytest.mark.asyncio
    async def test_no_choices(self, model, client, run_context):
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        with pytest.raises(MalformedResponseError, match="No response"):
            await model.generate_response(run_context, [])

    @pytest.mark.asyncio
    async def test_neither_text_nor_tools(self, model, client, run_context):
        client.chat.completions.create.return_value = completion()
        with pytest.raises(MalformedResponseError):
            await model.generate_response(run_context, [])

    @pytest.mark.asyncio
    async def test_tool_call_without_name(self, model, client, run_context):
        client.chat.completions.create.return_value = completion(
            tool_calls=[openai_tool_call("call_1", "", "{}")]
        )
        with pytest.raises(MalformedResponseError):
            await model.generate_response(run_context, [])


class TestAgentWithOpenAI:
    @pytest.mark.asyncio
    async def test_calculator_run(self, model, client, make_agent):
        client.chat.completions.create.side_effect = [
            completion(
                tool_calls=[
                    openai_tool_call(
                        "call_1", "calculator", '{"a": 15.7, "b": 9.2, "operation": "multiply"}'
                    )
                ]
            ),
            completion(content="15.7 * 9.2 = 144.44"),
        ]
        context = Context()

        answer = await make_agent(model).run("What is 15.7 * 9.2?", context)

        assert answer == "15.7 * 9.2 = 144.44"
        second_request = client.chat.completions.create.await_args_list[1].kwargs
        assert [m["role"] for m in second_request["messages"]] == [
            "system",
            "user",
            "assistant",
            "tool",
        ]
        assert second_request["messages"][3] == {
            "role": "tool",
            "tool_call_id": "call_1",
            "content": "144.44",
        }


class TestFromConfig:
    def _config(self, api_key):
        return Config(
            openai=OpenAIConfig(
                api_key=api_key,
                model="gpt-4o",
                base_url=None,
                temperature=0.2,
                max_tokens=512,
            ),
            agent=AgentConfig(max_turns=10, timeout_seconds=None, default_instructions=None),
            log_level="info",
        )

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            OpenAIModel.from_config(self._config(None))

    def test_settings_applied(self):
        model = OpenAIModel.from_config(self._config("sk-test"))

        assert model.model == "gpt-4o"
        assert model.temperature == 0.2
        assert model.max_tokens == 512
