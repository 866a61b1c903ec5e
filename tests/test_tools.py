"""Unit tests for the tool contract, registry, schemas and built-in tools."""

import asyncio
import threading

import pytest
from pydantic import BaseModel, Field

from adk.context import Context, RunContext
from adk.errors import (
    BuildError,
    DuplicateToolError,
    InvalidArgumentsError,
    ToolExecutionError,
    ToolNotFoundError,
)
from adk.tools import (
    CalculatorTool,
    FunctionTool,
    Tool,
    ToolDescriptor,
    ToolRegistry,
    ToolResult,
    function_tool,
)
from adk.tools.calculator import format_number
from adk.tools.schema import model_from_schema, parse_payload, validate_arguments


@pytest.fixture
def run_context():
    return RunContext(Context(), agent_name="test_agent")


class EchoTool(Tool):
    name = "echo"
    description = "Repeat the given text"

    def parameter_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {"text": {"type": "string"}},
            "required": ["text"],
        }

    async def execute(self, context, arguments) -> ToolResult:
        return ToolResult.ok(self.name, arguments["text"])


class TestToolResult:
    def test_text_output(self):
        assert ToolResult.ok("t", "hello").to_message() == "hello"

    def test_structured_output_is_json(self):
        result = ToolResult.ok("t", {"total": 3, "items": [1, 2]})
        assert result.to_message() == '{"total": 3, "items": [1, 2]}'

    def test_error_output(self):
        result = ToolResult.failure("t", "Division by zero")
        assert result.is_error is True
        assert result.success is False
        assert result.to_message() == "Error: Division by zero"


class TestToolDescriptor:
    def test_descriptor_from_tool(self):
        descriptor = EchoTool().descriptor()
        assert descriptor == ToolDescriptor(
            name="echo",
            description="Repeat the given text",
            parameters=EchoTool().parameter_schema(),
        )

    def test_openai_function_format(self):
        function = EchoTool().descriptor().to_openai_function()
        assert function["type"] == "function"
        assert function["function"]["name"] == "echo"
        assert function["function"]["parameters"]["required"] == ["text"]


class TestToolRegistry:
    def test_register_and_resolve(self):
        registry = ToolRegistry()
        tool = EchoTool()
        registry.register(tool)

        assert registry.resolve("echo") is tool
        assert registry.get("echo") is tool
        assert "echo" in registry
        assert len(registry) == 1

    def test_resolve_unknown_name(self):
        registry = ToolRegistry([EchoTool()])

        with pytest.raises(ToolNotFoundError) as exc_info:
            registry.resolve("nope")

        assert exc_info.value.tool_name == "nope"
        assert exc_info.value.available == ["echo"]
        assert registry.get("nope") is None

    def test_resolution_is_exact(self):
        registry = ToolRegistry([EchoTool()])
        for name in ("Echo", "echo ", ""):
            with pytest.raises(ToolNotFoundError):
                registry.resolve(name)

    def test_duplicate_name(self):
        registry = ToolRegistry([EchoTool()])

        with pytest.raises(DuplicateToolError) as exc_info:
            registry.register(EchoTool())

        assert exc_info.value.tool_name == "echo"
        assert isinstance(exc_info.value, BuildError)

    def test_frozen_registry_rejects_tools(self):
        registry = ToolRegistry([EchoTool()])
        registry.freeze()

        with pytest.raises(BuildError):
            registry.register(CalculatorTool())
        assert registry.list_names() == ["echo"]

    def test_nameless_tool_rejected(self):
        tool = function_tool("", "No name", None, lambda: "x")
        with pytest.raises(BuildError):
            ToolRegistry([tool])

    def test_descriptors_in_registration_order(self):
        registry = ToolRegistry([CalculatorTool(), EchoTool()])
        assert [d.name for d in registry.descriptors()] == ["calculator", "echo"]
        assert [t.name for t in registry] == ["calculator", "echo"]


class TestSchemaValidation:
    SCHEMA = {
        "type": "object",
        "properties": {
            "query": {"type": "string", "minLength": 1},
            "limit": {"type": "integer", "minimum": 1, "maximum": 50, "default": 10},
            "tags": {"type": "array", "items": {"type": "string"}},
            "mode": {"type": "string", "enum": ["fast", "exact"]},
        },
        "required": ["query"],
    }

    def test_valid_payload(self):
        model = model_from_schema("search", self.SCHEMA)
        args = validate_arguments(model, {"query": "python", "tags": ["a"], "mode": "fast"})
        assert args == {"query": "python", "tags": ["a"], "mode": "fast", "limit": 10}

    def test_omitted_optional_fields_stay_omitted(self):
        model = model_from_schema("search", self.SCHEMA)
        args = validate_arguments(model, {"query": "python"})
        assert "tags" not in args
        assert "mode" not in args

    def test_json_string_payload(self):
        model = model_from_schema("search", self.SCHEMA)
        assert validate_arguments(model, '{"query": "x", "limit": 5}')["limit"] == 5

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"query": ""},
            {"query": "x", "limit": 0},
            {"query": "x", "limit": "many"},
            {"query": "x", "mode": "slow"},
            {"query": "x", "tags": "not-a-list"},
        ],
    )
    def test_invalid_payloads(self, payload):
        model = model_from_schema("search", self.SCHEMA)
        with pytest.raises(InvalidArgumentsError):
            validate_arguments(model, payload, tool_name="search")

    def test_non_json_and_non_object(self):
        with pytest.raises(InvalidArgumentsError, match="not valid JSON"):
            parse_payload("{oops")
        with pytest.raises(InvalidArgumentsError, match="JSON object"):
            parse_payload("[1, 2]")

    def test_empty_payload(self):
        assert parse_payload(None) == {}
        assert parse_payload("") == {}

    def test_additional_properties_false(self):
        schema = {
            "type": "object",
            "properties": {"x": {"type": "number"}},
            "required": ["x"],
            "additionalProperties": False,
        }
        model = model_from_schema("strict", schema)
        with pytest.raises(InvalidArgumentsError):
            validate_arguments(model, {"x": 1, "y": 2})

    def test_nested_object(self):
        schema = {
            "type": "object",
            "properties": {
                "point": {
                    "type": "object",
                    "properties": {"x": {"type": "number"}, "y": {"type": "number"}},
                    "required": ["x", "y"],
                }
            },
            "required": ["point"],
        }
        model = model_from_schema("plot", schema)
        assert validate_arguments(model, {"point": {"x": 1, "y": 2}}) == {
            "point": {"x": 1.0, "y": 2.0}
        }
        with pytest.raises(InvalidArgumentsError):
            validate_arguments(model, {"point": {"x": 1}})


class TestFunctionTool:
    @pytest.mark.asyncio
    async def test_sync_function(self, run_context):
        tool = function_tool(
            "add",
            "Add two numbers",
            {
                "type": "object",
                "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
                "required": ["a", "b"],
            },
            lambda a, b: a + b,
        )
        result = await tool.execute(run_context, {"a": 2, "b": 3})
        assert result == ToolResult.ok("add", 5.0)

    @pytest.mark.asyncio
    async def test_async_function_with_context(self, run_context):
        async def remember(context, key: str, value: str) -> str:
            context.set(key, value)
            return f"remembered {key}"

        tool = function_tool(
            "remember",
            "Store a value",
            {
                "type": "object",
                "properties": {"key": {"type": "string"}, "value": {"type": "string"}},
                "required": ["key", "value"],
            },
            remember,
        )
        result = await tool.execute(run_context, {"key": "city", "value": "Oslo"})

        assert result.output == "remembered city"
        assert run_context.get("city") == "Oslo"

    @pytest.mark.asyncio
    async def test_pydantic_model_schema(self, run_context):
        class GreetArguments(BaseModel):
            name: str = Field(description="Who to greet")
            excited: bool = False

        tool = FunctionTool(
            "greet",
            "Greet someone",
            GreetArguments,
            lambda name, excited: f"Hello {name}{'!' if excited else '.'}",
        )

        schema = tool.parameter_schema()
        assert schema["required"] == ["name"]
        assert schema["properties"]["name"]["description"] == "Who to greet"
        assert (await tool.execute(run_context, {"name": "Ada"})).output == "Hello Ada."

    @pytest.mark.asyncio
    async def test_invalid_arguments_raise(self, run_context):
        tool = function_tool(
            "square",
            "Square a number",
            {"type": "object", "properties": {"x": {"type": "number"}}, "required": ["x"]},
            lambda x: x * x,
        )
        with pytest.raises(InvalidArgumentsError) as exc_info:
            await tool.execute(run_context, {"x": "four"})
        assert exc_info.value.tool_name == "square"

    def test_default_schema(self):
        tool = function_tool("ping", "Ping", None, lambda: "pong")
        assert tool.parameter_schema() == {"type": "object", "properties": {}, "required": []}

    @pytest.mark.asyncio
    async def test_blocking_function_runs_off_the_loop(self, run_context):
        release = threading.Event()

        def wait_for_release(context) -> int:
            if not release.wait(timeout=5):
                raise RuntimeError("event loop was blocked")
            context.set("released", True)
            return threading.get_ident()

        tool = function_tool(
            "wait", "Blocks until released", None, wait_for_release, blocking=True
        )
        pending = asyncio.create_task(tool.execute(run_context, {}))
        await asyncio.sleep(0.01)

        assert not pending.done()
        release.set()
        result = await pending

        assert result.output != threading.get_ident()
        assert run_context.get("released") is True

    @pytest.mark.asyncio
    async def test_sync_function_runs_on_the_loop_by_default(self, run_context):
        tool = function_tool("where", "Report the thread", None, threading.get_ident)
        result = await tool.execute(run_context, {})
        assert result.output == threading.get_ident()


class TestCalculatorTool:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation, a, b, expected",
        [
            ("add", 123, 456, "579"),
            ("subtract", 10, 4.5, "5.5"),
            ("multiply", 15.7, 9.2, "144.44"),
            ("divide", 10, 4, "2.5"),
        ],
    )
    async def test_operations(self, run_context, operation, a, b, expected):
        result = await CalculatorTool().execute(
            run_context, {"a": a, "b": b, "operation": operation}
        )
        assert result.output == expected
        assert result.tool_name == "calculator"

    @pytest.mark.asyncio
    async def test_division_by_zero(self, run_context):
        with pytest.raises(ToolExecutionError, match="Division by zero"):
            await CalculatorTool().execute(
                run_context, {"a": 1, "b": 0, "operation": "divide"}
            )

    @pytest.mark.asyncio
    async def test_unknown_operation(self, run_context):
        with pytest.raises(InvalidArgumentsError):
            await CalculatorTool().execute(run_context, {"a": 1, "b": 2, "operation": "power"})

    @pytest.mark.asyncio
    async def test_json_string_arguments(self, run_context):
        result = await CalculatorTool().execute(
            run_context, '{"a": 2, "b": 21, "operation": "multiply"}'
        )
        assert result.output == "42"

    def test_schema(self):
        schema = CalculatorTool().parameter_schema()
        assert schema["properties"]["operation"]["enum"] == [
            "add",
            "subtract",
            "multiply",
            "divide",
        ]
        assert sorted(schema["required"]) == ["a", "b", "operation"]

    def test_format_number(self):
        assert format_number(3.0) == "3"
        assert format_number(0.1 + 0.2) == "0.3"
        assert format_number(-2.5) == "-2.5"
