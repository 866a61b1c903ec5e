"""Pytest configuration and shared fixtures for adk tests."""

import pytest

from adk.agent import AgentBuilder
from adk.errors import ProviderError
from adk.tools import CalculatorTool
from adk.utils.config import reset_config
from adk.utils.logger import get_default_level, set_default_level


@pytest.fixture(autouse=True)
def clean_config():
    """Make sure no test sees configuration cached by another."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_log_level():
    level = get_default_level()
    yield
    set_default_level(level)


@pytest.fixture
def calculator():
    return CalculatorTool()


@pytest.fixture
def make_agent(calculator):
    """Factory for a math agent around a given model.

    Args:
        calculator: Calculator tool fixture.

    Returns:
        Callable building an Agent with the calculator tool.
    """

    def _make(model, tools=None, **options):
        builder = (
            AgentBuilder("math_agent")
            .instructions("You are a helpful math assistant.")
            .model(model)
            .add_tools(tools if tools is not None else [calculator])
        )
        if "max_turns" in options:
            builder.max_turns(options["max_turns"])
        if "timeout" in options:
            builder.timeout(options["timeout"])
        return builder.build()

    return _make


@pytest.fixture
def provider_failure():
    return ProviderError("connection refused", provider="stub")
