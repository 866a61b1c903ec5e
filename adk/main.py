"""
ADK - Demo Entry Point
======================

Runs a math assistant with the calculator tool against OpenAI:

    python -m adk.main "What is 15.7 * 9.2?"

Or after installing:
    adk-demo "What is 123 + 456?"

Requires OPENAI_API_KEY (environment or .env).
"""

import asyncio
import sys

from adk.agent import Agent, AgentBuilder
from adk.errors import AgentError
from adk.models import Model, OpenAIModel
from adk.tools import CalculatorTool
from adk.utils.config import Config, get_config
from adk.utils.logger import Logger, set_default_level

main_logger = Logger("Main")

MATH_INSTRUCTIONS = (
    "You are a helpful math assistant. "
    "Use the calculator tool to perform calculations when needed."
)
DEFAULT_TASK = "What is 15.7 * 9.2? Please use the calculator tool to compute this."


def build_math_agent(config: Config, model: Model | None = None) -> Agent:
    """
    Create the calculator math agent.

    Args:
        config: Configuration supplying run limits (and the OpenAI model)
        model: Model to use instead of OpenAI

    Raises:
        ConfigurationError: If no model is given and OPENAI_API_KEY is unset
    """
    return (
        AgentBuilder.from_config(config, name="math_agent")
        .instructions(MATH_INSTRUCTIONS)
        .model(model or OpenAIModel.from_config(config))
        .add_tool(CalculatorTool())
        .build()
    )


async def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    task = " ".join(args) or DEFAULT_TASK

    try:
        config = get_config()
        set_default_level(config.log_level)
        agent = build_math_agent(config)
        main_logger.info(f"Running {agent!r}")
        answer = await agent.run(task)
    except AgentError as e:
        main_logger.error("Agent run failed", e)
        return 1

    print(f"Agent response: {answer}")
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
