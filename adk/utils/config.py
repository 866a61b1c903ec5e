"""
Configuration Management
========================

Centralized configuration for the agent kit. Environment variables (and an
optional .env file) are read and typed in one place:

    OPENAI_API_KEY          API key for the OpenAI backend (optional here,
                            required by OpenAIModel.from_config)
    OPENAI_MODEL            Chat model name (default: gpt-4o-mini)
    OPENAI_BASE_URL         Alternative OpenAI-compatible endpoint
    OPENAI_TEMPERATURE      Sampling temperature (default: 0.7)
    OPENAI_MAX_TOKENS       Completion token limit (default: unset)
    AGENT_MAX_TURNS         Maximum Deciding steps per run (default: 10)
    AGENT_TIMEOUT_SECONDS   Wall-clock limit for one run (default: unset)
    AGENT_INSTRUCTIONS      Default instruction preamble
    LOG_LEVEL               debug / info / warning / error (default: info)

Usage:
    from adk.utils.config import get_config

    config = get_config()
    print(config.openai.model)
    print(config.agent.max_turns)
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from adk.errors import ConfigurationError


def _optional(name: str, default: str | None) -> str | None:
    """Get an optional environment variable with a default."""
    return os.getenv(name) or default


def _optional_int(name: str, default: int | None) -> int | None:
    """
    Get an optional integer environment variable.

    Raises:
        ConfigurationError: If the variable is set but not an integer
    """
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _optional_float(name: str, default: float | None) -> float | None:
    """
    Get an optional float environment variable.

    Raises:
        ConfigurationError: If the variable is set but not a number
    """
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class OpenAIConfig:
    """OpenAI backend configuration."""
    api_key: str | None      # sk-... API key
    model: str               # Chat completions model
    base_url: str | None     # Custom endpoint (e.g. a local vLLM server)
    temperature: float
    max_tokens: int | None


@dataclass(frozen=True)
class AgentConfig:
    """Defaults applied by AgentBuilder.from_config."""
    max_turns: int
    timeout_seconds: float | None
    default_instructions: str | None


@dataclass(frozen=True)
class Config:
    """
    Root configuration object.

    Access via:
        config = get_config()
        config.openai.api_key
        config.agent.max_turns
    """
    openai: OpenAIConfig
    agent: AgentConfig
    log_level: str


DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TURNS = 10


def load_config(dotenv: bool = True) -> Config:
    """
    Load and validate configuration from the environment.

    Args:
        dotenv: Whether to load a .env file first

    Returns:
        Config: The validated configuration

    Raises:
        ConfigurationError: If a value is malformed
    """
    if dotenv:
        load_dotenv()

    max_turns = _optional_int("AGENT_MAX_TURNS", DEFAULT_MAX_TURNS)
    if max_turns < 1:
        raise ConfigurationError(f"AGENT_MAX_TURNS must be at least 1, got {max_turns}")

    timeout = _optional_float("AGENT_TIMEOUT_SECONDS", None)
    if timeout is not None and timeout <= 0:
        raise ConfigurationError(f"AGENT_TIMEOUT_SECONDS must be positive, got {timeout}")

    return Config(
        openai=OpenAIConfig(
            api_key=os.getenv("OPENAI_API_KEY"),
            model=_optional("OPENAI_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("OPENAI_BASE_URL"),
            temperature=_optional_float("OPENAI_TEMPERATURE", 0.7),
            max_tokens=_optional_int("OPENAI_MAX_TOKENS", None),
        ),
        agent=AgentConfig(
            max_turns=max_turns,
            timeout_seconds=timeout,
            default_instructions=os.getenv("AGENT_INSTRUCTIONS"),
        ),
        log_level=_optional("LOG_LEVEL", "info"),
    )


# ==============================================================================
# Singleton
# ==============================================================================

_config_instance: Config | None = None


def get_config() -> Config:
    """
    Get the configuration, loading it on first access.

    Returns:
        Config: The shared configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None


__all__ = [
    "AgentConfig",
    "Config",
    "OpenAIConfig",
    "get_config",
    "load_config",
    "reset_config",
]
