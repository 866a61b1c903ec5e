"""
Utilities Module
================

Common utilities shared across the package:
- logger: Context-aware logging with levels
- config: Environment-based configuration
"""

from adk.utils.config import Config, get_config, load_config
from adk.utils.logger import Logger, logger

__all__ = ["Config", "Logger", "get_config", "load_config", "logger"]
