"""Configuration management.

Values come from the YAML config file, with ``${VAR}`` expansion. A ``.env``
file in the working directory is loaded first so it can feed both the
expansion and the ``OVERLOAD_LCD`` / ``CW_STATE_LOG_LEVEL`` overrides.
"""

from dotenv import load_dotenv

from cwstate.config.loader import load_browser_config
from cwstate.config.schema import BrowserConfig, LcdConfig, LoggingConfig


def load_environment() -> None:
    """Load a local ``.env`` without overriding variables already set."""
    load_dotenv(override=False)


__all__ = ["BrowserConfig", "LcdConfig", "LoggingConfig", "load_browser_config", "load_environment"]
