"""Error formatting utilities.

Turns application errors into messages fit for the CLI.
"""

from typing import Any

from ..errors import ConfigError


def format_error(error: Any) -> str | None:
    """Format known application errors into user-friendly messages.

    Returns None if the error type is not recognized.
    """
    if isinstance(error, ConfigError):
        return f"Invalid configuration in {error.path}:\n{error.message}"
    return None
