"""Application exceptions."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or validated."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")
