"""Per-user directories for searchlist (config file, logs)."""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "searchlist"


class GlobalPath:
    """Platform-specific directories, overridable for tests."""

    @classmethod
    def data(cls) -> str:
        """Application data directory."""
        return os.environ.get("SEARCHLIST_DATA_DIR") or user_data_dir(APP_NAME)

    @classmethod
    def log(cls) -> str:
        """Log file directory."""
        return str(Path(cls.data()) / "log")

    @classmethod
    def config(cls) -> str:
        """Configuration directory."""
        return os.environ.get("SEARCHLIST_CONFIG_DIR") or user_config_dir(APP_NAME)

    @classmethod
    def config_file(cls) -> Path:
        """Default configuration file path."""
        return Path(cls.config()) / "config.json"
