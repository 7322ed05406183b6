"""
Centralized path management for dayplan.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional


class PathManager:
    """Resolves where dayplan keeps its configuration and logs."""

    APP_DIR_NAME = "dayplan"
    CONFIG_FILE = "config.json"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._working_dir: Optional[Path] = None

    def _default_user_dir(self) -> Path:
        """Platform-appropriate per-user data directory."""
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / self.APP_DIR_NAME
        if sys.platform.startswith("win"):
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / self.APP_DIR_NAME
            return Path.home() / "AppData" / "Roaming" / self.APP_DIR_NAME
        return Path.home() / ".config" / self.APP_DIR_NAME

    @property
    def working_dir(self) -> Path:
        """
        Get the working directory for dayplan data.

        Priority order:
        1. DAYPLAN_HOME environment variable (explicit override)
        2. Per-user application directory
        """
        if self._working_dir is not None:
            return self._working_dir

        env_override = os.environ.get("DAYPLAN_HOME")
        if env_override:
            env_path = Path(env_override).expanduser().resolve()
            self.logger.debug(f"Using DAYPLAN_HOME override: {env_path}")
            self._working_dir = env_path
        else:
            self._working_dir = self._default_user_dir()
        return self._working_dir

    @property
    def log_dir(self) -> Path:
        """Get the log directory."""
        return self.working_dir / "logs"

    @property
    def config_path(self) -> Path:
        """Get the configuration file path."""
        return self.working_dir / self.CONFIG_FILE

    def ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        for directory in (self.working_dir, self.log_dir):
            directory.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Ensured directory exists: {directory}")


_path_manager = None


def get_path_manager() -> PathManager:
    """Get or create the global PathManager instance."""
    global _path_manager
    if _path_manager is None:
        _path_manager = PathManager()
    return _path_manager


def reset_path_manager() -> None:
    """Forget the cached PathManager (used when DAYPLAN_HOME changes)."""
    global _path_manager
    _path_manager = None
