"""Configuration manager for vfsh."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".vfsh"


class ShellConfig(BaseSettings):
    """vfsh configuration."""

    # Remote filesystem
    base_url: str = Field(default="http://localhost:8080", description="Root URL of the remote filesystem")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # History
    history_file: Optional[Path] = Field(
        default=DEFAULT_CONFIG_DIR / "history.json",
        description="File the command history is persisted to (unset to keep history in memory)"
    )
    max_history: int = Field(default=500, ge=0, description="Maximum number of history entries kept")

    # Interaction
    ordered: bool = Field(default=True, description="Render results in submission order")
    prompt: str = Field(default="vfsh> ", description="Prompt text")
    log_level: str = Field(default="WARNING", description="Logging level")

    model_config = SettingsConfigDict(env_prefix="VFSH_", env_file=".env", extra="ignore")


class ConfigManager:
    """Layers a JSON config file under environment variables and explicit overrides."""

    def __init__(self, config_path: Optional[Path] = None, **overrides: Any):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. Defaults to ~/.vfsh/config.json
            **overrides: Values that win over the environment and the file
        """
        if config_path is None:
            self.config_path = DEFAULT_CONFIG_DIR / "config.json"
        else:
            self.config_path = Path(config_path)
        self.overrides = {key: value for key, value in overrides.items() if value is not None}
        self.config = self._build()

    def _load_file(self) -> Dict[str, Any]:
        """Load configuration values from file."""
        if not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", self.config_path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a JSON object", self.config_path)
            return {}
        return data

    def _build(self) -> ShellConfig:
        from_env = ShellConfig().model_fields_set
        values = {key: value for key, value in self._load_file().items() if key not in from_env}
        values.update(self.overrides)
        return ShellConfig(**values)

    def get(self) -> ShellConfig:
        return self.config


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_path: Optional[Path] = None, **overrides: Any) -> ConfigManager:
    """Get the global config manager, creating it on first use."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(config_path, **overrides)
    return _config_manager
