"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables
  2. User config (~/.metalcloud/config.yaml)
  3. Defaults

API keys are NEVER stored in config files.
They must be provided via the METALCLOUD_API_KEY environment variable.
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from .errors import InvalidArgument
from .presentation.symbols import VALID_SYMBOL_PREFERENCES


API_KEY_ENV = "METALCLOUD_API_KEY"

# Environment variable -> (section, setting)
ENV_OVERRIDES = {
    "METALCLOUD_ENDPOINT": ("api", "endpoint"),
    "METALCLOUD_USER_EMAIL": ("api", "user_email"),
    "METALCLOUD_SYMBOLS": ("display", "symbols"),
}


@dataclass
class ApiConfig:
    """Management API connection settings."""
    endpoint: str = ""
    user_email: Optional[str] = None

    @property
    def api_key(self) -> Optional[str]:
        """Get API key from environment. Never stored."""
        return os.environ.get(API_KEY_ENV)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if not self.endpoint:
            return "API endpoint not configured. Set METALCLOUD_ENDPOINT or api.endpoint in the config file"
        if not self.api_key:
            return f"API key missing. Set the {API_KEY_ENV} environment variable"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    symbols: str = "auto"  # "unicode" | "ascii" | "auto"
    width: int = 0         # 0 = detect terminal width

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.symbols not in VALID_SYMBOL_PREFERENCES:
            return f"Unknown symbols setting '{self.symbols}'. Valid: {', '.join(VALID_SYMBOL_PREFERENCES)}"
        if not isinstance(self.width, int) or isinstance(self.width, bool) or self.width < 0:
            return f"Invalid display width '{self.width}'. Use 0 (auto) or a positive number of columns"
        return None


@dataclass
class Config:
    """Application configuration."""
    api: ApiConfig = field(default_factory=ApiConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self) -> Optional[str]:
        """Validate every section. Returns the first error message or None."""
        return self.display.validate() or self.api.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization (the API key is never included)."""
        return {
            "api": {
                "endpoint": self.api.endpoint,
                "user_email": self.api.user_email
            },
            "display": {
                "symbols": self.display.symbols,
                "width": self.display.width
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        api_data = data.get("api") or {}
        display_data = data.get("display") or {}

        return cls(
            api=ApiConfig(
                endpoint=api_data.get("endpoint", ""),
                user_email=api_data.get("user_email")
            ),
            display=DisplayConfig(
                symbols=display_data.get("symbols", "auto"),
                width=display_data.get("width", 0)
            )
        )


class ConfigManager:
    """
    Manages configuration loading.

    Hierarchy:
      1. Environment variables
      2. User config (~/.metalcloud/config.yaml)
      3. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".metalcloud"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = Path(config_path) if config_path else None
        self._config: Optional[Config] = None

    @property
    def user_config_path(self) -> Path:
        return self._config_path or self.USER_CONFIG_FILE

    def load(self) -> Config:
        """
        Load configuration from all sources.

        Raises:
            InvalidArgument: The config file is not valid YAML or not a mapping
        """
        if self._config is not None:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        if self.user_config_path.exists():
            config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Environment overrides
        for env_name, (section, setting) in ENV_OVERRIDES.items():
            if os.environ.get(env_name):
                config_data.setdefault(section, {})[setting] = os.environ[env_name]

        self._config = Config.from_dict(config_data)
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidArgument(f"Malformed config file {path}: {e}") from e
        except OSError as e:
            raise InvalidArgument(f"Could not read config file {path}: {e.strerror or e}") from e

        if not isinstance(data, dict):
            raise InvalidArgument(f"Malformed config file {path}: expected a mapping")
        if "api_key" in (data.get("api") or {}):
            raise InvalidArgument(
                f"Config file {path} contains an API key",
                hint=f"Remove api.api_key from the file and set {API_KEY_ENV} instead"
            )
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result


# Convenience function
def get_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration."""
    return ConfigManager(config_path).load()
