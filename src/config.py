"""
Configuration management for orchestration stack operations.

Settings are read from ``orchestration.yaml`` in the config directory, merged
over the defaults, and then overridden by ``ORCHESTRATION_*`` environment
variables.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields


CONFIG_FILE_NAME = "orchestration.yaml"

ENV_OVERRIDES = {
    "ORCHESTRATION_REGION": "aws_region",
    "ORCHESTRATION_PROFILE": "aws_profile",
    "ORCHESTRATION_LOG_LEVEL": "log_level",
    "ORCHESTRATION_ROOT_TENANT": "root_tenant_name",
}


@dataclass
class OrchestrationConfig:
    """Settings for talking to the provider and resolving identities."""

    # Provider connection
    aws_region: str = "us-east-1"
    aws_profile: Optional[str] = None

    # Added to create/update calls that pass no capabilities
    default_capabilities: list[str] = field(default_factory=list)

    # Root tenant used when a stack has no owning tenant
    root_tenant_name: str = "My Company"
    root_admin_userid: str = "admin"
    root_default_group: str = "EvmGroup-super_administrator"

    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # A single capability may be written as a YAML scalar
        if isinstance(self.default_capabilities, str):
            self.default_capabilities = [self.default_capabilities]
        elif self.default_capabilities is None:
            self.default_capabilities = []
        else:
            self.default_capabilities = list(self.default_capabilities)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            k: v for k, v in self.__dict__.items()
            if not k.startswith('_')
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrchestrationConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class ConfigManager:
    """Loads and saves the orchestration configuration."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize config manager."""
        self.config_dir = Path(config_dir) if config_dir else self._find_config_dir()
        self._config: Optional[OrchestrationConfig] = None

    def _find_config_dir(self) -> Path:
        """Find the configuration directory."""
        env_dir = os.environ.get("ORCHESTRATION_CONFIG_DIR")
        if env_dir:
            return Path(env_dir)
        return Path.cwd() / "config"

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def load(self) -> OrchestrationConfig:
        """Load configuration from file and environment."""
        data: Dict[str, Any] = {}
        if self.config_file.exists():
            with open(self.config_file, 'r') as f:
                data.update(yaml.safe_load(f) or {})

        for env_var, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if value:
                data[key] = value

        return OrchestrationConfig.from_dict(data)

    def get_config(self) -> OrchestrationConfig:
        """Get the loaded configuration."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def save_config(self, config: OrchestrationConfig) -> None:
        """Save configuration to file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)
        self._config = config


# Singleton instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Get or create the config manager instance."""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(config_dir: Optional[Union[str, Path]] = None) -> OrchestrationConfig:
    """Get the orchestration configuration."""
    return get_config_manager(config_dir).get_config()


def reset_config() -> None:
    """Drop the cached configuration so it is reloaded on next access."""
    global _config_manager
    _config_manager = None
