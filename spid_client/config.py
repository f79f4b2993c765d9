"""
Configuration for the SPiD client.

Settings are read from a JSON file in the config directory and can be
overridden with SPID_* environment variables.
"""

import json
import logging
import os
import time
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".spid"
CONFIG_FILE_NAME = "config.json"

# Seconds before expiry at which a token is treated as expired
TOKEN_EXPIRY_LEEWAY = 60

ENV_OVERRIDES = {
    "SPID_SERVER_URL": "server_url",
    "SPID_CLIENT_ID": "client_id",
    "SPID_CLIENT_SECRET": "client_secret",
    "SPID_REDIRECT_URI": "redirect_uri",
    "SPID_TOKEN": "token",
    "SPID_TIMEOUT": "timeout",
    "SPID_VERIFY_SSL": "verify_ssl",
}


@dataclass
class SpidConfig:
    """Connection and credential settings for the SPiD API."""

    server_url: str = ""
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    token: str = ""
    refresh_token: str = ""
    token_expires_at: int = 0
    timeout: int = 30
    verify_ssl: bool = True

    def is_configured(self) -> bool:
        """Check if the server URL and some means of authenticating are set."""
        return bool(self.server_url) and (bool(self.token) or self.has_client_credentials())

    def has_client_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def has_refresh_token(self) -> bool:
        return bool(self.refresh_token)

    def is_token_expired(self) -> bool:
        """Check if the access token is past its expiry (0 means unknown)."""
        if not self.token_expires_at:
            return False
        return time.time() >= self.token_expires_at - TOKEN_EXPIRY_LEEWAY

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpidConfig":
        """Build a config, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def apply_env(self, environ: Optional[Dict[str, str]] = None) -> "SpidConfig":
        """Override fields from SPID_* environment variables."""
        environ = os.environ if environ is None else environ

        for var, attr in ENV_OVERRIDES.items():
            value = environ.get(var)
            if value is None or value == "":
                continue
            if attr == "timeout":
                try:
                    self.timeout = int(value)
                except ValueError:
                    raise ConfigurationError(
                        f"Invalid {var}: expected an integer",
                        details=value,
                    )
            elif attr == "verify_ssl":
                self.verify_ssl = value.strip().lower() not in ("0", "false", "no", "off")
            else:
                setattr(self, attr, value)

        return self


class ConfigManager:
    """Loads, caches and persists the client configuration."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            env_dir = os.environ.get("SPID_CONFIG_DIR")
            config_dir = Path(env_dir) if env_dir else DEFAULT_CONFIG_DIR
        self.config_dir = Path(config_dir)
        self._config: Optional[SpidConfig] = None

    def get_config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def load(self) -> SpidConfig:
        """Read the config file and apply environment overrides."""
        path = self.get_config_path()
        data: Dict[str, Any] = {}

        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                raise ConfigurationError(f"Could not read config file {path}", details=str(e))
            logger.debug(f"Loaded configuration from {path}")

        self._config = SpidConfig.from_dict(data).apply_env()
        return self._config

    def get(self) -> SpidConfig:
        """Get the cached configuration, loading it on first use."""
        if self._config is None:
            return self.load()
        return self._config

    def save(self, config: Optional[SpidConfig] = None) -> None:
        """Write the configuration to disk."""
        config = config or self.get()
        path = self.get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)

        try:
            os.chmod(path, 0o600)
        except OSError as e:
            logger.warning(f"Could not restrict permissions on {path}: {e}")

        self._config = config
        logger.debug(f"Saved configuration to {path}")

    def update(self, **kwargs) -> SpidConfig:
        """Update fields and persist the result."""
        config = self.get()
        for key, value in kwargs.items():
            if not hasattr(config, key):
                raise ConfigurationError(f"Unknown configuration key: {key}")
            setattr(config, key, value)
        self.save(config)
        return config

    def clear(self) -> None:
        """Remove the config file and reset to defaults."""
        path = self.get_config_path()
        if path.exists():
            path.unlink()
        self._config = SpidConfig()


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get the global config manager, creating it if needed."""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config() -> SpidConfig:
    """Get the global configuration."""
    return get_config_manager().get()
