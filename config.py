import logging
import os
from typing import Optional

import keyring
import yaml

from settings_schema import ConfigSchema, validate_config

APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def default_config_path() -> str:
    env_path = os.environ.get("HEVY_BRIDGE_CONFIG")
    if env_path:
        return env_path
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return os.path.join(base, "hevy-bridge", "config.yaml")


class YamlConfig:
    """Load and save settings to a YAML file with optional keyring storage."""

    SENSITIVE_KEYS = {"api_key"}

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or default_config_path()
        self.encrypt = os.environ.get("ENCRYPT_SETTINGS") == "1"
        self.service = "hevy-bridge"

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping")
        if self.encrypt:
            for key in list(data.keys()):
                if key in self.SENSITIVE_KEYS:
                    secret = keyring.get_password(self.service, key)
                    if secret is not None:
                        data[key] = secret
                    else:
                        data.pop(key, None)
        return data

    def save(self, data: dict) -> None:
        out = dict(data)
        if self.encrypt:
            for key in self.SENSITIVE_KEYS:
                if key in out:
                    keyring.set_password(self.service, key, str(out[key]))
                    out[key] = True
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)

    def settings(self) -> ConfigSchema:
        return validate_config(self.load())

    def store_api_key(self, key: str) -> None:
        data = self.load()
        data["api_key"] = key
        self.save(data)
        logger.debug("stored api key in %s", self.path)


MISSING_KEY_HELP = (
    "No API key found. Provide one via:\n"
    "  1. --api-key <KEY>\n"
    "  2. HEVY_API_KEY environment variable\n"
    "  3. `hevy-bridge config set-key <KEY>` to persist it"
)


def resolve_api_key(cli_key: Optional[str], config: YamlConfig) -> str:
    """Return the API key from the flag, the environment, or stored config."""
    if cli_key:
        return cli_key
    env_key = os.environ.get("HEVY_API_KEY")
    if env_key:
        return env_key
    stored = config.settings().api_key
    if stored:
        return stored
    raise ValueError(MISSING_KEY_HELP)
