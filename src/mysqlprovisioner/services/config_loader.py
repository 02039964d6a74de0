"""Configuration loaders for mysqlprovisioner."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

from mysqlprovisioner.errors import ProvisionerError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    SUPPORTED_KEYS = {
        "environment",
        "container",
        "env_file",
        "output_dir",
        "verbose",
        "log_file",
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise ProvisionerError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise ProvisionerError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ProvisionerError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise ProvisionerError(f"Unknown configuration keys: {unknown_list}")

        return parsed


class EnvironmentSettingsLoader:
    """Builds the key/value lookup used for environment-prefixed MySQL settings.

    Values from the dotenv file take precedence over the process environment.
    """

    def __init__(self, logger, environ: Optional[Mapping[str, str]] = None):
        self.logger = logger
        self.environ = environ if environ is not None else os.environ

    def load(self, env_file: Optional[str]) -> Dict[str, str]:
        settings = dict(self.environ)
        if not env_file:
            return settings

        path = Path(env_file)
        if not path.is_file():
            self.logger.debug("No dotenv file found at %s", env_file)
            return settings

        try:
            file_values = dotenv_values(path)
        except OSError as exc:
            raise ProvisionerError(f"Could not read env file '{env_file}': {exc}") from exc

        for key, value in file_values.items():
            if value is not None:
                settings[key] = value

        self.logger.debug("Loaded %s setting(s) from %s", len(file_values), env_file)
        return settings
