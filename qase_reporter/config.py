"""Configuration for the reporter.

Loads from an optional YAML file, then applies the official Qase environment
variables, then explicit overrides (CLI flags).

Priority: overrides > env vars > YAML file > defaults
"""

import os
from pathlib import Path
from typing import Any, Optional

import pydantic
import yaml
from pydantic import BaseModel, Field

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "qase-reporter.yml"

# Same names the official Qase reporters read.
ENV_VARS = {
    "api_token": "QASE_TESTOPS_API_TOKEN",
    "project": "QASE_TESTOPS_PROJECT",
    "run_title": "QASE_TESTOPS_RUN_TITLE",
    "host": "QASE_TESTOPS_API_HOST",
    "timeout": "QASE_TESTOPS_API_TIMEOUT",
}


class ReporterConfig(BaseModel):
    api_token: str = ""
    project: str = ""  # project code, e.g. "DEMO"
    run_title: str = ""
    host: str = "qase.io"
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    filename: str = ""

    @property
    def base_url(self) -> str:
        return f"https://api.{self.host}/v1"

    def validate_required(self) -> None:
        """Raise ConfigError unless the API token and project are set."""
        missing = [
            f"{key} ({ENV_VARS[key]})"
            for key in ("api_token", "project")
            if not getattr(self, key)
        ]
        if missing:
            raise ConfigError(f"missing required configuration: {', '.join(missing)}")


def _apply_env_overrides(config_dict: dict) -> dict:
    """Copy non-empty Qase environment variables into the config dict."""
    for key, env_var in ENV_VARS.items():
        value = os.getenv(env_var)
        if value:
            config_dict[key] = value
    return config_dict


def _read_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    return data


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> ReporterConfig:
    """Build the reporter configuration.

    A config file named explicitly (argument or QASE_CONFIG_PATH) must
    exist; the default ``qase-reporter.yml`` is optional.
    """
    config_dict: dict[str, Any] = {}

    # 1. YAML file
    explicit = config_path is not None or "QASE_CONFIG_PATH" in os.environ
    if config_path is None:
        config_path = os.getenv("QASE_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    path = Path(config_path)
    if path.exists():
        config_dict = _read_yaml(path)
    elif explicit:
        raise ConfigError(f"config file not found: {path}")

    # 2. Environment
    config_dict = _apply_env_overrides(config_dict)

    # 3. Explicit overrides, unset flags are skipped
    for key, value in (overrides or {}).items():
        if value is not None:
            config_dict[key] = value

    try:
        return ReporterConfig(**config_dict)
    except pydantic.ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
