"""
Template Editor Configuration

Loads backend connection settings from .env, an optional config.yaml and
the environment, in that order, with command-line overrides applied last.

Usage:
    from template_editor.editor.config import load_config

    config = load_config(api_url="http://localhost:5000")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values, find_dotenv

from template_editor.editor.exceptions import ConfigError
from template_editor.editor.logging_config import get_logger
from template_editor.editor.validators import validate_api_url

logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path.home() / ".template-editor" / "config.yaml"
DEFAULT_TIMEOUT = 10.0

# Delay before leaving the screen after a successful save
REDIRECT_DELAY_SECONDS = 2.0

# config.yaml key -> environment variable
ENV_KEYS = {
    "api_url": "TEMPLATE_EDITOR_API_URL",
    "api_token": "TEMPLATE_EDITOR_TOKEN",
    "timeout": "TEMPLATE_EDITOR_TIMEOUT",
}


@dataclass
class EditorConfig:
    """Connection settings for the interview backend."""
    api_url: str
    api_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    redirect_delay: float = REDIRECT_DELAY_SECONDS
    config_path: Optional[Path] = None

    def to_display_dict(self) -> Dict[str, str]:
        """Values for the settings summary table."""
        return {
            "api_url": self.api_url,
            "api_token": self.api_token or "",
            "timeout": f"{self.timeout:g}s",
            "config_file": str(self.config_path) if self.config_path else "",
        }


def _read_dotenv(env_file: Optional[Path]) -> Dict[str, Optional[str]]:
    """Values of the .env file without touching os.environ."""
    path = str(env_file) if env_file else find_dotenv(usecwd=True)
    if not path:
        return {}
    return dict(dotenv_values(path))


def _resolve_config_path(path: Optional[Path], dotenv: Dict[str, Optional[str]]) -> Path:
    if path:
        return Path(path)
    env_path = os.getenv("TEMPLATE_EDITOR_CONFIG") or dotenv.get("TEMPLATE_EDITOR_CONFIG")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    """Read config.yaml. A missing file is an empty config."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML in {config_path}",
            remediation=f"Fix the syntax of {config_path} or remove it",
            details=str(e)
        ) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}", details=str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a mapping at the top of {config_path}",
            remediation="Use 'key: value' lines, e.g. 'api_url: http://localhost:5000'"
        )

    logger.debug("Loaded config from %s", config_path)
    return data


def load_config(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None,
    **overrides: Any
) -> EditorConfig:
    """Build the editor configuration.

    Args:
        config_path: Path to config.yaml (default: TEMPLATE_EDITOR_CONFIG or
            ~/.template-editor/config.yaml)
        env_file: Optional .env file; the nearest .env is used when omitted
        **overrides: api_url, api_token, timeout values that win over everything
            else. None values are ignored.

    Returns:
        EditorConfig

    Raises:
        ConfigError: If api_url is missing or a value is invalid
    """
    # later layers win: .env, config.yaml, process environment, overrides
    dotenv = _read_dotenv(env_file)
    values = {key: dotenv[var] for key, var in ENV_KEYS.items() if dotenv.get(var)}

    path = _resolve_config_path(config_path, dotenv)
    values.update(_read_yaml(path))

    for key, env_var in ENV_KEYS.items():
        env_value = os.getenv(env_var)
        if env_value:
            values[key] = env_value

    for key, value in overrides.items():
        if value is not None:
            values[key] = value

    api_url = str(values.get("api_url") or "").strip().rstrip("/")
    if not api_url:
        raise ConfigError("Backend API URL is not configured", config_key="api_url")

    is_valid, message = validate_api_url(api_url)
    if not is_valid:
        raise ConfigError(message, config_key="api_url", details=f"Got: {api_url}")

    try:
        timeout = float(values.get("timeout") or DEFAULT_TIMEOUT)
    except (TypeError, ValueError) as e:
        raise ConfigError(
            "Request timeout must be a number of seconds",
            config_key="timeout",
            details=str(e)
        ) from e

    return EditorConfig(
        api_url=api_url,
        api_token=values.get("api_token") or None,
        timeout=timeout,
        config_path=path if path.exists() else None,
    )
