"""
Configuration loader with YAML and environment variable support.

Priority (highest to lowest):
1. Environment variables: GKE_MCP_GCP__DEFAULT_LOCATION=us-central1
2. User config: --config-dir path / ~/.gke-mcp/config.yaml
3. Built-in defaults: gke_mcp/config/defaults/settings.yaml
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from gke_mcp.config.models import GKEMCPServerConfig
from gke_mcp.utils import get_logger

logger = get_logger(__name__)


# Default config locations
DEFAULT_CONFIG_DIR = Path.home() / ".gke-mcp"
PACKAGE_DEFAULTS_DIR = Path(__file__).parent / "defaults"

# Environment variable prefix
ENV_PREFIX = "GKE_MCP_"
ENV_DELIMITER = "__"


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from 'override' take precedence over 'base'.
    Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            content = yaml.safe_load(f)
            return content if content else {}
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse {path}: {e}")
        return {}


def _get_env_overrides() -> dict[str, Any]:
    """
    Extract configuration overrides from environment variables.

    Environment variables are expected in the format:
    GKE_MCP_SECTION__KEY=value

    GKE_MCP_SERVER__PORT=9000 -> {"server": {"port": 9000}}
    GKE_MCP_GCP__DEFAULT_PROJECT_ID=my-proj -> {"gcp": {"default_project_id": "my-proj"}}
    """
    overrides: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        key_path = key[len(ENV_PREFIX) :].lower().split(ENV_DELIMITER)
        if not all(key_path):
            logger.warning(f"Ignoring malformed configuration variable {key}")
            continue

        current = overrides
        for part in key_path[:-1]:
            if part not in current or not isinstance(current[part], dict):
                current[part] = {}
            current = current[part]

        current[key_path[-1]] = _parse_env_value(value)

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate Python type."""
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    return value


def load_config(config_dir: Optional[str | Path] = None) -> GKEMCPServerConfig:
    """
    Load configuration from multiple sources.

    Args:
        config_dir: Optional path to configuration directory.
                   If not provided, uses ~/.gke-mcp/

    Returns:
        GKEMCPServerConfig: Validated configuration object

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    config_data = _load_yaml_file(PACKAGE_DEFAULTS_DIR / "settings.yaml")

    user_config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
    user_config = _load_yaml_file(user_config_dir / "config.yaml")
    config_data = _deep_merge(config_data, user_config)

    env_overrides = _get_env_overrides()
    config_data = _deep_merge(config_data, env_overrides)

    return GKEMCPServerConfig.model_validate(config_data)
