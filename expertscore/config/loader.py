"""Configuration loading with YAML parsing and environment variable expansion."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from expertscore.config.schema import ExpertScoreConfig
from expertscore.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path("expertscore.yaml"),
    Path("~/.expertscore/config.yaml"),
]

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand ${ENV_VAR} references in config values."""
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def _find_config_file(explicit_path: str | Path | None = None) -> Path | None:
    """Find the config file to load."""
    if explicit_path is not None:
        path = Path(explicit_path).expanduser()
        if path.exists():
            return path
        logger.warning("Config file not found: %s", path)
        return None

    for candidate in DEFAULT_CONFIG_PATHS:
        resolved = candidate.expanduser()
        if resolved.exists():
            logger.info("Using config: %s", resolved)
            return resolved

    return None


def _read_config_file(path: Path) -> dict[str, Any]:
    """Parse one YAML config file into a (possibly empty) mapping."""
    logger.info("Loading config from %s", path)
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Config {path} must hold a mapping, got {type(raw).__name__}"
        )
    return raw


def load_config(path: str | Path | None = None) -> ExpertScoreConfig:
    """Load and validate configuration.

    Resolution order:
    1. Explicit path argument
    2. expertscore.yaml in current directory
    3. ~/.expertscore/config.yaml
    4. All defaults (no file needed)

    Environment variables are expanded in string values: ${VAR_NAME}

    Raises ConfigError if the file cannot be read, is not YAML, or does not
    hold a mapping; pydantic ValidationError if a value is out of range.
    """
    config_path = _find_config_file(path)

    if config_path is not None:
        raw = _expand_env_vars(_read_config_file(config_path))
    else:
        logger.info("No config file found, using defaults")
        raw = {}

    config = ExpertScoreConfig.model_validate(raw)
    logger.debug("Config loaded: version=%d", config.version)
    return config
