"""CLI configuration: config file loading and runtime overrides.

Extracted from depmeta.py to keep the entrypoint slim. Values land on
``Constants`` so library modules read one place. Precedence is CLI options,
then the config file, then the environment, then the defaults.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a config file exists but cannot be used."""


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML or JSON config file.

    Args:
        config_path: Path to YAML/YML/JSON config file; falls back to the
            DEPMETA_CONFIG environment variable when None.

    Returns:
        Config dict; empty when no file is configured or it does not exist.

    Raises:
        ConfigError: if the file cannot be read or parsed.
    """
    config_path = config_path or os.environ.get(Constants.ENV_CONFIG)
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the top level")
    return data


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        logger.warning("Ignoring config section '%s': expected a mapping", name)
        return {}
    return value


def apply_config(config: Dict[str, Any]) -> None:
    """Apply config file values to ``Constants``."""
    output = _section(config, "output")
    fmt = output.get("format")
    if fmt is not None:
        if str(fmt).lower() in Constants.SUPPORTED_FORMATS:
            Constants.OUTPUT_FORMAT = str(fmt).lower()
        else:
            logger.warning("Ignoring unsupported output format in config: %s", fmt)
    if output.get("indent") is not None:
        try:
            Constants.OUTPUT_INDENT = int(output["indent"])
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer output indent in config: %s", output["indent"])

    frameworks = _section(config, "frameworks")
    aliases = frameworks.get("aliases") or {}
    if isinstance(aliases, dict):
        merged = dict(Constants.FRAMEWORK_ALIASES)
        merged.update({str(alias).lower(): str(target).lower() for alias, target in aliases.items()})
        Constants.FRAMEWORK_ALIASES = merged
    else:
        logger.warning("Ignoring config frameworks.aliases: expected a mapping")


def resolve_log_settings(args, config: Dict[str, Any]):
    """Return (level, file) for logging, honoring CLI > config > environment."""
    logging_cfg = _section(config, "logging")
    level = (getattr(args, "LOG_LEVEL", None)
             or logging_cfg.get("level")
             or os.environ.get(Constants.ENV_LOG_LEVEL)
             or "INFO")
    log_file = getattr(args, "LOG_FILE", None) or logging_cfg.get("file")
    return str(level).upper(), log_file


def apply_cli_overrides(args) -> None:
    """Apply CLI options, which take precedence over the config file."""
    if getattr(args, "OUTPUT_FORMAT", None):
        Constants.OUTPUT_FORMAT = args.OUTPUT_FORMAT
