"""YAML configuration file support for the CLI.

Values from the file fill in options left unset on the command line; the
command line always has the highest precedence.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Dict, Optional

import yaml

from args import positive_int
from constants import Constants

logger = logging.getLogger(__name__)

# config file key -> argparse dest
CONFIG_KEYS = {
    "gitlab-url": "GITLAB_URL",
    "gitlab-token": "GITLAB_TOKEN",
    "unsafe-ssl": "UNSAFE_SSL",
    "projectfilter": "PROJECT_FILTER",
    "project-filter": "PROJECT_FILTER",
    "max-pages": "MAX_PAGES",
    "ignore": "IGNORE",
    "include-if-has-file": "INCLUDE_IF_HAS_FILE",
    "project-type": "PROJECT_TYPE",
    "gitlab-namespace": "GITLAB_NAMESPACE",
    "template": "TEMPLATE",
    "homepage": "HOMEPAGE",
    "archive": "ARCHIVE",
    "no-token": "NO_TOKEN",
    "output": "OUTPUT",
    "error-on-empty": "ERROR_ON_EMPTY",
}

# options given as switches on the command line
BOOLEAN_DESTS = {"UNSAFE_SSL", "ARCHIVE", "NO_TOKEN", "ERROR_ON_EMPTY"}

# same conversions as the argparse `type=` of each option; str otherwise
CONVERTERS = {"MAX_PAGES": positive_int}

# applied last, when neither the command line nor the file set a value
DEFAULTS = {
    "UNSAFE_SSL": False,
    "MAX_PAGES": Constants.MAX_PAGES,
    "ARCHIVE": False,
    "NO_TOKEN": False,
    "OUTPUT": Constants.DEFAULT_OUTPUT_FILE,
    "ERROR_ON_EMPTY": False,
}


class ConfigFileError(Exception):
    """The configuration file is missing, not a mapping, or holds invalid values."""


def load_config_file(path: str) -> Dict[str, Any]:
    """Load a YAML configuration file.

    Raises:
        ConfigFileError: when the file cannot be read or parsed
    """
    if not os.path.isfile(path):
        raise ConfigFileError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigFileError(f"Failed to load config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(f"Config file {path} must contain a mapping")
    return data


def _convert(key: str, dest: str, value: Any) -> Any:
    """Check and convert a config value the way argparse would.

    Raises:
        ConfigFileError: when the value has the wrong type
    """
    if dest in BOOLEAN_DESTS:
        if not isinstance(value, bool):
            raise ConfigFileError(f"Config key {key} must be true or false, got {value!r}")
        return value
    if isinstance(value, (bool, dict, list)):
        raise ConfigFileError(f"Config key {key} must be a single value, got {value!r}")
    convert = CONVERTERS.get(dest, str)
    try:
        return convert(str(value))
    except (ValueError, argparse.ArgumentTypeError) as exc:
        raise ConfigFileError(f"Invalid value for config key {key}: {value!r} ({exc})") from exc


def apply_config(args, config: Optional[Dict[str, Any]]) -> None:
    """Fill unset ``args`` attributes from ``config``, then from DEFAULTS.

    Raises:
        ConfigFileError: when a config value has the wrong type
    """
    for key, value in (config or {}).items():
        dest = CONFIG_KEYS.get(str(key).lower().replace("_", "-"))
        if dest is None:
            logger.warning("Unknown config key ignored: %s", key)
            continue
        if value is None:
            continue
        if getattr(args, dest, None) is None:
            setattr(args, dest, _convert(str(key), dest, value))

    for dest, value in DEFAULTS.items():
        if getattr(args, dest, None) is None:
            setattr(args, dest, value)


def resolve_token(args) -> Optional[str]:
    """Token from the command line or config file, else the GITLAB_TOKEN env var."""
    token = getattr(args, "GITLAB_TOKEN", None)
    if token:
        return str(token)
    env_token = os.environ.get(Constants.ENV_GITLAB_TOKEN)
    if env_token and env_token.strip():
        return env_token.strip()
    return None
