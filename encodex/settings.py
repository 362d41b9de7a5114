#!/usr/bin/env python3
"""
encodex - Settings
Load codec defaults from a YAML, TOML or JSON config file.

Example encodex.yaml:

    encodex:
      variant: Base32
      padding: optional
      letter_case: insensitive
      line_wrap: 76
      ignore_line_breaks: true

The top-level "encodex" key is optional.
"""

import json
import logging
import os
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import toml
import yaml

from .exceptions import ConfigurationError
from .models import CodecConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ENCODEX_CONFIG"
SECTION = "encodex"

FORMATS = {
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.toml': 'toml',
    '.json': 'json',
}

CONFIG_KEYS = frozenset(f.name for f in fields(CodecConfig))


def detect_format(path: Union[str, Path]) -> str:
    """Map a file extension to a config format."""
    suffix = Path(path).suffix.lower()
    if suffix not in FORMATS:
        raise ConfigurationError(
            f"unsupported config file type '{suffix or path}', use .yaml, .toml or .json",
            param_name="config"
        )
    return FORMATS[suffix]


def parse_config(content: str, format: str) -> Dict[str, Any]:
    """Parse config file content into a mapping."""
    try:
        if format == 'yaml':
            data = yaml.safe_load(content)
        elif format == 'toml':
            data = toml.loads(content)
        elif format == 'json':
            data = json.loads(content)
        else:
            raise ConfigurationError(f"unsupported config format: {format}", param_name="config")
    except (yaml.YAMLError, toml.TomlDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"cannot parse {format} config: {e}", param_name="config") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"config must be a mapping, got {type(data).__name__}",
            param_name="config"
        )
    section = data.get(SECTION, data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{SECTION}' section must be a mapping", param_name="config")
    return section


def config_from_mapping(data: Mapping[str, Any], base: Optional[CodecConfig] = None) -> CodecConfig:
    """Apply a mapping of option names to values on top of `base`.

    Raises:
        ConfigurationError: on unknown keys or invalid values
    """
    unknown = sorted(set(data) - CONFIG_KEYS)
    if unknown:
        raise ConfigurationError(
            f"unknown config keys: {', '.join(unknown)}",
            param_name=unknown[0]
        )
    return replace(base or CodecConfig(), **dict(data))


def load_settings(path: Optional[Union[str, Path]] = None, base: Optional[CodecConfig] = None) -> CodecConfig:
    """Build a CodecConfig from a config file.

    Args:
        path: config file; falls back to $ENCODEX_CONFIG, then to defaults
        base: configuration the file values are applied to

    Returns:
        the resulting configuration
    """
    base = base or CodecConfig()
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
        if not path:
            return base

    format = detect_format(path)
    try:
        content = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"cannot read config file {path}: {e}", param_name="config") from e

    config = config_from_mapping(parse_config(content, format), base)
    logger.debug(f"loaded settings from {path}: {config}")
    return config
