# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader — glimpse.yaml in, frozen GlimpseConfig out.

  1. Find the file (explicit path, or glimpse.yaml at the site root)
  2. Parse it with yaml.safe_load into a plain mapping
  3. Validate the mapping against the pydantic schema

A bad config stops the command before any post is read. Validation errors
are flattened to one "section.field: problem" entry per bad field, which
reads far better in a JSON log line than pydantic's multi-line report.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from glimpse.config.exceptions import ConfigLoadError, ConfigValidationError
from glimpse.config.schema import GlimpseConfig

DEFAULT_CONFIG_NAME = "glimpse.yaml"


def find_config(directory: Path) -> Optional[Path]:
    """The site's glimpse.yaml if the directory has one."""
    candidate = directory / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def _read_mapping(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigLoadError(config_path, "config file not found")
    if not config_path.is_file():
        raise ConfigLoadError(config_path, "config path is not a file")

    try:
        document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigLoadError(config_path, f"cannot read config file: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(config_path, f"Invalid YAML: {err}") from err

    if document is None:
        raise ConfigLoadError(config_path, "config file is empty")
    if not isinstance(document, dict):
        raise ConfigLoadError(
            config_path, f"config must be a YAML mapping, got {type(document).__name__}"
        )
    return document


def _describe(err: ValidationError) -> str:
    problems = []
    for error in err.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def load_config(config_path: Path) -> GlimpseConfig:
    """
    Load and validate a config file.

    Raises:
        ConfigLoadError: The file can't be read or isn't a YAML mapping.
        ConfigValidationError: The mapping doesn't fit the schema.
    """
    document = _read_mapping(config_path)
    try:
        return GlimpseConfig.model_validate(document)
    except ValidationError as err:
        raise ConfigValidationError(config_path, _describe(err)) from err
