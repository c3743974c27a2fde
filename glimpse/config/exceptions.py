# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised while turning glimpse.yaml into a GlimpseConfig.

Each one remembers which file it came from, so the CLI can log the path and
the reason as separate fields.
"""

from pathlib import Path


class ConfigError(Exception):
    """Base for every config failure. `str()` gives "<path>: <reason>"."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigLoadError(ConfigError):
    """The file is missing, unreadable, not YAML, or not a mapping."""


class ConfigValidationError(ConfigError):
    """The YAML is fine but the schema rejects it: a missing or unknown key, a bad value."""
