# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for glimpse.

The one-time setup every command goes through before touching a post:
  1. Validate the interpreter
  2. Set the level and optional log file every glimpse logger uses
  3. Log what we're running on

The log file path in the config is relative to the site root, so bootstrap
needs to know where that root is.
"""

from pathlib import Path
from typing import Optional

from glimpse import __version__
from glimpse.config.schema import GlobalConfig
from glimpse.logging.logger import configure_defaults, get_logger
from glimpse.runtime.environment import check_minimum_python, get_system_info


def bootstrap(config: GlobalConfig, site_root: Path, log_level: Optional[str] = None) -> None:
    """
    Run the bootstrap sequence.

    Args:
        config: The validated global configuration.
        site_root: Directory that relative config paths are resolved against.
        log_level: Command-line override for config.log_level.
    """
    check_minimum_python()

    log_file = None
    if config.log_file is not None:
        log_file = site_root / config.log_file

    configure_defaults(log_level or config.log_level, log_file)
    logger = get_logger("glimpse.runtime")

    system_info = get_system_info()
    logger.info(
        "glimpse bootstrap complete",
        extra={
            "version": __version__,
            "project": config.project_name,
            "site_root": str(site_root),
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )
