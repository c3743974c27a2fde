# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
What glimpse is running on.

Rendered HTML depends on the installed Markdown and Pygments releases (a new
Pygments can change highlighting classes), so the versions of the libraries
that shape the output are reported alongside the interpreter.
"""

import platform
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import NamedTuple

MINIMUM_PYTHON = (3, 11)

# Distribution names, as installed.
OUTPUT_LIBRARIES = ("Markdown", "Pygments", "PyYAML", "pydantic", "httpx")


class SystemInfo(NamedTuple):
    python_version: str
    platform: str
    architecture: str


def check_minimum_python() -> None:
    """
    Raises:
        RuntimeError: On interpreters older than MINIMUM_PYTHON.
    """
    if sys.version_info[:2] < MINIMUM_PYTHON:
        required = ".".join(str(part) for part in MINIMUM_PYTHON)
        raise RuntimeError(
            f"glimpse requires Python >= {required}, running {platform.python_version()}"
        )


def get_system_info() -> SystemInfo:
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
    )


def get_library_versions() -> dict[str, str]:
    """Installed version of each library in OUTPUT_LIBRARIES, "missing" if absent."""
    versions: dict[str, str] = {}
    for name in OUTPUT_LIBRARIES:
        try:
            versions[name] = version(name)
        except PackageNotFoundError:
            versions[name] = "missing"
    return versions
