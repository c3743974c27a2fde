# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path helpers for glimpse.

Image references and the output directory are resolved against the site
root and may not leave it.
"""

from pathlib import Path


def ensure_directory(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def validate_path_within_project(target: Path, project_root: Path) -> Path:
    """
    Resolve `target` and confirm it lies under `project_root`.

    Symlinks and `..` segments are resolved first, so `/../secret.png` from
    a post is rejected like any other escape.

    Raises:
        ValueError: If the resolved path is outside the root.
    """
    root = project_root.resolve()
    resolved = target.resolve()
    if resolved != root and root not in resolved.parents:
        raise ValueError(f"{target} resolves outside the site root {root}")
    return resolved
