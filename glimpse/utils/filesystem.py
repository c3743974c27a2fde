# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
File reading and writing for glimpse.

Rendered pages and reports are staged in a temporary file next to their
target and renamed into place, so a server reading _site/ mid-build sees
either the previous page or the new one. Text is written without newline
translation: the bytes on disk are exactly the string that was hashed into
the manifest.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

TEMP_PREFIX = ".glimpse_tmp_"


@contextmanager
def _staged(target_path: Path) -> Iterator[Path]:
    """Yield a scratch path beside the target; it replaces the target if the block succeeds."""
    handle, name = tempfile.mkstemp(dir=target_path.parent, prefix=TEMP_PREFIX, suffix=".tmp")
    os.close(handle)
    scratch = Path(name)
    try:
        yield scratch
        scratch.replace(target_path)
    finally:
        scratch.unlink(missing_ok=True)


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Replace `target_path` with `content` in one rename, creating parent
    directories as needed.

    Raises:
        OSError: If the staging file can't be written or renamed.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)
    with _staged(target_path) as scratch:
        with scratch.open("w", encoding=encoding, newline="") as stream:
            stream.write(content)


def safe_read(file_path: Path, encoding: str = "utf-8") -> str:
    """
    Read a text file, refusing directories with a clear error instead of the
    platform-specific one.

    Raises:
        FileNotFoundError, IsADirectoryError, UnicodeDecodeError, OSError
    """
    if file_path.is_dir():
        raise IsADirectoryError(f"Expected a file, got a directory: {file_path}")
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    with file_path.open(encoding=encoding, newline="") as stream:
        return stream.read()
