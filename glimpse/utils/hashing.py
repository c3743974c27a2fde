# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Hashing utilities for glimpse.

The render manifest records a SHA256 for every page it writes, so a deploy
step can tell which pages actually changed between builds.
"""

import hashlib

HASH_ALGORITHM = "sha256"


def compute_sha256_bytes(data: bytes) -> str:
    """Lowercase hex SHA256 digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def compute_sha256_text(text: str, encoding: str = "utf-8") -> str:
    """SHA256 of a string, as it would be written to disk."""
    return compute_sha256_bytes(text.encode(encoding))
