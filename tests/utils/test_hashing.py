# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Manifest hashes must describe the bytes that end up on disk."""

from pathlib import Path

from glimpse.utils.filesystem import atomic_write
from glimpse.utils.hashing import compute_sha256_bytes, compute_sha256_text

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


class TestSha256:
    def test_empty_input(self) -> None:
        assert compute_sha256_bytes(b"") == EMPTY_SHA256
        assert compute_sha256_text("") == EMPTY_SHA256

    def test_one_character_changes_the_digest(self) -> None:
        assert compute_sha256_text("<p>a</p>") != compute_sha256_text("<p>b</p>")

    def test_digest_is_lowercase_hex(self) -> None:
        digest = compute_sha256_text("glimpse")
        assert len(digest) == 64
        assert digest == digest.lower()

    def test_text_digest_matches_written_page(self, tmp_path: Path) -> None:
        page = "<h1>Glimpses</h1>\r\nθ\n"
        target = tmp_path / "page.html"
        atomic_write(target, page)
        assert compute_sha256_text(page) == compute_sha256_bytes(target.read_bytes())
