# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Text normalization for post sources.

Posts get written on every kind of editor. Before anything scans a post we
settle the representation: Unix line endings, no byte-order mark, no NUL
bytes, exactly one trailing newline. Nothing else changes.
"""


def normalize_text(text: str) -> str:
    """
    Normalize a post source without changing how it renders.

    Trailing spaces on a line are kept: two of them are a markdown line break.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    text = text.replace("\r\n", "\n")
    text = text.replace("\r", "\n")
    text = text.replace("\x00", "")

    result = text.rstrip("\n")
    if result:
        result += "\n"

    return result
