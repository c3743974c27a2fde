# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Front matter splitting and parsing.

A post starts with a YAML block fenced by `---` lines:

    ---
    layout: post
    title: Recurrent Model of Visual Attention
    ---
    Body text starts here.

The closing fence may also be `...`, the YAML end-of-document marker.
"""

from typing import Any

import yaml

from glimpse.post.exceptions import PostFormatError

_OPEN_FENCE = "---"
_CLOSE_FENCES = ("---", "...")


def split_front_matter(text: str) -> tuple[str, str, int]:
    """
    Split a normalized post source into (front matter, body, body line offset).

    The offset is how many source lines precede the first body line, so body
    line N is source line N + offset.

    Raises:
        PostFormatError: If the document doesn't open with `---` or the block
            is never closed.
    """
    lines = text.split("\n")
    if not lines or lines[0].rstrip() != _OPEN_FENCE:
        raise PostFormatError("Post does not start with a '---' front matter block")

    for index in range(1, len(lines)):
        if lines[index].rstrip() in _CLOSE_FENCES:
            front = "\n".join(lines[1:index])
            body = "\n".join(lines[index + 1 :])
            return front, body, index + 1

    raise PostFormatError("Front matter block opened with '---' is never closed")


def parse_front_matter(front_text: str) -> dict[str, Any]:
    """
    Parse the YAML inside the front matter block.

    An empty block is an empty mapping. Anything that isn't a mapping at the
    top level (a bare list, a scalar) is a format error.

    Raises:
        PostFormatError: Invalid YAML or a non-mapping document.
    """
    try:
        parsed = yaml.safe_load(front_text)
    except yaml.YAMLError as err:
        raise PostFormatError(f"Invalid YAML in front matter: {err}") from err

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise PostFormatError(
            f"Front matter must be a YAML mapping, got {type(parsed).__name__}"
        )

    return {str(key): value for key, value in parsed.items()}
