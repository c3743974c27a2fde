# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Image reference extraction.

Three spellings show up in posts:
  - inline markdown: ![alt](url "optional title")
  - reference markdown: ![alt][label] with a `[label]: url` definition
  - raw HTML: <img src="url" alt="...">

Code is masked out first, so an `<img>` inside an HTML snippet in a code
block is not mistaken for an image in the post.
"""

import re
from typing import NamedTuple

from glimpse.content.fences import mask_code

_INLINE_IMAGE = re.compile(
    r"!\[(?P<alt>[^\]]*)\]\(\s*<?(?P<url>[^)\s>]+)>?(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
)
_REFERENCE_IMAGE = re.compile(r"!\[(?P<alt>[^\]]*)\]\[(?P<label>[^\]]*)\]")
_LINK_DEFINITION = re.compile(r"^ {0,3}\[(?P<label>[^\]]+)\]:\s*<?(?P<url>[^\s>]+)>?")
_HTML_IMAGE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_HTML_SRC = re.compile(r"\bsrc\s*=\s*([\"'])(.*?)\1", re.IGNORECASE)
_HTML_ALT = re.compile(r"\balt\s*=\s*([\"'])(.*?)\1", re.IGNORECASE)


class ImageRef(NamedTuple):
    """One image the rendered post will try to load."""

    url: str
    alt: str
    line: int


def _link_definitions(lines: list[str]) -> dict[str, str]:
    definitions: dict[str, str] = {}
    for line in lines:
        match = _LINK_DEFINITION.match(line)
        if match is not None:
            # Labels are case-insensitive; the first definition wins.
            definitions.setdefault(match.group("label").strip().lower(), match.group("url"))
    return definitions


def extract_images(body: str, line_offset: int = 0) -> list[ImageRef]:
    """
    Find every image reference in a markdown body, in document order.

    A reference-style image whose label has no definition is reported with an
    empty URL so the link check can flag it.
    """
    lines = mask_code(body).split("\n")
    definitions = _link_definitions(lines)
    images: list[ImageRef] = []

    for index, line in enumerate(lines):
        source_line = index + 1 + line_offset
        found: list[tuple[int, ImageRef]] = []

        for match in _INLINE_IMAGE.finditer(line):
            found.append((match.start(), ImageRef(match.group("url"), match.group("alt"), source_line)))

        for match in _REFERENCE_IMAGE.finditer(line):
            label = match.group("label").strip() or match.group("alt").strip()
            url = definitions.get(label.lower(), "")
            found.append((match.start(), ImageRef(url, match.group("alt"), source_line)))

        for match in _HTML_IMAGE.finditer(line):
            src_match = _HTML_SRC.search(match.group(0))
            if src_match is None:
                continue
            alt_match = _HTML_ALT.search(match.group(0))
            alt = alt_match.group(2) if alt_match else ""
            found.append((match.start(), ImageRef(src_match.group(2), alt, source_line)))

        images.extend(ref for _, ref in sorted(found, key=lambda item: item[0]))

    return images
