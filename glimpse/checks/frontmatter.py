# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Front matter checks.

The static generator needs a handful of fields to build the page: the
layout to render with, the title, who wrote it, the excerpt shown in
listings and on social cards, and the header picture. A field that is
present but blank is as bad as a missing one.
"""

from urllib.parse import urlparse

from glimpse.checks.models import ERROR, WARNING, Finding
from glimpse.config.schema import GlimpseConfig
from glimpse.post.models import Post

CHECK_NAME = "frontmatter"
# Front matter findings point at the opening fence.
_LINE = 1


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def is_valid_picture_reference(value: str) -> bool:
    """An absolute http(s) URL, or a path from the site root."""
    if value.startswith("/") and not value.startswith("//"):
        return True
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def check_front_matter(post: Post, config: GlimpseConfig) -> list[Finding]:
    path = str(post.source_path)
    findings: list[Finding] = []

    for field_name in config.check.required_fields:
        if field_name not in post.front_matter:
            findings.append(
                Finding(CHECK_NAME, ERROR, f"Required front matter field '{field_name}' is missing", path, _LINE)
            )
        elif _is_blank(post.front_matter[field_name]):
            findings.append(
                Finding(CHECK_NAME, ERROR, f"Required front matter field '{field_name}' is empty", path, _LINE)
            )

    picture = post.metadata.picture
    if picture and picture.strip() and not is_valid_picture_reference(picture.strip()):
        findings.append(
            Finding(
                CHECK_NAME,
                ERROR,
                f"picture '{picture}' is neither an http(s) URL nor a site-relative path",
                path,
                _LINE,
            )
        )

    layout = post.metadata.layout
    allowed_layouts = config.check.allowed_layouts
    if layout and allowed_layouts and layout not in allowed_layouts:
        findings.append(
            Finding(
                CHECK_NAME,
                ERROR,
                f"layout '{layout}' is not one of: {', '.join(allowed_layouts)}",
                path,
                _LINE,
            )
        )

    author = post.metadata.author
    authors = config.site.authors
    if author and authors and author not in authors:
        findings.append(
            Finding(CHECK_NAME, WARNING, f"author '{author}' has no entry in site.authors", path, _LINE)
        )

    return findings
