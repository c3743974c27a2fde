# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Site builder.

Writes the rendered site into the output directory:

    _site/
    ├── <slug>.html      — one page per post
    ├── index.html       — listing, newest first
    ├── pygments.css     — code highlighting styles
    └── manifest.json    — every written file -> SHA256

Every file is written atomically. The manifest carries no timestamps, so
building an unchanged tree twice produces byte-identical output and a
deploy step can diff manifests to find changed pages.
"""

import json
from pathlib import Path
from typing import NamedTuple

from glimpse import __version__
from glimpse.config.schema import SiteConfig
from glimpse.logging.logger import get_logger
from glimpse.post.models import Post
from glimpse.render.exceptions import RenderError
from glimpse.render.html import STYLESHEET_NAME, pygments_stylesheet, render_index, render_post
from glimpse.utils.filesystem import atomic_write
from glimpse.utils.hashing import compute_sha256_text
from glimpse.utils.paths import ensure_directory, validate_path_within_project

MANIFEST_NAME = "manifest.json"
INDEX_NAME = "index.html"


class BuildResult(NamedTuple):
    """Summary of a site build."""

    output_directory: str
    pages: list[str]
    manifest_path: str


def _check_unique_slugs(posts: list[Post]) -> None:
    seen: dict[str, Path] = {}
    for post in posts:
        if post.slug in seen:
            raise RenderError(
                f"Posts {seen[post.slug]} and {post.source_path} would both render to {post.slug}.html"
            )
        seen[post.slug] = post.source_path


def build_site(posts: list[Post], site: SiteConfig, site_root: Path, output_dir: Path) -> BuildResult:
    """
    Render every post plus the index, stylesheet and manifest.

    Raises:
        RenderError: If the output directory lies outside the site root or
            two posts share a slug.
    """
    logger = get_logger("glimpse.render")

    try:
        output_dir = validate_path_within_project(output_dir, site_root)
    except ValueError as err:
        raise RenderError(str(err)) from err
    _check_unique_slugs(posts)
    ensure_directory(output_dir)

    written: dict[str, str] = {}
    pages: list[str] = []

    def _write(name: str, content: str) -> None:
        atomic_write(output_dir / name, content)
        written[name] = compute_sha256_text(content)

    for post in posts:
        page_name = f"{post.slug}.html"
        _write(page_name, render_post(post, site))
        pages.append(page_name)
        logger.debug("Page rendered", extra={"source": str(post.source_path), "page": page_name})

    _write(INDEX_NAME, render_index(posts, site))
    _write(STYLESHEET_NAME, pygments_stylesheet())

    manifest = {
        "generator": f"glimpse {__version__}",
        "files": dict(sorted(written.items())),
    }
    manifest_path = output_dir / MANIFEST_NAME
    atomic_write(manifest_path, json.dumps(manifest, indent=2, sort_keys=True) + "\n")

    logger.info(
        "Site build complete",
        extra={"output_dir": str(output_dir), "pages": len(pages)},
    )

    return BuildResult(
        output_directory=str(output_dir),
        pages=pages,
        manifest_path=str(manifest_path),
    )
