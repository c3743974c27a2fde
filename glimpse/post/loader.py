# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Post loader — reads a markdown file from disk and produces a Post.

The loading pipeline mirrors the config loader:
  1. Read the file as UTF-8
  2. Normalize line endings and stray bytes
  3. Split off and parse the YAML front matter
  4. Validate the mapping into PostMetadata
  5. Derive slug and date from the Jekyll-style filename

Posts are named `YYYY-MM-DD-slug.md`. A `date` key in the front matter wins
over the filename date. A file without a date prefix is still a post; it just
has no date unless the front matter gives one.
"""

import datetime as dt
import re
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from glimpse.content.normalizer import normalize_text
from glimpse.post.exceptions import PostFormatError
from glimpse.post.frontmatter import parse_front_matter, split_front_matter
from glimpse.post.models import Post, PostMetadata
from glimpse.utils.filesystem import safe_read

POST_EXTENSIONS = (".md", ".markdown")

_DATED_NAME = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")


def parse_post_filename(path: Path) -> tuple[Optional[dt.date], str]:
    """
    Split a post filename into (date, slug).

    Raises:
        PostFormatError: If the name has a date prefix that isn't a real date.
    """
    match = _DATED_NAME.match(path.stem)
    if match is None:
        return None, path.stem

    year, month, day, slug = match.groups()
    try:
        post_date = dt.date(int(year), int(month), int(day))
    except ValueError as err:
        raise PostFormatError(f"Invalid date in post filename {path.name}: {err}") from err

    return post_date, slug


def _resolve_date(metadata: PostMetadata, filename_date: Optional[dt.date]) -> Optional[dt.date]:
    if metadata.date is None:
        return filename_date
    if isinstance(metadata.date, dt.datetime):
        return metadata.date.date()
    return metadata.date


def load_post(path: Path) -> Post:
    """
    Load and validate a single post.

    Raises:
        PostFormatError: For any read, front matter, or metadata problem.
            The message always names the file.
    """
    try:
        raw_text = safe_read(path)
    except (OSError, UnicodeDecodeError) as err:
        raise PostFormatError(f"Cannot read post {path}: {err}") from err

    text = normalize_text(raw_text)

    try:
        front_text, body, body_line_offset = split_front_matter(text)
        front_matter = parse_front_matter(front_text)
    except PostFormatError as err:
        raise PostFormatError(f"{path}: {err}") from err

    try:
        metadata = PostMetadata.model_validate(front_matter)
    except ValidationError as err:
        raise PostFormatError(f"{path}: front matter has invalid values:\n{err}") from err

    filename_date, slug = parse_post_filename(path)

    return Post(
        source_path=path,
        slug=slug,
        date=_resolve_date(metadata, filename_date),
        metadata=metadata,
        front_matter=front_matter,
        body=body,
        body_line_offset=body_line_offset,
    )


def discover_posts(directory: Path) -> list[Path]:
    """
    List the post files in a directory, sorted by name.

    Jekyll names sort chronologically, so sorted order is publication order.
    Hidden files (editor swap files, `.draft.md`) are skipped. A missing
    directory simply has no posts.
    """
    if not directory.is_dir():
        return []

    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file()
        and path.suffix.lower() in POST_EXTENSIONS
        and not path.name.startswith(".")
    )
