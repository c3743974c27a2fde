# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The post record.

PostMetadata is the front matter after validation. Every field is optional
at this level: whether a post is *publishable* without, say, an excerpt is a
question for the checks, and they want to report every missing field at
once instead of stopping at the first.

Unknown front matter keys are kept. Static generators accept arbitrary keys
and themes read them, so rejecting them here would be wrong.
"""

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_JEKYLL_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


class PostMetadata(BaseModel):
    """Validated front matter of a single post."""

    model_config = ConfigDict(frozen=True, extra="allow")

    layout: Optional[str] = Field(default=None, description="Page template name")
    title: Optional[str] = Field(default=None, description="Post title")
    comments: bool = Field(default=False, description="Whether the comments section is shown")
    author: Optional[str] = Field(default=None, description="Author identifier")
    excerpt: Optional[str] = Field(default=None, description="Summary shown in listings")
    picture: Optional[str] = Field(default=None, description="Header or preview image URL")
    date: Optional[Union[dt.datetime, dt.date]] = Field(
        default=None, description="Publication date, overrides the filename date"
    )
    tags: list[str] = Field(default_factory=list)

    @field_validator("layout", "title", "author", "excerpt", "picture", mode="before")
    @classmethod
    def _scalar_text(cls, value: Any) -> Any:
        # YAML reads `title: 1984` as an int and `title: 2015-09-21` as a date.
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, dt.date):
            return value.isoformat()
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _jekyll_date(cls, value: Any) -> Any:
        # Jekyll writes `2015-09-21 10:00:00 +0200`; YAML leaves that a string.
        if isinstance(value, str):
            text = value.strip()
            for layout in _JEKYLL_DATE_FORMATS:
                try:
                    return dt.datetime.strptime(text, layout)
                except ValueError:
                    continue
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        # "rnn attention" is as common in front matter as [rnn, attention]
        if isinstance(value, str):
            return value.split()
        if value is None:
            return []
        return value


@dataclass(frozen=True)
class Post:
    """
    A post loaded from disk.

    `front_matter` is the raw mapping as parsed from YAML, kept alongside the
    validated metadata so the checks can tell "missing" apart from "present
    but empty". `body_line_offset` is the number of source lines before the
    first body line.
    """

    source_path: Path
    slug: str
    date: Optional[dt.date]
    metadata: PostMetadata
    front_matter: dict[str, Any]
    body: str
    body_line_offset: int

    @property
    def title(self) -> str:
        return self.metadata.title or self.slug
