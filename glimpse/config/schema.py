# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for glimpse.

Each section of glimpse.yaml gets its own frozen pydantic model. Frozen means
once you create it, you cannot mutate it. A command that needs different
settings loads a different file.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Only `global` is mandatory in the YAML. The `site` and `check` sections fall
back to their defaults when absent, so a bare repository with a `_posts/`
directory can be checked without writing any config at all.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glimpse.logging.logger import LOG_LEVELS


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings that apply to every command: project identity
    and observability.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="glimpse", description="Human-readable project identifier"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output, relative to the site root",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return upper


class AuthorConfig(BaseModel):
    """How an author identifier from front matter is shown in the byline."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    name: str = Field(description="Display name used in the byline")
    url: Optional[str] = Field(default=None, description="Optional link for the byline")


class SiteConfig(BaseModel):
    """
    Where posts live, where rendered pages go, and who writes them.
    All directories are relative to the site root.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(default="1.0.0", description="Schema version")
    title: str = Field(default="Blog", description="Site title shown on the index page")
    base_url: str = Field(default="", description="Public URL prefix of the rendered site")
    posts_directory: str = Field(
        default="_posts", description="Where the markdown posts live"
    )
    output_directory: str = Field(
        default="_site", description="Where rendered HTML is written"
    )
    authors: dict[str, AuthorConfig] = Field(
        default_factory=dict,
        description="Author identifier -> byline details",
    )


class CheckConfig(BaseModel):
    """Knobs for the publishing checks."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(default="1.0.0", description="Schema version")
    required_fields: list[str] = Field(
        default_factory=lambda: ["layout", "title", "author", "excerpt", "picture"],
        description="Front matter fields that must be present and non-empty",
    )
    allowed_layouts: list[str] = Field(
        default_factory=list,
        description="Layouts a post may use; empty means any",
    )
    allowed_languages: list[str] = Field(
        default_factory=list,
        description="Code fence languages a post may use; empty means any Pygments lexer",
    )
    check_images: bool = Field(
        default=True,
        description="Whether image references are requested over the network",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Per-request timeout for image checks",
    )
    user_agent: str = Field(
        default="glimpse-linkcheck/1.0",
        description="User-Agent header sent with image checks",
    )


class GlimpseConfig(BaseModel):
    """
    Top-level config container. `global` is required; the other sections
    default when missing from the YAML.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    site: SiteConfig = Field(default_factory=SiteConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)


def default_config() -> GlimpseConfig:
    """The config used when no --config is given on the command line."""
    return GlimpseConfig.model_validate({"global": {"config_version": "1.0.0"}})
