# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Result types shared by all checks."""

from dataclasses import dataclass, field
from typing import Optional

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class Finding:
    """One problem found in one post."""

    check: str
    severity: str
    message: str
    path: str
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def location(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"


@dataclass(frozen=True)
class PostResult:
    """Everything the checks said about a single post."""

    path: str
    title: str
    findings: list[Finding] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for finding in self.findings if finding.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for finding in self.findings if not finding.is_error)


@dataclass(frozen=True)
class CheckReport:
    """Complete outcome of a check run. `passed` means no errors; warnings are allowed."""

    posts: list[PostResult] = field(default_factory=list)
    checks_run: list[str] = field(default_factory=list)
    offline: bool = False

    @property
    def posts_checked(self) -> int:
        return len(self.posts)

    @property
    def error_count(self) -> int:
        return sum(post.error_count for post in self.posts)

    @property
    def warning_count(self) -> int:
        return sum(post.warning_count for post in self.posts)

    @property
    def passed(self) -> bool:
        return self.error_count == 0
