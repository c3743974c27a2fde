# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Check pipeline orchestrator.

Loads each post and runs every check over it, in a fixed order:
  1. load        (front matter splits and parses; otherwise nothing else runs)
  2. frontmatter (required fields, picture, layout, author)
  3. fences      (code blocks render)
  4. citations   (citations <-> references, anchor links)
  5. links       (images resolve; network, skipped offline)

Posts are processed in sorted path order so two runs over the same tree
produce the same report. A post that fails to load is reported and the run
moves on to the next one.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

import httpx

from glimpse.checks.citations import check_citations
from glimpse.checks.fences import check_fences
from glimpse.checks.frontmatter import check_front_matter
from glimpse.checks.links import LinkChecker, check_links
from glimpse.checks.models import ERROR, CheckReport, Finding, PostResult
from glimpse.config.schema import GlimpseConfig
from glimpse.logging.logger import get_logger
from glimpse.post.exceptions import PostFormatError
from glimpse.post.loader import load_post
from glimpse.post.models import Post

LOAD_CHECK = "load"

StructuralCheck = Callable[[Post, GlimpseConfig], list[Finding]]

STRUCTURAL_CHECKS: dict[str, StructuralCheck] = {
    "frontmatter": check_front_matter,
    "fences": check_fences,
    "citations": check_citations,
}
LINK_CHECK = "links"
ALL_CHECKS: tuple[str, ...] = (*STRUCTURAL_CHECKS, LINK_CHECK)


def _selected_checks(only: Optional[Sequence[str]], offline: bool, config: GlimpseConfig) -> list[str]:
    selected = list(ALL_CHECKS) if only is None else [name for name in ALL_CHECKS if name in only]
    unknown = set(only or ()) - set(ALL_CHECKS)
    if unknown:
        raise ValueError(f"Unknown checks: {', '.join(sorted(unknown))}")
    if offline or not config.check.check_images:
        selected = [name for name in selected if name != LINK_CHECK]
    return selected


def check_post(
    post: Post,
    config: GlimpseConfig,
    checks: Sequence[str],
    link_checker: Optional[LinkChecker] = None,
) -> list[Finding]:
    """Run the named checks over one loaded post."""
    findings: list[Finding] = []
    for name in checks:
        if name == LINK_CHECK:
            if link_checker is not None:
                findings.extend(check_links(post, link_checker))
            continue
        findings.extend(STRUCTURAL_CHECKS[name](post, config))
    return findings


def run_checks(
    paths: Iterable[Path],
    config: GlimpseConfig,
    site_root: Path,
    *,
    offline: bool = False,
    only: Optional[Sequence[str]] = None,
    client: Optional[httpx.Client] = None,
) -> CheckReport:
    """
    Check a set of post files and tally the findings.

    Args:
        paths: Post files to check.
        config: Validated config.
        site_root: Root that site-relative image paths resolve against.
        offline: Skip every check that needs the network.
        only: Restrict to these check names (default: all).
        client: httpx client for image checks; one is created when omitted.

    Raises:
        ValueError: If `only` names a check that doesn't exist.
    """
    logger = get_logger("glimpse.checks")
    checks = _selected_checks(only, offline, config)
    results: list[PostResult] = []

    with LinkChecker(site_root, config.check, client=client) as link_checker:
        for path in sorted(paths):
            try:
                post = load_post(path)
            except PostFormatError as err:
                results.append(
                    PostResult(
                        path=str(path),
                        title=path.stem,
                        findings=[Finding(LOAD_CHECK, ERROR, str(err), str(path), None)],
                    )
                )
                continue

            findings = check_post(post, config, checks, link_checker)
            results.append(PostResult(path=str(path), title=post.title, findings=findings))

        urls_checked = link_checker.urls_checked

    report = CheckReport(posts=results, checks_run=checks, offline=offline)

    for result in report.posts:
        for finding in result.findings:
            log = logger.error if finding.is_error else logger.warning
            log(
                finding.message,
                extra={
                    "check": finding.check,
                    "severity": finding.severity,
                    "path": finding.path,
                    "line": finding.line,
                },
            )

    logger.info(
        "Check run complete",
        extra={
            "posts_checked": report.posts_checked,
            "errors": report.error_count,
            "warnings": report.warning_count,
            "checks": checks,
            "images_checked": urls_checked,
            "passed": report.passed,
        },
    )

    return report
