# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Check report writer.

    <report-dir>/
    ├── check_report.json — machine-readable findings
    └── check_report.txt  — human-readable summary

check_report.json is the authoritative output; the text file is a
convenience view of the same data, grouped by post.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from glimpse.checks.models import CheckReport
from glimpse.logging.logger import get_logger
from glimpse.utils.filesystem import atomic_write

JSON_REPORT_NAME = "check_report.json"
TEXT_REPORT_NAME = "check_report.txt"


def report_to_dict(report: CheckReport) -> dict[str, object]:
    return {
        "passed": report.passed,
        "offline": report.offline,
        "checks_run": list(report.checks_run),
        "posts_checked": report.posts_checked,
        "error_count": report.error_count,
        "warning_count": report.warning_count,
        "posts": [
            {
                "path": post.path,
                "title": post.title,
                "error_count": post.error_count,
                "warning_count": post.warning_count,
                "findings": [asdict(finding) for finding in post.findings],
            }
            for post in report.posts
        ],
    }


def write_report(report: CheckReport, output_dir: Path) -> Path:
    """Write both report files and return the directory they're in."""
    output_dir.mkdir(parents=True, exist_ok=True)

    atomic_write(
        output_dir / JSON_REPORT_NAME,
        json.dumps(report_to_dict(report), indent=2, sort_keys=True, default=str) + "\n",
    )
    atomic_write(output_dir / TEXT_REPORT_NAME, format_report_text(report))

    get_logger("glimpse.reporting").info(
        "Check report written",
        extra={"output_dir": str(output_dir)},
    )

    return output_dir


def format_report_text(report: CheckReport) -> str:
    timestamp = datetime.now(tz=timezone.utc).isoformat()
    lines: list[str] = [
        "=" * 60,
        "GLIMPSE CHECK REPORT",
        f"Generated: {timestamp}",
        f"Checks: {', '.join(report.checks_run) or 'none'}",
        f"Network: {'skipped (offline)' if report.offline else 'enabled'}",
        "=" * 60,
        "",
        f"Posts checked: {report.posts_checked}",
        f"Errors: {report.error_count}",
        f"Warnings: {report.warning_count}",
        f"Result: {'PASS' if report.passed else 'FAIL'}",
    ]

    for post in report.posts:
        lines.extend(["", f"--- {post.title} ({post.path}) ---"])
        if not post.findings:
            lines.append("  ok")
            continue
        for finding in post.findings:
            where = f"line {finding.line}" if finding.line is not None else "file"
            lines.append(f"  [{finding.severity.upper()}] {finding.check} ({where}): {finding.message}")

    lines.extend(["", "=" * 60])
    return "\n".join(lines) + "\n"
