# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Citation and anchor consistency.

The contract between prose and reference list is one-to-one: every number
cited in the text has exactly one entry, and every entry is cited somewhere.
Separately, every `#fragment` link has to land on an anchor that exists in
the rendered page.
"""

from collections import Counter

from glimpse.checks.models import ERROR, WARNING, Finding
from glimpse.config.schema import GlimpseConfig
from glimpse.content.citations import (
    extract_anchor_links,
    extract_anchors,
    extract_citations,
    extract_reference_entries,
)
from glimpse.post.models import Post

CHECK_NAME = "citations"


def check_citations(post: Post, config: GlimpseConfig) -> list[Finding]:
    path = str(post.source_path)
    offset = post.body_line_offset
    findings: list[Finding] = []

    citations = extract_citations(post.body, offset)
    entries = extract_reference_entries(post.body, offset)

    entry_counts = Counter(entry.number for entry in entries)
    cited_numbers = {citation.number for citation in citations}

    reported_missing: set[int] = set()
    for citation in citations:
        if citation.number not in entry_counts and citation.number not in reported_missing:
            reported_missing.add(citation.number)
            findings.append(
                Finding(CHECK_NAME, ERROR, f"Citation [{citation.number}] has no reference entry", path, citation.line)
            )

    reported_duplicate: set[int] = set()
    for entry in entries:
        if entry_counts[entry.number] > 1 and entry.number not in reported_duplicate:
            reported_duplicate.add(entry.number)
            findings.append(
                Finding(
                    CHECK_NAME,
                    ERROR,
                    f"Reference [{entry.number}] is listed {entry_counts[entry.number]} times",
                    path,
                    entry.line,
                )
            )
        if entry.number not in cited_numbers and entry.number not in reported_duplicate:
            findings.append(
                Finding(CHECK_NAME, ERROR, f"Reference [{entry.number}] is never cited in the text", path, entry.line)
            )

    numbers = sorted(entry_counts)
    if numbers and numbers != list(range(1, len(numbers) + 1)):
        findings.append(
            Finding(
                CHECK_NAME,
                WARNING,
                f"Reference numbering is not contiguous from 1: {', '.join(str(n) for n in numbers)}",
                path,
                entries[0].line,
            )
        )

    anchors = extract_anchors(post.body)
    for link in extract_anchor_links(post.body, offset):
        if link.fragment not in anchors:
            findings.append(
                Finding(CHECK_NAME, ERROR, f"Link to '#{link.fragment}' has no matching anchor", path, link.line)
            )

    return findings
