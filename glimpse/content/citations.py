# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Citations, the reference list, and in-document anchors.

Research posts cite with numbered markers in the prose, usually linked to the
reference list: `as shown in [[2]](#rmva.ref)`. The reference list lives
under a `References` heading and numbers its entries either as an ordered
list (`2. Williams, ...`) or with bracketed labels (`[2] Williams, ...`).

A marker holds citation numbers of at most three digits, so a year in
brackets (`in [2015]`) is prose, not a citation. A range wider than
MAX_CITATION_RANGE numbers (`[0-255]`, `[1-200000]`) is read as a numeric
interval and ignored.

The section runs from the `References` heading to the next heading of the
same or a higher level. Only ATX (`#`) headings are recognised.

Anchors are the ids a `#fragment` link can land on: explicit `<a name>` /
`id=` attributes, plus the ids the renderer gives headings. Heading ids come
from Python-Markdown's toc slugify, the same function the renderer is
configured with, so what we check is what gets rendered.
"""

import re
from typing import NamedTuple, Optional

from markdown.extensions.toc import slugify

from glimpse.content.fences import mask_code

REFERENCES_TITLE = "references"
MAX_CITATION_RANGE = 20

_HEADING = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<text>.*?))?(?:[ \t]+#+)?[ \t]*$")
_ORDERED_ENTRY = re.compile(r"^\s{0,3}(?P<number>\d+)[.)]\s+(?P<text>.+)$")
_BRACKET_ENTRY = re.compile(r"^\s{0,3}\[(?P<number>\d+)\]:?\s+(?P<text>.+)$")
# Not preceded by a word char (x[1]), a bracket (a][1]), `!` (image) or `\` (escape);
# not a link definition ([1]: url).
_CITATION = re.compile(r"(?<![\w\]!\\])\[(?P<numbers>\d{1,3}(?:\s*[,\-–]\s*\d{1,3})*)\](?!:)")
_NAMED_ANCHOR = re.compile(r"<a\b[^>]*?\bname\s*=\s*([\"'])(?P<name>.*?)\1", re.IGNORECASE)
_ID_ATTRIBUTE = re.compile(r"<[a-z][^>]*?\bid\s*=\s*([\"'])(?P<name>.*?)\1", re.IGNORECASE)
_MARKDOWN_FRAGMENT_LINK = re.compile(r"\]\(\s*#(?P<fragment>[^)\s]+)")
_HTML_FRAGMENT_LINK = re.compile(r"\bhref\s*=\s*([\"'])#(?P<fragment>.*?)\1", re.IGNORECASE)
_DEFINITION_FRAGMENT_LINK = re.compile(r"^ {0,3}\[[^\]]+\]:\s*#(?P<fragment>\S+)")
_INLINE_LINK = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_HTML_TAG = re.compile(r"<[^>]+>")
_UNIQUE_SUFFIX = re.compile(r"^(.*)_([0-9]+)$")


class Citation(NamedTuple):
    number: int
    line: int


class ReferenceEntry(NamedTuple):
    number: int
    text: str
    line: int


class AnchorLink(NamedTuple):
    fragment: str
    line: int


class _Heading(NamedTuple):
    index: int
    level: int
    text: str


def _headings(lines: list[str]) -> list[_Heading]:
    found = []
    for index, line in enumerate(lines):
        match = _HEADING.match(line)
        if match is not None:
            found.append(_Heading(index, len(match.group("hashes")), (match.group("text") or "").strip()))
    return found


def _plain_heading_text(text: str) -> str:
    text = _INLINE_LINK.sub(r"\1", text)
    text = _HTML_TAG.sub("", text)
    return text.replace("*", "").replace("`", "").strip()


def find_reference_section(body: str) -> Optional[tuple[int, int]]:
    """
    Locate the reference section as a half-open range of 0-based body line
    indices. The range starts at the heading line. None if there is no
    `References` heading.
    """
    lines = mask_code(body).split("\n")
    headings = _headings(lines)

    for position, heading in enumerate(headings):
        if _plain_heading_text(heading.text).lower().rstrip(":") != REFERENCES_TITLE:
            continue
        end = len(lines)
        for later in headings[position + 1 :]:
            if later.level <= heading.level:
                end = later.index
                break
        return heading.index, end

    return None


def extract_reference_entries(body: str, line_offset: int = 0) -> list[ReferenceEntry]:
    """Numbered entries of the reference section, in document order."""
    section = find_reference_section(body)
    if section is None:
        return []

    lines = mask_code(body).split("\n")
    start, end = section
    entries: list[ReferenceEntry] = []

    for index in range(start + 1, end):
        line = lines[index]
        match = _ORDERED_ENTRY.match(line) or _BRACKET_ENTRY.match(line)
        if match is not None:
            entries.append(
                ReferenceEntry(int(match.group("number")), match.group("text").strip(), index + 1 + line_offset)
            )

    return entries


def _expand_numbers(marker: str) -> Optional[list[int]]:
    """The cited numbers, or None when a range is too wide to be a citation."""
    numbers: list[int] = []
    for part in re.split(r"\s*,\s*", marker):
        bounds = re.split(r"\s*[\-–]\s*", part)
        if len(bounds) == 2:
            low, high = int(bounds[0]), int(bounds[1])
            if high - low + 1 > MAX_CITATION_RANGE:
                return None
            if low <= high:
                numbers.extend(range(low, high + 1))
                continue
        numbers.extend(int(bound) for bound in bounds)
    return numbers


def extract_citations(body: str, line_offset: int = 0) -> list[Citation]:
    """
    In-text citation markers outside code and outside the reference section.

    `[3]`, `[[3]](#refs)`, `[1, 2]` and `[1-3]` are all markers; a list or
    range yields one Citation per number.
    """
    lines = mask_code(body).split("\n")
    section = find_reference_section(body)
    citations: list[Citation] = []

    for index, line in enumerate(lines):
        if section is not None and section[0] <= index < section[1]:
            continue
        for match in _CITATION.finditer(line):
            numbers = _expand_numbers(match.group("numbers"))
            for number in numbers or ():
                citations.append(Citation(number, index + 1 + line_offset))

    return citations


def _unique(slug: str, used: set[str]) -> str:
    # Same disambiguation Python-Markdown's toc applies to repeated headings.
    while slug in used or not slug:
        match = _UNIQUE_SUFFIX.match(slug)
        if match:
            slug = f"{match.group(1)}_{int(match.group(2)) + 1}"
        else:
            slug = f"{slug}_1"
    used.add(slug)
    return slug


def heading_slug(text: str) -> str:
    """The id the renderer gives a heading with this markdown text."""
    return slugify(_plain_heading_text(text), "-")


def extract_anchors(body: str) -> set[str]:
    """Every fragment id defined by the document once rendered."""
    lines = mask_code(body).split("\n")
    anchors: set[str] = set()
    used: set[str] = set()

    for line in lines:
        for match in _NAMED_ANCHOR.finditer(line):
            anchors.add(match.group("name"))
        for match in _ID_ATTRIBUTE.finditer(line):
            used.add(match.group("name"))

    anchors.update(used)
    for heading in _headings(lines):
        anchors.add(_unique(heading_slug(heading.text), used))

    return anchors


def extract_anchor_links(body: str, line_offset: int = 0) -> list[AnchorLink]:
    """Links that point inside the document (`#fragment`), in document order."""
    lines = mask_code(body).split("\n")
    links: list[AnchorLink] = []

    for index, line in enumerate(lines):
        source_line = index + 1 + line_offset
        positioned: list[tuple[int, str]] = []
        for pattern in (_MARKDOWN_FRAGMENT_LINK, _HTML_FRAGMENT_LINK, _DEFINITION_FRAGMENT_LINK):
            for match in pattern.finditer(line):
                positioned.append((match.start(), match.group("fragment")))
        links.extend(AnchorLink(fragment, source_line) for _, fragment in sorted(positioned))

    return links
