# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Fenced code block extraction.

Blocks are found the way a writer would expect them to work (CommonMark):
  - a fence is 3+ backticks or 3+ tildes, indented at most 3 spaces
  - the first word of the info string is the language tag
  - a block closes on a line of the same fence character, at least as long
    as the opening run, with nothing after it but whitespace
  - a block that never closes runs to the end of the document

The renderer is stricter. Python-Markdown's fenced_code only turns a block
into <pre><code> when the opening fence starts at column 0, the info string
is `lang`, `.lang` or `{attrs}` (optionally followed by hl_lines="..."), and
the closing line is the opening fence repeated exactly. Anything else comes
out as a paragraph of inline code. Each block carries `problem`, naming the
rule it breaks, so the checks can flag it before it ships.

Indented (4-space) code blocks are not recognised. In posts they collide
with nested list content far more often than they are meant as code.
"""

import re
from typing import Iterator, NamedTuple

_OPENING = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_INLINE_CODE = re.compile(r"(`+)(.+?)\1")

# What fenced_code accepts after the opening fence and its spaces.
_RENDERED_INFO = re.compile(
    r"""
    \{(?P<attrs>[^\n]*)\}
    |
    \.?(?P<lang>[\w\#.+-]*)[ ]*
    (?:hl_lines=(?P<quot>["'])(?P<hl_lines>.*?)(?P=quot)[ ]*)?
    """,
    re.VERBOSE,
)


class CodeBlock(NamedTuple):
    """A fenced code block as it appears in the post."""

    language: str
    info: str
    content: str
    line: int
    terminated: bool
    problem: str = ""


class _FenceSpan(NamedTuple):
    start: int
    end: int
    indent: int
    fence: str
    raw_info: str
    terminated: bool


def _is_closing(line: str, fence_char: str, fence_len: int) -> bool:
    stripped = line.rstrip()
    if len(stripped) - len(stripped.lstrip(" ")) > 3:
        return False
    run = stripped.lstrip(" ")
    return len(run) >= fence_len and set(run) == {fence_char}


def _iter_fence_spans(lines: list[str]) -> Iterator[_FenceSpan]:
    """
    Yield fence spans as half-open line index ranges.

    `start` is the opening fence line; `end` is one past the closing fence
    line (or len(lines) for an unterminated block).
    """
    index = 0
    while index < len(lines):
        match = _OPENING.match(lines[index])
        if match is None:
            index += 1
            continue

        fence = match.group("fence")
        raw_info = match.group("info")
        if fence[0] == "`" and "`" in raw_info:
            # Not a fence: an inline code span at the start of a line.
            index += 1
            continue

        closing = index + 1
        while closing < len(lines) and not _is_closing(lines[closing], fence[0], len(fence)):
            closing += 1

        terminated = closing < len(lines)
        end = closing + 1 if terminated else len(lines)
        yield _FenceSpan(index, end, len(match.group("indent")), fence, raw_info, terminated)
        index = end


def _language_from_info(info: str) -> str:
    """The language the writer meant, even from an info string the renderer rejects."""
    if not info:
        return ""
    word = info.split()[0]
    # Pandoc style {.lua} and Jekyll style lua{linenos}
    word = word.strip("{}").lstrip(".")
    return word.split("{", 1)[0].lower()


def _rendered_language(match: "re.Match[str]") -> str:
    attrs = match.group("attrs")
    if attrs is None:
        return (match.group("lang") or "").lower()
    # In {attrs} the first class is the language.
    for token in attrs.split():
        if token.startswith(".") and len(token) > 1:
            return token[1:].lower()
    return ""


def _render_problem(span: _FenceSpan, lines: list[str]) -> str:
    if span.indent:
        return f"opening fence is indented {span.indent} space(s); only a fence at column 0 becomes a code block"

    info = span.raw_info.lstrip(" ")
    match = _RENDERED_INFO.fullmatch(info)
    if match is None or (match.group("attrs") is not None and set("{}") & set(match.group("attrs"))):
        return f"info string '{info.strip()}' is not understood; use `lang`, `.lang` or `{{.lang ...}}`"

    if span.terminated:
        closing = lines[span.end - 1]
        if closing.rstrip(" ") != span.fence:
            return f"closing fence '{closing.strip()}' must repeat the opening '{span.fence}' exactly, at column 0"

    return ""


def _dedent(line: str, indent: int) -> str:
    removable = len(line) - len(line.lstrip(" "))
    return line[min(indent, removable):]


def extract_code_blocks(body: str, line_offset: int = 0) -> list[CodeBlock]:
    """
    Find every fenced code block in a markdown body.

    Args:
        body: The markdown body (front matter already removed).
        line_offset: Source lines preceding the body, added to reported lines.

    Returns:
        Blocks in document order. `line` is the 1-based source line of the
        opening fence. `problem` is empty when the renderer will produce a
        code block for it.
    """
    lines = body.split("\n")
    blocks: list[CodeBlock] = []

    for span in _iter_fence_spans(lines):
        content_end = span.end - 1 if span.terminated else span.end
        content_lines = [_dedent(line, span.indent) for line in lines[span.start + 1 : content_end]]
        problem = _render_problem(span, lines)
        rendered = None if problem else _RENDERED_INFO.fullmatch(span.raw_info.lstrip(" "))
        blocks.append(
            CodeBlock(
                language=_rendered_language(rendered) if rendered else _language_from_info(span.raw_info.strip()),
                info=span.raw_info.strip(),
                content="\n".join(content_lines),
                line=span.start + 1 + line_offset,
                terminated=span.terminated,
                problem=problem,
            )
        )

    return blocks


def _blank_inline_code(line: str) -> str:
    return _INLINE_CODE.sub(lambda m: " " * len(m.group(0)), line)


def mask_code(body: str) -> str:
    """
    Blank out everything that is code, keeping the line structure.

    Fenced blocks (fence lines included) become empty lines and inline code
    spans become runs of spaces, so scanners for citations, images and
    anchors can work on prose only and still report correct line numbers.
    """
    lines = body.split("\n")
    in_fence = [False] * len(lines)
    for span in _iter_fence_spans(lines):
        for index in range(span.start, span.end):
            in_fence[index] = True

    masked = ["" if in_fence[i] else _blank_inline_code(line) for i, line in enumerate(lines)]
    return "\n".join(masked)
