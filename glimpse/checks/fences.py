# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Code fence checks.

The snippets in a post are illustrative: fragments lifted from a training
script, with elisions, never run by anything here. So we hold them to
"renders correctly", not "executes":

  errors   — the fence is never closed (the rest of the post renders as code),
             the renderer would not turn it into a code block at all,
             the language tag is missing, or the tag names no known lexer
             (the block renders without highlighting)
  warnings — structural smells: unbalanced brackets, text the lexer can't
             tokenize, Python that doesn't parse, an empty block

We never call an interpreter on the snippet. Structure comes from the
Pygments lexer for the tagged language, which already knows where strings
and comments are, so a `(` inside a string literal is not counted.
"""

import ast

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.token import Error, Operator, Punctuation
from pygments.util import ClassNotFound

from glimpse.checks.models import ERROR, WARNING, Finding
from glimpse.config.schema import GlimpseConfig
from glimpse.content.fences import CodeBlock, extract_code_blocks
from glimpse.post.models import Post

CHECK_NAME = "fences"

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}


def resolve_lexer(language: str) -> Lexer | None:
    """The Pygments lexer for a fence language tag, or None if unknown."""
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        return None


def _bracket_problem(lexer: Lexer, content: str) -> str | None:
    """
    Describe the first bracket imbalance in the snippet, or None.

    Only punctuation and operator tokens are considered.
    """
    stack: list[str] = []
    for token_type, value in lexer.get_tokens(content):
        if token_type not in Punctuation and token_type not in Operator:
            continue
        for char in value:
            if char in _OPENERS:
                stack.append(char)
            elif char in _CLOSERS:
                if not stack:
                    return f"unexpected '{char}' with no matching opener"
                opener = stack.pop()
                if _OPENERS[opener] != char:
                    return f"'{opener}' closed by '{char}'"
    if stack:
        return f"'{stack[-1]}' is never closed"
    return None


def _lexer_errors(lexer: Lexer, content: str) -> list[str]:
    return [value for token_type, value in lexer.get_tokens(content) if token_type in Error]


def _python_problem(content: str) -> str | None:
    try:
        ast.parse(content)
    except SyntaxError as err:
        return f"Python snippet does not parse: {err.msg} (snippet line {err.lineno})"
    return None


def _check_block(block: CodeBlock, path: str, config: GlimpseConfig) -> list[Finding]:
    findings: list[Finding] = []

    if not block.terminated:
        findings.append(
            Finding(CHECK_NAME, ERROR, "Code fence is never closed; the rest of the post would render as code", path, block.line)
        )

    if block.problem:
        findings.append(
            Finding(CHECK_NAME, ERROR, f"Code fence will not render as a code block: {block.problem}", path, block.line)
        )

    if not block.language:
        findings.append(Finding(CHECK_NAME, ERROR, "Code fence has no language tag", path, block.line))
        return findings

    allowed = [language.lower() for language in config.check.allowed_languages]
    if allowed and block.language not in allowed:
        findings.append(
            Finding(
                CHECK_NAME,
                ERROR,
                f"Language '{block.language}' is not one of: {', '.join(allowed)}",
                path,
                block.line,
            )
        )

    lexer = resolve_lexer(block.language)
    if lexer is None:
        findings.append(
            Finding(CHECK_NAME, ERROR, f"Language tag '{block.language}' is not recognised", path, block.line)
        )
        return findings

    if not block.content.strip():
        findings.append(Finding(CHECK_NAME, WARNING, "Code block is empty", path, block.line))
        return findings

    bracket_problem = _bracket_problem(lexer, block.content)
    if bracket_problem is not None:
        findings.append(
            Finding(CHECK_NAME, WARNING, f"Unbalanced brackets in {block.language} snippet: {bracket_problem}", path, block.line)
        )

    error_tokens = _lexer_errors(lexer, block.content)
    if error_tokens:
        sample = ", ".join(repr(token) for token in error_tokens[:3])
        findings.append(
            Finding(CHECK_NAME, WARNING, f"{lexer.name} lexer could not tokenize: {sample}", path, block.line)
        )

    if "python" in lexer.aliases:
        python_problem = _python_problem(block.content)
        if python_problem is not None:
            findings.append(Finding(CHECK_NAME, WARNING, python_problem, path, block.line))

    return findings


def check_fences(post: Post, config: GlimpseConfig) -> list[Finding]:
    path = str(post.source_path)
    findings: list[Finding] = []
    for block in extract_code_blocks(post.body, post.body_line_offset):
        findings.extend(_check_block(block, path, config))
    return findings
