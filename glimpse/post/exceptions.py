# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Exceptions raised while reading posts from disk."""


class PostError(Exception):
    """Base for all post errors."""


class PostFormatError(PostError):
    """
    Raised when a post can't be turned into a Post record: unreadable file,
    missing or unterminated front matter, invalid YAML, or metadata of the
    wrong type.
    """
