# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Exceptions raised while building the rendered site."""


class RenderError(Exception):
    """Raised when pages can't be written where they were asked to go."""
