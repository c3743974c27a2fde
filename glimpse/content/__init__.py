# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Scanners over a post's markdown body.

Everything here is a pure function of the body text. Line numbers are
reported in source-file coordinates: callers pass the offset of the first
body line so findings point at the line an editor would show.
"""
