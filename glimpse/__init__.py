# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
glimpse — loads, checks and renders the posts of a static blog.

Subsystems:
  - post: front matter parsing and the post record
  - content: scanning a markdown body for code, images, citations and anchors
  - checks: the publishing checks run before a post goes out
  - render: markdown to HTML pages
  - reporting: writing check results to disk
"""

__version__ = "1.0.0"
