# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Markdown to HTML.

The body goes through Python-Markdown with the extensions a technical blog
needs: fenced code highlighted by Pygments (CSS classes, stylesheet written
separately), tables, and heading ids from the toc extension. Heading ids use
the toc slugify, which is also what the anchor check uses.

Everything that comes from front matter is escaped before it lands in the
page. The body is trusted markdown and may carry raw HTML (anchors, figures).
"""

import datetime as dt
from html import escape
from typing import Optional

import markdown
from markdown.extensions.codehilite import CodeHiliteExtension
from markdown.extensions.toc import TocExtension, slugify
from pygments.formatters import HtmlFormatter

from glimpse.config.schema import SiteConfig
from glimpse.post.models import Post

HIGHLIGHT_CSS_CLASS = "highlight"
STYLESHEET_NAME = "pygments.css"


def _markdown() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=[
            "fenced_code",
            "tables",
            CodeHiliteExtension(css_class=HIGHLIGHT_CSS_CLASS, guess_lang=False, use_pygments=True),
            TocExtension(slugify=slugify, permalink=False),
        ],
        output_format="html",
    )


def render_body(markdown_text: str) -> str:
    """Convert a markdown body to an HTML fragment."""
    return _markdown().convert(markdown_text)


def pygments_stylesheet() -> str:
    """CSS for the highlighted code blocks."""
    return HtmlFormatter(style="default").get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")


def format_date(value: dt.date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def author_byline(author_id: Optional[str], site: SiteConfig) -> str:
    """
    HTML for the "By ..." line. Known authors get their display name (and a
    link when configured); unknown identifiers are shown as-is.
    """
    if not author_id:
        return ""
    author = site.authors.get(author_id)
    if author is None:
        name_html = f'<span class="author">{escape(author_id)}</span>'
    elif author.url:
        name_html = f'<a class="author" href="{escape(author.url)}">{escape(author.name)}</a>'
    else:
        name_html = f'<span class="author">{escape(author.name)}</span>'
    return f"By {name_html}"


def _head(post: Post, site: SiteConfig) -> str:
    meta = post.metadata
    lines = [
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1">',
        f"<title>{escape(post.title)}</title>",
    ]
    if meta.excerpt:
        lines.append(f'<meta name="description" content="{escape(meta.excerpt.strip())}">')
        lines.append(f'<meta property="og:description" content="{escape(meta.excerpt.strip())}">')
    lines.append(f'<meta property="og:title" content="{escape(post.title)}">')
    if site.base_url:
        page_url = f"{site.base_url.rstrip('/')}/{post.slug}.html"
        lines.append(f'<meta property="og:url" content="{escape(page_url)}">')
    if meta.picture:
        lines.append(f'<meta property="og:image" content="{escape(meta.picture.strip())}">')
    if meta.author:
        lines.append(f'<meta name="author" content="{escape(meta.author)}">')
    lines.append(f'<link rel="stylesheet" href="{STYLESHEET_NAME}">')
    return "\n".join(f"  {line}" for line in lines)


def render_post(post: Post, site: SiteConfig) -> str:
    """Render a post into a complete HTML5 page."""
    meta = post.metadata
    layout = meta.layout or "post"

    header = [f'<h1 class="post-title">{escape(post.title)}</h1>']
    byline_parts = []
    byline = author_byline(meta.author, site)
    if byline:
        byline_parts.append(byline)
    if post.date is not None:
        byline_parts.append(f'<time datetime="{post.date.isoformat()}">{format_date(post.date)}</time>')
    if byline_parts:
        header.append(f'<p class="byline">{" &middot; ".join(byline_parts)}</p>')
    if meta.picture:
        header.append(
            f'<figure class="post-picture"><img src="{escape(meta.picture.strip())}" alt="{escape(post.title)}"></figure>'
        )

    comments = ""
    if meta.comments:
        comments = '\n<section class="comments" id="comments" data-post="' + escape(post.slug) + '"></section>'

    header_html = "\n".join(header)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        f"{_head(post, site)}\n"
        "</head>\n"
        "<body>\n"
        f'<article class="{escape(layout)}">\n'
        f"<header>\n{header_html}\n</header>\n"
        f'<div class="post-body">\n{render_body(post.body)}\n</div>'
        f"{comments}\n"
        "</article>\n"
        "</body>\n"
        "</html>\n"
    )


def render_index(posts: list[Post], site: SiteConfig) -> str:
    """Listing page: newest first, title linking to the page, date and excerpt."""
    dated = sorted(posts, key=lambda p: (p.date or dt.date.min, p.slug), reverse=True)
    items = []
    for post in dated:
        parts = [f'<a href="{escape(post.slug)}.html">{escape(post.title)}</a>']
        if post.date is not None:
            parts.append(f'<time datetime="{post.date.isoformat()}">{format_date(post.date)}</time>')
        if post.metadata.excerpt:
            parts.append(f'<p class="excerpt">{escape(post.metadata.excerpt.strip())}</p>')
        items.append("<li>" + "\n".join(parts) + "</li>")

    listing = "\n".join(items)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '  <meta charset="utf-8">\n'
        f"  <title>{escape(site.title)}</title>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>{escape(site.title)}</h1>\n"
        f'<ul class="posts">\n{listing}\n</ul>\n'
        "</body>\n"
        "</html>\n"
    )
