# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Image reachability.

Every image a post embeds, plus its front matter picture, has to load when
the page is served. Remote images are requested over HTTP; site-relative
paths are looked up under the site root.

The checker is read-only toward the remote side: HEAD first, and only when
a server refuses HEAD (405/501) a streamed GET whose body is never read.
Each distinct URL is requested once per run, however many posts share it.
"""

from pathlib import Path
from types import TracebackType
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx

from glimpse.checks.models import ERROR, Finding
from glimpse.config.schema import CheckConfig
from glimpse.content.images import ImageRef, extract_images
from glimpse.logging.logger import get_logger
from glimpse.post.models import Post
from glimpse.utils.paths import validate_path_within_project

CHECK_NAME = "links"

_HEAD_REJECTED = {405, 501}


class LinkChecker:
    """
    Resolves image references and remembers the answer.

    Pass a preconfigured httpx.Client to control transport (tests use
    httpx.MockTransport); otherwise the checker builds and owns one.
    """

    def __init__(
        self,
        site_root: Path,
        config: CheckConfig,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._site_root = site_root
        self._config = config
        self._owns_client = client is None
        self._client = client
        self._results: dict[str, Optional[str]] = {}
        self._logger = get_logger("glimpse.checks.links")

    def __enter__(self) -> "LinkChecker":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    @property
    def urls_checked(self) -> int:
        return len(self._results)

    def _http_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._config.request_timeout_seconds,
                follow_redirects=True,
                headers={"User-Agent": self._config.user_agent},
            )
        return self._client

    def _check_remote(self, url: str) -> Optional[str]:
        client = self._http_client()
        try:
            response = client.head(url)
            if response.status_code in _HEAD_REJECTED:
                with client.stream("GET", url) as streamed:
                    status = streamed.status_code
            else:
                status = response.status_code
        except httpx.HTTPError as err:
            return f"request failed: {type(err).__name__}: {err}"

        self._logger.debug("Image checked", extra={"url": url, "status": status})
        if status >= 400:
            return f"HTTP {status}"
        return None

    def _check_local(self, raw_path: str) -> Optional[str]:
        relative = unquote(raw_path).lstrip("/")
        try:
            resolved = validate_path_within_project(self._site_root / relative, self._site_root)
        except ValueError:
            return "path escapes the site root"
        if not resolved.is_file():
            return f"no such file under the site root: {relative}"
        return None

    def check_url(self, url: str) -> Optional[str]:
        """Return a problem description, or None when the image resolves."""
        if url in self._results:
            return self._results[url]

        if not url:
            problem: Optional[str] = "image has no URL (undefined reference label?)"
        else:
            parsed = urlparse(url)
            if url.startswith("//"):
                problem = self._check_remote(f"https:{url}")
            elif parsed.scheme in ("http", "https"):
                problem = self._check_remote(url)
            elif parsed.scheme == "data":
                problem = None
            elif parsed.scheme:
                problem = f"unsupported URL scheme '{parsed.scheme}'"
            else:
                problem = self._check_local(parsed.path)

        self._results[url] = problem
        return problem


def _images_for(post: Post) -> list[ImageRef]:
    images = extract_images(post.body, post.body_line_offset)
    picture = post.metadata.picture
    if picture and picture.strip():
        images.insert(0, ImageRef(picture.strip(), "front matter picture", 1))
    return images


def check_links(post: Post, checker: LinkChecker) -> list[Finding]:
    path = str(post.source_path)
    findings: list[Finding] = []
    for image in _images_for(post):
        problem = checker.check_url(image.url)
        if problem is not None:
            findings.append(
                Finding(CHECK_NAME, ERROR, f"Image '{image.url}' does not resolve: {problem}", path, image.line)
            )
    return findings
