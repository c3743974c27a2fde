# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for image reachability.

Remote requests go through httpx.MockTransport, so nothing here touches the
network. Local paths are checked against a temporary site root.
"""

from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest

from glimpse.checks.links import LinkChecker, check_links
from glimpse.config.schema import CheckConfig
from glimpse.post.loader import load_post


class _Recorder:
    """MockTransport handler that answers from a table and remembers requests."""

    def __init__(self, statuses: dict[str, int], head_status: Optional[int] = None) -> None:
        self.statuses = statuses
        self.head_status = head_status
        self.requests: list[tuple[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append((request.method, url))
        if request.method == "HEAD" and self.head_status is not None:
            return httpx.Response(self.head_status)
        return httpx.Response(self.statuses.get(url, 404))


def _checker(site_root: Path, handler: Callable[[httpx.Request], httpx.Response]) -> LinkChecker:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return LinkChecker(site_root, CheckConfig(), client=client)


class TestRemoteImages:
    def test_reachable_image(self, site_root: Path) -> None:
        recorder = _Recorder({"https://example.com/a.png": 200})
        with _checker(site_root, recorder) as checker:
            assert checker.check_url("https://example.com/a.png") is None
        assert recorder.requests == [("HEAD", "https://example.com/a.png")]

    def test_missing_image(self, site_root: Path) -> None:
        with _checker(site_root, _Recorder({})) as checker:
            assert checker.check_url("https://example.com/gone.png") == "HTTP 404"

    def test_head_rejected_falls_back_to_get(self, site_root: Path) -> None:
        recorder = _Recorder({"https://example.com/a.png": 200}, head_status=405)
        with _checker(site_root, recorder) as checker:
            assert checker.check_url("https://example.com/a.png") is None
        assert [method for method, _ in recorder.requests] == ["HEAD", "GET"]

    def test_transport_error_is_a_problem(self, site_root: Path) -> None:
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _checker(site_root, _fail) as checker:
            problem = checker.check_url("https://example.com/a.png")
        assert problem is not None
        assert problem.startswith("request failed: ConnectError")

    def test_each_url_is_requested_once(self, site_root: Path) -> None:
        recorder = _Recorder({"https://example.com/a.png": 200})
        with _checker(site_root, recorder) as checker:
            checker.check_url("https://example.com/a.png")
            checker.check_url("https://example.com/a.png")
            assert checker.urls_checked == 1
        assert len(recorder.requests) == 1

    def test_protocol_relative_url_uses_https(self, site_root: Path) -> None:
        recorder = _Recorder({"https://cdn.example.com/a.png": 200})
        with _checker(site_root, recorder) as checker:
            assert checker.check_url("//cdn.example.com/a.png") is None

    def test_supplied_client_is_left_open(self, site_root: Path) -> None:
        client = httpx.Client(transport=httpx.MockTransport(_Recorder({})))
        with LinkChecker(site_root, CheckConfig(), client=client):
            pass
        assert not client.is_closed
        client.close()


class TestLocalImages:
    def test_existing_file(self, site_root: Path) -> None:
        with _checker(site_root, _Recorder({})) as checker:
            assert checker.check_url("/assets/preview.png") is None

    def test_percent_encoded_path(self, site_root: Path) -> None:
        (site_root / "assets" / "learning curve.png").write_bytes(b"png")
        with _checker(site_root, _Recorder({})) as checker:
            assert checker.check_url("/assets/learning%20curve.png") is None

    def test_missing_file(self, site_root: Path) -> None:
        with _checker(site_root, _Recorder({})) as checker:
            problem = checker.check_url("/assets/missing.png")
        assert problem == "no such file under the site root: assets/missing.png"

    def test_path_escaping_the_root(self, site_root: Path) -> None:
        with _checker(site_root, _Recorder({})) as checker:
            assert checker.check_url("/../outside.png") == "path escapes the site root"

    def test_local_paths_never_hit_the_network(self, site_root: Path) -> None:
        recorder = _Recorder({})
        with _checker(site_root, recorder) as checker:
            checker.check_url("/assets/preview.png")
        assert recorder.requests == []


class TestOtherReferences:
    def test_data_uri_is_accepted(self, site_root: Path) -> None:
        with _checker(site_root, _Recorder({})) as checker:
            assert checker.check_url("data:image/png;base64,iVBORw0KGgo=") is None

    @pytest.mark.parametrize("url", ["ftp://example.com/a.png", "file:///etc/passwd"])
    def test_unsupported_scheme(self, site_root: Path, url: str) -> None:
        with _checker(site_root, _Recorder({})) as checker:
            problem = checker.check_url(url)
        assert problem is not None
        assert "unsupported URL scheme" in problem

    def test_empty_url(self, site_root: Path) -> None:
        with _checker(site_root, _Recorder({})) as checker:
            assert "no URL" in (checker.check_url("") or "")


class TestCheckLinks:
    def test_sample_post_resolves(self, site_root: Path, write_post: Callable[..., Path]) -> None:
        post = load_post(write_post())
        with _checker(site_root, _Recorder({})) as checker:
            assert check_links(post, checker) == []

    def test_broken_picture_and_body_image(
        self, site_root: Path, write_post: Callable[..., Path], sample_post_text: str
    ) -> None:
        text = sample_post_text.replace("/assets/preview.png", "https://example.com/preview.png")
        text = text.replace("/assets/sensor.png", "/assets/sensor-v2.png")
        post = load_post(write_post(text=text))

        with _checker(site_root, _Recorder({})) as checker:
            findings = check_links(post, checker)

        assert [(f.check, f.line) for f in findings] == [("links", 1), ("links", 11)]
        assert "HTTP 404" in findings[0].message
        assert "sensor-v2.png" in findings[1].message
        assert all(f.is_error for f in findings)
