# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for glimpse tests.

Fixtures here are available to every test file automatically.
Config files on disk, an in-memory check config, a small site tree and a
post factory.
"""

import logging
import textwrap
from pathlib import Path
from typing import Callable, Iterator

import pytest

from glimpse.config.schema import GlimpseConfig
from glimpse.logging.logger import configure_defaults

# A post that passes every check. Body line 1 is source line 8.
SAMPLE_POST = textwrap.dedent("""\
    ---
    layout: post
    title: Glimpses
    author: alice
    excerpt: A short post about where to look.
    picture: /assets/preview.png
    ---

    Attention models look at one part of an image at a time [1].

    ![The glimpse sensor](/assets/sensor.png)

    ```python
    def glimpse(image, location):
        return image[location]
    ```

    See [the method](#the-method).

    ## The method

    The locator is trained with REINFORCE [2].

    ## References

    1. Mnih et al. Recurrent Models of Visual Attention. 2014.
    2. Williams. Simple statistical gradient-following algorithms. 1992.
""")

PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture(autouse=True)
def _reset_loggers() -> Iterator[None]:
    """
    Drop handlers of every glimpse logger after each test.

    Handlers hold on to the sys.stdout they were created with; a fresh one per
    test keeps capsys working and output from leaking between tests.
    """
    yield
    configure_defaults("INFO", None)
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("glimpse"):
            logger = logging.getLogger(name)
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()


def _write_yaml(directory: Path, name: str, body: str) -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """Smallest config the schema accepts, with a project name and DEBUG logging."""
    return _write_yaml(
        tmp_path,
        "minimal.yaml",
        """\
        global:
          config_version: "1.0.0"
          project_name: "glimpse-test"
          log_level: "DEBUG"
        """,
    )


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Parses as YAML but lacks global.config_version."""
    return _write_yaml(tmp_path, "no_version.yaml", 'global:\n  project_name: "glimpse-test"\n')


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    return _write_yaml(tmp_path, "broken.yaml", "site: [title: {\n")


@pytest.fixture()
def check_config() -> GlimpseConfig:
    """Config matching the sample site: one known author, `post` layout only."""
    return GlimpseConfig.model_validate(
        {
            "global": {"config_version": "1.0.0", "project_name": "glimpse-test"},
            "site": {
                "title": "Test Notes",
                "authors": {"alice": {"name": "Alice Example", "url": "https://example.com/alice"}},
            },
            "check": {"allowed_layouts": ["post"]},
        }
    )


@pytest.fixture()
def site_root(tmp_path: Path) -> Path:
    """A site tree with an empty posts directory and the sample post's images."""
    root = tmp_path / "site"
    (root / "_posts").mkdir(parents=True)
    assets = root / "assets"
    assets.mkdir()
    (assets / "preview.png").write_bytes(PNG_BYTES)
    (assets / "sensor.png").write_bytes(PNG_BYTES)
    return root


@pytest.fixture()
def write_post(site_root: Path) -> Callable[..., Path]:
    """Factory: write a post into the site's _posts directory and return its path."""

    def _write(name: str = "2015-09-21-glimpses.md", text: str = SAMPLE_POST) -> Path:
        path = site_root / "_posts" / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def sample_post_text() -> str:
    """Source of a post that passes every check against check_config."""
    return SAMPLE_POST
