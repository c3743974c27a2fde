# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI smoke tests.

CLI tests must verify:
  - commands execute
  - exit codes are correct
  - help text exists

We use subprocess to test the actual CLI entrypoint the way a user would.
This catches issues that unit tests miss, like broken imports or entrypoint
registration. Every run gets a temporary working directory so nothing lands
in the repository.
"""

import json
import subprocess
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]


def _run_cli(*args: str, cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run `glimpse` with the given arguments and capture output."""
    return subprocess.run(
        [sys.executable, "-m", "glimpse.cli.main", *args],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=str(cwd),
    )


def _json_lines(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


@pytest.fixture()
def site_config(site_root: Path) -> Path:
    """Config at the sample site root: no network, known author, `post` layout."""
    config_file = site_root / "glimpse.yaml"
    config_file.write_text(
        textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              project_name: "glimpse-cli-test"
            site:
              title: "CLI Test"
              authors:
                alice:
                  name: "Alice Example"
            check:
              allowed_layouts: [post]
              check_images: false
        """),
        encoding="utf-8",
    )
    return config_file


class TestHelpTexts:
    """Every subcommand must have working --help output."""

    @pytest.mark.parametrize("subcommand", ["check", "links", "render", "info"])
    def test_subcommand_help_exits_zero(self, subcommand: str, tmp_path: Path) -> None:
        result = _run_cli(subcommand, "--help", cwd=tmp_path)
        assert result.returncode == 0
        assert subcommand in result.stdout.lower() or "usage" in result.stdout.lower()

    def test_root_help_exits_with_user_error(self, tmp_path: Path) -> None:
        """Running glimpse with no args should show help and exit with USER_ERROR (1)."""
        result = _run_cli(cwd=tmp_path)
        assert result.returncode == 1


class TestSubcommandExecution:
    def test_info_runs_without_config(self, tmp_path: Path) -> None:
        result = _run_cli("info", cwd=tmp_path)
        assert result.returncode == 0

    def test_check_without_posts_succeeds(self, tmp_path: Path) -> None:
        result = _run_cli("check", "--offline", cwd=tmp_path)
        assert result.returncode == 0

    def test_check_passing_site(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path]
    ) -> None:
        write_post()
        result = _run_cli("check", "--config", str(site_config), cwd=site_root)
        assert result.returncode == 0, result.stdout

    def test_check_failing_post_returns_validation_error(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path]
    ) -> None:
        write_post(text="---\nlayout: post\ntitle: Broken\n---\nSee [1].\n")
        result = _run_cli("check", "--config", str(site_config), "--offline", cwd=site_root)

        assert result.returncode == 4  # VALIDATION_ERROR
        errors = [entry for entry in _json_lines(result.stdout) if entry["level"] == "ERROR"]
        assert any(entry.get("check") == "citations" for entry in errors)

    def test_check_writes_report(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path], tmp_path: Path
    ) -> None:
        write_post()
        report_dir = tmp_path / "reports"
        result = _run_cli(
            "check", "--config", str(site_config), "--report-dir", str(report_dir), cwd=site_root
        )

        assert result.returncode == 0
        report = json.loads((report_dir / "check_report.json").read_text(encoding="utf-8"))
        assert report["passed"] is True

    def test_check_named_post(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path]
    ) -> None:
        path = write_post()
        write_post(name="2016-01-01-broken.md", text="no front matter\n")
        result = _run_cli("check", str(path), "--config", str(site_config), cwd=site_root)
        assert result.returncode == 0

    def test_missing_post_path_returns_user_error(self, site_root: Path, site_config: Path) -> None:
        result = _run_cli("check", "_posts/nope.md", "--config", str(site_config), cwd=site_root)
        assert result.returncode == 1

    def test_links_with_image_checks_disabled(self, site_root: Path, site_config: Path) -> None:
        result = _run_cli("links", "--config", str(site_config), cwd=site_root)
        assert result.returncode == 0

    def test_render_writes_site(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path]
    ) -> None:
        write_post()
        result = _run_cli("render", "--config", str(site_config), cwd=site_root)

        assert result.returncode == 0, result.stdout
        assert (site_root / "_site" / "glimpses.html").is_file()
        assert (site_root / "_site" / "index.html").is_file()

    def test_render_refuses_posts_with_errors(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path]
    ) -> None:
        write_post(text="---\ntitle: Broken\n---\nSee [1].\n")
        result = _run_cli("render", "--config", str(site_config), cwd=site_root)

        assert result.returncode == 4
        assert not (site_root / "_site").exists()

    def test_render_output_outside_site_root(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path], tmp_path: Path
    ) -> None:
        write_post()
        result = _run_cli(
            "render", "--config", str(site_config), "--output", str(tmp_path / "out"), cwd=site_root
        )
        assert result.returncode == 1


class TestConfigLoading:
    """Subcommands should handle config loading failures gracefully."""

    def test_nonexistent_config_returns_config_error(self, tmp_path: Path) -> None:
        result = _run_cli("check", "--config", "/nonexistent/path.yaml", cwd=tmp_path)
        assert result.returncode == 2  # CONFIG_ERROR

    def test_invalid_config_returns_config_error(self, invalid_config_file: Path, tmp_path: Path) -> None:
        result = _run_cli("info", "--config", str(invalid_config_file), cwd=tmp_path)
        assert result.returncode == 2

    def test_valid_config_is_accepted(self, tmp_config_file: Path, tmp_path: Path) -> None:
        result = _run_cli("info", "--config", str(tmp_config_file), cwd=tmp_path)
        assert result.returncode == 0

    def test_repository_config_passes_offline(self, tmp_path: Path) -> None:
        result = _run_cli("check", "--config", str(REPO_ROOT / "glimpse.yaml"), "--offline", cwd=tmp_path)
        assert result.returncode == 0, result.stdout

    def test_config_at_site_root_is_discovered(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path]
    ) -> None:
        write_post()
        result = _run_cli("check", cwd=site_root)
        assert result.returncode == 0, result.stdout

    def test_broken_discovered_config_returns_config_error(self, tmp_path: Path) -> None:
        (tmp_path / "glimpse.yaml").write_text("global: [unclosed\n", encoding="utf-8")
        result = _run_cli("info", cwd=tmp_path)
        assert result.returncode == 2


class TestGlobalOptions:
    def test_log_level_option_is_accepted(self, tmp_path: Path) -> None:
        result = _run_cli("info", "--log-level", "DEBUG", cwd=tmp_path)
        assert result.returncode == 0

    def test_log_level_error_silences_info(self, tmp_path: Path) -> None:
        result = _run_cli("info", "--log-level", "ERROR", cwd=tmp_path)
        assert result.returncode == 0
        assert result.stdout.strip() == ""

    def test_options_before_the_subcommand_are_rejected(self, tmp_path: Path) -> None:
        result = _run_cli("--config", "/nonexistent/path.yaml", "check", cwd=tmp_path)
        assert result.returncode == 2
        assert result.stderr.startswith("usage: glimpse")
        assert "unrecognized arguments" in result.stderr or "invalid choice" in result.stderr

    def test_dry_run_does_not_render(
        self, site_root: Path, site_config: Path, write_post: Callable[..., Path]
    ) -> None:
        write_post()
        result = _run_cli("render", "--config", str(site_config), "--dry-run", cwd=site_root)

        assert result.returncode == 0
        assert not (site_root / "_site").exists()

    def test_site_root_option(
        self, site_root: Path, write_post: Callable[..., Path], tmp_path: Path
    ) -> None:
        write_post()
        result = _run_cli("info", "--site-root", str(site_root), cwd=tmp_path)

        assert result.returncode == 0
        slugs = [entry.get("slug") for entry in _json_lines(result.stdout)]
        assert "glimpses" in slugs


class TestLogFile:
    def test_command_lines_reach_the_configured_log_file(self, site_root: Path) -> None:
        (site_root / "glimpse.yaml").write_text(
            'global:\n  config_version: "1.0.0"\n  log_file: "logs/glimpse.log"\n',
            encoding="utf-8",
        )
        result = _run_cli("check", "--offline", cwd=site_root)
        assert result.returncode == 0, result.stdout

        logged = _json_lines((site_root / "logs" / "glimpse.log").read_text(encoding="utf-8"))
        assert ("glimpse.runtime", "glimpse bootstrap complete") in [(e["module"], e["msg"]) for e in logged]
        assert ("glimpse.cli.check", "No posts found, nothing to check") in [(e["module"], e["msg"]) for e in logged]
