# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for glimpse.

One root command with four subcommands. The shared options (--config,
--site-root, --log-level, --dry-run) live on a parent parser that every
subcommand inherits, so they are written after the subcommand name.

Usage:
    glimpse check --config glimpse.yaml
    glimpse check _posts/2015-09-21-rmva.md --offline --report-dir reports
    glimpse links
    glimpse render --output _site
    glimpse info
"""

import argparse
import sys
from typing import Optional, Sequence

from glimpse.cli.commands import handle_check, handle_info, handle_links, handle_render
from glimpse.cli.exit_codes import USER_ERROR
from glimpse.logging.logger import LOG_LEVELS

_PATHS_HELP = "Post files or directories (default: the configured posts directory)."


def _shared_options() -> argparse.ArgumentParser:
    # add_help=False: only the subcommand parser answers --help.
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("--config", default=None, help="YAML config (default: glimpse.yaml at the site root, if any).")
    shared.add_argument(
        "--site-root",
        dest="site_root",
        default=None,
        help="Site root (default: the config file's directory, else the working directory).",
    )
    shared.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        choices=LOG_LEVELS,
        help="Logging verbosity; overrides global.log_level.",
    )
    shared.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Log what would happen and stop.",
    )
    return shared


def build_parser() -> argparse.ArgumentParser:
    shared = _shared_options()
    parser = argparse.ArgumentParser(
        prog="glimpse",
        description="glimpse — check and render the posts of a static blog.",
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    check = commands.add_parser("check", parents=[shared], help="Run all publishing checks.")
    check.add_argument("paths", nargs="*", help=_PATHS_HELP)
    check.add_argument("--offline", action="store_true", help="Skip image reachability, which needs the network.")
    check.add_argument(
        "--report-dir",
        dest="report_dir",
        default=None,
        help="Also write check_report.json and check_report.txt here.",
    )
    check.set_defaults(func=handle_check)

    links = commands.add_parser("links", parents=[shared], help="Check that every image resolves.")
    links.add_argument("paths", nargs="*", help=_PATHS_HELP)
    links.set_defaults(func=handle_links)

    render = commands.add_parser("render", parents=[shared], help="Render posts to HTML.")
    render.add_argument("paths", nargs="*", help=_PATHS_HELP)
    render.add_argument("--output", default=None, help="Output directory (default: site.output_directory).")
    render.set_defaults(func=handle_render)

    info = commands.add_parser("info", parents=[shared], help="Log environment, config and posts.")
    info.set_defaults(func=handle_info)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point behind the `glimpse` script. Without a subcommand, print help and exit 1."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        sys.exit(USER_ERROR)

    sys.exit(handler(args))


if __name__ == "__main__":
    main()
