# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the glimpse CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code from exit_codes. No print() calls; everything goes through the
structured logger.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from glimpse.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, USER_ERROR, VALIDATION_ERROR
from glimpse.config.exceptions import ConfigError
from glimpse.config.loader import find_config, load_config
from glimpse.config.schema import GlimpseConfig, default_config
from glimpse.logging.logger import get_logger
from glimpse.runtime.bootstrap import bootstrap


class _Setup:
    """What every command has after config loading and bootstrap."""

    def __init__(self, config: GlimpseConfig, site_root: Path, logger: logging.Logger) -> None:
        self.config = config
        self.site_root = site_root
        self.logger = logger


def _resolve_site_root(args: argparse.Namespace) -> Path:
    """--site-root wins, then the config file's directory, then the working directory."""
    if getattr(args, "site_root", None):
        return Path(args.site_root).resolve()
    if args.config is not None:
        return Path(args.config).resolve().parent
    return Path.cwd().resolve()


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[_Setup]]:
    """
    The shared setup that every command needs: load config, run bootstrap.

    Without --config, a glimpse.yaml at the site root is picked up; with
    neither, the defaults apply.

    Returns (exit_code, setup). If exit_code is not SUCCESS the caller should
    return it immediately.
    """
    logger = get_logger(f"glimpse.cli.{command_name}", log_level=args.log_level)

    site_root = _resolve_site_root(args)
    config_path = Path(args.config) if args.config is not None else find_config(site_root)

    config = default_config()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "config": str(err.path), "error": err.reason},
            )
            return CONFIG_ERROR, None
    else:
        logger.debug(
            "No config found, running with defaults",
            extra={"command": command_name, "site_root": str(site_root)},
        )

    bootstrap(config.global_config, site_root, log_level=args.log_level)
    logger = get_logger(f"glimpse.cli.{command_name}", log_level=args.log_level)

    return SUCCESS, _Setup(config, site_root, logger)


def _resolve_post_paths(args: argparse.Namespace, setup: _Setup) -> Optional[list[Path]]:
    """
    Expand the positional paths into post files.

    Directories contribute their posts; files are taken as given. With no
    paths, the configured posts directory is used. Returns None (after
    logging) when an explicitly named path doesn't exist.
    """
    from glimpse.post.loader import discover_posts

    raw_paths = getattr(args, "paths", None) or []
    if not raw_paths:
        return discover_posts(setup.site_root / setup.config.site.posts_directory)

    resolved: list[Path] = []
    for raw in raw_paths:
        path = Path(raw)
        if path.is_dir():
            resolved.extend(discover_posts(path))
        elif path.is_file():
            resolved.append(path)
        else:
            setup.logger.error("No such post or directory", extra={"path": raw})
            return None
    return sorted(set(resolved))


def handle_check(args: argparse.Namespace) -> int:
    """Run every publishing check over the selected posts."""
    exit_code, setup = _load_and_bootstrap(args, "check")
    if exit_code != SUCCESS or setup is None:
        return exit_code
    logger = setup.logger

    try:
        paths = _resolve_post_paths(args, setup)
        if paths is None:
            return USER_ERROR
        if not paths:
            logger.warning("No posts found, nothing to check", extra={"command": "check"})
            return SUCCESS

        logger.info(
            "Starting checks",
            extra={"command": "check", "posts": len(paths), "offline": args.offline, "dry_run": args.dry_run},
        )

        if args.dry_run:
            logger.info("Dry run — would check posts", extra={"paths": [str(p) for p in paths]})
            return SUCCESS

        from glimpse.checks.pipeline import run_checks

        report = run_checks(paths, setup.config, setup.site_root, offline=args.offline)

        if args.report_dir is not None:
            from glimpse.reporting.writer import write_report

            write_report(report, Path(args.report_dir))

        return SUCCESS if report.passed else VALIDATION_ERROR

    except Exception as err:
        logger.error("Check failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_links(args: argparse.Namespace) -> int:
    """Check only that the images of the selected posts resolve."""
    exit_code, setup = _load_and_bootstrap(args, "links")
    if exit_code != SUCCESS or setup is None:
        return exit_code
    logger = setup.logger

    try:
        if not setup.config.check.check_images:
            logger.info("Image checks are disabled in the config", extra={"command": "links"})
            return SUCCESS

        paths = _resolve_post_paths(args, setup)
        if paths is None:
            return USER_ERROR
        if not paths:
            logger.warning("No posts found, nothing to check", extra={"command": "links"})
            return SUCCESS

        if args.dry_run:
            logger.info("Dry run — would check images", extra={"paths": [str(p) for p in paths]})
            return SUCCESS

        from glimpse.checks.pipeline import LINK_CHECK, run_checks

        report = run_checks(paths, setup.config, setup.site_root, only=[LINK_CHECK])
        return SUCCESS if report.passed else VALIDATION_ERROR

    except Exception as err:
        logger.error("Link check failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_render(args: argparse.Namespace) -> int:
    """
    Render the selected posts to HTML.

    The offline checks run first; a post with errors would publish broken,
    so nothing is written unless every check passes.
    """
    exit_code, setup = _load_and_bootstrap(args, "render")
    if exit_code != SUCCESS or setup is None:
        return exit_code
    logger = setup.logger

    try:
        paths = _resolve_post_paths(args, setup)
        if paths is None:
            return USER_ERROR

        from glimpse.checks.pipeline import run_checks

        report = run_checks(paths, setup.config, setup.site_root, offline=True)
        if not report.passed:
            logger.error(
                "Posts have errors, not rendering",
                extra={"errors": report.error_count},
            )
            return VALIDATION_ERROR

        output_dir = (
            Path(args.output).resolve()
            if args.output is not None
            else setup.site_root / setup.config.site.output_directory
        )

        if args.dry_run:
            logger.info(
                "Dry run — would render posts",
                extra={"posts": len(paths), "output_dir": str(output_dir)},
            )
            return SUCCESS

        from glimpse.post.loader import load_post
        from glimpse.render.exceptions import RenderError
        from glimpse.render.site import build_site

        posts = [load_post(path) for path in paths]
        try:
            result = build_site(posts, setup.config.site, setup.site_root, output_dir)
        except RenderError as err:
            logger.error("Cannot render site", extra={"error": str(err)})
            return USER_ERROR

        logger.info(
            "Render finished",
            extra={"pages": len(result.pages), "output_dir": result.output_directory},
        )
        return SUCCESS

    except Exception as err:
        logger.error("Render failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_info(args: argparse.Namespace) -> int:
    """Log the environment, the effective config and the posts that would be processed."""
    exit_code, setup = _load_and_bootstrap(args, "info")
    if exit_code != SUCCESS or setup is None:
        return exit_code
    logger = setup.logger

    try:
        from glimpse.post.exceptions import PostFormatError
        from glimpse.post.loader import discover_posts, load_post
        from glimpse.runtime.environment import get_library_versions

        logger.info("Output libraries", extra={"versions": get_library_versions()})

        config = setup.config
        posts_dir = setup.site_root / config.site.posts_directory
        logger.info(
            "Site configuration",
            extra={
                "site_root": str(setup.site_root),
                "title": config.site.title,
                "posts_directory": str(posts_dir),
                "output_directory": config.site.output_directory,
                "authors": sorted(config.site.authors),
                "required_fields": list(config.check.required_fields),
                "check_images": config.check.check_images,
            },
        )

        for path in discover_posts(posts_dir):
            try:
                post = load_post(path)
            except PostFormatError as err:
                logger.warning("Unreadable post", extra={"path": str(path), "error": str(err)})
                continue
            logger.info(
                "Post",
                extra={
                    "path": str(path),
                    "slug": post.slug,
                    "title": post.title,
                    "author": post.metadata.author,
                    "date": post.date.isoformat() if post.date else None,
                    "layout": post.metadata.layout,
                },
            )

        return SUCCESS

    except Exception as err:
        logger.error("Info failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR
