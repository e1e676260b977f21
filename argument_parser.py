#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Tuple

from config import (DEFAULT_API_URL, DEFAULT_LABELS_FILE, Command,
                    CommandConfig, Config, GitHubConfig, SyncBehaviorConfig)
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_AUTH_ERROR = 40
EXIT_VALIDATION_ERROR = 3


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="org-labels",
        description="Manage issue labels across all repositories of a GitHub organization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s add acme bug ee0701
  %(prog)s remove acme wontfix
  %(prog)s update acme bug fc2929
  %(prog)s rename acme bug defect
  %(prog)s standardize acme acme/config --destructive
  %(prog)s --dry-run standardize acme/web config
        """,
    )
    return parser


def _add_github_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub-related arguments to parser."""
    parser.add_argument(
        "--gh-api",
        dest="gh_api_url",
        default=DEFAULT_API_URL,
        help="Base URL of the GitHub API",
    )
    parser.add_argument(
        "--gh-token",
        dest="gh_token",
        help="GitHub API token (or set GITHUB_API_TOKEN / GITHUB_TOKEN env var)",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout_s",
        type=float,
        default=30.0,
        help="Per-request timeout in seconds (default: 30)",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add behavior and configuration arguments to parser."""
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="List actions without doing them",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Print debug output",
    )
    parser.add_argument(
        "--per-page",
        dest="per_page",
        type=int,
        default=100,
        help="Page size for repository and label listings (default: 100)",
    )
    parser.add_argument(
        "--max-concurrency",
        dest="max_concurrency",
        type=int,
        default=20,
        help="Maximum number of requests in flight (default: 20)",
    )
    parser.add_argument(
        "--max-failed-pages",
        dest="max_failed_pages",
        type=int,
        default=3,
        help="Stop discovery after this many consecutive failed pages (default: 3)",
    )


def _add_command_parsers(parser: argparse.ArgumentParser) -> None:
    """Add one sub-parser per command."""
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    add = subparsers.add_parser("add", help="Add a label to all repos")
    add.add_argument("target", metavar="ORG[/REPO]")
    add.add_argument("label")
    add.add_argument("color", help="Hex color without '#', e.g. 09aF00")

    remove = subparsers.add_parser("remove", help="Remove a label from all repos")
    remove.add_argument("target", metavar="ORG[/REPO]")
    remove.add_argument("label")

    update = subparsers.add_parser("update", help="Change the color of a label in all repos")
    update.add_argument("target", metavar="ORG[/REPO]")
    update.add_argument("label")
    update.add_argument("color", help="Hex color without '#', e.g. 09aF00")

    rename = subparsers.add_parser("rename", help="Rename a label in all repos")
    rename.add_argument("target", metavar="ORG[/REPO]")
    rename.add_argument("label", metavar="old_label")
    rename.add_argument("new_label")

    standardize = subparsers.add_parser(
        "standardize",
        help="Sync all repos with config/<labels-file> of a config repo",
    )
    standardize.add_argument("target", metavar="ORG[/REPO]")
    standardize.add_argument("config_repo", metavar="CONFIG_REPO")
    standardize.add_argument(
        "-d",
        "--destructive",
        action="store_true",
        dest="destructive",
        help="Delete labels that are not in the configuration",
    )
    standardize.add_argument(
        "--labels-file",
        dest="labels_file",
        default=DEFAULT_LABELS_FILE,
        help=f"File name under config/ in the config repo (default: {DEFAULT_LABELS_FILE})",
    )


def _validate_parsed_arguments(args) -> Tuple[str, CommandConfig]:
    """Validate parsed arguments before any request is made."""
    try:
        validated_api_url = SecurityValidator.validate_url(args.gh_api_url, ["https"])
        target = SecurityValidator.validate_target(args.target)

        label = getattr(args, "label", None)
        if label is not None:
            label = SecurityValidator.validate_label_name(label)

        new_label = getattr(args, "new_label", None)
        if new_label is not None:
            new_label = SecurityValidator.validate_label_name(new_label)

        color = getattr(args, "color", None)
        if color is not None:
            color = SecurityValidator.validate_color(color)

        config_repo = getattr(args, "config_repo", None)
        if config_repo is not None:
            SecurityValidator.validate_target(config_repo)

        labels_file = getattr(args, "labels_file", DEFAULT_LABELS_FILE)
        if not labels_file or "/" in labels_file or ".." in labels_file:
            raise ValueError("labels file must be a plain file name")

        if not 1 <= args.per_page <= 100:
            raise ValueError("page size must be between 1 and 100")
        if not 1 <= args.max_concurrency <= 100:
            raise ValueError("max concurrency must be between 1 and 100")
        if args.max_failed_pages < 1:
            raise ValueError("max failed pages must be at least 1")
        if args.timeout_s <= 0 or args.timeout_s > 300:
            raise ValueError("timeout must be between 0 and 300 seconds")

        Logger.security_event(
            "CONFIG_VALIDATION", "successfully validated all configuration inputs"
        )

        return validated_api_url, CommandConfig(
            command=Command(args.command),
            target=target,
            label=label,
            color=color,
            new_label=new_label,
            config_repo=config_repo,
        )

    except ValueError as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_VALIDATION_ERROR)


def _get_credentials(args) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """Return ``(token, username, password)``; a token wins over basic auth."""
    token = (
        args.gh_token
        or os.getenv("GITHUB_API_TOKEN")
        or os.getenv("GITHUB_TOKEN")
    )
    if token:
        return token, None, None

    username = os.getenv("GITHUB_USERNAME")
    password = os.getenv("GITHUB_PASSWORD")
    if username and password:
        return None, username, password

    Logger.error(
        "error: requires a personal GITHUB_API_TOKEN (or --gh-token) or both "
        "GITHUB_USERNAME and GITHUB_PASSWORD"
    )
    sys.exit(EXIT_AUTH_ERROR)


def parse_arguments(argv: Optional[List[str]] = None) -> Config:
    """Parse command line arguments and return configuration object."""
    parser = _create_argument_parser()
    _add_github_arguments(parser)
    _add_behavior_arguments(parser)
    _add_command_parsers(parser)

    args = parser.parse_args(argv)
    Logger.verbose = args.verbose

    validated_api_url, command = _validate_parsed_arguments(args)
    token, username, password = _get_credentials(args)

    return Config(
        github=GitHubConfig(
            api_url=validated_api_url,
            token=token,
            username=username,
            password=password,
            timeout_s=float(args.timeout_s),
        ),
        command=command,
        behavior=SyncBehaviorConfig(
            dry_run=args.dry_run,
            destructive=getattr(args, "destructive", False),
            per_page=args.per_page,
            max_concurrency=args.max_concurrency,
            max_failed_pages=args.max_failed_pages,
            labels_file=getattr(args, "labels_file", DEFAULT_LABELS_FILE),
        ),
    )
