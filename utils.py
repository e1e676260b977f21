#!/usr/bin/env python3
"""Utility functions for org-labels."""

from typing import List, Optional, Tuple
from urllib.parse import quote, unquote


def split_target(target: str) -> Tuple[str, Optional[str]]:
    """Split ``org`` or ``org/repo`` into ``(org, repo)``."""
    if "/" in target:
        org, repo = target.split("/", 1)
        return org, repo
    return target, None


def qualify_config_repo(org: str, config_repo: str) -> str:
    """Return ``owner/repo`` for the configuration repository.

    A bare repository name is taken to live in ``org``.
    """
    if "/" in config_repo:
        return config_repo
    return f"{org}/{config_repo}"


def quote_label(name: str) -> str:
    """Quote a label name for use as a single URL path segment."""
    return quote(name, safe="")


def _path_segments(path: str) -> List[str]:
    return [p for p in path.split("?", 1)[0].split("/") if p]


def repository_from_path(path: str) -> str:
    """Map a request path to ``owner/repo``.

    Example: '/api/v3/repos/acme/web/labels/bug' -> 'acme/web'. Paths that do
    not address a repository are returned unchanged.
    """
    parts = _path_segments(path)
    for idx, part in enumerate(parts[:-2]):
        if part == "repos":
            return f"{parts[idx + 1]}/{parts[idx + 2]}"
    return path


def label_from_path(path: str) -> str:
    """Recover a label name from the final segment of a request path."""
    parts = _path_segments(path)
    return unquote(parts[-1]) if parts else ""
