#!/usr/bin/env python3
"""Configuration dataclasses for org-labels."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_LABELS_FILE = "github_labels.json"
USER_AGENT = "org-labels"


class Command(Enum):
    """Enumeration for the supported sub-commands."""
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    RENAME = "rename"
    STANDARDIZE = "standardize"


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub API access configuration, read-only once built."""
    api_url: str
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    user_agent: str = USER_AGENT
    timeout_s: float = 30.0


@dataclass
class SyncBehaviorConfig:
    """Fan-out and discovery behavior configuration."""
    dry_run: bool = False
    destructive: bool = False
    per_page: int = 100
    max_concurrency: int = 20
    max_failed_pages: int = 3
    labels_file: str = DEFAULT_LABELS_FILE


@dataclass
class CommandConfig:
    """The requested command and its positional arguments.

    ``target`` is an organization or an explicit ``org/repo`` pair.
    ``label`` is the label to add/remove/update, or the old name for rename.
    """
    command: Command
    target: str
    label: Optional[str] = None
    color: Optional[str] = None
    new_label: Optional[str] = None
    config_repo: Optional[str] = None


@dataclass
class Config:
    """Main configuration for one org-labels invocation."""
    github: GitHubConfig
    command: CommandConfig
    behavior: SyncBehaviorConfig
