#!/usr/bin/env python3
"""
Org Labels - Manage issue labels across every repository of a GitHub
organization.

Single-label commands (add, remove, update, rename) apply one change to all
repositories of an organization. The standardize command reads a list of
labels from config/github_labels.json in a configuration repository and
creates, updates and (with --destructive) deletes labels so that every
repository matches it.
"""

from __future__ import annotations

import sys
from typing import List, NoReturn, Optional

from argument_parser import parse_arguments
from sync_orchestrator import LabelSyncOrchestrator


def main(argv: Optional[List[str]] = None) -> NoReturn:
    cfg = parse_arguments(argv)
    orchestrator = LabelSyncOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
