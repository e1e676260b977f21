#!/usr/bin/env python3
"""Main orchestrator for synchronizing labels across an organization."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Tuple

import httpx

from config import Command, Config
from errors import TransportError, ValidationError
from fanout import FanOutExecutor
from github_client import GitHubClient
from label_inventory import LabelInventory
from logging_utils import Logger
from models import Label, LabelOperation, Outcome, RunSummary
from reconcile import reconcile
from repo_discovery import RepositoryDiscovery
from results import summarize
from security import SecurityValidator
from utils import qualify_config_repo, split_target

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_GITHUB_ERROR = 31


class LabelSyncOrchestrator:
    def __init__(
        self, cfg: Config, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        self.cfg = cfg
        self._transport = transport

    def run(self) -> int:
        try:
            self._preflight()
            return asyncio.run(self._dispatch())
        except ValidationError as e:
            Logger.error(f"validation error: {e}")
            return EXIT_VALIDATION_ERROR
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR

    def _preflight(self) -> None:
        """Validate everything that can be checked before any request is sent."""
        cmd = self.cfg.command
        SecurityValidator.validate_target(cmd.target)

        if cmd.command in (Command.ADD, Command.UPDATE):
            SecurityValidator.validate_color(cmd.color)
        if cmd.command is not Command.STANDARDIZE:
            SecurityValidator.validate_label_name(cmd.label)
        if cmd.command is Command.RENAME:
            SecurityValidator.validate_label_name(cmd.new_label)
        if cmd.command is Command.STANDARDIZE and not cmd.config_repo:
            raise ValidationError("standardize requires a configuration repository")

    async def _dispatch(self) -> int:
        handlers = {
            Command.ADD: self.add,
            Command.REMOVE: self.remove,
            Command.UPDATE: self.update,
            Command.RENAME: self.rename,
            Command.STANDARDIZE: self.standardize,
        }
        async with GitHubClient(
            self.cfg.github,
            max_concurrency=self.cfg.behavior.max_concurrency,
            transport=self._transport,
        ) as client:
            return await handlers[self.cfg.command.command](client)

    async def add(self, client: GitHubClient) -> int:
        """Add a label with the given color to every repository."""
        cmd = self.cfg.command
        operation = LabelOperation.create(cmd.label, cmd.color)
        return await self._handle_label(client, operation, "done adding labels")

    async def remove(self, client: GitHubClient) -> int:
        """Remove a label from every repository."""
        operation = LabelOperation.delete(self.cfg.command.label)
        return await self._handle_label(client, operation, "done removing labels")

    async def update(self, client: GitHubClient) -> int:
        """Change the color of an existing label in every repository."""
        cmd = self.cfg.command
        operation = LabelOperation.update(cmd.label, cmd.color)
        return await self._handle_label(client, operation, "done updating labels")

    async def rename(self, client: GitHubClient) -> int:
        """Rename an existing label in every repository."""
        cmd = self.cfg.command
        operation = LabelOperation.rename(cmd.label, cmd.new_label)
        return await self._handle_label(client, operation, "done renaming labels")

    async def standardize(self, client: GitHubClient) -> int:
        """Bring every repository's labels in line with the configuration repo."""
        cmd = self.cfg.command
        behavior = self.cfg.behavior
        org, repos = await self._resolve_repositories(client)
        config_repo = qualify_config_repo(org, cmd.config_repo)

        inventory = LabelInventory(client, per_page=behavior.per_page)
        try:
            desired = await inventory.fetch_desired(config_repo, behavior.labels_file)
        except TransportError as e:
            Logger.error(
                f"error fetching labels configuration from {config_repo}: {e}; "
                f"headers: {e.headers}"
            )
            return EXIT_GITHUB_ERROR

        Logger.info(f"checking {len(desired)} labels across {len(repos)} repos")
        plan = await self._plan(inventory, org, repos, desired)

        if behavior.dry_run:
            self._log_plan(org, plan)
            Logger.info("dry-run completed")
            return EXIT_SUCCESS

        outcomes = await FanOutExecutor(client).apply_many(org, plan)
        self._report(summarize(outcomes))
        Logger.info("done standardizing labels")
        return EXIT_SUCCESS

    async def _plan(
        self,
        inventory: LabelInventory,
        org: str,
        repos: List[str],
        desired: List[Label],
    ) -> Dict[str, List[LabelOperation]]:
        """Fetch every inventory concurrently and reconcile each one."""
        inventories = await asyncio.gather(
            *(inventory.fetch_labels(org, repo) for repo in repos)
        )
        return {
            repo: reconcile(desired, current, self.cfg.behavior.destructive)
            for repo, current in zip(repos, inventories)
        }

    async def _handle_label(
        self, client: GitHubClient, operation: LabelOperation, done: str
    ) -> int:
        org, repos = await self._resolve_repositories(client)

        if self.cfg.behavior.dry_run:
            self._log_plan(org, {repo: [operation] for repo in repos})
            Logger.info("dry-run completed")
            return EXIT_SUCCESS

        outcomes: List[Outcome] = await FanOutExecutor(client).apply_one(
            org, repos, operation
        )
        self._report(summarize({org: outcomes}))
        Logger.info(done)
        return EXIT_SUCCESS

    async def _resolve_repositories(self, client: GitHubClient) -> Tuple[str, List[str]]:
        """Return the organization and its repositories, or the single named one."""
        org, repo = split_target(self.cfg.command.target)
        if repo:
            return org, [repo]

        discovery = RepositoryDiscovery(
            client,
            per_page=self.cfg.behavior.per_page,
            max_failed_pages=self.cfg.behavior.max_failed_pages,
        )
        return org, await discovery.discover(org)

    @staticmethod
    def _log_plan(org: str, plan: Dict[str, List[LabelOperation]]) -> None:
        total = len(plan)
        for idx, (repo, operations) in enumerate(plan.items(), start=1):
            if not operations:
                Logger.info(f"[{idx}/{total}] {org}/{repo}: up to date")
                continue
            for operation in operations:
                Logger.info(f"[{idx}/{total}] would {operation.describe()} in {org}/{repo}")

    @staticmethod
    def _report(summary: RunSummary) -> None:
        Logger.info(
            f"{summary.updates} label updates across "
            f"{summary.affected_repositories} repos"
        )
