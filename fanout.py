#!/usr/bin/env python3
"""Concurrent application of label operations across repositories."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Dict, Iterable, List, Mapping, Sequence

from github_client import GitHubClient
from models import LabelOperation, Outcome


async def settle(calls: Iterable[Awaitable[Outcome]]) -> List[Outcome]:
    """Run all ``calls`` concurrently and return outcomes in settlement order."""
    tasks = [asyncio.ensure_future(call) for call in calls]
    return [await task for task in asyncio.as_completed(tasks)]


class FanOutExecutor:
    """Issues one request per operation/repository pair, all at once, no retries."""

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    @staticmethod
    def labels_path(org: str, repo: str) -> str:
        return f"/repos/{org}/{repo}/labels"

    def _send(self, org: str, repo: str, operation: LabelOperation) -> Awaitable[Outcome]:
        method, suffix, body = operation.to_request()
        return self.client.send(
            method,
            self.labels_path(org, repo) + suffix,
            json=body,
            label=operation.name,
        )

    async def apply(
        self, org: str, repo: str, operations: Sequence[LabelOperation]
    ) -> List[Outcome]:
        """Apply a computed operation list to one repository."""
        return await settle(self._send(org, repo, op) for op in operations)

    async def apply_one(
        self, org: str, repos: Sequence[str], operation: LabelOperation
    ) -> List[Outcome]:
        """Apply a single operation to every repository in ``repos``."""
        return await settle(self._send(org, repo, operation) for repo in repos)

    async def apply_many(
        self, org: str, plan: Mapping[str, Sequence[LabelOperation]]
    ) -> Dict[str, List[Outcome]]:
        """Apply per-repository operation lists, all repositories concurrently."""
        repos = list(plan)
        results = await asyncio.gather(
            *(self.apply(org, repo, plan[repo]) for repo in repos)
        )
        return dict(zip(repos, results))
