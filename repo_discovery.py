#!/usr/bin/env python3
"""GitHub API wrapper for discovering repositories of an organization."""

from __future__ import annotations

from typing import List, Set

from errors import TransportError
from github_client import GitHubClient
from logging_utils import Logger


class RepositoryDiscovery:
    """Walks the paginated repository listing of an organization or user."""

    def __init__(
        self, client: GitHubClient, per_page: int = 100, max_failed_pages: int = 3
    ) -> None:
        self.client = client
        self.per_page = per_page
        self.max_failed_pages = max_failed_pages

    async def discover(self, org: str) -> List[str]:
        """Return the names of all repositories of ``org``, deduplicated.

        Paging stops on an empty page or on a page shorter than the previous
        successful one. When the repository count is an exact multiple of the
        page size this means one extra, empty page is fetched. A failed page
        does not take part in that check; paging goes on with the next index
        until ``max_failed_pages`` consecutive failures.
        """
        Logger.info(f"discovering repositories under: {org}")
        repos: List[str] = []
        seen: Set[str] = set()
        page = 0
        last_length = 0
        failed_pages = 0

        while True:
            page += 1
            try:
                batch = await self.client.get_json(
                    f"/users/{org}/repos",
                    params={"page": page, "per_page": self.per_page},
                )
            except TransportError as e:
                failed_pages += 1
                Logger.error(
                    f"error searching {org}'s repos (page {page}): {e}; "
                    f"headers: {e.headers}"
                )
                if failed_pages >= self.max_failed_pages:
                    Logger.warn(
                        f"giving up on {org} after {failed_pages} failed pages"
                    )
                    break
                continue

            failed_pages = 0
            if not isinstance(batch, list):
                Logger.warn(f"unexpected repository listing on page {page} for {org}")
                batch = []

            for repo in batch:
                name = repo.get("name") if isinstance(repo, dict) else None
                if not name or name in seen:
                    continue
                seen.add(name)
                repos.append(name)
                Logger.debug(f"found: {org}/{name}")

            # An empty page, or one shorter than the last, is the final page
            if not batch or len(batch) < last_length:
                break
            last_length = len(batch)

        Logger.info(f"found {len(repos)} repositories in {org}")
        return repos
