"""Tests for repository discovery pagination."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, Mock

from errors import TransportError
from repo_discovery import RepositoryDiscovery


def _make_discovery(
    lengths: List[Optional[int]], max_failed_pages: int = 3
) -> RepositoryDiscovery:
    """Build a discovery whose page N has ``lengths[N-1]`` repos (None fails)."""

    def get_json(path: str, params: Dict[str, int]):
        page = params['page']
        if page > len(lengths):
            raise AssertionError(f'unexpected page request: {page}')
        length = lengths[page - 1]
        if length is None:
            raise TransportError('boom', status_code=502, headers={'x-ratelimit-remaining': '42'})
        return [{'name': f'repo-{page}-{i}'} for i in range(length)]

    client = Mock()
    client.get_json = AsyncMock(side_effect=get_json)
    return RepositoryDiscovery(client, per_page=100, max_failed_pages=max_failed_pages)


def test_short_last_page_terminates() -> None:
    """[100, 100, 100, 43] stops after 4 pages with every repo collected."""
    discovery = _make_discovery([100, 100, 100, 43])

    repos = asyncio.run(discovery.discover('acme'))

    assert len(repos) == 343
    assert discovery.client.get_json.await_count == 4


def test_empty_first_page_terminates_immediately() -> None:
    """An organization without repositories costs a single request."""
    discovery = _make_discovery([0])

    assert asyncio.run(discovery.discover('acme')) == []
    assert discovery.client.get_json.await_count == 1


def test_exact_multiple_fetches_one_extra_page() -> None:
    """When the count is a multiple of the page size an empty page ends paging."""
    discovery = _make_discovery([100, 100, 0])

    repos = asyncio.run(discovery.discover('acme'))

    assert len(repos) == 200
    assert discovery.client.get_json.await_count == 3


def test_requests_user_repos_listing() -> None:
    """Pages are requested from the users listing, 1-indexed, with page size."""
    discovery = _make_discovery([2])

    asyncio.run(discovery.discover('acme'))

    discovery.client.get_json.assert_awaited_once_with(
        '/users/acme/repos', params={'page': 1, 'per_page': 100}
    )


def test_failed_page_is_skipped_and_paging_continues() -> None:
    """A failed page neither stops paging nor resets the previous length."""
    discovery = _make_discovery([100, None, 100, 7])

    repos = asyncio.run(discovery.discover('acme'))

    assert len(repos) == 207
    assert discovery.client.get_json.await_count == 4


def test_consecutive_failures_are_bounded() -> None:
    """Discovery gives up after max_failed_pages consecutive failures."""
    discovery = _make_discovery([100, None, None, None, 100], max_failed_pages=3)

    repos = asyncio.run(discovery.discover('acme'))

    assert len(repos) == 100
    assert discovery.client.get_json.await_count == 4


def test_duplicate_names_are_dropped() -> None:
    """Repos repeated across pages are returned once, first position kept."""
    pages = [
        [{'name': 'web'}, {'name': 'api'}],
        [{'name': 'api'}],
    ]
    client = Mock()
    client.get_json = AsyncMock(side_effect=pages)
    discovery = RepositoryDiscovery(client, per_page=2)

    assert asyncio.run(discovery.discover('acme')) == ['web', 'api']
