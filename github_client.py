#!/usr/bin/env python3
"""Async GitHub REST client shared by discovery, inventory and fan-out."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx

from config import GitHubConfig
from errors import TransportError
from logging_utils import Logger
from models import Outcome


class GitHubClient:
    """Thin wrapper around ``httpx.AsyncClient`` with GitHub auth and headers.

    Use as an async context manager. Every request waits on a shared
    semaphore, so at most ``max_concurrency`` calls are in flight at once.
    """

    def __init__(
        self,
        config: GitHubConfig,
        max_concurrency: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not config.token and not (config.username and config.password):
            raise ValueError("GitHub token or username/password is required")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.config = config
        self.max_concurrency = max_concurrency
        self.rate_limit_remaining: Optional[str] = None
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._semaphore: Optional[asyncio.Semaphore] = None

    async def __aenter__(self) -> "GitHubClient":
        Logger.debug(f"init github API: {self.config.api_url}")
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers=self._get_api_headers(),
            auth=self._get_auth(),
            timeout=self.config.timeout_s,
            transport=self._transport,
        )
        self._semaphore = asyncio.Semaphore(self.max_concurrency)
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
        self._client = None
        self._semaphore = None

    def _get_api_headers(self) -> Dict[str, str]:
        """Get standard API headers for GitHub requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": self.config.user_agent,
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def _get_auth(self) -> Optional[httpx.BasicAuth]:
        if self.config.token:
            return None
        return httpx.BasicAuth(self.config.username or "", self.config.password or "")

    def _require_client(self) -> httpx.AsyncClient:
        if self._client is None or self._semaphore is None:
            raise RuntimeError("github client used outside of 'async with'")
        return self._client

    def _track_rate_limit(self, response: httpx.Response) -> None:
        remaining = response.headers.get("x-ratelimit-remaining")
        if remaining is not None:
            self.rate_limit_remaining = remaining

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Raises TransportError on network failure, a non-2xx status or a body
        that is not JSON.
        """
        client = self._require_client()
        try:
            async with self._semaphore:
                response = await client.get(path, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"GET {path} failed: {e}") from e

        self._track_rate_limit(response)
        if not response.is_success:
            raise TransportError(
                f"GET {path} returned {response.status_code}",
                status_code=response.status_code,
                headers=response.headers,
            )
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"GET {path} returned a body that is not JSON",
                status_code=response.status_code,
                headers=response.headers,
            ) from e

    async def send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        label: Optional[str] = None,
    ) -> Outcome:
        """Issue one mutation call; never raises for remote or network errors."""
        client = self._require_client()
        try:
            async with self._semaphore:
                response = await client.request(method, path, json=json)
        except httpx.HTTPError as e:
            return Outcome(status_code=0, path=self._full_path(path), body=str(e), label=label)

        self._track_rate_limit(response)
        return Outcome(
            status_code=response.status_code,
            path=response.request.url.raw_path.decode("ascii").split("?", 1)[0],
            body=self._decode_body(response),
            label=label,
        )

    def _full_path(self, path: str) -> str:
        base = httpx.URL(self.config.api_url).raw_path.decode("ascii").rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
