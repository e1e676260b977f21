#!/usr/bin/env python3
"""Fetching current and desired label sets."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, List

from errors import ConfigFormatError, TransportError
from github_client import GitHubClient
from logging_utils import Logger
from models import Label
from security import SecurityValidator


def parse_desired_labels(document: Any) -> List[Label]:
    """Turn a decoded labels document into an ordered list of labels.

    The document must be a JSON list of objects carrying ``name`` and a
    valid hex ``color``; anything else raises ConfigFormatError.
    """
    if not isinstance(document, list):
        raise ConfigFormatError("labels configuration must be a json array")

    labels: List[Label] = []
    for idx, entry in enumerate(document):
        if not isinstance(entry, dict):
            raise ConfigFormatError(f"labels configuration entry {idx} is not an object")
        name = entry.get("name")
        color = entry.get("color")
        try:
            SecurityValidator.validate_label_name(name)
            SecurityValidator.validate_color(color)
        except ValueError as e:
            raise ConfigFormatError(f"labels configuration entry {idx}: {e}") from e
        labels.append(Label(name=name, color=color))
    return labels


def decode_contents(body: Any) -> Any:
    """Decode a contents API response whose ``content`` is base64 JSON."""
    if not isinstance(body, dict) or "content" not in body:
        raise ConfigFormatError("labels configuration response has no content")
    try:
        raw = base64.b64decode(body["content"])
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise ConfigFormatError(f"labels configuration is not valid json: {e}") from e


class LabelInventory:
    """Reads label lists from repositories."""

    def __init__(self, client: GitHubClient, per_page: int = 100) -> None:
        self.client = client
        self.per_page = per_page

    async def fetch_labels(self, org: str, repo: str) -> List[Label]:
        """Return the current labels of ``org/repo``, or [] when the call fails."""
        try:
            body = await self.client.get_json(
                f"/repos/{org}/{repo}/labels", params={"per_page": self.per_page}
            )
        except TransportError as e:
            Logger.error(
                f"error fetching labels of {org}/{repo}: {e}; headers: {e.headers}"
            )
            return []

        if not isinstance(body, list):
            Logger.warn(f"unexpected label listing for {org}/{repo}")
            return []
        return [
            Label(name=item["name"], color=item.get("color"))
            for item in body
            if isinstance(item, dict) and item.get("name")
        ]

    async def fetch_desired(self, config_repo: str, labels_file: str) -> List[Label]:
        """Load the desired labels from ``config/<labels_file>`` in ``config_repo``.

        TransportError propagates so the caller can stop before touching any
        repository; a malformed document raises ConfigFormatError.
        """
        body = await self.client.get_json(
            f"/repos/{config_repo}/contents/config/{labels_file}"
        )
        Logger.info(
            f"GitHub rate limit remaining: {self.client.rate_limit_remaining}"
        )
        return parse_desired_labels(decode_contents(body))
