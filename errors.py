#!/usr/bin/env python3
"""Exception types for org-labels."""

from __future__ import annotations

from typing import Mapping, Optional


class ValidationError(ValueError):
    """Raised when user input or a configuration document is malformed."""


class ConfigFormatError(ValidationError):
    """Raised when the desired labels document has the wrong shape."""


class TransportError(Exception):
    """Raised when a read call to the GitHub API fails.

    Carries the response status (None when no response arrived) and the
    response headers so callers can report rate-limit diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.headers = dict(headers or {})

    def rate_limit_remaining(self) -> Optional[str]:
        return self.headers.get("x-ratelimit-remaining")
