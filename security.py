#!/usr/bin/env python3
"""Input validation and log sanitizing for org-labels."""

import re
from typing import List, Optional

from errors import ValidationError


class SecurityValidator:
    """Validation utilities for command line input and logged text."""

    MAX_REPO_NAME_LENGTH = 100
    MAX_ORG_NAME_LENGTH = 39
    MAX_LABEL_NAME_LENGTH = 50
    MAX_URL_LENGTH = 2048

    # Hex color without the leading '#', 3 or 6 digits
    COLOR_PATTERN = re.compile(r"^(?:[0-9A-F]{3}|[0-9A-F]{6})$", re.IGNORECASE)
    SAFE_ORG_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")
    SAFE_REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

    @classmethod
    def validate_color(cls, color: str) -> str:
        """Validate a hex color code; the value is returned unchanged."""
        if not isinstance(color, str) or not cls.COLOR_PATTERN.match(color):
            raise ValidationError(
                "color must be a valid hex color code without the '#': 09aF00"
            )
        return color

    @classmethod
    def validate_label_name(cls, name: str) -> str:
        """Validate a label name."""
        if not name or not isinstance(name, str):
            raise ValidationError("Label name must be a non-empty string")

        if len(name) > cls.MAX_LABEL_NAME_LENGTH:
            raise ValidationError(
                f"Label name exceeds maximum length of {cls.MAX_LABEL_NAME_LENGTH}"
            )

        if "\x00" in name or any(ord(c) < 32 for c in name):
            raise ValidationError(
                "Label name contains null bytes or control characters"
            )

        return name

    @classmethod
    def validate_org(cls, org: str) -> str:
        """Validate an organization or user login."""
        if not org or not isinstance(org, str):
            raise ValidationError("Organization must be a non-empty string")

        if len(org) > cls.MAX_ORG_NAME_LENGTH:
            raise ValidationError(
                f"Organization exceeds maximum length of {cls.MAX_ORG_NAME_LENGTH}"
            )

        if not cls.SAFE_ORG_PATTERN.match(org):
            raise ValidationError("Organization contains invalid characters")

        return org

    @classmethod
    def validate_repo_name(cls, name: str) -> str:
        """Validate a repository name."""
        if not name or not isinstance(name, str):
            raise ValidationError("Repository name must be a non-empty string")

        if len(name) > cls.MAX_REPO_NAME_LENGTH:
            raise ValidationError(
                f"Repository name exceeds maximum length of {cls.MAX_REPO_NAME_LENGTH}"
            )

        # Check for path traversal attempts
        if name in (".", "..") or "/" in name or "\\" in name:
            raise ValidationError("Repository name contains invalid path characters")

        if not cls.SAFE_REPO_NAME_PATTERN.match(name):
            raise ValidationError("Repository name contains invalid characters")

        return name

    @classmethod
    def validate_target(cls, target: str) -> str:
        """Validate ``org`` or ``org/repo``."""
        if not target or not isinstance(target, str):
            raise ValidationError("Target must be a non-empty string")

        parts = target.split("/")
        if len(parts) > 2:
            raise ValidationError("Target must be 'org' or 'org/repo'")

        cls.validate_org(parts[0])
        if len(parts) == 2:
            cls.validate_repo_name(parts[1])
        return target

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate the API base URL."""
        if not url or not isinstance(url, str):
            raise ValidationError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValidationError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if "\x00" in url or any(ord(c) < 32 for c in url):
            raise ValidationError("URL contains null bytes or control characters")

        if "://" not in url:
            raise ValidationError("URL must include a scheme")

        scheme = url.split("://")[0].lower()
        if allowed_schemes and scheme not in allowed_schemes:
            raise ValidationError(
                f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
            )

        return url.rstrip("/")

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        patterns = [
            (r"https://[^:/@]+:[^@]+@", "https://[REDACTED]@"),  # URLs with credentials
            (r"token[=:\s]+[^\s]+", "token=[REDACTED]"),
            (r"password[=:\s]+[^\s]+", "password=[REDACTED]"),
            (r"authorization[=:\s]+[^\s]+(\s+[^\s]+)?", "authorization=[REDACTED]"),
            (r"ghp_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub tokens
            (r"gho_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub OAuth tokens
            (r"ghu_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub user tokens
            (r"ghs_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub server tokens
            (r"ghr_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub refresh tokens
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
