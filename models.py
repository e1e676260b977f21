#!/usr/bin/env python3
"""Label, operation and outcome types shared across org-labels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Set, Tuple

from utils import quote_label


@dataclass(frozen=True)
class Label:
    """A repository label; ``name`` is unique within one repository."""
    name: str
    color: Optional[str] = None

    def same_color(self, other: "Label") -> bool:
        """Colors compare case-insensitively, a missing color only matches another."""
        if self.color is None or other.color is None:
            return self.color is other.color
        return self.color.lower() == other.color.lower()


class OperationKind(Enum):
    """Kinds of label mutation, mapped to their HTTP method."""
    CREATE = "POST"
    UPDATE = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class LabelOperation:
    """One label mutation against one repository.

    ``target_name`` addresses the existing label (unused for creates);
    ``name`` and ``color`` form the request payload. Use the classmethod
    constructors so each kind only carries the fields it needs.
    """
    kind: OperationKind
    target_name: str
    name: str
    color: Optional[str] = None

    @classmethod
    def create(cls, name: str, color: str) -> "LabelOperation":
        return cls(OperationKind.CREATE, name, name, color)

    @classmethod
    def update(cls, name: str, color: str) -> "LabelOperation":
        return cls(OperationKind.UPDATE, name, name, color)

    @classmethod
    def rename(cls, old_name: str, new_name: str) -> "LabelOperation":
        return cls(OperationKind.UPDATE, old_name, new_name)

    @classmethod
    def delete(cls, name: str) -> "LabelOperation":
        return cls(OperationKind.DELETE, name, name)

    @property
    def payload(self) -> Dict[str, str]:
        body = {"name": self.name}
        if self.color is not None:
            body["color"] = self.color
        return body

    def to_request(self) -> Tuple[str, str, Optional[Dict[str, str]]]:
        """Return ``(method, path suffix, json body)`` relative to a labels URL."""
        if self.kind is OperationKind.CREATE:
            return self.kind.value, "", self.payload
        suffix = "/" + quote_label(self.target_name)
        if self.kind is OperationKind.DELETE:
            return self.kind.value, suffix, None
        return self.kind.value, suffix, self.payload

    def describe(self) -> str:
        if self.kind is OperationKind.CREATE:
            return f"create `{self.name}` ({self.color})"
        if self.kind is OperationKind.DELETE:
            return f"delete `{self.target_name}`"
        if self.name != self.target_name:
            return f"rename `{self.target_name}` -> `{self.name}`"
        return f"update `{self.name}` ({self.color})"


class Effect(Enum):
    """Classification of a single outcome."""
    UPDATED = "updated"
    CREATED = "created"
    DELETED = "deleted"
    CONFLICT = "conflict"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class Outcome:
    """Result of one network call. ``status_code`` 0 means no response arrived."""
    status_code: int
    path: str
    body: Any = None
    label: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class RunSummary:
    updates: int = 0
    repositories: Set[str] = field(default_factory=set)

    @property
    def affected_repositories(self) -> int:
        return len(self.repositories)
