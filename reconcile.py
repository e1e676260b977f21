#!/usr/bin/env python3
"""Diffing a desired label set against a repository's current labels."""

from __future__ import annotations

from typing import List, Sequence

from models import Label, LabelOperation


def reconcile(
    desired: Sequence[Label], current: Sequence[Label], destructive: bool = False
) -> List[LabelOperation]:
    """Return the operations that bring ``current`` in line with ``desired``.

    Creates and updates come first, in desired order. Labels present but not
    desired are deleted, in inventory order, only when ``destructive`` is set.
    Names match exactly; when ``current`` holds duplicates only the first
    match is consumed. ``current`` itself is never modified.
    """
    remaining = list(current)
    operations: List[LabelOperation] = []

    for wanted in desired:
        match_idx = next(
            (idx for idx, label in enumerate(remaining) if label.name == wanted.name),
            None,
        )
        if match_idx is None:
            operations.append(LabelOperation.create(wanted.name, wanted.color))
            continue

        existing = remaining.pop(match_idx)
        if not existing.same_color(wanted):
            operations.append(LabelOperation.update(wanted.name, wanted.color))

    if destructive:
        operations.extend(LabelOperation.delete(label.name) for label in remaining)

    return operations
