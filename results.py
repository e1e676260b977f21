#!/usr/bin/env python3
"""Classification and reporting of request outcomes."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from logging_utils import Logger
from models import Effect, Outcome, RunSummary
from utils import label_from_path, repository_from_path

_EFFECTS = {
    200: Effect.UPDATED,
    201: Effect.CREATED,
    204: Effect.DELETED,
    422: Effect.CONFLICT,
}


def classify(outcome: Outcome) -> Effect:
    return _EFFECTS.get(outcome.status_code, Effect.UNCLASSIFIED)


def outcome_label(outcome: Outcome) -> str:
    """Name of the label an outcome refers to.

    Delete responses carry no body, so the request path's last segment is
    the fallback.
    """
    if outcome.label:
        return outcome.label
    if isinstance(outcome.body, dict) and outcome.body.get("name"):
        return str(outcome.body["name"])
    return label_from_path(outcome.path)


def log_result(outcome: Outcome, label: Optional[str] = None) -> Effect:
    """Emit one log line for ``outcome`` and return its classification."""
    effect = classify(outcome)
    name = label or outcome_label(outcome)
    path = outcome.path

    if effect is Effect.CONFLICT:
        Logger.warn(f"label `{name}` already exists at {path}")
    elif effect is Effect.UPDATED:
        Logger.success(f"label `{name}` successfully updated at {path}")
    elif effect is Effect.CREATED:
        Logger.success(f"label `{name}` successfully created at {path}")
    elif effect is Effect.DELETED:
        Logger.success(f"label `{name}` successfully deleted from {path}")
    else:
        Logger.error(f"label `{name}` at {path} status: {outcome.status_code}")
        if outcome.body:
            Logger.error(str(outcome.body))
    return effect


def record(summary: RunSummary, outcome: Outcome) -> None:
    """Count a successful outcome and mark its repository as affected."""
    if outcome.succeeded:
        summary.updates += 1
        summary.repositories.add(repository_from_path(outcome.path))


def summarize(
    outcomes_by_repository: Mapping[str, Iterable[Outcome]], log: bool = True
) -> RunSummary:
    """Fold all outcomes into a RunSummary, logging each one when ``log`` is set."""
    summary = RunSummary()
    for outcomes in outcomes_by_repository.values():
        for outcome in outcomes:
            if log:
                log_result(outcome)
            record(summary, outcome)
    return summary
