"""Tests for outcome classification and run summaries."""

from __future__ import annotations

from models import Effect, Outcome
from results import classify, log_result, outcome_label, summarize


def test_classify_by_status_code() -> None:
    """Known codes map to their effect, everything else is unclassified."""
    assert classify(Outcome(200, '/repos/acme/a/labels/bug')) is Effect.UPDATED
    assert classify(Outcome(201, '/repos/acme/a/labels')) is Effect.CREATED
    assert classify(Outcome(204, '/repos/acme/a/labels/bug')) is Effect.DELETED
    assert classify(Outcome(422, '/repos/acme/a/labels')) is Effect.CONFLICT
    assert classify(Outcome(404, '/repos/acme/a/labels/bug')) is Effect.UNCLASSIFIED
    assert classify(Outcome(0, '/repos/acme/a/labels/bug')) is Effect.UNCLASSIFIED


def test_summary_counts_successes_on_distinct_repos() -> None:
    """[200, 201, 422, 204, 200] on five repos gives 4 updates across 4 repos."""
    outcomes = [
        Outcome(200, '/repos/acme/a/labels/bug'),
        Outcome(201, '/repos/acme/b/labels'),
        Outcome(422, '/repos/acme/c/labels'),
        Outcome(204, '/repos/acme/d/labels/old'),
        Outcome(200, '/repos/acme/e/labels/bug'),
    ]

    summary = summarize({'acme': outcomes}, log=False)

    assert summary.updates == 4
    assert summary.affected_repositories == 4


def test_repository_counted_once() -> None:
    """Several successful calls on one repository mark it affected once."""
    outcomes = {
        'web': [
            Outcome(201, '/repos/acme/web/labels'),
            Outcome(200, '/repos/acme/web/labels/bug'),
            Outcome(204, '/repos/acme/web/labels/old'),
        ],
        'api': [Outcome(500, '/repos/acme/api/labels')],
    }

    summary = summarize(outcomes, log=False)

    assert summary.updates == 3
    assert summary.repositories == {'acme/web'}


def test_deleted_label_recovered_from_path() -> None:
    """Delete responses have no body, the label name comes from the path."""
    outcome = Outcome(204, '/repos/acme/web/labels/needs%20triage')

    assert outcome_label(outcome) == 'needs triage'


def test_label_prefers_operation_then_body() -> None:
    """The operation's label wins, then the response body name."""
    assert outcome_label(Outcome(201, '/repos/acme/web/labels', {'name': 'bug'})) == 'bug'
    assert outcome_label(Outcome(422, '/repos/acme/web/labels', {}, label='wip')) == 'wip'


def test_log_lines_per_effect(capsys) -> None:
    """Each outcome produces one descriptive line."""
    log_result(Outcome(201, '/repos/acme/web/labels', label='bug'))
    log_result(Outcome(422, '/repos/acme/web/labels', label='bug'))
    log_result(Outcome(204, '/repos/acme/web/labels/old'))
    log_result(Outcome(404, '/repos/acme/web/labels/gone', {'message': 'Not Found'}))

    captured = capsys.readouterr()
    assert 'label `bug` successfully created at /repos/acme/web/labels' in captured.out
    assert 'label `bug` already exists at /repos/acme/web/labels' in captured.out
    assert 'label `old` successfully deleted from /repos/acme/web/labels/old' in captured.out
    assert 'status: 404' in captured.err
    assert 'Not Found' in captured.err
