"""Tests for command line parsing and credential lookup."""

from __future__ import annotations

import pytest

from argument_parser import EXIT_AUTH_ERROR, EXIT_VALIDATION_ERROR, parse_arguments
from config import Command


@pytest.fixture(autouse=True)
def _clear_credentials(monkeypatch) -> None:
    for name in ('GITHUB_API_TOKEN', 'GITHUB_TOKEN', 'GITHUB_USERNAME', 'GITHUB_PASSWORD'):
        monkeypatch.delenv(name, raising=False)


def test_standardize_arguments(monkeypatch) -> None:
    """standardize takes a target, a config repo and the destructive flag."""
    monkeypatch.setenv('GITHUB_API_TOKEN', 'env-token')

    cfg = parse_arguments(
        ['--dry-run', 'standardize', 'acme/web', 'config', '--destructive']
    )

    assert cfg.command.command is Command.STANDARDIZE
    assert cfg.command.target == 'acme/web'
    assert cfg.command.config_repo == 'config'
    assert cfg.behavior.destructive is True
    assert cfg.behavior.dry_run is True
    assert cfg.behavior.labels_file == 'github_labels.json'
    assert cfg.github.token == 'env-token'


def test_rename_arguments() -> None:
    """rename keeps the old name as the addressed label."""
    cfg = parse_arguments(['--gh-token', 'cli-token', 'rename', 'acme', 'bug', 'defect'])

    assert cfg.command.command is Command.RENAME
    assert cfg.command.label == 'bug'
    assert cfg.command.new_label == 'defect'
    assert cfg.behavior.destructive is False


def test_basic_auth_fallback(monkeypatch) -> None:
    """Username and password are used when no token is set."""
    monkeypatch.setenv('GITHUB_USERNAME', 'octocat')
    monkeypatch.setenv('GITHUB_PASSWORD', 'secret')

    cfg = parse_arguments(['remove', 'acme', 'wontfix'])

    assert cfg.github.token is None
    assert cfg.github.username == 'octocat'
    assert cfg.github.password == 'secret'


def test_missing_credentials_exit() -> None:
    """Without any credentials the command exits with the auth error code."""
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(['remove', 'acme', 'wontfix'])

    assert excinfo.value.code == EXIT_AUTH_ERROR


@pytest.mark.parametrize('color', ['#abc', 'abcd', 'zzzzzz'])
def test_invalid_color_exits(monkeypatch, color: str) -> None:
    """Invalid colors are rejected while parsing."""
    monkeypatch.setenv('GITHUB_TOKEN', 'env-token')

    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(['add', 'acme', 'bug', color])

    assert excinfo.value.code == EXIT_VALIDATION_ERROR
