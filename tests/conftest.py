"""Shared pytest fixtures for mappingkit tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def demo_configuration_file_path() -> Path:
    return PROJECT_ROOT / 'demo.toml'


@pytest.fixture
def logging_configuration_file_path(tmp_path: Path) -> Path:
    """Logging configuration which sends every record to stderr."""
    result = tmp_path / 'logging.toml'
    result.write_text(
        'version = 1\n'
        'disable_existing_loggers = false\n'
        '[handlers.stderr]\n'
        'class = "logging.StreamHandler"\n'
        'stream = "ext://sys.stderr"\n'
        '[loggers.mappingkit]\n'
        'handlers = ["stderr"]\n'
        'level = "WARNING"\n'
        'propagate = false\n',
        'utf-8',
    )
    return result


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Restore ``mappingkit`` logger state after each test."""
    logger = logging.getLogger('mappingkit')
    original_handlers = logger.handlers[:]
    original_level = logger.level
    original_propagate = logger.propagate
    yield
    logger.handlers = original_handlers
    logger.setLevel(original_level)
    logger.propagate = original_propagate
