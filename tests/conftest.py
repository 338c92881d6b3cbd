"""Pytest configuration and shared fixtures for the pptx2slides test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest
from utils import PptxTestGenerator, build_package, cleanup_test_dir, create_test_temp_dir, text_slide

from pptx2slides.store import InMemoryDocumentStore


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - full import pipeline tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def three_slide_package() -> bytes:
    """Provide a hand-built package with a titled list, a titled paragraph and an empty slide."""
    return build_package(
        [
            text_slide("Agenda", "Intro", "Plan", "Q&A"),
            text_slide("Summary", "All good"),
            text_slide(),
        ]
    )


@pytest.fixture
def basic_deck_bytes() -> bytes:
    """Provide a real deck generated with python-pptx."""
    return PptxTestGenerator.to_bytes(PptxTestGenerator.create_basic_deck())


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Undo CLI logging setup so later tests see the default configuration."""
    root = logging.getLogger()
    root_level, root_handlers = root.level, list(root.handlers)
    yield
    root.setLevel(root_level)
    root.handlers[:] = root_handlers

    logger = logging.getLogger("pptx2slides")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
