"""
Shared fixtures for core module tests.

This module provides reusable pytest fixtures for testing core functionality,
including test data builders, classifiers, indexers and progress displays.
"""

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core.classifier import ClassifierOptions, FilePriorityClassifier
from core.file_utils import DefaultFileUtils
from core.indexer import FileIndexer, IndexerOptions
from core.models import (
    CodebaseInput,
    FileEntry,
    FileIndexEntry,
    ImportanceScore,
)
from models import FileType, ImportanceCategory
from ui.progress_display import NoOpProgressDisplay


@pytest.fixture
def file_utils():
    """Default file utilities."""
    return DefaultFileUtils()


@pytest.fixture
def classifier():
    """Priority classifier with default options."""
    return FilePriorityClassifier()


@pytest.fixture
def classifier_factory():
    """Factory for creating classifiers with custom options."""

    def _factory(**options):
        return FilePriorityClassifier(ClassifierOptions(**options))

    return _factory


@pytest.fixture
def indexer():
    """Indexer with default options and no progress output."""
    return FileIndexer(progress_display=NoOpProgressDisplay())


@pytest.fixture
def indexer_factory():
    """Factory for creating indexers with custom options."""

    def _factory(classifier=None, progress_display=None, logger=None, **options):
        return FileIndexer(
            options=IndexerOptions(**options),
            classifier=classifier,
            progress_display=progress_display or NoOpProgressDisplay(),
            logger=logger,
        )

    return _factory


@pytest.fixture
def codebase_factory():
    """
    Factory for creating a CodebaseInput.

    Accepts FileEntry objects, bare paths (empty content, size 100), or
    (path, content) tuples (size is the content length).
    """

    def _factory(*files):
        entries = []
        for f in files:
            if isinstance(f, FileEntry):
                entries.append(f)
            elif isinstance(f, tuple):
                path, content = f
                entries.append(FileEntry(path=path, content=content, size=len(content)))
            else:
                entries.append(FileEntry(path=f, content="", size=100))
        return CodebaseInput(files=entries)

    return _factory


@pytest.fixture
def sample_codebase(codebase_factory):
    """A small web application codebase."""
    return codebase_factory(
        ("package.json", '{"name": "shop", "dependencies": {"express": "^4.0.0"}}'),
        ("src/index.ts", "import express from 'express';\nconst app = express();\n"),
        ("src/utils/format.ts", "export function format(v) { return v; }\n"),
        ("src/utils/format.test.ts", "test('format', () => {});\n"),
        ("README.md", "# Shop\n"),
        ("Dockerfile", "FROM node:20\n"),
        (".github/workflows/ci.yml", "on: push\n"),
        ("api/schema.graphql", "type Query { items: [Item] }\n"),
        ("node_modules/express/index.js", "module.exports = {};\n"),
    )


@pytest.fixture
def index_entry_factory():
    """Factory for creating FileIndexEntry instances."""

    def _factory(
        path="src/app.ts",
        score=50,
        category=ImportanceCategory.NORMAL,
        type=FileType.SOURCE,
        language="typescript",
        size=100,
    ):
        return FileIndexEntry(
            path=path,
            type=type,
            size=size,
            importance=ImportanceScore(score=score, reasons=(), category=category),
            language=language,
            last_modified=datetime(2024, 1, 1, tzinfo=UTC),
        )

    return _factory


@pytest.fixture
def tracking_progress_display():
    """Progress display that tracks calls for testing."""
    mock = MagicMock()
    mock.calls = []

    def make_tracker(method_name):
        def tracker(*args, **kwargs):
            if method_name == "update":
                mock.calls.append(
                    (method_name, kwargs.get("advance"), kwargs.get("description"))
                )
            else:
                mock.calls.append((method_name, *args))

        return tracker

    mock.on_start = make_tracker("start")
    mock.on_update = make_tracker("update")
    mock.on_complete = make_tracker("complete")
    mock.__enter__ = MagicMock(return_value=mock)
    mock.__exit__ = MagicMock(return_value=None)

    return mock


@pytest.fixture
def mock_file_reader_factory():
    """Factory for creating MockFileReader instances with file content mappings."""

    def _factory(file_contents: dict[str, str]):
        """
        Create a MockFileReader configured with file content mappings.

        Args:
            file_contents: Dictionary mapping file names to their content.

        Returns:
            MockFileReader instance configured to return content based on file name.
        """
        from core.file_io import MockFileReader

        def read_file_side_effect(path: Path) -> str:
            return file_contents.get(path.name, "")

        return MockFileReader(read_file_fn=read_file_side_effect)

    return _factory
