"""Pytest configuration and fixtures."""

import itertools

import pytest

from shortlink.codegen import CodeGenerator
from shortlink.common.logging_config import setup_logging
from shortlink.persistence import SnapshotPersistence
from shortlink.service import ShortenerService
from shortlink.store import LinkStore


class SequenceClock:
    """Deterministic monotonic source that replays scripted values, then counts up."""
    
    def __init__(self, *values: int, start: int = 1_000_000):
        self._values = iter(values)
        self._counter = itertools.count(start)
    
    def __call__(self) -> int:
        value = next(self._values, None)
        return next(self._counter) if value is None else value


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def snapshot_path(tmp_path):
    """Path of a snapshot file inside a temporary directory."""
    return str(tmp_path / "base.json")


@pytest.fixture
def persistence(snapshot_path, logger):
    """Create snapshot persistence on a temporary file."""
    return SnapshotPersistence(snapshot_path, logger=logger)


@pytest.fixture
def store(logger):
    """Create empty link store."""
    return LinkStore(logger=logger)


@pytest.fixture
def code_generator():
    """Create code generator with a thread-safe counting source."""
    return CodeGenerator(clock=SequenceClock())


@pytest.fixture
def service(store, persistence, code_generator, logger) -> ShortenerService:
    """Create service instance."""
    return ShortenerService(
        store=store,
        persistence=persistence,
        code_generator=code_generator,
        logger=logger,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def scripted_generator():
    """Factory for code generators that replay the given source values first."""
    def _make(*values: int) -> CodeGenerator:
        return CodeGenerator(clock=SequenceClock(*values))
    return _make
