"""Core short-code allocation and lookup engine."""

from .codegen import CodeGenerator
from .store import LinkStore
from .persistence import SnapshotPersistence
from .service import ShortenerService
from .models import LinkRecord
from .errors import (
    ShortenerError,
    RetryExhaustedError,
    PersistenceError,
    SnapshotCorruptError,
)

__all__ = [
    "CodeGenerator",
    "LinkStore",
    "SnapshotPersistence",
    "ShortenerService",
    "LinkRecord",
    "ShortenerError",
    "RetryExhaustedError",
    "PersistenceError",
    "SnapshotCorruptError",
]
