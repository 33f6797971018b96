"""Thread-safe in-memory table of short codes."""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional

from .models import LinkRecord


class ReadWriteLock:
    """Shared/exclusive lock with writer preference.
    
    Any number of readers may hold the lock together. A writer waits for them
    to drain and blocks new readers while it waits or holds the lock. The
    owning writer may re-enter for writing or reading.
    """
    
    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writer: Optional[int] = None
        self._write_depth = 0
    
    @contextmanager
    def read(self) -> Iterator[None]:
        me = threading.get_ident()
        with self._cond:
            owned = self._writer == me
            if not owned:
                while self._writer is not None or self._writers_waiting:
                    self._cond.wait()
                self._readers += 1
        try:
            yield
        finally:
            if not owned:
                with self._cond:
                    self._readers -= 1
                    if self._readers == 0:
                        self._cond.notify_all()
    
    @contextmanager
    def write(self) -> Iterator[None]:
        me = threading.get_ident()
        with self._cond:
            if self._writer != me:
                self._writers_waiting += 1
                try:
                    while self._writer is not None or self._readers:
                        self._cond.wait()
                finally:
                    self._writers_waiting -= 1
                self._writer = me
            self._write_depth += 1
        try:
            yield
        finally:
            with self._cond:
                self._write_depth -= 1
                if self._write_depth == 0:
                    self._writer = None
                    self._cond.notify_all()


class LinkStore:
    """In-memory mapping of short code to target URL.
    
    Lookups share the lock with each other; inserts and removals take it
    exclusively. Holding the exclusive side via ``locked()`` lets a caller
    insert an entry and persist it before any other thread can observe it.
    """
    
    def __init__(
        self,
        links: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link store.
        
        Args:
            links: Initial code -> URL mapping (usually a loaded snapshot)
            logger: Optional logger
        """
        self._links: Dict[str, str] = dict(links or {})
        self._lock = ReadWriteLock()
        self.logger = logger or logging.getLogger(__name__)
    
    @contextmanager
    def locked(self) -> Iterator["LinkStore"]:
        """Hold the store exclusively for a multi-step critical section."""
        with self._lock.write():
            yield self
    
    def lookup(self, code: str) -> Optional[str]:
        """Get the target URL for a short code.
        
        Args:
            code: The short code to lookup
            
        Returns:
            The target URL, or None if the code is unknown
        """
        with self._lock.read():
            return self._links.get(code)
    
    def insert(self, code: str, target_url: str) -> bool:
        """Insert a mapping if the code is free.
        
        Args:
            code: The short code to use
            target_url: The URL the code resolves to
            
        Returns:
            True if inserted, False if the code already exists
        """
        with self._lock.write():
            if code in self._links:
                return False
            self._links[code] = target_url
            return True
    
    def discard(self, code: str) -> None:
        """Remove a code inserted by a create that failed to persist."""
        with self._lock.write():
            if self._links.pop(code, None) is not None:
                self.logger.debug(f"Discarded short code {code}")
    
    def snapshot(self) -> Dict[str, str]:
        """Return a consistent copy of the table in insertion order."""
        with self._lock.read():
            return dict(self._links)
    
    def records(self) -> List[LinkRecord]:
        """Return all mappings as records in insertion order."""
        return [LinkRecord(code, url) for code, url in self.snapshot().items()]
    
    def __contains__(self, code: object) -> bool:
        with self._lock.read():
            return code in self._links
    
    def __len__(self) -> int:
        with self._lock.read():
            return len(self._links)
