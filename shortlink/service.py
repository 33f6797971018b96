"""Business logic service for the URL shortener."""

import asyncio
import logging
from typing import Any, Dict, Optional

from .codegen import CodeGenerator
from .errors import RetryExhaustedError
from .models import LinkRecord
from .persistence import SnapshotPersistence
from .store import LinkStore


class ShortenerService:
    """Create short codes and resolve them back to URLs."""
    
    def __init__(
        self,
        store: LinkStore,
        persistence: SnapshotPersistence,
        code_generator: Optional[CodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
    ):
        """Initialize shortener service.
        
        Args:
            store: Link store holding the live table
            persistence: Snapshot persistence for the table
            code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Maximum generation attempts per create
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")
        
        self.store = store
        self.persistence = persistence
        self.generator = code_generator or CodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
    
    @classmethod
    def from_snapshot(
        cls,
        persistence: SnapshotPersistence,
        code_generator: Optional[CodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
    ) -> "ShortenerService":
        """Build a service whose store is populated from the snapshot.
        
        Raises:
            SnapshotCorruptError: If the snapshot exists but is unparsable
            PersistenceError: If the snapshot cannot be read
        """
        store = LinkStore(persistence.load(), logger=logger)
        return cls(
            store=store,
            persistence=persistence,
            code_generator=code_generator,
            logger=logger,
            max_collision_retries=max_collision_retries,
        )
    
    def shorten(self, target_url: str) -> LinkRecord:
        """Allocate a short code for a URL and persist it.
        
        The code is inserted, the snapshot is written, and only then is the
        store lock released, so no lookup can see a code that is not durable.
        
        Args:
            target_url: The URL to shorten (stored as given)
            
        Returns:
            The committed link record
            
        Raises:
            RetryExhaustedError: If every candidate code collided
            PersistenceError: If the snapshot write failed (insert rolled back)
        """
        with self.store.locked():
            code = self._insert_unique(target_url)
            
            try:
                self.persistence.save(self.store.snapshot())
            except Exception:
                self.store.discard(code)
                self.logger.error(f"Rolled back short code {code} after snapshot write failure")
                raise
        
        self.logger.info(f"Created short URL: {code} -> {target_url}")
        return LinkRecord(code=code, target_url=target_url)
    
    def resolve(self, code: str) -> Optional[str]:
        """Get the target URL for a short code.
        
        Returns:
            Target URL or None if not found
        """
        target_url = self.store.lookup(code)
        
        if target_url is None:
            self.logger.warning(f"Short code not found: {code}")
        else:
            self.logger.debug(f"Resolved URL: {code} -> {target_url}")
        
        return target_url
    
    async def create_short_url(self, target_url: str) -> LinkRecord:
        """Async wrapper around ``shorten`` for request handlers."""
        return await asyncio.to_thread(self.shorten, target_url)
    
    async def get_original_url(self, code: str) -> Optional[str]:
        """Async wrapper around ``resolve`` for request handlers."""
        return await asyncio.to_thread(self.resolve, code)
    
    def health_check(self) -> Dict[str, Any]:
        """Perform health check.
        
        Returns:
            Dictionary with store status and link count
        """
        return {
            "store": True,
            "links": len(self.store),
        }
    
    def flush(self) -> None:
        """Write the full table to the snapshot."""
        with self.store.locked():
            links = self.store.snapshot()
            self.persistence.save(links)
        self.logger.info(f"Flushed {len(links)} links to {self.persistence.path}")
    
    async def close(self) -> None:
        """Write a final snapshot on shutdown."""
        await asyncio.to_thread(self.flush)
    
    def _insert_unique(self, target_url: str) -> str:
        """Insert the URL under the first candidate code that is free.
        
        Must be called with the store lock held.
        
        Raises:
            RetryExhaustedError: If unable to insert after max_collision_retries
        """
        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.generate()
            
            if self.store.insert(code, target_url):
                if attempt > 1:
                    self.logger.debug(f"Generated code after {attempt} attempts: {code}")
                return code
            
            self.logger.warning(f"Short code collision on {code} (attempt {attempt})")
        
        raise RetryExhaustedError(self.max_collision_retries)
