"""Durable JSON snapshot of the link table."""

import logging
import os
import tempfile
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import PersistenceError, SnapshotCorruptError


class Snapshot(BaseModel):
    """On-disk layout: one object holding the code -> URL mapping."""
    
    links: Dict[str, str] = Field(default_factory=dict)


class SnapshotPersistence:
    """Load and save the full link table as a single JSON file."""
    
    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """Initialize snapshot persistence.
        
        Args:
            path: Snapshot file path
            logger: Optional logger
        """
        self.path = path
        self.logger = logger or logging.getLogger(__name__)
    
    def load(self) -> Dict[str, str]:
        """Read the snapshot from disk.
        
        Returns:
            Code -> URL mapping; empty if the file is missing or blank
            
        Raises:
            SnapshotCorruptError: If the file exists but cannot be parsed
            PersistenceError: If the file cannot be read
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            self.logger.info(f"Snapshot {self.path} not found, starting with an empty table")
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read snapshot {self.path}: {e}") from e
        
        if not raw.strip():
            self.logger.info(f"Snapshot {self.path} is empty, starting with an empty table")
            return {}
        
        try:
            snapshot = Snapshot.model_validate_json(raw)
        except ValidationError as e:
            raise SnapshotCorruptError(f"Snapshot {self.path} is corrupt: {e}") from e
        
        self.logger.info(f"Loaded {len(snapshot.links)} links from {self.path}")
        return snapshot.links
    
    def save(self, links: Mapping[str, str]) -> None:
        """Overwrite the snapshot with the full table.
        
        The table is written to a temporary file in the same directory and
        moved over the snapshot, so readers see either the old or the new
        file, never a partial one.
        
        Args:
            links: Code -> URL mapping to persist
            
        Raises:
            PersistenceError: If the snapshot cannot be written
        """
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        
        try:
            payload = Snapshot(links=dict(links)).model_dump_json(indent=2)
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{os.path.basename(self.path)}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except ValueError as e:
            # Serialization rejects text UTF-8 cannot represent (lone surrogates).
            raise PersistenceError(f"Failed to encode snapshot {self.path}: {e}") from e
        except OSError as e:
            raise PersistenceError(f"Failed to write snapshot {self.path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
        
        self.logger.debug(f"Saved {len(links)} links to {self.path}")
