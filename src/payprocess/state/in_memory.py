# payprocess/state/in_memory.py
"""In-memory state store implementation."""

from typing import Dict, Any, Optional
import time
import logging

from ..core import SavedState

logger = logging.getLogger(__name__)


class InMemoryStateStore:
    """In-memory store of saved payment states.

    Keeps the flat record rather than the object so what comes back from
    get() went through the same decoding as a persistent backend.
    Data is lost when the process restarts.
    """

    def __init__(self):
        """Initialize the in-memory state store."""
        self._store: Dict[str, Dict[str, Any]] = {}
        logger.debug("InMemoryStateStore initialized")

    async def set(self, key: str, saved_state: SavedState) -> None:
        """Store a saved state in memory.

        Args:
            key: Unique payment identifier
            saved_state: Snapshot taken with UnifiedPaymentProcess.get_saved_state()
        """
        self._store[key] = {
            'state': saved_state.to_record(),
            'ts': time.time()
        }
        logger.debug(f"Stored saved state for payment {key}")

    async def get(self, key: str) -> Optional[SavedState]:
        """Retrieve a saved state from memory.

        Args:
            key: Unique payment identifier

        Returns:
            The decoded SavedState if found, None otherwise
        """
        entry = self._store.get(key)
        if entry is None:
            logger.debug(f"No saved state found for payment {key}")
            return None
        logger.debug(f"Retrieved saved state for payment {key}")
        return SavedState.from_record(entry['state'])

    async def delete(self, key: str) -> None:
        """Delete a saved state from memory.

        Args:
            key: Unique payment identifier
        """
        if key in self._store:
            del self._store[key]
            logger.debug(f"Deleted saved state for payment {key}")
        else:
            logger.debug(f"No saved state to delete for payment {key}")

    def clear(self) -> None:
        """Clear all stored data. Useful for testing."""
        self._store.clear()
        logger.debug("Cleared all stored data")

    def size(self) -> int:
        """Return the number of stored payments."""
        return len(self._store)
