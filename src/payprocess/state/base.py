# payprocess/state/base.py
"""Base state store protocol for saved payment processes."""

from typing import Optional, Protocol

from ..core import SavedState


class StateStore(Protocol):
    """Protocol for storage backends of :class:`~payprocess.core.SavedState`.

    A store keeps the flat record of a saved state (two strings and one
    integer) under a caller-chosen key, so an interrupted payment can be
    restored into a fresh :class:`~payprocess.core.UnifiedPaymentProcess`.
    """

    async def set(self, key: str, saved_state: SavedState) -> None:
        """Store the saved state of a payment.

        Args:
            key: Unique payment identifier
            saved_state: Snapshot taken with ``get_saved_state()``

        Raises:
            Exception: If storage operation fails
        """
        ...

    async def get(self, key: str) -> Optional[SavedState]:
        """Retrieve a saved state.

        Args:
            key: Unique payment identifier

        Returns:
            The restored SavedState if found, None otherwise

        Raises:
            InvalidSavedStateError: If the stored record can not be decoded
        """
        ...

    async def delete(self, key: str) -> None:
        """Delete a saved state.

        Args:
            key: Unique payment identifier
        """
        ...
