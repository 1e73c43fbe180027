"""
EditHistory: bounded undo stack of serialized source snapshots.

Backed by a deque with maxlen, so the oldest snapshot is evicted on overflow.
"""

from collections import deque
from typing import Deque, List, Optional

from mjforge.exceptions import ConfigError
from mjforge.logging_config import logger
from .config import MUTATION_CONFIG


class EditHistory:
    """
    In-memory undo stack for one edit session.

    Cleared on document switch so undo never crosses documents.
    """

    def __init__(self, capacity: Optional[int] = None):
        """
        Initialize history.

        Args:
            capacity: Maximum number of snapshots (default from MUTATION_CONFIG)

        Raises:
            ConfigError: If the capacity is not a positive integer
        """
        if capacity is None:
            capacity = MUTATION_CONFIG["history_capacity"]
        if capacity < 1:
            raise ConfigError(f"History capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._snapshots: Deque[str] = deque(maxlen=self.capacity)

    def push(self, snapshot: str) -> bool:
        """
        Push a snapshot.

        Returns:
            False when the snapshot equals the current top (coalesced)
        """
        if self._snapshots and self._snapshots[-1] == snapshot:
            return False

        if len(self._snapshots) == self.capacity:
            logger.debug("History full, evicting oldest snapshot")
        self._snapshots.append(snapshot)
        return True

    def pop(self) -> Optional[str]:
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def peek(self) -> Optional[str]:
        if not self._snapshots:
            return None
        return self._snapshots[-1]

    def clear(self) -> None:
        self._snapshots.clear()

    def snapshots(self) -> List[str]:
        """Snapshots oldest first."""
        return list(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return len(self._snapshots) > 0

    def __len__(self) -> int:
        return len(self._snapshots)
