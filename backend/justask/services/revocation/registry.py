"""Bounded, insertion-ordered set of revoked refresh tokens."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

log = logging.getLogger(__name__)


class RevocationRegistry:
    """
    Process-local registry of revoked refresh tokens.

    Entries are kept in insertion order. When :meth:`revoke` pushes the size
    above ``high_water``, the oldest entries are dropped until only the
    ``retain`` most recent remain. An evicted token verifies again until its
    own ``exp`` passes; that window is accepted.

    State is per process and lost on restart. Construct one per application.

    :param high_water: Size that must never be exceeded after ``revoke``.
    :param retain: Entries kept after an eviction pass.
    """

    def __init__(self, *, high_water: int = 10_000, retain: int = 5_000) -> None:
        if retain <= 0 or retain > high_water:
            raise ValueError("retain must be in (0, high_water].")
        self.high_water = high_water
        self.retain = retain
        self._entries: OrderedDict[str, None] = OrderedDict()
        self._lock = threading.Lock()

    def revoke(self, token: str) -> None:
        """Add ``token``; re-adding an existing token keeps its original position."""
        with self._lock:
            if token in self._entries:
                return
            self._entries[token] = None
            if len(self._entries) > self.high_water:
                evicted = len(self._entries) - self.retain
                for _ in range(evicted):
                    self._entries.popitem(last=False)
                log.info(
                    "Revocation registry evicted oldest entries",
                    extra={"evicted": evicted, "remaining": len(self._entries)},
                )

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token in self._entries

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.is_revoked(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
