"""Thread-safe holder for the latest quote snapshot."""

from __future__ import annotations

from threading import Lock

from .models import Snapshot


class SnapshotCache:
    """Thread-safe in-memory cache of the most recent Snapshot.

    Writer: QuotePoller (one refresh cycle at a time).
    Readers: JSON endpoint, SSE streaming endpoint.
    """

    def __init__(self) -> None:
        self._snapshot: Snapshot | None = None
        self._lock = Lock()
        self._version: int = 0  # Monotonically increasing; bumped on every update

    def update(self, snapshot: Snapshot) -> Snapshot:
        """Replace the current snapshot. Returns it for chaining."""
        with self._lock:
            self._snapshot = snapshot
            self._version += 1
            return snapshot

    def get(self) -> Snapshot | None:
        """Latest snapshot, or None before the first refresh completes."""
        with self._lock:
            return self._snapshot

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version
