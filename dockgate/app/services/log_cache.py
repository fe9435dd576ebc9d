from __future__ import annotations

import threading
import time


class LogCache:
    """
    Holder of the latest redacted log snapshot.

    Only the reference swap happens under the lock. Readers never take it:
    reading a `str` attribute is atomic, so a reader sees either the old or
    the new snapshot, never a mix of both.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshot = ""
        self._updated_at: float | None = None

    def update(self, new_text: str) -> None:
        with self._lock:
            self._snapshot = new_text
            self._updated_at = time.time()

    def read(self) -> str:
        return self._snapshot

    @property
    def updated_at(self) -> float | None:
        # Wall-clock time of the last successful update; None before the first one.
        return self._updated_at
