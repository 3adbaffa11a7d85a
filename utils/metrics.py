import threading


class HitCounter:
    """Request counter shared by every worker thread of one app."""

    def __init__(self):
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    @property
    def value(self) -> int:
        with self._lock:
            return self._hits

    def reset(self):
        with self._lock:
            self._hits = 0
