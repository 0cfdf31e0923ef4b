import threading
from typing import Any, List, Tuple

from chainmap.hash_map import HashMap

MISSING = object()


class KeyValueStore:
    """HashMap shared between request threads; every call runs under one lock."""

    def __init__(self, initial_bucket_count: int, max_load_factor: float):
        self._map = HashMap(initial_bucket_count, max_load_factor)
        self._lock = threading.Lock()

    def put(self, key: str, value: Any) -> Tuple[bool, Any]:
        """Returns (existed, previous value)."""
        with self._lock:
            existed = key in self._map
            previous = self._map.put(key, value)
            return existed, previous

    def get(self, key: str) -> Any:
        """Returns the stored value or MISSING."""
        with self._lock:
            return self._map.get(key, MISSING)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._map.remove(key)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._map.keys())

    def stats(self) -> dict:
        with self._lock:
            return {
                "size": self._map.size(),
                "bucket_count": self._map.bucket_count(),
                "load_factor": self._map.load_factor(),
                "max_load_factor": self._map.max_load_factor,
            }
