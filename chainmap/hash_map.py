import numbers
from typing import Any, Iterator, Optional

from chainmap.bucket_array import BucketArray
from chainmap.hashing import EqualFunction, HashFunction, default_equal, default_hash
from chainmap.logger.logger import log_rehash_event

DEFAULT_BUCKET_COUNT = 10
DEFAULT_MAX_LOAD_FACTOR = 1.0


class HashMap:
    """
    Separate-chaining hash map over a bucket array that doubles when the
    load factor is reached.

    Not thread safe: callers sharing a map between threads must hold one lock
    around every call, rehash included.

    Parameters
    ----------
    initial_bucket_count : int
        Number of buckets to start with, at least 1.
    max_load_factor : float
        Elements per bucket allowed before the next put doubles the array.
    hash_function : callable, optional
        key -> int. Defaults to crc32 for text, hash() otherwise.
    equal_function : callable, optional
        (key, key) -> bool. Must agree with hash_function: equal keys hash equal.
    """

    def __init__(
        self,
        initial_bucket_count: int = DEFAULT_BUCKET_COUNT,
        max_load_factor: float = DEFAULT_MAX_LOAD_FACTOR,
        hash_function: Optional[HashFunction] = None,
        equal_function: Optional[EqualFunction] = None,
    ) -> None:
        if isinstance(initial_bucket_count, bool) or not isinstance(initial_bucket_count, int):
            raise TypeError(
                f"initial_bucket_count must be an int, got {type(initial_bucket_count).__name__}"
            )
        if initial_bucket_count < 1:
            raise ValueError(f"initial_bucket_count must be at least 1, got {initial_bucket_count}")
        if isinstance(max_load_factor, bool) or not isinstance(max_load_factor, numbers.Real):
            raise TypeError(
                f"max_load_factor must be a real number, got {type(max_load_factor).__name__}"
            )
        # NaN fails this comparison too
        if not max_load_factor > 0:
            raise ValueError(f"max_load_factor must be greater than 0, got {max_load_factor}")

        self._max_load_factor = float(max_load_factor)
        self._equal = equal_function or default_equal
        self._buckets = BucketArray(initial_bucket_count, hash_function or default_hash)
        self._element_count = 0

    @property
    def max_load_factor(self) -> float:
        return self._max_load_factor

    def size(self) -> int:
        return self._element_count

    def bucket_count(self) -> int:
        return self._buckets.bucket_count

    def load_factor(self) -> float:
        return self._element_count / self._buckets.bucket_count

    def _grown_bucket_count(self) -> int:
        # One doubling unless max_load_factor * bucket_count is below 1
        new_bucket_count = self._buckets.bucket_count * 2
        while (self._element_count + 1) / new_bucket_count > self._max_load_factor:
            new_bucket_count *= 2
        return new_bucket_count

    def _rehash(self, new_bucket_count: int) -> None:
        old_bucket_count = self._buckets.bucket_count
        self._buckets = self._buckets.rebuild(new_bucket_count)
        log_rehash_event(old_bucket_count, new_bucket_count, self._element_count)

    def put(self, key: Any, value: Any) -> Optional[Any]:
        """
        Store value under key and return the value it replaced, or None.

        The load check runs before the lookup and counts this put as one more
        element, so overwriting an existing key on a full map still doubles
        the bucket array.
        """
        if (self._element_count + 1) / self._buckets.bucket_count > self._max_load_factor:
            self._rehash(self._grown_bucket_count())

        bucket = self._buckets.bucket_for(key)
        position = bucket.find(key, self._equal)
        if position is not None:
            entry = bucket.entry_at(position)
            previous = entry.value
            entry.value = value
            return previous

        bucket.append(key, value)
        self._element_count += 1
        return None

    def get(self, key: Any, default: Any = None) -> Any:
        bucket = self._buckets.bucket_for(key)
        position = bucket.find(key, self._equal)
        if position is None:
            return default
        return bucket.entry_at(position).value

    def remove(self, key: Any) -> bool:
        bucket = self._buckets.bucket_for(key)
        position = bucket.find(key, self._equal)
        if position is None:
            return False
        bucket.remove_at(position)
        self._element_count -= 1
        return True

    def contains(self, key: Any) -> bool:
        return self._buckets.bucket_for(key).find(key, self._equal) is not None

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return self._element_count

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def keys(self) -> Iterator[Any]:
        for entry in self._buckets.entries():
            yield entry.key

    def values(self) -> Iterator[Any]:
        for entry in self._buckets.entries():
            yield entry.value

    def items(self) -> Iterator[tuple]:
        for entry in self._buckets.entries():
            yield entry.key, entry.value

    def __repr__(self):
        pairs = ", ".join(f"{key!r}: {value!r}" for key, value in self.items())
        return f"HashMap({{{pairs}}})"
