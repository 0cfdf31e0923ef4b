from typing import Any, Iterator, Optional

from chainmap.bucket import Bucket, Entry
from chainmap.hashing import HashFunction


class BucketArray:
    """
    Fixed-length run of buckets. The length only changes by building a new
    array with rebuild(); the old one is dropped by whoever held it.
    """

    def __init__(self, bucket_count: int, hash_function: HashFunction) -> None:
        if bucket_count < 1:
            raise ValueError(f"bucket_count must be at least 1, got {bucket_count}")
        self._hash = hash_function
        self._buckets: list[Bucket] = [Bucket() for _ in range(bucket_count)]

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def index_for(self, key: Any, bucket_count: Optional[int] = None) -> int:
        if bucket_count is None:
            bucket_count = self.bucket_count
        hashed = self._hash(key)
        if not isinstance(hashed, int) or isinstance(hashed, bool):
            raise TypeError(
                f"hash function must return an int, got {type(hashed).__name__} for key {key!r}"
            )
        # Python's % with a positive divisor is already non-negative
        return hashed % bucket_count

    def bucket_at(self, index: int) -> Bucket:
        return self._buckets[index]

    def bucket_for(self, key: Any) -> Bucket:
        return self._buckets[self.index_for(key)]

    def entries(self) -> Iterator[Entry]:
        for bucket in self._buckets:
            yield from bucket

    def rebuild(self, new_bucket_count: int) -> "BucketArray":
        rebuilt = BucketArray(new_bucket_count, self._hash)
        for entry in self.entries():
            rebuilt.bucket_at(rebuilt.index_for(entry.key)).append(entry.key, entry.value)
        return rebuilt
