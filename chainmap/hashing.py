import zlib
from typing import Any, Callable, Hashable

HashFunction = Callable[[Hashable], int]
EqualFunction = Callable[[Any, Any], bool]


def default_hash(key: Hashable) -> int:
    """crc32 for text and bytes so bucket placement is stable across runs, hash() for the rest."""
    if isinstance(key, str):
        return zlib.crc32(key.encode("utf-8"))
    if isinstance(key, (bytes, bytearray)):
        return zlib.crc32(key)
    return hash(key)


def default_equal(left: Any, right: Any) -> bool:
    return left == right
