from typing import Any, Iterator, Optional

from chainmap.hashing import EqualFunction


class Entry:
    __slots__ = ("key", "value")

    def __init__(self, key: Any, value: Any):
        self.key = key
        self.value = value

    def __repr__(self):
        return f"Entry({self.key!r}, {self.value!r})"


class Bucket:
    """
    Entries whose keys reduce to the same index, kept in insertion order.
    Duplicate keys are the owning map's problem, not the bucket's.
    """
    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def find(self, key: Any, equal: EqualFunction) -> Optional[int]:
        for position, entry in enumerate(self._entries):
            if equal(entry.key, key):
                return position
        return None

    def entry_at(self, position: int) -> Entry:
        return self._entries[position]

    def append(self, key: Any, value: Any) -> None:
        self._entries.append(Entry(key, value))

    def remove_at(self, position: int) -> Entry:
        return self._entries.pop(position)
