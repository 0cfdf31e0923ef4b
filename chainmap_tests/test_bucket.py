from chainmap.bucket import Bucket
from chainmap.hashing import default_equal


def test_find_on_empty_bucket():
    bucket = Bucket()
    assert bucket.find("a", default_equal) is None
    assert len(bucket) == 0


def test_append_keeps_insertion_order():
    bucket = Bucket()
    for i, key in enumerate(["a", "b", "c"]):
        bucket.append(key, i)

    assert [entry.key for entry in bucket] == ["a", "b", "c"]
    assert bucket.find("b", default_equal) == 1
    assert bucket.entry_at(2).value == 2


def test_remove_at_closes_the_gap():
    bucket = Bucket()
    for i, key in enumerate(["a", "b", "c"]):
        bucket.append(key, i)

    removed = bucket.remove_at(1)

    assert removed.key == "b"
    assert [entry.key for entry in bucket] == ["a", "c"]
    assert bucket.find("b", default_equal) is None
    assert bucket.find("c", default_equal) == 1


def test_find_uses_supplied_equality():
    bucket = Bucket()
    bucket.append("Alice", 92)

    def case_insensitive(left, right):
        return left.lower() == right.lower()

    assert bucket.find("ALICE", default_equal) is None
    assert bucket.find("ALICE", case_insensitive) == 0


def test_entry_value_updates_in_place():
    bucket = Bucket()
    bucket.append("Bob", 87)
    bucket.entry_at(bucket.find("Bob", default_equal)).value = 89

    assert bucket.entry_at(0).value == 89
    assert len(bucket) == 1
