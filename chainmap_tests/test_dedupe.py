from unittest.mock import patch

import pytest

from chainmap.dedupe import (
    build_parser,
    dedupe_large_file,
    dedupe_partition,
    main,
    partition_index,
)


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("apple\nbanana\napple\ncherry\nbanana\ndate\napple")
    return path


@pytest.fixture(autouse=True)
def no_psutil():
    with patch('chainmap.dedupe.get_memory_usage', return_value=0) as mock_memory:
        yield mock_memory


def read_lines(path):
    with open(path) as f:
        return f.read().splitlines()


def work_dirs(path):
    return list(path.glob("temp_files_*"))


def test_dedupe_large_file(tmp_path, input_file):
    output = tmp_path / "out" / "output.txt"
    output.parent.mkdir()

    report = dedupe_large_file(str(input_file), str(output), num_partitions=3)

    assert sorted(read_lines(output)) == ["apple", "banana", "cherry", "date"]
    assert report.lines == 7
    assert report.unique == 4
    assert work_dirs(output.parent) == []


def test_missing_final_newline_is_same_line(tmp_path):
    # a partition count where the raw text with and without "\n" would split
    num_partitions = next(
        n for n in range(2, 100)
        if partition_index("apple\n", n) != partition_index("apple", n)
    )
    source = tmp_path / "input.txt"
    source.write_text("apple\nbanana\napple")
    output = tmp_path / "output.txt"

    report = dedupe_large_file(str(source), str(output), num_partitions=num_partitions)

    assert sorted(read_lines(output)) == ["apple", "banana"]
    assert report.unique == 2


def test_single_partition_keeps_first_occurrence_order(tmp_path, input_file):
    output = tmp_path / "output.txt"

    dedupe_large_file(str(input_file), str(output), num_partitions=1)

    assert read_lines(output) == ["apple", "banana", "cherry", "date"]


def test_existing_temp_files_dir_survives(tmp_path, input_file):
    existing = tmp_path / "temp_files"
    existing.mkdir()
    (existing / "keep.txt").write_text("mine")

    dedupe_large_file(str(input_file), str(tmp_path / "output.txt"), num_partitions=2)

    assert (existing / "keep.txt").read_text() == "mine"
    assert work_dirs(tmp_path) == []


def test_keep_temp(tmp_path, input_file):
    dedupe_large_file(str(input_file), str(tmp_path / "output.txt"), num_partitions=2, keep_temp=True)

    [work_dir] = work_dirs(tmp_path)
    assert (work_dir / "partition_0.txt").exists()
    assert (work_dir / "partition_1.dedup.txt").exists()


def test_rejects_zero_partitions(tmp_path, input_file):
    with pytest.raises(ValueError):
        dedupe_large_file(str(input_file), str(tmp_path / "o.txt"), num_partitions=0)
    assert work_dirs(tmp_path) == []


def test_empty_input(tmp_path):
    source = tmp_path / "empty.txt"
    source.write_text("")
    output = tmp_path / "output.txt"

    report = dedupe_large_file(str(source), str(output), num_partitions=2)

    assert output.read_text() == ""
    assert report.lines == 0
    assert report.unique == 0


def test_dedupe_partition_reports_map_growth(tmp_path):
    source = tmp_path / "partition.txt"
    source.write_text("".join(f"line-{i % 15}\n" for i in range(40)))
    out = tmp_path / "partition.dedup.txt"

    report = dedupe_partition(str(source), str(out), 0, hash_function=lambda text: 1)

    assert read_lines(out) == [f"line-{i}" for i in range(15)]
    assert report.lines == 40
    assert report.unique == 15
    assert report.bucket_count == 20
    assert report.load_factor == 15 / 20


def test_main(tmp_path, input_file, no_psutil):
    output = tmp_path / "output.txt"

    assert main(["-i", str(input_file), "-o", str(output), "-p", "4"]) == 0

    assert sorted(read_lines(output)) == ["apple", "banana", "cherry", "date"]
    assert no_psutil.called


def test_parser_requires_paths():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-i", "only-input.txt"])
