"""
Remove duplicate lines from a text file too large for one in-memory map.

Lines are spread over partition files first, so each HashMap only ever holds
one partition. Every partition is deduplicated by put()ing each line and
keeping the ones that had no previous value.
"""
import argparse
import logging
import os
import shutil
import sys
import tempfile
import zlib
from collections import namedtuple
from typing import Callable, Iterator, Optional, TextIO

import psutil

from chainmap.hash_map import HashMap

BUFFER_SIZE = 1 << 20

DedupeReport = namedtuple("DedupeReport", ["lines", "unique", "bucket_count", "load_factor"])


def get_memory_usage() -> int:
    """Return current process RSS memory usage in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss


def iter_text(stream: TextIO) -> Iterator[str]:
    """Yield each line without its newline, so a missing final newline changes nothing."""
    for line in stream:
        yield line.rstrip("\n")


def partition_index(text: str, num_partitions: int) -> int:
    # adler32 keeps partitions independent of the map's crc32 bucket placement
    return zlib.adler32(text.encode("utf-8", "ignore")) % num_partitions


def partition_path(work_dir: str, index: int, suffix: str = "txt") -> str:
    return os.path.join(work_dir, f"partition_{index}.{suffix}")


def partition_file(input_path: str, work_dir: str, num_partitions: int) -> int:
    """Split input_path into num_partitions files and return the number of lines read."""
    partitions = [
        open(partition_path(work_dir, i), "w", buffering=BUFFER_SIZE)
        for i in range(num_partitions)
    ]
    lines = 0
    try:
        with open(input_path, "r", buffering=BUFFER_SIZE) as fin:
            for text in iter_text(fin):
                partitions[partition_index(text, num_partitions)].write(text + "\n")
                lines += 1
    finally:
        for f in partitions:
            f.close()
    logging.info(f"Partitioned {lines} lines into {num_partitions} files")
    return lines


def dedupe_partition(
    source_path: str,
    deduped_path: str,
    index: int,
    hash_function: Optional[Callable[[str], int]] = None
) -> DedupeReport:
    seen = HashMap(hash_function=hash_function)
    lines = 0
    with open(source_path, "r", buffering=BUFFER_SIZE) as fin, \
            open(deduped_path, "w", buffering=BUFFER_SIZE) as fout:
        for lines, text in enumerate(iter_text(fin), start=1):
            if seen.put(text, lines) is None:
                fout.write(text + "\n")

    report = DedupeReport(lines, seen.size(), seen.bucket_count(), seen.load_factor())
    logging.info(
        f"Partition #{index}: {report.lines} lines, {report.unique} unique; "
        f"map at {report.bucket_count} buckets, load factor {report.load_factor:.2f}; "
        f"memory {get_memory_usage() / 1e6:.2f} MB"
    )
    return report


def dedupe_large_file(
    input_file: str,
    output_file: str,
    num_partitions: int = 100,
    hash_function: Optional[Callable[[str], int]] = None,
    keep_temp: bool = False
) -> DedupeReport:
    """
    Write the first occurrence of every distinct line of input_file to
    output_file. Lines come out grouped by partition, in input order within
    each partition.

    Work files live in a fresh temp_files_* directory next to the output,
    removed afterwards unless keep_temp is set. The returned report sums lines
    and unique lines over all partitions and carries the largest map seen.
    """
    if num_partitions < 1:
        raise ValueError(f"num_partitions must be at least 1, got {num_partitions}")

    output_dir = os.path.dirname(os.path.abspath(output_file))
    work_dir = tempfile.mkdtemp(prefix="temp_files_", dir=output_dir)
    logging.info(f"Work directory: {work_dir}")

    try:
        lines = partition_file(input_file, work_dir, num_partitions)

        reports = [
            dedupe_partition(
                partition_path(work_dir, i),
                partition_path(work_dir, i, "dedup.txt"),
                i,
                hash_function,
            )
            for i in range(num_partitions)
        ]

        with open(output_file, "w", buffering=BUFFER_SIZE) as fout:
            for i in range(num_partitions):
                with open(partition_path(work_dir, i, "dedup.txt"), "r", buffering=BUFFER_SIZE) as fin:
                    shutil.copyfileobj(fin, fout)
    finally:
        if not keep_temp:
            shutil.rmtree(work_dir, ignore_errors=True)

    largest = max(reports, key=lambda r: r.bucket_count)
    report = DedupeReport(
        lines,
        sum(r.unique for r in reports),
        largest.bucket_count,
        largest.load_factor,
    )
    logging.info(f"Wrote {report.unique} of {report.lines} lines to {output_file}")
    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Remove duplicate lines from a large text file."
    )
    parser.add_argument("-i", "--input_file", required=True, help="Text file to deduplicate")
    parser.add_argument("-o", "--output_file", required=True, help="Where the distinct lines go")
    parser.add_argument(
        "-p",
        "--partitions",
        type=int,
        default=100,
        help="Number of partition files (more partitions, smaller maps)",
    )
    parser.add_argument(
        "--keep-temp",
        action="store_true",
        help="Leave the work directory next to the output",
    )
    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        stream=sys.stdout,
        level=logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
        force=True,
    )
    args = build_parser().parse_args(argv)

    dedupe_large_file(
        args.input_file,
        args.output_file,
        num_partitions=args.partitions,
        keep_temp=args.keep_temp,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
