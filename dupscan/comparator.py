"""
Byte-for-byte file comparison for duplicate detection.

Files are compared in passes of growing size: two different files usually
differ near the start, so the first pass reads only a few bytes, and files that
keep matching are read in ever larger blocks.
"""

import itertools
import logging
import os
from typing import BinaryIO, Iterator, Sequence, Union

from .config import DEFAULT_BUFFER_SCHEDULE
from .errors import FileOpenFailure

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

# Global warning counter to avoid spam
_warning_counts = {
    'permission_denied': 0,
    'file_not_found': 0,
    'io_errors': 0,
}

_MAX_WARNINGS_PER_TYPE = 5


def pass_sizes(schedule: Sequence[int]) -> Iterator[int]:
    """Yield the read size of each pass, repeating the last size forever."""
    return itertools.chain(schedule, itertools.repeat(schedule[-1]))


def _read_block(stream: BinaryIO, size: int) -> bytes:
    """Read up to ``size`` bytes, stopping early only at end of stream."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def streams_equal(stream_a: BinaryIO, stream_b: BinaryIO,
                  schedule: Sequence[int] = DEFAULT_BUFFER_SCHEDULE) -> bool:
    """
    Compare two binary streams block by block.

    Each pass reads the scheduled number of bytes from both streams and
    compares exactly the bytes that were read. A short read means end of
    stream.

    Args:
        stream_a: First stream, positioned at its start
        stream_b: Second stream, positioned at its start
        schedule: Read size for each pass

    Returns:
        True if both streams hold the same bytes
    """
    for size in pass_sizes(schedule):
        block_a = _read_block(stream_a, size)
        block_b = _read_block(stream_b, size)

        if block_a != block_b:
            return False

        if len(block_a) < size:
            return True


def _open_binary(path: PathLike) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as e:
        raise FileOpenFailure(os.fspath(path), e) from e


def files_equal(path_a: PathLike, path_b: PathLike,
                schedule: Sequence[int] = DEFAULT_BUFFER_SCHEDULE) -> bool:
    """
    Check whether two files have identical contents.

    A file that cannot be opened or read counts as different from its partner;
    a warning is logged and the scan carries on.

    Args:
        path_a: Path to the first file
        path_b: Path to the second file
        schedule: Read size for each comparison pass

    Returns:
        True if the files are byte-for-byte identical
    """
    try:
        with _open_binary(path_a) as stream_a, _open_binary(path_b) as stream_b:
            return streams_equal(stream_a, stream_b, schedule)

    except FileOpenFailure as e:
        partner = path_b if e.path == os.fspath(path_a) else path_a
        if isinstance(e.reason, PermissionError):
            _record_failed_comparison('permission_denied', e.path, partner, e.reason)
        elif isinstance(e.reason, FileNotFoundError):
            _record_failed_comparison('file_not_found', e.path, partner, e.reason)
        else:
            _record_failed_comparison('io_errors', e.path, partner, e.reason)
        return False
    except OSError as e:
        _record_failed_comparison('io_errors', path_a, path_b, e)
        return False


def _record_failed_comparison(failure_type: str, path: PathLike, partner: PathLike, reason: Exception) -> None:
    """
    Count a comparison that could not be completed and log it.

    Only the first few failures of each type are logged; after that one
    suppression notice is logged and the rest are only counted.
    """
    count = _warning_counts.get(failure_type, 0)
    _warning_counts[failure_type] = count + 1

    if count < _MAX_WARNINGS_PER_TYPE:
        logger.warning("Treating %s and %s as different, could not read %s: %s",
                       path, partner, path, reason)
    elif count == _MAX_WARNINGS_PER_TYPE:
        failure_name = failure_type.replace('_', ' ').title()
        logger.warning("%s: further failed comparisons will not be logged", failure_name)


def get_warning_summary() -> dict:
    """Failed comparisons so far, by failure type."""
    return _warning_counts.copy()


def reset_warning_counters() -> None:
    """Reset failure counters (useful for testing)."""
    for warning_type in _warning_counts:
        _warning_counts[warning_type] = 0
