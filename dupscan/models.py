"""
Data models shared by the scanner, grouper and reporter.
"""

from dataclasses import dataclass, field
from typing import List

BYTES_PER_MEGABYTE = 1 << 20


@dataclass(frozen=True)
class FileEntry:
    """A regular file discovered during traversal."""
    path: str
    size: int


@dataclass
class DuplicateGroup:
    """Files of one size confirmed to be byte-for-byte identical."""
    size: int
    paths: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.paths)

    @property
    def wasted_size(self) -> int:
        """Bytes that could be reclaimed by keeping a single copy."""
        return self.size * (len(self.paths) - 1)


@dataclass
class ScanStats:
    """Aggregate statistics over every file in the size index."""
    num_files: int = 0
    total_bytes: int = 0

    @property
    def total_megabytes(self) -> float:
        return self.total_bytes / BYTES_PER_MEGABYTE
