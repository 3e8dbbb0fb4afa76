"""
Size index: files bucketed by their size in bytes.

Only files that share a size can be identical, so the grouper compares files
inside a bucket and never across buckets.
"""

from collections import defaultdict
from typing import Dict, List, Set, Tuple


class SizeIndex:
    """
    Mapping from file size to the ordered paths observed with that size.

    Sizes whose bucket holds two or more paths are tracked as candidate sizes.
    A size becomes a candidate when its second path is recorded and stays one
    for the rest of the run. Nothing is ever removed.
    """

    def __init__(self):
        self._buckets: Dict[int, List[str]] = defaultdict(list)
        self._candidates: Set[int] = set()

    def record(self, path: str, size: int) -> None:
        """Append a path to the bucket for its size."""
        if size < 0:
            raise ValueError(f"File size cannot be negative: {size}")
        bucket = self._buckets[size]
        bucket.append(path)
        if len(bucket) == 2:
            self._candidates.add(size)

    def bucket(self, size: int) -> Tuple[str, ...]:
        """Return the paths recorded for a size, in recording order."""
        return tuple(self._buckets.get(size, ()))

    def all_sizes(self) -> List[int]:
        return sorted(self._buckets)

    def candidate_sizes(self) -> List[int]:
        """Sizes shared by at least two files, ascending."""
        return sorted(self._candidates)

    @property
    def num_files(self) -> int:
        return sum(len(paths) for paths in self._buckets.values())

    @property
    def total_bytes(self) -> int:
        return sum(size * len(paths) for size, paths in self._buckets.items())

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, size: int) -> bool:
        return size in self._buckets


def dump_index(index: SizeIndex) -> str:
    """Describe every bucket of the index, for debug logging."""
    lines = []
    for size in index.all_sizes():
        paths = index.bucket(size)
        if len(paths) > 1:
            lines.append("Potential dup!")
        lines.append(f"Key {size}:")
        lines.extend(f"  {path}" for path in paths)
    candidates = index.candidate_sizes()
    lines.append(f"Candidate sizes: {', '.join(str(size) for size in candidates) or 'none'}")
    return "\n".join(lines)
