"""
Duplicate grouping within size buckets.
"""

import functools
import logging
from typing import Callable, List, Optional, Sequence, Set

from tqdm import tqdm

from .comparator import files_equal
from .config import ScanConfig
from .formatter import format_file_size
from .index import SizeIndex
from .models import DuplicateGroup

logger = logging.getLogger(__name__)

EqualFunc = Callable[[str, str], bool]


def group_bucket(paths: Sequence[str], equal: EqualFunc, size: int = 0) -> List[DuplicateGroup]:
    """
    Partition one size bucket into groups of identical files.

    Each unmatched file is compared with every later unmatched file. The first
    match opens a group and later matches join it. A file placed in a group is
    not compared again, so each file lands in at most one group and each pair
    is compared at most once.

    Args:
        paths: Files sharing one size, in discovery order
        equal: Content comparison function
        size: Size of the files in the bucket

    Returns:
        Groups in discovery order; files matching nothing are left out
    """
    matched: Set[str] = set()
    groups = []

    for i, first in enumerate(paths):
        if first in matched:
            continue

        group = None
        for other in paths[i + 1:]:
            if other in matched:
                continue
            if equal(first, other):
                if group is None:
                    group = DuplicateGroup(size=size, paths=[first])
                    matched.add(first)
                group.paths.append(other)
                matched.add(other)

        if group is not None:
            groups.append(group)

    return groups


def find_duplicate_groups(index: SizeIndex,
                          equal: Optional[EqualFunc] = None,
                          config: Optional[ScanConfig] = None,
                          show_progress: bool = False) -> List[DuplicateGroup]:
    """
    Find every group of identical files recorded in a size index.

    Only candidate sizes are visited, in ascending order, so files of different
    sizes are never compared.

    Args:
        index: Populated size index
        equal: Comparison function; defaults to files_equal with the
            configured buffer schedule
        config: Scan configuration
        show_progress: Display a tqdm progress bar over candidate sizes

    Returns:
        Duplicate groups ordered by size, then by discovery order
    """
    config = config or ScanConfig()
    if equal is None:
        equal = functools.partial(files_equal, schedule=config.buffer_schedule)

    candidate_sizes = index.candidate_sizes()
    logger.debug("Comparing contents of %d candidate sizes", len(candidate_sizes))

    groups = []
    for size in tqdm(candidate_sizes, desc="Comparing", unit=" sizes", leave=False, disable=not show_progress):
        bucket_groups = group_bucket(index.bucket(size), equal, size=size)
        if bucket_groups:
            logger.debug("Size %s: %d duplicate groups", format_file_size(size), len(bucket_groups))
        groups.extend(bucket_groups)

    logger.info("Found %d duplicate groups", len(groups))
    return groups
