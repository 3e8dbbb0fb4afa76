"""
Directory scanning functionality.
"""

import logging
import os
from typing import Dict, Iterator, List, Optional, Union

from tqdm import tqdm

from .errors import NotADirectory, PathNotFound
from .index import SizeIndex
from .models import FileEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_MAX_WARNINGS_SHOWN = 5


class ScanResult:
    """Container for the size index built by a scan, plus warnings."""

    def __init__(self):
        self.index = SizeIndex()
        self.warnings: List[str] = []
        self.skipped_items: Dict[str, int] = {
            'permission_denied': 0,
            'symlinks': 0,
            'special_files': 0,
            'other_errors': 0
        }

    @property
    def num_skipped(self) -> int:
        return sum(self.skipped_items.values())


def walk_files(root: PathLike, result: Optional[ScanResult] = None) -> Iterator[FileEntry]:
    """
    Lazily yield every regular file under ``root``.

    Directories are walked with an explicit stack, entries sorted by name, so
    the order is the same on every run and deep trees do not grow the call
    stack. Symlinks are never followed. Anything that is neither a directory
    nor a regular file is skipped.

    Args:
        root: Directory to walk
        result: Optional ScanResult collecting warnings and skip counters

    Yields:
        FileEntry with the absolute path and size of each regular file

    Raises:
        PathNotFound: if root does not exist
        NotADirectory: if root is not a directory
    """
    if result is None:
        result = ScanResult()

    root_path = os.path.abspath(os.fspath(root))
    if not os.path.exists(root_path):
        raise PathNotFound(f"Root directory {root_path} does not exist")
    if not os.path.isdir(root_path):
        raise NotADirectory(f"Root path {root_path} is not a directory")

    stack = [root_path]
    while stack:
        directory = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except PermissionError as e:
            _skip(result, 'permission_denied', f"Permission denied listing {directory}: {e}")
            continue
        except OSError as e:
            _skip(result, 'other_errors', f"Cannot list {directory}: {e}")
            continue

        subdirs = []
        for entry in entries:
            file_entry = _process_entry(entry, subdirs, result)
            if file_entry is not None:
                yield file_entry

        # Reversed so the alphabetically first subdirectory is walked next
        stack.extend(reversed(subdirs))


def _process_entry(entry: os.DirEntry, subdirs: List[str], result: ScanResult) -> Optional[FileEntry]:
    """Classify one directory entry; queue directories, return regular files."""
    try:
        if entry.is_symlink():
            logger.debug("Skipping symbolic link: %s", entry.path)
            result.skipped_items['symlinks'] += 1
            return None

        if entry.is_dir(follow_symlinks=False):
            subdirs.append(entry.path)
            return None

        if entry.is_file(follow_symlinks=False):
            size = entry.stat(follow_symlinks=False).st_size
            return FileEntry(path=entry.path, size=size)

        logger.debug("Skipping special file: %s", entry.path)
        result.skipped_items['special_files'] += 1

    except PermissionError as e:
        _skip(result, 'permission_denied', f"Permission denied: {entry.path} ({e})")
    except OSError as e:
        _skip(result, 'other_errors', f"OS error processing {entry.path}: {e}")
    return None


def _skip(result: ScanResult, kind: str, message: str) -> None:
    logger.debug(message)
    result.warnings.append(message)
    result.skipped_items[kind] += 1


def scan_directory(root: PathLike, show_progress: bool = True) -> ScanResult:
    """
    Walk ``root`` and record every regular file in a new size index.

    Args:
        root: Directory to scan
        show_progress: Display a tqdm progress bar on stderr

    Returns:
        ScanResult holding the populated SizeIndex

    Raises:
        PathNotFound: if root does not exist
        NotADirectory: if root is not a directory
    """
    result = ScanResult()
    files_found = 0
    logger.info("Scanning directory: %s", root)

    try:
        with tqdm(desc="Scanning", unit=" files", leave=False, disable=not show_progress) as pbar:
            for file_entry in walk_files(root, result):
                result.index.record(file_entry.path, file_entry.size)
                files_found += 1
                pbar.update(1)

                if files_found % 1000 == 0:
                    pbar.set_postfix(
                        sizes=len(result.index),
                        warnings=len(result.warnings),
                        refresh=False
                    )
    except KeyboardInterrupt:
        logger.error("Scan interrupted. Found %d files so far.", files_found)
        raise

    _report_warnings(result)
    logger.info(
        "Found %d files in %d distinct sizes, %d sizes need content comparison",
        result.index.num_files, len(result.index), len(result.index.candidate_sizes())
    )
    return result


def _report_warnings(result: ScanResult) -> None:
    if not result.warnings:
        return

    logger.warning("Scan completed with %d warnings:", len(result.warnings))
    for warning in result.warnings[:_MAX_WARNINGS_SHOWN]:
        logger.warning("  %s", warning)
    if len(result.warnings) > _MAX_WARNINGS_SHOWN:
        logger.warning("  ... and %d more warnings", len(result.warnings) - _MAX_WARNINGS_SHOWN)
