"""
Output formatting for duplicate detection results.
"""

import json
from typing import List

from .index import SizeIndex
from .models import DuplicateGroup, ScanStats


def format_file_size(size: int) -> str:
    """Format file size in human-readable format."""
    if size < 1024:
        return f"{size} bytes"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    elif size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    else:
        return f"{size / (1024 * 1024 * 1024):.1f} GB"


def compute_stats(index: SizeIndex) -> ScanStats:
    """Count every file in the index and the bytes they hold."""
    stats = ScanStats()
    for size in index.all_sizes():
        count = len(index.bucket(size))
        stats.num_files += count
        stats.total_bytes += size * count
    return stats


def format_group(group: DuplicateGroup) -> str:
    """
    Format one group as a bracketed, comma-separated block::

        [ /data/a.txt,
          /data/b.txt ]
    """
    lines = []
    last = len(group.paths) - 1
    for position, path in enumerate(group.paths):
        prefix = "[ " if position == 0 else "  "
        suffix = " ]" if position == last else ","
        lines.append(f"{prefix}{path}{suffix}")
    return "\n".join(lines)


def format_stats(stats: ScanStats) -> str:
    return "\n".join([
        "-- Stats --",
        f"Number of files scanned: {stats.num_files}",
        f"Total data compared: {stats.total_megabytes:.2f}MB",
    ])


def format_report(groups: List[DuplicateGroup], stats: ScanStats) -> str:
    """
    Build the console report: header, one block per group, then the stats.

    Args:
        groups: Duplicate groups to list
        stats: Statistics over the whole scan

    Returns:
        Report text ending with a newline
    """
    parts = ["Matching Files:\n"]
    for group in groups:
        if group.paths:
            parts.append(format_group(group) + "\n\n")
    parts.append(format_stats(stats) + "\n")
    return "".join(parts)


def format_json_report(groups: List[DuplicateGroup], stats: ScanStats) -> str:
    """Format the results as JSON for scripting and programmatic access."""
    output = {
        "duplicate_groups": [
            {
                "size": group.size,
                "size_formatted": format_file_size(group.size),
                "count": group.count,
                "paths": list(group.paths),
            }
            for group in groups
            if group.paths
        ],
        "statistics": {
            "total_files": stats.num_files,
            "total_bytes": stats.total_bytes,
            "total_megabytes": round(stats.total_megabytes, 2),
            "duplicate_groups_count": len(groups),
            "duplicate_files_count": sum(group.count for group in groups),
            "potential_savings": sum(group.wasted_size for group in groups),
        }
    }
    return json.dumps(output, indent=2)
