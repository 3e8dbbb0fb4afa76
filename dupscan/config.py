"""
Runtime configuration for a scan.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from .errors import ConfigError

# Read sizes for successive comparison passes. Real differences usually show up
# in the first few bytes, so the first pass is tiny; files that keep matching
# get progressively larger reads. The last entry is reused once the table runs
# out. Tuned for small (<1KB) and large (>1GB) files.
DEFAULT_BUFFER_SCHEDULE: Tuple[int, ...] = (64, 255, 4096, 65535, 16777216, 268435456)

OUTPUT_FORMATS = ("text", "json")


def validate_buffer_schedule(schedule: Iterable[int]) -> Tuple[int, ...]:
    """
    Check a buffer schedule and return it as a tuple.

    Raises:
        ConfigError: if the schedule is empty or holds a non-positive size
    """
    sizes = tuple(schedule)
    if not sizes:
        raise ConfigError("Buffer schedule must contain at least one size")
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ConfigError(f"Invalid buffer size in schedule: {size!r}")
    return sizes


def parse_buffer_schedule(text: str) -> Tuple[int, ...]:
    """Parse a comma-separated list such as ``"64,4096,65536"``."""
    sizes = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            sizes.append(int(part))
        except ValueError:
            raise ConfigError(f"Invalid buffer size in schedule: {part!r}") from None
    return validate_buffer_schedule(sizes)


@dataclass
class ScanConfig:
    """Settings for one run of the duplicate finder."""
    buffer_schedule: Tuple[int, ...] = DEFAULT_BUFFER_SCHEDULE
    show_progress: bool = True
    output_format: str = "text"

    def __post_init__(self):
        self.buffer_schedule = validate_buffer_schedule(self.buffer_schedule)
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"Unknown output format: {self.output_format}")
