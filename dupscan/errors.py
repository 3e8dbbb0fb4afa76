"""
Exception hierarchy for dupscan.
"""


class DupscanError(Exception):
    """Base exception for all dupscan errors."""


class ScanError(DupscanError):
    """The scan root could not be walked."""


class PathNotFound(ScanError):
    """The scan root does not exist."""


class NotADirectory(ScanError):
    """The scan root exists but is not a directory."""


class FileOpenFailure(DupscanError):
    """A file vanished or became unreadable between indexing and comparison."""

    def __init__(self, path: str, reason: Exception):
        super().__init__(f"Could not open {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidArguments(DupscanError):
    """Wrong command-line arguments."""


class ConfigError(DupscanError):
    """Invalid configuration value."""
