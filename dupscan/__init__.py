"""
dupscan - find byte-for-byte identical files under a directory tree.
"""

__version__ = "1.0.0"
