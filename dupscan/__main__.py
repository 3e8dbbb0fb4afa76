"""
Allow running the package with ``python -m dupscan``.
"""

from .cli import main

if __name__ == "__main__":
    main()
