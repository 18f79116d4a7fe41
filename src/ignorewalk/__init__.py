"""Gitignore-style filtered directory listing.

This package walks directory trees while applying a per-directory stack of
gitignore-style rules, without needing a version control system.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("ignorewalk")
except PackageNotFoundError:
    __version__ = "unknown"
