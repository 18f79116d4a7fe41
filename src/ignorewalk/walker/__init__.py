"""Filtered directory walking.

This package provides the FilteredWalker traversal engine together with the
filesystem and path-resolution helpers it relies on.
"""

from .error_action import ErrorAction
from .filtered_walker import FilteredWalker
from .path_resolver import resolve_paths

__all__ = ["ErrorAction", "FilteredWalker", "resolve_paths"]
