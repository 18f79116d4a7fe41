"""Directory enumeration for the walker."""

import os
import stat
from typing import List, Optional

from ignorewalk.types import PathType

# Only Windows reports file attributes
_FILE_ATTRIBUTE_HIDDEN = stat.FILE_ATTRIBUTE_HIDDEN if os.name == "nt" else 0


def is_hidden(name: str, stat_result: Optional[os.stat_result] = None) -> bool:
    """Decide whether an item is hidden.

    Names starting with a dot are hidden everywhere. On Windows the hidden file
    attribute also counts.

    Example:
        >>> is_hidden(".gitignore")
        True
        >>> is_hidden("README.md")
        False
    """
    if name.startswith("."):
        return True
    attributes = getattr(stat_result, "st_file_attributes", 0)
    return bool(attributes & _FILE_ATTRIBUTE_HIDDEN)


class DirectoryEntry:
    """A single child of an enumerated directory.

    Attributes:
        name (str): The item's base name.
        path (str): The item's path, joined onto the directory path as given.
        is_dir (bool): True if the walker should treat the item as a directory.
        is_hidden (bool): True if the item is hidden.

    Example:
        >>> entry = DirectoryEntry("notes.txt", "docs/notes.txt", is_dir=False)
        >>> entry.name
        'notes.txt'
        >>> entry.is_dir
        False
    """

    __slots__ = ("name", "path", "is_dir", "is_hidden")

    def __init__(
        self,
        name: str,
        path: str,
        is_dir: bool = False,
        is_hidden: bool = False,
    ) -> None:
        self.name = name
        self.path = path
        self.is_dir = is_dir
        self.is_hidden = is_hidden

    def __repr__(self) -> str:
        kind = "dir" if self.is_dir else "file"
        return f"DirectoryEntry({self.path!r}, {kind})"


def scan_directory(
    directory: PathType, follow_symlinks: bool = False, display_path: Optional[PathType] = None
) -> List[DirectoryEntry]:
    """List the immediate children of a directory, sorted by name.

    Args:
        directory: The directory to enumerate.
        follow_symlinks: Whether a symbolic link to a directory counts as a directory.
            When False, every symbolic link is treated as a file.
        display_path: The form of ``directory`` that entry paths are joined onto.
            Defaults to ``directory`` itself.

    Returns:
        The children, sorted by name.

    Raises:
        OSError: If the directory cannot be enumerated.
    """
    prefix = os.fspath(directory if display_path is None else display_path)
    entries = []
    with os.scandir(directory) as it:
        for item in it:
            try:
                is_dir = item.is_dir(follow_symlinks=follow_symlinks)
            except OSError:
                is_dir = False
            stat_result = None
            if _FILE_ATTRIBUTE_HIDDEN:
                try:
                    stat_result = item.stat(follow_symlinks=False)
                except OSError:
                    pass
            entries.append(
                DirectoryEntry(
                    item.name,
                    os.path.join(prefix, item.name),
                    is_dir=is_dir,
                    is_hidden=is_hidden(item.name, stat_result),
                )
            )
    entries.sort(key=lambda entry: entry.name)
    return entries


def path_is_hidden(path: PathType) -> bool:
    """Decide whether a path given directly, rather than enumerated, is hidden."""
    stat_result = None
    if _FILE_ATTRIBUTE_HIDDEN:
        try:
            stat_result = os.stat(path, follow_symlinks=False)
        except OSError:
            pass
    return is_hidden(os.path.basename(os.fspath(path)), stat_result)
