"""Device/inode identity used to detect symlink loops."""

import os
from typing import NamedTuple, Optional

from ignorewalk.types import PathType


class FileIdentifier(NamedTuple):
    """Uniquely identifies a directory by its device and inode numbers.

    Two paths reaching the same directory, for instance through a symbolic link,
    share one identifier.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Note:
        On Windows, inode numbers might be handled differently than on Unix systems,
        but Python's os.stat implementation provides values that can be used
        for uniquely identifying files.
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_path(cls, path: PathType) -> Optional["FileIdentifier"]:
        """Stat a path, following symlinks.

        Returns:
            The identifier, or None if the path cannot be stat'ed.
        """
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)
