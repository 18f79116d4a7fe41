from enum import Enum
from os import PathLike
from pathlib import Path
from typing import NamedTuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class OutputMode(Enum):
    """What a walk reports.

    Attributes:
        FILES: Every surviving file, as soon as it is judged
        DIRECTORIES: Every directory that transitively contains a surviving file
    """

    FILES = "files"
    DIRECTORIES = "directories"


class WalkResult(NamedTuple):
    """One reported item.

    Attributes:
        path: The item's path, built from the root exactly as it was given.
        is_dir: True for directories reported in DIRECTORIES mode.
    """

    path: Path
    is_dir: bool
