import os

from ignorewalk.types import PathType


class IgnoreWalkError(Exception):
    """Base class for errors reported while walking.

    Attributes:
        path (str): The path the error concerns.
    """

    def __init__(self, path: PathType, message: str) -> None:
        self.path = os.fspath(path)
        super().__init__(message)


class RootNotFoundError(IgnoreWalkError):
    """
    Exception raised when a requested root path does not exist.

    This also covers wildcard path arguments that match nothing. The error only
    concerns the one root; other roots are still walked.

    Example:
        >>> error = RootNotFoundError("/no/such/dir")
        >>> str(error)
        'Path not found: /no/such/dir'
    """

    def __init__(self, path: PathType) -> None:
        super().__init__(path, f"Path not found: {os.fspath(path)}")


class WalkIOError(IgnoreWalkError):
    """
    Exception raised when a directory cannot be enumerated or a rule file cannot be read.

    The subtree below the failed directory contributes nothing to the output, which
    is why the failure is always reported rather than treated as an empty directory.

    Attributes:
        path (str): The directory or rule file that failed.
        cause (OSError): The underlying operating system error.

    Example:
        >>> error = WalkIOError("/data/locked", PermissionError(13, "Permission denied"))
        >>> str(error)
        'Cannot read /data/locked: Permission denied'
    """

    def __init__(self, path: PathType, cause: OSError) -> None:
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(path, f"Cannot read {os.fspath(path)}: {reason}")
