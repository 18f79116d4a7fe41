"""Error action enum for handling I/O errors during directory traversal."""

from enum import Enum


class ErrorAction(str, Enum):
    """Action to take when a directory or rule file cannot be read during a walk.

    Values:
        REPORT: Record the error, skip the failed subtree and keep walking (default behavior)
        RAISE: Raise the error immediately, ending the walk
    """

    REPORT = "report"
    RAISE = "raise"
