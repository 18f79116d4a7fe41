"""Collection of ancestor directories for directory output mode."""

from typing import Dict, Iterator, List, Optional


class AncestorOutput:
    """Tracks which directories transitively contain a reported file.

    A directory becomes live when one of its files is reported. When the walk leaves
    a live directory, the directory is queued for output and its parent becomes live
    in turn. Directories are left deepest first, so the queue is emitted in reverse
    to list shallower directories before deeper ones.

    Example:
        >>> output = AncestorOutput()
        >>> output.mark_live("/r/a/b")
        >>> output.exit_directory("/r/a/b", "r/a/b", "/r/a")
        >>> output.exit_directory("/r/a", "r/a", "/r")
        >>> output.exit_directory("/r", "r", None)
        >>> list(output.drain())
        ['r', 'r/a', 'r/a/b']
    """

    def __init__(self) -> None:
        self._live: Dict[str, bool] = {}
        self._pending: List[str] = []

    def mark_live(self, directory_key: str) -> None:
        self._live[directory_key] = True

    def is_live(self, directory_key: str) -> bool:
        return self._live.get(directory_key, False)

    def exit_directory(self, directory_key: str, path: str, parent_key: Optional[str]) -> None:
        """Queue a directory for output if it is live, and propagate to its parent."""
        if not self._live.pop(directory_key, False):
            return
        self._pending.append(path)
        if parent_key is not None:
            self._live[parent_key] = True

    def drain(self) -> Iterator[str]:
        """Yield queued directories, most recently queued first."""
        while self._pending:
            yield self._pending.pop()
