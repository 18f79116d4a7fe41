"""Expansion of root path arguments into concrete paths."""

import glob
import logging
import re
from pathlib import Path
from typing import Iterator, Sequence

logger = logging.getLogger(__name__)

_WILDCARD = re.compile(r"[*?\[]")


def has_wildcard(path: str) -> bool:
    """Check whether a path argument contains glob wildcards.

    Example:
        >>> has_wildcard("src/*.py")
        True
        >>> has_wildcard("src/main.py")
        False
    """
    return _WILDCARD.search(path) is not None


def expand_path(path: str) -> Iterator[Path]:
    """Expand one wildcard-capable path argument.

    Arguments without wildcards are returned unchanged. A wildcard that matches
    nothing is also returned unchanged, so the walker reports it as a missing root
    instead of it vanishing silently.

    Example:
        >>> list(expand_path("plain/dir"))
        [PosixPath('plain/dir')]
    """
    if not has_wildcard(path):
        yield Path(path)
        return

    matches = sorted(glob.glob(path, recursive=True))
    if not matches:
        logger.debug("Wildcard %s matched nothing", path)
        yield Path(path)
        return
    for match in matches:
        yield Path(match)


def resolve_paths(paths: Sequence[str] = (), literal_paths: Sequence[str] = ()) -> Iterator[Path]:
    """Resolve wildcard path arguments, then literal ones, in argument order.

    Args:
        paths: Path arguments that may contain glob wildcards.
        literal_paths: Path arguments taken verbatim.

    Yields:
        One path per root to walk. Existence is not checked here.
    """
    for path in paths:
        yield from expand_path(path)
    for literal in literal_paths:
        yield Path(literal)
