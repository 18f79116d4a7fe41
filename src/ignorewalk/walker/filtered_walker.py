"""Filtered directory walking with per-directory gitignore-style rules.

This module provides the FilteredWalker class, which lists the files of one or more
directory trees (or the directories containing them) while applying the rules of
every rule file found on the way, the way git applies nested .gitignore files.
"""

import logging
import os
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Iterable, Iterator, List, Optional, Sequence, Set

from ignorewalk.exceptions import IgnoreWalkError, RootNotFoundError, WalkIOError
from ignorewalk.rules.match_evaluator import Verdict, evaluate, is_excluded
from ignorewalk.rules.pattern_compiler import escape_base_path, normalize_path
from ignorewalk.rules.rule_stack import RuleScopeStack
from ignorewalk.types import OutputMode, PathType, WalkResult

from .ancestor_output import AncestorOutput
from .directory_entry import DirectoryEntry, path_is_hidden, scan_directory
from .error_action import ErrorAction
from .file_identifier import FileIdentifier

logger = logging.getLogger(__name__)


class _QueuedDirectory:
    """A directory waiting in the work queue.

    The same record serves as the directory's entry marker and, once entered, as its
    exit marker: it stays at its place in the queue while its subdirectories are
    inserted in front of it, and is met again only after all of them have exited.
    """

    __slots__ = ("path", "abs_path", "key", "parent_key", "excluded_by", "file_id", "entered")

    def __init__(
        self,
        path: str,
        abs_path: str,
        parent_key: Optional[str],
        excluded_by: int = 0,
        file_id: Optional[FileIdentifier] = None,
    ) -> None:
        self.path = path
        self.abs_path = abs_path
        self.key = normalize_path(abs_path).rstrip("/")
        self.parent_key = parent_key
        # Priority of the rule that excluded this directory or an ancestor, 0 if included
        self.excluded_by = excluded_by
        self.file_id = file_id
        self.entered = False


class _WalkContext:
    """Everything the walk of a single root owns."""

    def __init__(self) -> None:
        self.queue: Deque[_QueuedDirectory] = deque()
        self.rules = RuleScopeStack()
        self.ancestors = AncestorOutput()
        self.active_ids: Set[FileIdentifier] = set()
        self.depth = 0


class FilteredWalker:
    """Lists files that survive gitignore-style rules, walking without recursion.

    Rules come from two sources: patterns passed explicitly, which apply as if they
    were declared at the top of a rule file in each root, and rule files named
    ``ignore_file_name`` found in any walked directory, whose rules only apply inside
    that directory. The highest-priority matching rule decides: rules of deeper
    directories outrank those of their ancestors, and later lines outrank earlier
    ones. A path no rule matches is kept.

    A directory excluded by a rule is normally not descended into. When a negated
    rule with a higher priority than the excluding rule is in scope, the directory
    is still walked so that rule can re-include items below it; everything else
    below stays excluded. Rule files inside excluded directories are not read.

    Hidden items (dot names, or the Windows hidden attribute) are skipped unless
    ``hidden`` selects them instead of visible items, or ``force`` selects both.
    Visible directories are always walked so their hidden children can be found.

    Attributes:
        ignore_file_name (Optional[str]): Name of the per-directory rule file.
        ignore_patterns (Sequence[str]): Patterns applied at the top of each root.
        include_ignore_files (bool): Whether rule files themselves can be reported.
        output_mode (OutputMode): Report files, or the directories containing them.
        depth (Optional[int]): Maximum subdirectory depth, None for unlimited.
        hidden (bool): Report hidden items instead of visible ones.
        force (bool): Report hidden and visible items alike.
        ignored (bool): Report exactly the items the rules exclude instead.
        follow_symlinks (bool): Walk into symbolic links to directories.
        error_action (ErrorAction): Whether I/O errors are reported or raised.
        errors (List[IgnoreWalkError]): Errors reported so far.

    Example:
        >>> walker = FilteredWalker(ignore_file_name=".gitignore")  # doctest: +SKIP
        >>> for result in walker.walk("project"):  # doctest: +SKIP
        ...     print(result.path)
        project/README.md
        project/src/main.py
    """

    def __init__(
        self,
        ignore_file_name: Optional[str] = None,
        ignore_patterns: Sequence[str] = (),
        include_ignore_files: bool = False,
        output_mode: OutputMode = OutputMode.FILES,
        depth: Optional[int] = None,
        hidden: bool = False,
        force: bool = False,
        ignored: bool = False,
        follow_symlinks: bool = False,
        error_action: ErrorAction = ErrorAction.REPORT,
        on_error: Optional[Callable[[IgnoreWalkError], None]] = None,
    ) -> None:
        """Initialize a FilteredWalker.

        Args:
            ignore_file_name: Name of the rule file to read in every directory. None
                or an empty string disables rule files.
            ignore_patterns: Extra rules applied in every root.
            include_ignore_files: Report rule files unless a rule excludes them.
            output_mode: FILES (default) or DIRECTORIES.
            depth: Maximum number of subdirectory levels to descend. 0 lists only
                the root's own files. Defaults to unlimited.
            hidden: Report only hidden items.
            force: Report hidden and visible items.
            ignored: Report the complement of the normal output.
            follow_symlinks: Walk into symbolic links to directories, skipping links
                that would loop back into a directory being walked.
            error_action: REPORT (default) records I/O errors and keeps walking;
                RAISE ends the walk with the error.
            on_error: Called with each reported error.

        Raises:
            ValueError: If depth is negative.
        """
        if depth is not None and depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")
        self.ignore_file_name = ignore_file_name or None
        self.ignore_patterns = list(ignore_patterns)
        self.include_ignore_files = include_ignore_files
        self.output_mode = output_mode
        self.depth = depth
        self.hidden = hidden
        self.force = force
        self.ignored = ignored
        self.follow_symlinks = follow_symlinks
        self.error_action = error_action
        self.on_error = on_error
        self.errors: List[IgnoreWalkError] = []

    def walk_many(self, roots: Iterable[PathType]) -> Iterator[WalkResult]:
        """Walk several roots one after another.

        In DIRECTORIES mode a directory already reported for an earlier root is not
        reported again, so file roots sharing a parent yield that parent once.
        """
        if self.output_mode is not OutputMode.DIRECTORIES:
            for root in roots:
                yield from self.walk(root)
            return

        reported: Set[Path] = set()
        for root in roots:
            for result in self.walk(root):
                if result.path not in reported:
                    reported.add(result.path)
                    yield result

    def walk(self, root: PathType) -> Iterator[WalkResult]:
        """Walk one root and yield what it reports.

        In FILES mode results are yielded as they are found, so a caller can stop
        early. In DIRECTORIES mode they are yielded once the whole root is done.

        A root that is a file is judged on its own against the explicit patterns,
        anchored at its containing directory.

        Raises:
            RootNotFoundError: If the root does not exist and errors are raised.
            WalkIOError: If something cannot be read and errors are raised.
        """
        root_path = os.fspath(root)
        if not os.path.exists(root_path):
            self._report(RootNotFoundError(root_path))
            return

        logger.debug("Walking %s", root_path)
        if os.path.isdir(root_path):
            yield from self._walk_tree(root_path)
        else:
            yield from self._walk_single_file(root_path)

    def _walk_single_file(self, file_path: str) -> Iterator[WalkResult]:
        name = os.path.basename(file_path)
        if self._skips_rule_file(name) or not self._selects_file(path_is_hidden(file_path)):
            return

        abs_path = os.path.abspath(file_path)
        context = _WalkContext()
        context.rules.push_patterns(escape_base_path(os.path.dirname(abs_path)), self.ignore_patterns)
        if is_excluded(normalize_path(abs_path), False, context.rules) != self.ignored:
            return

        if self.output_mode is OutputMode.DIRECTORIES:
            yield WalkResult(Path(os.path.dirname(file_path) or os.curdir), True)
        else:
            yield WalkResult(Path(file_path), False)

    def _walk_tree(self, root_path: str) -> Iterator[WalkResult]:
        context = _WalkContext()
        abs_root = os.path.abspath(root_path)
        root = _QueuedDirectory(root_path, abs_root, None)
        if self.follow_symlinks:
            root.file_id = FileIdentifier.from_path(abs_root)

        seeded = context.rules.push_patterns(escape_base_path(abs_root), self.ignore_patterns)
        context.queue.append(root)

        while context.queue:
            top = context.queue[0]
            if top.entered:
                self._exit(context, top)
            else:
                yield from self._enter(context, top, seeded if top is root else 0)

        for directory in context.ancestors.drain():
            yield WalkResult(Path(directory), True)

    def _enter(self, context: _WalkContext, top: _QueuedDirectory, seeded: int) -> Iterator[WalkResult]:
        top.entered = True
        context.depth += 1
        if top.file_id is not None:
            context.active_ids.add(top.file_id)

        children = self._open_scope(context, top, seeded)
        if children is None:
            return

        # Below an excluded directory only a higher-priority negated rule can change
        # anything; without one every item there is excluded as well.
        rescuable = not top.excluded_by or context.rules.has_negated_above(top.excluded_by)
        directories_mode = self.output_mode is OutputMode.DIRECTORIES

        subdirectories = []
        for entry in children:
            candidate = f"{top.key}/{entry.name}"
            if entry.is_dir:
                if entry.is_hidden and not (self.force or self.hidden):
                    continue
                excluded_by = top.excluded_by
                if rescuable:
                    excluded_by = self._judge(context, candidate + "/", True, top.excluded_by)
                queued = self._schedule(context, top, entry, excluded_by)
                if queued is not None:
                    subdirectories.append(queued)
                continue

            if self._skips_rule_file(entry.name) or not self._selects_file(entry.is_hidden):
                continue
            if directories_mode and context.ancestors.is_live(top.key):
                continue
            excluded_by = top.excluded_by
            if rescuable:
                excluded_by = self._judge(context, candidate, False, top.excluded_by)
            if not self._reports(excluded_by):
                continue
            if directories_mode:
                context.ancestors.mark_live(top.key)
            else:
                yield WalkResult(Path(entry.path), False)

        # Subdirectories go in front of this directory, first child first, so they
        # are all entered and exited before this directory is met again.
        context.queue.extendleft(reversed(subdirectories))

    def _open_scope(
        self, context: _WalkContext, top: _QueuedDirectory, seeded: int
    ) -> Optional[List[DirectoryEntry]]:
        """Push the directory's rules and list its children.

        Returns:
            The children, or None if the rule file or directory could not be read.
            The error has been reported in that case.
        """
        pushed = seeded
        try:
            if self.ignore_file_name and not top.excluded_by:
                pushed += self._load_rule_file(context, top)
            try:
                return scan_directory(top.abs_path, self.follow_symlinks, top.path)
            except OSError as e:
                raise WalkIOError(top.path, e) from e
        except WalkIOError as e:
            self._report(e)
            return None
        finally:
            context.rules.record(top.key, pushed)

    def _load_rule_file(self, context: _WalkContext, top: _QueuedDirectory) -> int:
        rules_file = os.path.join(top.abs_path, self.ignore_file_name or "")
        if not os.path.isfile(rules_file):
            return 0
        try:
            return context.rules.load_rules(escape_base_path(top.abs_path), rules_file)
        except OSError as e:
            raise WalkIOError(os.path.join(top.path, self.ignore_file_name or ""), e) from e

    def _schedule(
        self, context: _WalkContext, top: _QueuedDirectory, entry: DirectoryEntry, excluded_by: int
    ) -> Optional[_QueuedDirectory]:
        if excluded_by and not (self.ignored or context.rules.has_negated_above(excluded_by)):
            return None
        if self.depth is not None and context.depth > self.depth:
            logger.debug("Not descending into %s: depth limit %d reached", entry.path, self.depth)
            return None

        abs_path = os.path.join(top.abs_path, entry.name)
        file_id = None
        if self.follow_symlinks:
            file_id = FileIdentifier.from_path(abs_path)
            if file_id is not None and file_id in context.active_ids:
                logger.debug("Not descending into %s: symlink loop", entry.path)
                return None
        return _QueuedDirectory(entry.path, abs_path, top.key, excluded_by, file_id)

    def _exit(self, context: _WalkContext, top: _QueuedDirectory) -> None:
        context.rules.pop_count(top.key)
        context.queue.popleft()
        context.depth -= 1
        if top.file_id is not None:
            context.active_ids.discard(top.file_id)
        if self.output_mode is OutputMode.DIRECTORIES:
            context.ancestors.exit_directory(top.key, top.path, top.parent_key)

    def _judge(self, context: _WalkContext, candidate: str, is_dir: bool, floor: int) -> int:
        """Return the priority of the rule excluding a candidate, or 0 if it is included.

        ``floor`` is the exclusion inherited from the parent directory: only rules
        above it are consulted, and it stands when none of them match.
        """
        verdict, priority = evaluate(candidate, is_dir, context.rules, floor)
        if verdict is Verdict.DROP:
            return priority
        if verdict is Verdict.ALLOW:
            return 0
        return floor

    def _reports(self, excluded_by: int) -> bool:
        return bool(excluded_by) == self.ignored

    def _selects_file(self, is_hidden: bool) -> bool:
        return self.force or self.hidden == is_hidden

    def _skips_rule_file(self, name: str) -> bool:
        return self.ignore_file_name is not None and name == self.ignore_file_name and not self.include_ignore_files

    def _report(self, error: IgnoreWalkError) -> None:
        if self.error_action is ErrorAction.RAISE:
            raise error
        logger.debug("Reported error: %s", error)
        self.errors.append(error)
        if self.on_error is not None:
            self.on_error(error)
