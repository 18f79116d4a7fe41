"""Per-directory stack of compiled rules."""

import logging
from collections import deque
from typing import Deque, Dict, Iterable, Iterator, Tuple

from ignorewalk.types import PathType

from .pattern_compiler import IgnoreRule, compile_rule

logger = logging.getLogger(__name__)

RankedRule = Tuple[int, IgnoreRule]


class RuleScopeStack:
    """Ordered collection of the rules in scope for the directory being walked.

    Rules are kept newest first. Every rule gets a priority number when it is pushed;
    numbers only grow, so among the rules currently on the stack a larger number
    always means a more recently declared, higher-priority rule. Later lines of one
    rule file therefore win over earlier ones, and rules of deeper directories win
    over those of their ancestors.

    Each directory records how many rules it pushed so that exactly those rules can
    be popped again once the walk leaves the directory.

    Example:
        >>> from ignorewalk.rules.pattern_compiler import escape_base_path
        >>> stack = RuleScopeStack()
        >>> stack.push_patterns(escape_base_path("/root"), ["*.log", "# note", "!keep.log"])
        2
        >>> [rule.source for _, rule in stack]
        ['!keep.log', '*.log']
        >>> stack.record("/root", 2)
        >>> stack.pop_count("/root")
        2
        >>> len(stack)
        0
    """

    def __init__(self) -> None:
        self._rules: Deque[RankedRule] = deque()
        self._counts: Dict[str, int] = {}
        self._last_priority = 0

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[RankedRule]:
        """Iterate over (priority, rule) pairs, highest priority first."""
        return iter(self._rules)

    def push(self, rule: IgnoreRule) -> int:
        """Push an already compiled rule and return the priority assigned to it."""
        self._last_priority += 1
        self._rules.appendleft((self._last_priority, rule))
        return self._last_priority

    def push_patterns(self, base_path: str, lines: Iterable[str]) -> int:
        """Compile and push each line, in order.

        Args:
            base_path: Escaped anchor of the declaring directory.
            lines: Rule lines; blank lines and comments are skipped.

        Returns:
            The number of rules pushed.
        """
        count = 0
        for line in lines:
            rule = compile_rule(line, base_path)
            if rule is not None:
                self.push(rule)
                count += 1
        return count

    def load_rules(self, base_path: str, rules_file: PathType) -> int:
        """Read a rule file and push its rules.

        The whole file is read before anything is pushed, so a read failure leaves the
        stack untouched.

        Raises:
            OSError: If the file cannot be read.
        """
        with open(rules_file, "r", encoding="utf-8", errors="replace") as f:
            # Universal newlines: only \n, \r and \r\n end a line
            lines = [line.rstrip("\n") for line in f]
        count = self.push_patterns(base_path, lines)
        logger.debug("Loaded %d rule(s) from %s", count, rules_file)
        return count

    def record(self, directory_key: str, count: int) -> None:
        """Remember that ``count`` rules at the front of the stack belong to a directory."""
        self._counts[directory_key] = count

    def pop_count(self, directory_key: str) -> int:
        """Pop the rules recorded for a directory and forget it.

        Returns:
            The number of rules removed. Unknown directories remove nothing.
        """
        count = self._counts.pop(directory_key, 0)
        for _ in range(count):
            self._rules.popleft()
        return count

    def has_negated_above(self, priority: int) -> bool:
        """Check whether any negated rule outranks the given priority."""
        for rank, rule in self._rules:
            if rank <= priority:
                break
            if rule.negated:
                return True
        return False

    def clear(self) -> None:
        """Drop every rule and every directory record."""
        self._rules.clear()
        self._counts.clear()
        self._last_priority = 0
