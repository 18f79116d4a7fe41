"""Evaluation of a candidate path against the rules in scope."""

from enum import Enum
from typing import Iterable, Tuple

from .rule_stack import RankedRule


class Verdict(str, Enum):
    """Outcome of matching one candidate path.

    Values:
        KEEP: No rule matched; the candidate is kept by default
        ALLOW: The deciding rule is a negated rule; the candidate is re-included
        DROP: The deciding rule is an exclude rule
    """

    KEEP = "keep"
    ALLOW = "allow"
    DROP = "drop"


def evaluate(candidate: str, is_dir: bool, rules: Iterable[RankedRule], floor: int = 0) -> Tuple[Verdict, int]:
    """Find the verdict of the highest-priority rule matching a candidate.

    Args:
        candidate: Normalized absolute path, with a trailing ``/`` for directories.
        is_dir: Whether the candidate is a directory. Directory-only rules are skipped
            for anything else.
        rules: (priority, rule) pairs, highest priority first.
        floor: Rules with a priority at or below this value are not consulted.

    Returns:
        The verdict and the priority of the deciding rule, or ``(Verdict.KEEP, 0)``
        when no rule above the floor matched.

    Example:
        >>> from ignorewalk.rules.rule_stack import RuleScopeStack
        >>> stack = RuleScopeStack()
        >>> _ = stack.push_patterns("/r", ["*.txt", "!keep.txt"])
        >>> evaluate("/r/a.txt", False, stack)
        (<Verdict.DROP: 'drop'>, 1)
        >>> evaluate("/r/keep.txt", False, stack)
        (<Verdict.ALLOW: 'allow'>, 2)
        >>> evaluate("/r/a.md", False, stack)
        (<Verdict.KEEP: 'keep'>, 0)
    """
    for priority, rule in rules:
        if priority <= floor:
            break
        if rule.directory_only and not is_dir:
            continue
        if rule.matches(candidate):
            return (Verdict.ALLOW if rule.negated else Verdict.DROP), priority
    return Verdict.KEEP, 0


def is_excluded(candidate: str, is_dir: bool, rules: Iterable[RankedRule]) -> bool:
    """Check whether the rules drop a candidate, ignoring inherited exclusion."""
    verdict, _ = evaluate(candidate, is_dir, rules)
    return verdict is Verdict.DROP
