"""Gitignore-style rule compilation, scoping and evaluation."""

from .match_evaluator import Verdict, evaluate, is_excluded
from .pattern_compiler import IgnoreRule, compile_rule, escape_base_path, normalize_path
from .rule_stack import RuleScopeStack

__all__ = [
    "IgnoreRule",
    "RuleScopeStack",
    "Verdict",
    "compile_rule",
    "escape_base_path",
    "evaluate",
    "is_excluded",
    "normalize_path",
]
