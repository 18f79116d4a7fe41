"""Compilation of gitignore-style rule lines into anchored path matchers.

Every rule is anchored to the absolute path of the directory that declared it, so a
rule can only ever match paths inside that directory's subtree. Candidate paths are
absolute, use forward slashes, and carry a trailing slash when they are directories.
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from pathspec.pattern import RegexPattern

from ignorewalk.types import PathType

# Empty lines, whitespace-only lines and comments produce no rule
_COMMENT_LINE = re.compile(r"^\s*(?:#.*)?$")

# Trailing whitespace that does not follow a backslash
_TRAILING_WHITESPACE = re.compile(r"(?:(?<!\\)\s)+$")

# A backslash at the start of the line, or before a whitespace character
_LINE_ESCAPES = re.compile(r"^\\|\\(?=\s)")

# Escaped glob characters inside literal text
_PATTERN_ESCAPES = re.compile(r"\\([\[\\*?])")

_GLOB_TOKENS = re.compile(
    r"(?<!\\)\[(?P<set>[^/\]]+)\]"
    r"|(?P<glob>/\*\*)"
    r"|(?P<star>(?<!\\)\*)"
    r"|(?P<any>(?<!\\)\?)"
    r"|(?P<text>(?:[^/?*\[]|(?<=\\)[?*\[])+)"
)

# Characters that change meaning inside a regular-expression character class
_SET_SPECIALS = frozenset("\\[]^&~|")


@dataclass(frozen=True)
class IgnoreRule:
    """A single compiled rule.

    Attributes:
        source: The rule text as it was declared.
        directory_only: True if the rule only applies to directories (it ended in ``/``).
        negated: True if the rule re-includes paths (it started with ``!``).
        matcher: Regular-expression pattern anchored under the declaring directory. Its
            ``include`` flag is the inverse of ``negated``.

    Example:
        >>> rule = compile_rule("*.log", escape_base_path("/project"))
        >>> rule.matches("/project/logs/app.log")
        True
        >>> rule.matches("/elsewhere/app.log")
        False
    """

    source: str
    directory_only: bool
    negated: bool
    matcher: RegexPattern

    def matches(self, candidate: str) -> bool:
        """Check whether the normalized candidate path matches this rule."""
        return self.matcher.match_file(candidate) is not None


def normalize_path(path: PathType) -> str:
    """Convert a path to its forward-slash form without touching the filesystem.

    Example:
        >>> normalize_path("/project/src")
        '/project/src'
    """
    norm = os.fspath(path)
    for sep in (os.sep, os.altsep):
        if sep and sep != "/":
            norm = norm.replace(sep, "/")
    return norm


def escape_base_path(directory: PathType) -> str:
    """Return the regex-escaped anchor for rules declared in ``directory``.

    The directory must already be absolute. A trailing separator is dropped, so the
    filesystem root anchors to the empty string.
    """
    return re.escape(normalize_path(directory).rstrip("/"))


def compile_rule(line: str, base_path: str) -> Optional[IgnoreRule]:
    """Compile one rule line declared in the directory anchored at ``base_path``.

    Args:
        line: A line from a rule file, or an explicitly supplied pattern.
        base_path: The escaped anchor from :func:`escape_base_path`.

    Returns:
        The compiled rule, or None for blank lines, comments and lines that are
        empty once their markers are removed. Malformed glob syntax never raises;
        it is matched as literal text instead.

    Example:
        >>> rule = compile_rule("!build/", escape_base_path("/src"))
        >>> rule.negated, rule.directory_only
        (True, True)
        >>> compile_rule("   # comment", escape_base_path("/src")) is None
        True
    """
    if line is None or _COMMENT_LINE.match(line):
        return None

    pattern = line.lstrip()
    negated = pattern.startswith("!")
    if negated:
        pattern = pattern[1:]

    pattern = _LINE_ESCAPES.sub("", _TRAILING_WHITESPACE.sub("", pattern))
    if not pattern:
        return None

    if not pattern.startswith("/"):
        pattern = f"/**/{pattern}"

    directory_only = pattern.endswith("/")
    if not directory_only:
        pattern = f"{pattern}/**"

    regex = re.compile(f"{base_path}{translate_glob(pattern)}\\Z")
    return IgnoreRule(
        source=line,
        directory_only=directory_only,
        negated=negated,
        matcher=RegexPattern(regex, include=not negated),
    )


def translate_glob(pattern: str) -> str:
    """Translate the glob syntax of a rule into a regular-expression fragment.

    ``/**`` matches zero or more whole path segments, ``*`` matches within one
    segment, and ``?`` matches any single character, including a separator.

    Example:
        >>> translate_glob("/**/*.py")
        '(/.*)?/[^/]*\\\\.py'
        >>> translate_glob("/file?[!0-9]")
        '/file.[^0-9]'
    """
    parts = []
    pos = 0
    while pos < len(pattern):
        token = _GLOB_TOKENS.match(pattern, pos)
        if token is None:
            # Stray characters such as an unclosed '[' are literal
            parts.append(re.escape(pattern[pos]))
            pos += 1
            continue
        pos = token.end()

        if token.group("text") is not None:
            parts.append(re.escape(_PATTERN_ESCAPES.sub(r"\1", token.group("text"))))
        elif token.group("star") is not None:
            parts.append("[^/]*")
        elif token.group("glob") is not None:
            parts.append("(/.*)?")
        elif token.group("any") is not None:
            parts.append(".")
        else:
            parts.append(_translate_set(token.group("set"), token.group(0)))
    return "".join(parts)


def _translate_set(body: str, original: str) -> str:
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    if not body:
        return re.escape(original)

    escaped = "".join(f"\\{char}" if char in _SET_SPECIALS else char for char in body)
    char_class = f"[^{escaped}]" if negate else f"[{escaped}]"
    try:
        re.compile(char_class)
    except re.error:
        # e.g. a reversed range such as [z-a]
        return re.escape(original)
    return char_class
