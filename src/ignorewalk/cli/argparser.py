"""Command-line argument parsing for ignorewalk.

This module defines the command-line interface for ignorewalk,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from ignorewalk import __version__


def non_negative_int(value: str) -> int:
    """Argument type for counts that cannot be negative.

    Raises:
        argparse.ArgumentTypeError: If the value is not a non-negative integer.
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with ignorewalk's options.
    """
    description = """
    ignorewalk: list files the way git would see them, without git.

    Walks one or more directories and prints the files that survive gitignore-style
    rules. Rules come from per-directory rule files (e.g. .gitignore) and from
    patterns given on the command line. Rules declared in a directory only apply
    inside it, rules of deeper directories take precedence over those of their
    parents, and later rules take precedence over earlier ones.

    Output Modes:
    - Files (default): every file that is not excluded
    - Directories (-d): every directory containing a file that is not excluded
    - Ignored (--ignored): the files (or directories) that are excluded instead
    """

    epilog = """
    Examples:
      # List files, honoring .gitignore files in every directory
      ignorewalk -n .gitignore /path/to/project

      # Add patterns on top of the rule files
      ignorewalk -n .gitignore -p "*.log" -p "!keep.log" /path/to/project

      # List the directories that contain surviving files
      ignorewalk -n .gitignore -d /path/to/project

      # List what the rules exclude
      ignorewalk -n .gitignore --ignored /path/to/project

      # Include hidden files, and only look two levels deep
      ignorewalk -n .gitignore -f --depth 2 /path/to/project

      # Walk every directory matching a wildcard, plus one taken literally
      ignorewalk -n .gitignore "packages/*" -l "odd[name]"

      # NUL-separated output for xargs
      ignorewalk -n .gitignore -0 . | xargs -0 wc -l

      # Display version information and exit
      ignorewalk -V
    """

    parser = argparse.ArgumentParser(
        prog="ignorewalk",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"ignorewalk {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Directories or files to walk. Wildcards are expanded. Defaults to the current directory.",
    )
    parser.add_argument(
        "-l",
        "--literal-path",
        dest="literal_paths",
        action="append",
        default=[],
        metavar="PATH",
        help="Directory or file to walk, taken verbatim without wildcard expansion (can be specified multiple times).",
    )
    parser.add_argument(
        "-n",
        "--ignore-file-name",
        metavar="NAME",
        help="Name of the rule file to read in every directory (e.g. .gitignore).",
    )
    parser.add_argument(
        "-p",
        "--ignore-pattern",
        dest="ignore_patterns",
        action="append",
        default=[],
        metavar="PATTERN",
        help=(
            "Gitignore-style pattern applied as if it were declared at the top of a rule file in each "
            "walked root, e.g. '*.log', 'build/' or '!keep.log'. Can be specified multiple times; later "
            "patterns take precedence."
        ),
    )
    parser.add_argument(
        "-I",
        "--include-ignore-files",
        action="store_true",
        help="Include the rule files themselves in the output unless a rule excludes them.",
    )
    parser.add_argument(
        "-d",
        "--directory",
        action="store_true",
        help="Print the directories that contain surviving files instead of the files.",
    )
    parser.add_argument(
        "--depth",
        type=non_negative_int,
        metavar="N",
        help="Maximum number of subdirectory levels to descend (default: unlimited). 0 lists only the root.",
    )
    parser.add_argument(
        "-a",
        "--hidden",
        action="store_true",
        help="Select hidden items instead of visible ones.",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Select hidden and visible items alike.",
    )
    parser.add_argument(
        "--ignored",
        action="store_true",
        help="Print the items the rules exclude instead of the ones they keep.",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help=(
            "Walk into symbolic links to directories. By default symbolic links are listed as files "
            "and never followed."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-0",
        "--null",
        action="store_true",
        help="End each output record with a NUL character instead of a newline.",
    )
    parser.add_argument(
        "-E",
        "--error-action",
        choices=["report", "fail"],
        default="report",
        help=(
            "How to handle unreadable directories and rule files: report them and continue, "
            "or stop (default: report)."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr; repeat for debug output.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle, and fills in
    the default root.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.include_ignore_files and args.directory:
        raise ValueError("-I/--include-ignore-files cannot be combined with -d/--directory")

    if not args.paths and not args.literal_paths:
        args.paths = ["."]
