"""Command-line interface for ignorewalk.

This module provides the ``ignorewalk`` command, which prints the files (or
directories) of one or more directory trees that survive gitignore-style rules.
It handles argument parsing, error reporting and signal management so the
listing can be piped into other tools safely.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`) on Unix-like systems
    - SIGINT: Handled for clean exit on Ctrl+C
    Both cases stop the walk and exit with the conventional code.

Exit Codes:
    0: Successful completion, including when nothing matched
    1: A root was not found, a directory or rule file could not be read, or another runtime error
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # List files honoring .gitignore files
    $ ignorewalk -n .gitignore /path/to/project

    # Display version information
    $ ignorewalk --version
"""

import logging
import sys

from ignorewalk.cli.argparser import create_parser, validate_args
from ignorewalk.cli.safe_writer import SafeWriter
from ignorewalk.cli.signal_handler import setup_signal_handling, signal_handler
from ignorewalk.exceptions import IgnoreWalkError
from ignorewalk.types import OutputMode
from ignorewalk.walker.error_action import ErrorAction
from ignorewalk.walker.filtered_walker import FilteredWalker
from ignorewalk.walker.path_resolver import resolve_paths


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by the number of -v flags."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(stream=sys.stderr, level=level, format="%(levelname)s: %(name)s: %(message)s")


def report_error(error: IgnoreWalkError) -> None:
    """Print an error reported during the walk; the walk itself continues."""
    print(f"Error: {error}", file=sys.stderr)


def main() -> None:
    """Main entry point for the ignorewalk command-line interface.

    Exit codes:
        0: Successful completion
        1: Missing root, I/O error, or other runtime error
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()
    had_errors = False

    try:
        parser = create_parser()
        # argparse exits with 2 on syntax errors and 0 for --version
        args = parser.parse_args()

        validate_args(args)
        configure_logging(args.verbose)

        error_action = {
            "report": ErrorAction.REPORT,
            "fail": ErrorAction.RAISE,
        }[args.error_action]

        walker = FilteredWalker(
            ignore_file_name=args.ignore_file_name,
            ignore_patterns=args.ignore_patterns,
            include_ignore_files=args.include_ignore_files,
            output_mode=OutputMode.DIRECTORIES if args.directory else OutputMode.FILES,
            depth=args.depth,
            hidden=args.hidden,
            force=args.force,
            ignored=args.ignored,
            follow_symlinks=args.follow_symlinks,
            error_action=error_action,
            on_error=report_error,
        )
        terminator = "\0" if args.null else "\n"
        output_file = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            try:
                for result in walker.walk_many(resolve_paths(args.paths, args.literal_paths)):
                    safe_writer.write(f"{result.path}{terminator}")
            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

        had_errors = bool(walker.errors)

    except IgnoreWalkError as e:
        # Only raised with --error-action fail
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    if signal_handler.sigpipe_received.is_set():
        sys.exit(141)
    elif signal_handler.sigint_received.is_set():
        sys.exit(130)
    elif had_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
