"""Signal-aware output writing for the ignorewalk CLI."""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from ignorewalk.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes output records straight to a file descriptor.

    Writing stops with BrokenPipeError as soon as SIGPIPE or SIGINT has been
    received, or when the reader has gone away. Paths are encoded the way the
    filesystem encodes them, so names that are not valid UTF-8 round-trip
    unchanged.

    Attributes:
        file: The file descriptor or path given at construction.
        fd: The file descriptor being written to.
    """

    def __init__(self, file: Union[int, str, os.PathLike]):
        """Initialize the safe writer.

        Args:
            file: An open file descriptor, or a path to create or truncate.

        Raises:
            TypeError: If file is neither an int nor a path.
        """
        self.file = file
        self._closed = False

        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write a string, retrying until every byte is written.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received or the pipe is closed.
            OSError: If another I/O error occurs.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        payload = os.fsencode(data)
        try:
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def close(self) -> None:
        """Close the file if this writer opened it. A broken pipe while closing is ignored."""
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence
            if exc_type is None:
                raise
