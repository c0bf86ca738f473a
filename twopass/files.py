"""File names, opening source files and reading them line by line."""

from __future__ import annotations

from typing import Iterator, TextIO

from .errors import ErrorCode, Reporter

MAX_LINE_LEN = 81
SOURCE_EXTENSION = ".as"
ENCODING = "latin-1"

# A line is read in pieces of at most this many characters.
_CHUNK = MAX_LINE_LEN + 1


def add_extension(name: str, extension: str) -> str:
    """The file name with the extension appended."""
    return name + extension


def open_source(name: str, reporter: Reporter) -> TextIO | None:
    """Open name + ".as" for reading.

    Only '\\n' ends a line and nothing is translated. If the file cannot be
    opened the error is reported and None is returned.
    """
    path = add_extension(name, SOURCE_EXTENSION)
    try:
        return open(path, "r", encoding=ENCODING, newline="\n")
    except OSError:
        reporter.internal(ErrorCode.FILE_NOT_FOUND)
        return None


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield the lines of a stream without their newline.

    A line is read in pieces of at most 82 characters, so a longer line comes
    out as several. A yielded line longer than MAX_LINE_LEN is too long.
    """
    for raw in iter(lambda: stream.readline(_CHUNK), ""):
        yield raw.split("\n", 1)[0]