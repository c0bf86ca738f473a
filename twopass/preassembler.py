"""Macro expansion: the stage that turns a .as file into a .am file."""

from __future__ import annotations

import io
from typing import Iterator, TextIO

from .errors import ErrorCode, Reporter
from .files import ENCODING, add_extension
from .text import read_next_word
from .validators import valid_macro_name

MACRO_START = "mcro"
MACRO_END = "mcroend"
EXPANDED_EXTENSION = ".am"

_CHUNK = 82


def _lines(text: str) -> Iterator[tuple[str, int]]:
    """Lines without newline, each with the offset just past its raw text."""
    stream = io.StringIO(text, newline="\n")
    offset = 0
    for raw in iter(lambda: stream.readline(_CHUNK), ""):
        offset += len(raw)
        yield raw.split("\n", 1)[0], offset


def _words(line: str) -> Iterator[tuple[str, int]]:
    """Words of a line, each with the index just past it."""
    idx = 0
    while True:
        word, idx = read_next_word(line, idx)
        if not word:
            return
        yield word, idx


def _collect_macros(
    text: str, file_name: str, reporter: Reporter
) -> dict[str, tuple[int, int]] | None:
    """Find macro definitions: name -> (first, last) offsets of the body."""
    macros: dict[str, tuple[int, int]] = {}
    ok = True
    name = ""
    start = 0
    defining = False

    for line_num, (line, offset) in enumerate(_lines(text), 1):
        def_line = False
        end_line = False
        for position, (word, idx) in enumerate(_words(line), 1):
            if def_line:
                if position == 3:
                    reporter.error(file_name, line_num, ErrorCode.MACRO_DEFINITION_EXTRA_TEXT)
                    ok = False
                else:
                    name = word
                    if not valid_macro_name(name):
                        reporter.error(file_name, line_num, ErrorCode.INVALID_MACRO_NAME)
                        ok = False
                    defining = True
                    start = offset

            if end_line and position == 2:
                reporter.error(file_name, line_num, ErrorCode.MACRO_END_EXTRA_TEXT)
                ok = False

            if position == 1:
                if word == MACRO_START:
                    def_line = True
                if word == MACRO_END:
                    if name in macros:
                        reporter.error(file_name, line_num, ErrorCode.DUPLICATE_MACRO)
                        ok = False
                    else:
                        defining = False
                        end_line = True
                        end = offset - (len(line) - idx) - (len(MACRO_END) + 2)
                        macros[name] = (start, end)

        if def_line and not defining:
            reporter.error(file_name, line_num, ErrorCode.MISSING_MACRO_NAME)
            ok = False

    return macros if ok else None


def expand_macros(text: str, file_name: str, reporter: Reporter) -> str | None:
    """Expand the macros of a source text.

    Definitions are removed, each call of a macro is replaced by its body and
    lines without words are dropped. Errors are reported and give None.
    """
    macros = _collect_macros(text, file_name, reporter)
    if macros is None:
        return None

    out: list[str] = []
    skipping = False
    for line, _ in _lines(text):
        for word, _ in _words(line):
            if word == MACRO_START:
                skipping = True
            if not skipping and word in macros:
                start, end = macros[word]
                if end >= start:
                    out.append(text[start:end + 1])
            elif not skipping and word != MACRO_END:
                out.append(line + "\n")
                break
            if word == MACRO_END:
                skipping = False
    return "".join(out)


def preassemble(stream: TextIO, file_name: str, reporter: Reporter) -> str | None:
    """Expand the macros of a source stream into file_name + ".am".

    Returns the path of the new file, or None if an error was reported.
    """
    expanded = expand_macros(stream.read(), file_name, reporter)
    if expanded is None:
        return None
    path = add_extension(file_name, EXPANDED_EXTENSION)
    try:
        with open(path, "w", encoding=ENCODING, newline="\n") as out:
            out.write(expanded)
    except OSError:
        reporter.internal(ErrorCode.CANNOT_CREATE_FILE)
        return None
    return path