"""Command line entry: assembles each named file."""

from __future__ import annotations

import sys

from .errors import Reporter
from .files import open_source
from .first_scan import first_scan
from .preassembler import preassemble
from .second_scan import second_scan


def assemble(name: str, reporter: Reporter) -> bool:
    """Assemble name + ".as"; True if output files were written."""
    stream = open_source(name, reporter)
    if stream is None:
        return False
    with stream:
        expanded = preassemble(stream, name, reporter)
    if expanded is None:
        return False
    result = first_scan(expanded, name, reporter)
    return second_scan(expanded, name, result, reporter)


def main(argv: list[str] | None = None) -> int:
    """Assemble every file named on the command line, last one first."""
    names = sys.argv[1:] if argv is None else list(argv)
    reporter = Reporter()
    for name in reversed(names):
        assemble(name, reporter)
    return 0


if __name__ == "__main__":
    sys.exit(main())