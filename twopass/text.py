"""Line scanning and number formatting helpers."""

from __future__ import annotations

import re
from functools import lru_cache

MAX_WORD_LEN = 31
WORD_SIZE = 24

_WS = " \t\n\v\f\r"
_WS_CLASS = "[" + re.escape(_WS) + "]"
_NOT_WS_CLASS = "[^" + re.escape(_WS) + "]"

_WORD = re.compile(_WS_CLASS + "*(" + _NOT_WS_CLASS + "{1,%d})" % (MAX_WORD_LEN + 1))
_COMMA = re.compile(_WS_CLASS + "*(.?)", re.S)
_INT = re.compile(r"[+-]?[0-9]+\Z")
_BITS = re.compile(r"[01]+\Z")


@lru_cache(maxsize=None)
def _until_pattern(stop: str) -> re.Pattern[str]:
    s = re.escape(stop)
    return re.compile(
        _WS_CLASS + "*(" + s + ")?" + "([^" + re.escape(_WS) + s + "]*)"
    )


def read_next_word(line: str, idx: int) -> tuple[str, int]:
    """Read the next whitespace-delimited word (at most 32 characters) from idx.

    Returns the word and the index after it, or ("", idx) if there is no word.
    """
    if idx >= len(line):
        return "", idx
    m = _WORD.match(line, idx)
    if m is None:
        return "", idx
    return m.group(1), m.end()


def read_next_word_until(line: str, idx: int, stop: str) -> tuple[str, int]:
    """Read a word that ends at whitespace or at the stop character.

    Leading whitespace and at most one stop character are skipped; when a stop
    character was skipped, the returned index is one less than the end of the
    word. The word is "" when nothing was read.
    """
    if idx >= len(line):
        return "", idx
    m = _until_pattern(stop).match(line, idx)
    end = m.end()
    if m.group(1) is not None:
        end -= 1
    return m.group(2), end


def read_comma(line: str, idx: int) -> tuple[bool, int]:
    """Consume whitespace and the first character after it; tell if it was a comma."""
    if idx >= len(line):
        return False, idx
    m = _COMMA.match(line, idx)
    return m.group(1) == ",", m.end()


def dec_to_bin(n: int, width: int) -> str:
    """Two's-complement binary string of n with exactly width bits."""
    if width <= 0:
        return ""
    return format(n & ((1 << width) - 1), f"0{width}b")


def is_int(text: str) -> bool:
    """True if text is an optionally signed run of decimal digits."""
    return bool(text) and _INT.match(text) is not None


def bin_to_hex(bits: str) -> str:
    """Six lower-case hex digits for the first 24 bits of a binary string."""
    word = bits[:WORD_SIZE]
    if len(word) < WORD_SIZE or not _BITS.match(word):
        raise ValueError(f"expected {WORD_SIZE} binary digits, got {bits!r}")
    return format(int(word, 2), "06x")