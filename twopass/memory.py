"""Instruction and data memory of the assembler."""

from __future__ import annotations

import re
from typing import MutableSequence

from .errors import ErrorCode, Reporter
from .symbols import SymbolTable, SymbolType
from .text import WORD_SIZE, dec_to_bin, is_int, read_comma, read_next_word_until
from .validators import valid_string

INITIAL_MEM_SIZE = 1000
MAX_MEM_CAPACITY = 128 * 128 * 128 - 1
INSTRUCTION_START = 100

ARE_ABSOLUTE = "100"
ARE_RELOCATABLE = "010"
ARE_EXTERNAL = "001"

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]*)")
_EXTERNAL_TYPES = (SymbolType.EXTERN, SymbolType.EXT_CODE, SymbolType.EXT_DATA)


def _atoi(text: str) -> int:
    digits = _ATOI.match(text).group(1)
    if digits in ("", "+", "-"):
        return 0
    return int(digits)


class Memory:
    """Word memory addressed by counter.

    Instruction memory starts at address 100, data memory at 0.
    """

    def __init__(self, instruction: bool, reporter: Reporter) -> None:
        self.reporter = reporter
        self.counter = INSTRUCTION_START if instruction else 0
        self.capacity = INITIAL_MEM_SIZE
        self._words: dict[int, str] = {}

    def __getitem__(self, address: int) -> str:
        try:
            return self._words[address]
        except KeyError:
            raise IndexError(f"no word stored at address {address}") from None

    def add_entry(self, data: str) -> bool:
        """Store a word at the counter and advance it; False if memory overflowed."""
        ok = True
        if self.counter >= self.capacity:
            self.capacity *= 100
            if self.capacity > MAX_MEM_CAPACITY:
                self.reporter.internal(ErrorCode.DATA_MEMORY_EXCEEDED)
                ok = False
        self._words[self.counter] = data[:WORD_SIZE]
        self.counter += 1
        return ok

    def reserve(self) -> None:
        """Leave the word at the counter to be filled in later."""
        self.counter += 1

    def insert_number(self, num: str) -> bool:
        """Store an immediate operand such as "#-5"."""
        return self.add_entry(dec_to_bin(_atoi(num[1:]), WORD_SIZE - 3) + ARE_ABSOLUTE)

    def insert_data(
        self, line: str, idx: int, kind: str, file_name: str, line_num: int
    ) -> bool:
        """Store the operands of .data (kind "d") or .string (kind "s").

        Syntax errors are reported; returns False if any was.
        """
        if kind == "d":
            return self._insert_ints(line, idx, file_name, line_num)
        if kind == "s":
            return self._insert_string(line, idx, file_name, line_num)
        raise ValueError(f"unknown data kind {kind!r}")

    def _insert_ints(self, line: str, idx: int, file_name: str, line_num: int) -> bool:
        ok = True
        comma_seen = True
        trailing_comma = False
        misplaced = False
        while True:
            data, idx = read_next_word_until(line, idx, ",")
            if not data:
                break
            trailing_comma = False
            if not is_int(data):
                self.reporter.error(file_name, line_num, ErrorCode.EXPECTED_INT)
                ok = False
            ok = self.add_entry(dec_to_bin(_atoi(data), WORD_SIZE)) and ok
            if not comma_seen:
                misplaced = True
            found, idx = read_comma(line, idx)
            if found:
                trailing_comma = True
            else:
                comma_seen = False
        if misplaced:
            self.reporter.error(file_name, line_num, ErrorCode.DATA_COMMAS)
            ok = False
        if trailing_comma:
            self.reporter.error(file_name, line_num, ErrorCode.DATA_TRAILING_COMMA)
            ok = False
        return ok

    def _insert_string(self, line: str, idx: int, file_name: str, line_num: int) -> bool:
        quotes = valid_string(line, idx)
        if quotes is None:
            self.reporter.error(file_name, line_num, ErrorCode.STRING_MISSING_QUOTES)
            return False
        start, end = quotes
        ok = True
        for ch in line[start + 1:end]:
            ok = self.add_entry(dec_to_bin(ord(ch), WORD_SIZE)) and ok
        return self.add_entry(dec_to_bin(0, WORD_SIZE)) and ok

    def insert_symbol(
        self,
        mode: int,
        word: str,
        table: SymbolTable,
        ext_lines: MutableSequence[str],
        file_name: str,
        line_num: int,
    ) -> bool:
        """Store the address of a symbol operand (mode 1 direct, 2 relative "&name").

        Uses of external symbols are appended to ext_lines as "name 000123".
        Returns False if the symbol is undefined.
        """
        ok = True
        name = word if mode == 1 else word[1:]
        address = table.address_of(name) or 0
        if not address:
            self.reporter.error(file_name, line_num, ErrorCode.UNDEFINED_SYMBOL)
            ok = False

        if mode == 2:
            distance = address - self.counter + 1
            return self.add_entry(dec_to_bin(distance, WORD_SIZE - 3) + ARE_ABSOLUTE) and ok

        if table.type_of(word) in _EXTERNAL_TYPES:
            ext_lines.append(f"{word} {self.counter:06d}")
            bits = dec_to_bin(address - 1, WORD_SIZE - 3) + ARE_EXTERNAL
        else:
            bits = dec_to_bin(address, WORD_SIZE - 3) + ARE_RELOCATABLE
        return self.add_entry(bits) and ok