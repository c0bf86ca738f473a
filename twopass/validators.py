"""Checks on macro names, operand counts, entry symbols and string literals."""

from __future__ import annotations

import string

from .symbols import SymbolTable

MAX_MACRO_LEN = 31
REGISTER_NAMES = ("r1", "r2", "r3", "r4", "r5", "r6", "r7", "r8")
OPERATION_NAMES = (
    "mov", "cmp", "add", "sub", "lea", "clr", "not", "inc",
    "dec", "jmp", "bne", "jsr", "red", "prn", "rts", "stop",
)

_LETTERS = frozenset(string.ascii_letters)
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_WS = frozenset(" \t\n\v\f\r")


def valid_macro_name(name: str) -> bool:
    """True if name may be used for a macro or a label.

    It must start with a letter or '_', hold only letters, digits and '_',
    be at most 31 characters long and not be a register or operation name.
    """
    if len(name) > MAX_MACRO_LEN:
        return False
    if name in REGISTER_NAMES or name in OPERATION_NAMES:
        return False
    if any(ch not in _NAME_CHARS for ch in name[1:]):
        return False
    return bool(name) and (name[0] in _LETTERS or name[0] == "_")


def valid_num_operands(opcode: int, num_ops: int) -> bool:
    """True if an instruction with this opcode takes num_ops operands."""
    if 0 <= opcode <= 4:
        return num_ops == 2
    if 4 < opcode <= 13:
        return num_ops == 1
    if opcode >= 14:
        return num_ops == 0
    return True


def validate_symbol_table(table: SymbolTable) -> list[str]:
    """Names of symbols declared .entry but never defined in the file."""
    return [
        sym.name
        for sym in table
        if sym.is_entry and not sym.is_code and not sym.is_data
    ]


def valid_string(line: str, idx: int) -> tuple[int, int] | None:
    """Locate a quoted string that runs from idx to the end of the line.

    Leading whitespace is skipped. Returns the indices of the opening and the
    closing quote, or None if the line does not hold such a string.
    """
    start = idx
    while start < len(line) and line[start] in _WS:
        start += 1
    end = len(line) - 1
    if end <= start or line[start] != '"' or line[end] != '"':
        return None
    return start, end