"""The operation table, addressing methods and the first word of an instruction."""

from __future__ import annotations

import string
from dataclasses import dataclass

from .text import WORD_SIZE, dec_to_bin
from .validators import REGISTER_NAMES, valid_macro_name

EMPTY_OPERAND = -1
INVALID_OPERAND = -2
IMMEDIATE = 0
DIRECT = 1
RELATIVE = 2
REGISTER = 3
LABEL_DEF = 4

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_ALNUM = _DIGITS | _LETTERS


@dataclass(frozen=True)
class Command:
    """An operation: its name, opcode, funct (-1 if none) and allowed modes."""

    name: str
    opcode: int
    funct: int
    src_modes: tuple[int, int, int]
    dst_modes: tuple[int, int, int]


_NONE = (-1, -1, -1)

COMMANDS: tuple[Command, ...] = (
    Command("mov", 0, -1, (0, 1, 3), (1, 3, 3)),
    Command("cmp", 1, -1, (0, 1, 3), (0, 1, 3)),
    Command("add", 2, 1, (0, 1, 3), (1, 3, 3)),
    Command("sub", 2, 2, (0, 1, 3), (1, 3, 3)),
    Command("lea", 4, -1, (1, 1, 1), (1, 3, 3)),
    Command("clr", 5, 1, (1, 3, 3), _NONE),
    Command("not", 5, 2, (1, 3, 3), _NONE),
    Command("inc", 5, 3, (1, 3, 3), _NONE),
    Command("dec", 5, 4, (1, 3, 3), _NONE),
    Command("jmp", 9, 1, (1, 2, 2), _NONE),
    Command("bne", 9, 2, (1, 2, 2), _NONE),
    Command("jsr", 9, 3, (1, 2, 2), _NONE),
    Command("red", 12, -1, (1, 3, 3), _NONE),
    Command("prn", 13, -1, (0, 1, 3), _NONE),
    Command("rts", 14, -1, _NONE, _NONE),
    Command("stop", 15, -1, _NONE, _NONE),
)

_BY_NAME = {cmd.name: cmd for cmd in COMMANDS}


def find_command(name: str) -> Command | None:
    """The operation with this name, or None."""
    return _BY_NAME.get(name)


def addressing_method(operand: str) -> int:
    """Addressing method of an operand.

    IMMEDIATE, DIRECT, RELATIVE or REGISTER; LABEL_DEF for "name:";
    EMPTY_OPERAND for an empty or unusable word, INVALID_OPERAND otherwise.
    """
    if not operand:
        return EMPTY_OPERAND

    if operand[0] == "#" and len(operand) > 1 and (
        operand[1] in "+-" or operand[1] in _DIGITS
    ):
        rest = operand[2:]
        if all(ch in _DIGITS for ch in rest):
            return IMMEDIATE
        return INVALID_OPERAND

    if operand in REGISTER_NAMES:
        return REGISTER

    i = 1
    while i < len(operand) and operand[i] in _ALNUM:
        i += 1

    if i >= len(operand):
        if operand[0] == "&":
            return RELATIVE
        if operand[0] in _LETTERS and valid_macro_name(operand):
            return DIRECT
        return EMPTY_OPERAND
    if operand[i] == ":" and i + 1 == len(operand) and operand[0] in _LETTERS:
        return LABEL_DEF
    return INVALID_OPERAND


def valid_addressing(opcode: int, op1: str, op2: str) -> bool:
    """True if both operands use addressing methods the operation allows."""
    cmd = next((c for c in COMMANDS if c.opcode == opcode), None)
    src_modes = cmd.src_modes if cmd else _NONE
    dst_modes = cmd.dst_modes if cmd else _NONE
    return (
        addressing_method(op1) in src_modes
        and addressing_method(op2) in dst_modes
    )


def _register_bits(operand: str) -> str:
    return dec_to_bin(ord(operand[1]) - ord("0"), 3)


def build_first_word(
    op: int,
    funct: int,
    mode1: int,
    mode2: int,
    operand1: str,
    operand2: str,
) -> str:
    """The 24-bit first word of an instruction, as a string of '0' and '1'."""
    word = ["0"] * WORD_SIZE

    def put(pos: int, bits: str) -> None:
        word[pos:pos + len(bits)] = bits

    two_operands = 0 <= op <= 4

    put(0, dec_to_bin(op, 6))
    put(16, dec_to_bin(funct if op in (2, 5, 9) else 0, 5))
    put(6, dec_to_bin(mode1 if two_operands else 0, 2))
    if two_operands:
        put(11, dec_to_bin(mode2, 2))
    elif 4 < op <= 13:
        put(11, dec_to_bin(mode1, 2))
    else:
        put(11, "00")
    put(21, dec_to_bin(4, 3))

    if mode1 == REGISTER:
        put(8 if two_operands else 13, _register_bits(operand1))
    else:
        put(8, "000")

    if mode2 == REGISTER:
        put(13, _register_bits(operand2))
    elif two_operands:
        put(13, "000")

    return "".join(word)