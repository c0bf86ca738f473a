import pytest

from twopass.operations import (
    COMMANDS,
    DIRECT,
    EMPTY_OPERAND,
    IMMEDIATE,
    INVALID_OPERAND,
    LABEL_DEF,
    REGISTER,
    RELATIVE,
    addressing_method,
    build_first_word,
    find_command,
    valid_addressing,
)
from twopass.text import dec_to_bin


def test_find_command():
    stop = find_command("stop")
    assert stop.opcode == 15
    assert stop.funct == -1
    sub = find_command("sub")
    assert (sub.opcode, sub.funct) == (2, 2)
    assert find_command("foo") is None
    assert len(COMMANDS) == 16


@pytest.mark.parametrize(
    "operand, expected",
    [
        ("", EMPTY_OPERAND),
        ("#5", IMMEDIATE),
        ("#-12", IMMEDIATE),
        ("#+7", IMMEDIATE),
        ("#5x", INVALID_OPERAND),
        ("#a", EMPTY_OPERAND),
        ("r1", REGISTER),
        ("r8", REGISTER),
        ("r9", DIRECT),
        ("LOOP", DIRECT),
        ("mov", EMPTY_OPERAND),
        ("&LOOP", RELATIVE),
        ("LOOP:", LABEL_DEF),
        ("a1:", LABEL_DEF),
        ("1a:", INVALID_OPERAND),
        ("my_label:", INVALID_OPERAND),
        ("LOOP:x", INVALID_OPERAND),
    ],
)
def test_addressing_method(operand, expected):
    assert addressing_method(operand) == expected


@pytest.mark.parametrize(
    "opcode, op1, op2, expected",
    [
        (0, "#5", "r1", True),
        (0, "r1", "#5", False),
        (1, "#5", "#6", True),
        (4, "#5", "r1", False),
        (4, "LABEL", "r2", True),
        (9, "&LOOP", "", True),
        (9, "r1", "", False),
        (14, "", "", True),
        (14, "r1", "", False),
    ],
)
def test_valid_addressing(opcode, op1, op2, expected):
    assert valid_addressing(opcode, op1, op2) is expected


def test_first_word_two_registers():
    word = build_first_word(0, -1, REGISTER, REGISTER, "r3", "r5")
    assert len(word) == 24
    assert word[:6] == dec_to_bin(0, 6)
    assert word[6:8] == dec_to_bin(REGISTER, 2)
    assert word[8:11] == dec_to_bin(3, 3)
    assert word[11:13] == dec_to_bin(REGISTER, 2)
    assert word[13:16] == dec_to_bin(5, 3)
    assert word[16:21] == "00000"
    assert word[21:] == "100"


def test_first_word_funct_and_single_operand():
    word = build_first_word(9, 1, RELATIVE, EMPTY_OPERAND, "&LOOP", "")
    assert word[:6] == dec_to_bin(9, 6)
    assert word[6:11] == "00000"
    assert word[11:13] == dec_to_bin(RELATIVE, 2)
    assert word[16:21] == dec_to_bin(1, 5)
    assert word[21:] == "100"


def test_first_word_single_register_goes_to_destination_field():
    word = build_first_word(5, 3, REGISTER, EMPTY_OPERAND, "r2", "")
    assert word[8:11] == "000"
    assert word[13:16] == dec_to_bin(2, 3)
    assert word[16:21] == dec_to_bin(3, 5)


def test_first_word_no_operands():
    word = build_first_word(14, -1, EMPTY_OPERAND, EMPTY_OPERAND, "", "")
    assert word[:6] == dec_to_bin(14, 6)
    assert word[6:21] == "0" * 15
    assert word[21:] == "100"