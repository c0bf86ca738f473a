"""First pass: fills the symbol table and lays out instruction and data memory."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ErrorCode, Reporter
from .files import ENCODING, MAX_LINE_LEN, read_lines
from .memory import Memory
from .operations import (
    DIRECT,
    IMMEDIATE,
    LABEL_DEF,
    RELATIVE,
    Command,
    addressing_method,
    build_first_word,
    find_command,
    valid_addressing,
)
from .symbols import SymbolTable
from .text import read_comma, read_next_word, read_next_word_until
from .validators import valid_num_operands

MAX_LABEL_LEN = 31
_DIRECTIVES = (".extern", ".entry")


@dataclass
class FirstPassResult:
    """Everything the first pass produced for one file."""

    inst_mem: Memory
    data_mem: Memory
    table: SymbolTable
    icf: int
    dcf: int
    error: bool


def add_operands(
    line: str,
    idx: int,
    command: Command,
    file_name: str,
    line_num: int,
    reporter: Reporter,
    memory: Memory,
) -> bool:
    """Check the operands after an operation and lay the instruction out in memory.

    Returns False if an error was reported.
    """
    op = command.opcode
    ok = True
    comma_err = False

    operand1, i = read_next_word_until(line, idx, ",")
    found, i = read_comma(line, i)
    if found and op > 4:
        reporter.error(file_name, line_num, ErrorCode.UNEXPECTED_COMMA)
        ok = False
        comma_err = True

    if read_comma(line, i)[0]:
        reporter.error(file_name, line_num, ErrorCode.CONSECUTIVE_COMMAS)
        ok = False
        comma_err = True

    operand2, i = read_next_word_until(line, i, ",")
    if not comma_err and read_comma(line, i)[0]:
        reporter.error(file_name, line_num, ErrorCode.INSTRUCTION_TRAILING_COMMA)
        ok = False
        comma_err = True

    extra, _ = read_next_word(line, i + 1)
    count = sum(1 for text in (operand1, operand2, extra) if text)

    if comma_err:
        return ok

    if valid_num_operands(op, count):
        if not valid_addressing(op, operand1, operand2):
            reporter.error(file_name, line_num, ErrorCode.INVALID_ADDRESSING)
            ok = False
    else:
        reporter.error(file_name, line_num, ErrorCode.INVALID_OPERAND_COUNT)
        ok = False

    mode1 = addressing_method(operand1)
    mode2 = addressing_method(operand2)
    word = build_first_word(op, command.funct, mode1, mode2, operand1, operand2)
    ok = memory.add_entry(word) and ok

    for mode, operand in ((mode1, operand1), (mode2, operand2)):
        if mode in (DIRECT, RELATIVE):
            memory.reserve()
        elif mode == IMMEDIATE:
            ok = memory.insert_number(operand) and ok
    return ok


def _scan_line(
    line: str,
    line_num: int,
    orig_file: str,
    reporter: Reporter,
    table: SymbolTable,
    inst_mem: Memory,
    data_mem: Memory,
) -> bool:
    word, i = read_next_word(line, 0)
    if not word or word.startswith(";"):
        return True

    ok = True

    def advance() -> bool:
        nonlocal word, i
        nxt, pos = read_next_word(line, i)
        if not nxt:
            return False
        word, i = nxt, pos
        return True

    def report(code: ErrorCode) -> None:
        nonlocal ok
        reporter.error(orig_file, line_num, code)
        ok = False

    extern_def = entry_def = symbol_def = False
    symbol_name = ""

    if word == ".extern":
        extern_def = True
        advance()
    elif word == ".entry":
        entry_def = True
        advance()

    if addressing_method(word) == LABEL_DEF:
        if entry_def or extern_def:
            report(ErrorCode.LABEL_ON_ENTRY_EXTERN)
        symbol_def = True
        symbol_name, _ = read_next_word_until(word, 0, ":")
        if len(symbol_name) > MAX_LABEL_LEN:
            report(ErrorCode.SYMBOL_TOO_LONG)
        if not advance() and not extern_def and not entry_def:
            report(ErrorCode.EMPTY_LABEL_LINE)

    if symbol_def and word in _DIRECTIVES:
        if entry_def or extern_def:
            report(ErrorCode.LABEL_BEFORE_ENTRY_EXTERN)
        if word == ".extern":
            extern_def = True
        else:
            entry_def = True
        advance()

    if word in (".data", ".string"):
        if symbol_def:
            ok = table.insert(symbol_name, data_mem.counter, "d", orig_file, line_num, reporter) and ok
        kind = "d" if word == ".data" else "s"
        return data_mem.insert_data(line, i, kind, orig_file, line_num) and ok

    if entry_def or extern_def:
        if addressing_method(word) == DIRECT:
            kind = "x" if extern_def else "e"
            ok = table.insert(word, data_mem.counter, kind, orig_file, line_num, reporter) and ok
        else:
            report(ErrorCode.INVALID_ENTRY_EXTERN_LABEL)
        return ok

    command = find_command(word)
    if command is None:
        report(ErrorCode.UNDEFINED_OPERATION)
        return ok
    if symbol_def:
        ok = table.insert(symbol_name, inst_mem.counter, "c", orig_file, line_num, reporter) and ok
    return add_operands(line, i, command, orig_file, line_num, reporter, inst_mem) and ok


def first_scan(input_file: str, orig_file: str, reporter: Reporter) -> FirstPassResult:
    """Run the first pass over the expanded source file input_file.

    Errors are reported under the name orig_file.
    """
    table = SymbolTable()
    inst_mem = Memory(True, reporter)
    data_mem = Memory(False, reporter)
    error = False

    with open(input_file, "r", encoding=ENCODING, newline="\n") as stream:
        for line_num, line in enumerate(read_lines(stream), 1):
            if len(line) > MAX_LINE_LEN:
                reporter.error(orig_file, line_num, ErrorCode.LINE_TOO_LONG)
                error = True
            if not _scan_line(line, line_num, orig_file, reporter, table, inst_mem, data_mem):
                error = True

    icf = inst_mem.counter
    dcf = data_mem.counter
    if not error:
        for sym in table:
            if sym.is_data:
                sym.address += icf
    return FirstPassResult(inst_mem, data_mem, table, icf, dcf, error)