"""Second pass: resolves symbol operands and writes the output files."""

from __future__ import annotations

import os

from .errors import ErrorCode, Reporter
from .files import ENCODING, add_extension, read_lines
from .first_scan import FirstPassResult
from .memory import INSTRUCTION_START, Memory
from .operations import DIRECT, IMMEDIATE, LABEL_DEF, RELATIVE, addressing_method
from .symbols import SymbolTable
from .text import bin_to_hex, read_comma, read_next_word, read_next_word_until
from .validators import validate_symbol_table

_SKIP_WORDS = (".extern", ".entry", ".data", ".string")
_NO_OPERAND = ("stop", "rts")


def _write(path: str, lines: list[str]) -> None:
    with open(path, "w", encoding=ENCODING, newline="\n") as out:
        out.writelines(line + "\n" for line in lines)


def write_object(
    inst_mem: Memory, data_mem: Memory, icf: int, dcf: int, input_name: str
) -> str:
    """Write the .obj file and return its path."""
    lines = [f"    {icf - INSTRUCTION_START} {dcf}"]
    lines += [f"{a:06d} {bin_to_hex(inst_mem[a])}" for a in range(INSTRUCTION_START, icf)]
    lines += [f"{icf + a:06d} {bin_to_hex(data_mem[a])}" for a in range(dcf)]
    path = add_extension(input_name, ".obj")
    _write(path, lines)
    return path


def write_entries(table: SymbolTable, input_name: str) -> str | None:
    """Write the .ent file; returns its path, or None when there are no entries."""
    path = add_extension(input_name, ".ent")
    lines = [f"{sym.name} {sym.address:06d}" for sym in table if sym.is_entry]
    if not lines:
        if os.path.exists(path):
            os.remove(path)
        return None
    _write(path, lines)
    return path


def _operand(
    mode: int, word: str, mem: Memory, result: FirstPassResult,
    ext_lines: list[str], file_name: str, line_num: int,
) -> bool:
    if mode == DIRECT and word not in _NO_OPERAND:
        return mem.insert_symbol(1, word, result.table, ext_lines, file_name, line_num)
    if mode == RELATIVE:
        return mem.insert_symbol(2, word, result.table, ext_lines, file_name, line_num)
    if mode == IMMEDIATE:
        mem.reserve()
    return True


def second_scan(
    file_name: str, input_name: str, result: FirstPassResult, reporter: Reporter
) -> bool:
    """Resolve symbols in instruction memory and write .obj, .ent and .ext files.

    Returns True when the assembly succeeded.
    """
    mem = result.inst_mem
    mem.counter = INSTRUCTION_START
    error = result.error

    for name in validate_symbol_table(result.table):
        reporter.symbol(file_name, name, ErrorCode.ENTRY_NOT_DEFINED)
        error = True

    ext_lines: list[str] = []
    with open(file_name, "r", encoding=ENCODING, newline="\n") as stream:
        for line_num, line in enumerate(read_lines(stream), 1):
            if error:
                break
            word, i = read_next_word(line, 0)
            if not word or word.startswith(";") or word in _SKIP_WORDS:
                continue
            if addressing_method(word) == LABEL_DEF:
                nxt, pos = read_next_word(line, i)
                if nxt:
                    word, i = nxt, pos
            if word in _SKIP_WORDS:
                continue

            mem.reserve()
            word, i = read_next_word_until(line, i, ",")
            if not _operand(addressing_method(word), word, mem, result,
                            ext_lines, file_name, line_num):
                error = True
            found, i = read_comma(line, i)
            if not found:
                continue
            word, i = read_next_word(line, i)
            if not _operand(addressing_method(word), word, mem, result,
                            ext_lines, file_name, line_num):
                error = True

    if error:
        print(f"Error(s) encountered while assembling {file_name}. Assembly terminated\n")
        return False

    _write(add_extension(input_name, ".ext"), ext_lines)
    write_object(mem, result.data_mem, result.icf, result.dcf, input_name)
    write_entries(result.table, input_name)
    print(f"Succesfully completed assembly for file {file_name}\n")
    return True