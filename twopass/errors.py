"""Error codes, their messages and the reporter that prints them."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TextIO


class ErrorCode(IntEnum):
    """Every error the assembler can report."""

    NONE = 0
    INVALID_MACRO_NAME = 1
    MACRO_DEFINITION_EXTRA_TEXT = 2
    MACRO_END_EXTRA_TEXT = 3
    MISSING_MACRO_NAME = 4
    DUPLICATE_MACRO = 5
    CANNOT_CREATE_FILE = 6
    OUT_OF_MEMORY = 7
    SYMBOL_TOO_LONG = 8
    LABEL_ON_ENTRY_EXTERN = 9
    EMPTY_LABEL_LINE = 10
    DATA_MEMORY_EXCEEDED = 11
    EXPECTED_INT = 12
    LINE_TOO_LONG = 13
    DATA_COMMAS = 14
    DATA_TRAILING_COMMA = 15
    STRING_MISSING_QUOTES = 16
    INVALID_ENTRY_EXTERN_LABEL = 17
    UNDEFINED_OPERATION = 18
    INVALID_ADDRESSING = 19
    INVALID_OPERAND_COUNT = 20
    INSTRUCTION_TRAILING_COMMA = 21
    INSTRUCTION_EXTRA_TEXT = 22
    LABEL_BEFORE_ENTRY_EXTERN = 23
    CONSECUTIVE_COMMAS = 24
    UNDEFINED_SYMBOL = 25
    SYMBOL_REDEFINED = 26
    ENTRY_AS_EXTERN = 27
    EXTERN_AS_ENTRY = 28
    UNEXPECTED_COMMA = 29
    ENTRY_NOT_DEFINED = 30
    NO_INPUT_FILE = 31
    FILE_NOT_FOUND = 32
    CANNOT_OPEN_FILE = 33


_MESSAGES = {
    ErrorCode.NONE: "No Error",
    ErrorCode.INVALID_MACRO_NAME: "Invalid macro name",
    ErrorCode.MACRO_DEFINITION_EXTRA_TEXT: "Extra text after macro definition",
    ErrorCode.MACRO_END_EXTRA_TEXT: "Extra text after macro end",
    ErrorCode.MISSING_MACRO_NAME: "Missing macro name on macro definition line",
    ErrorCode.DUPLICATE_MACRO: "Cannot define two macros with the same name",
    ErrorCode.CANNOT_CREATE_FILE: "Could not create new file",
    ErrorCode.OUT_OF_MEMORY: "Failed to dynamically allocate memory. Exiting program execution",
    ErrorCode.SYMBOL_TOO_LONG: "Symbol Name exceeds maximum of 31 characters",
    ErrorCode.LABEL_ON_ENTRY_EXTERN: "Cannot define a label on .entry or .extern",
    ErrorCode.EMPTY_LABEL_LINE: "Expected text after label definition",
    ErrorCode.DATA_MEMORY_EXCEEDED: "Maximum Data memory size exceeded",
    ErrorCode.EXPECTED_INT: "Expected type INT in .data definition",
    ErrorCode.LINE_TOO_LONG: "Max line len of 81 chars exceeded",
    ErrorCode.DATA_COMMAS: "Missing comas or too many between ints on .data definition",
    ErrorCode.DATA_TRAILING_COMMA: "Trailing , on .data definition",
    ErrorCode.STRING_MISSING_QUOTES: "Missing quotes  on .string definition",
    ErrorCode.INVALID_ENTRY_EXTERN_LABEL: "Label name on .entry/.extern definition must be valid",
    ErrorCode.UNDEFINED_OPERATION: "Invalid instruction; undefined operation",
    ErrorCode.INVALID_ADDRESSING: "Invalid addressing method used for insruction",
    ErrorCode.INVALID_OPERAND_COUNT: "Invalid number of operands supplied to instruction",
    ErrorCode.INSTRUCTION_TRAILING_COMMA: "Trailing , on instruction line",
    ErrorCode.INSTRUCTION_EXTRA_TEXT: "Extra text on instruction line",
    ErrorCode.LABEL_BEFORE_ENTRY_EXTERN: "Cannot define .e/.x label: .e/.x",
    ErrorCode.CONSECUTIVE_COMMAS: "Too many sequential ','",
    ErrorCode.UNDEFINED_SYMBOL: "Undefined symbol",
    ErrorCode.SYMBOL_REDEFINED: "This label has already beeen defined elsewhere",
    ErrorCode.ENTRY_AS_EXTERN: "Label already defined as .entry cannot be defined as .extern",
    ErrorCode.EXTERN_AS_ENTRY: "Label already defined as .extern cannot be defined as .entry",
    ErrorCode.UNEXPECTED_COMMA: "Unexpected ','",
    ErrorCode.ENTRY_NOT_DEFINED: (
        "This label has been defined as .entry but hasn't been defined in this file"
    ),
    ErrorCode.NO_INPUT_FILE: "You must give a file name as an input to the assembler",
    ErrorCode.FILE_NOT_FOUND: "File not found - cannot open file",
    ErrorCode.CANNOT_OPEN_FILE: "Could not open a new file",
}


def message(code: int) -> str:
    """Return the message for an error code; ValueError if the code is unknown."""
    return _MESSAGES[ErrorCode(code)]


class Reporter:
    """Prints errors to a stream (standard output by default) and counts them."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.count = 0

    def _emit(self, text: str) -> None:
        self.count += 1
        print(text, file=self._stream if self._stream is not None else sys.stdout)

    def error(self, file_name: str, line_num: int, code: int) -> None:
        """Report a syntax or label error found on a given line."""
        self._emit(f"ERROR in file {file_name}, line {line_num}: {message(code)}")

    def internal(self, code: int) -> None:
        """Report an error that is not tied to a source line."""
        self._emit(f"ERROR: {message(code)}")

    def symbol(self, file_name: str, symbol_name: str, code: int) -> None:
        """Report an error about a symbol of a file."""
        self._emit(f"ERROR in file {file_name}, label: {symbol_name}; {message(code)}")