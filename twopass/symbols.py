"""The symbol table: an open-addressing hash table of labels."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

from .errors import ErrorCode, Reporter

INITIAL_SIZE = 1000
LOAD_FACTOR = 0.75
_STORED_NAME_LEN = 29
_KINDS = frozenset("cdex")


class SymbolType(IntEnum):
    """Kinds a symbol can have, alone or combined."""

    CODE = 1
    DATA = 2
    ENTRY = 3
    EXTERN = 4
    ENT_CODE = 5
    EXT_CODE = 6
    ENT_DATA = 7
    EXT_DATA = 8


_TYPES = {
    "c": SymbolType.CODE,
    "d": SymbolType.DATA,
    "e": SymbolType.ENTRY,
    "x": SymbolType.EXTERN,
    "ec": SymbolType.ENT_CODE,
    "ce": SymbolType.ENT_CODE,
    "xc": SymbolType.EXT_CODE,
    "cx": SymbolType.EXT_CODE,
    "ed": SymbolType.ENT_DATA,
    "de": SymbolType.ENT_DATA,
    "xd": SymbolType.EXT_DATA,
    "dx": SymbolType.EXT_DATA,
}


@dataclass
class Symbol:
    """A symbol: its name, its kind letters (c, d, e, x; at most two) and address."""

    name: str
    flags: str
    address: int

    @property
    def is_entry(self) -> bool:
        return "e" in self.flags

    @property
    def is_extern(self) -> bool:
        return "x" in self.flags

    @property
    def is_code(self) -> bool:
        return "c" in self.flags

    @property
    def is_data(self) -> bool:
        return "d" in self.flags


def hash_key(key: str, size: int) -> int:
    """Slot index for key in a table of the given size (multiplier 31, 32-bit)."""
    h = 0
    for byte in key.encode("utf-8"):
        if byte > 127:
            byte -= 256
        h = (h * 31 + byte) & 0xFFFFFFFF
    return h % size if size > 0 else 0


class SymbolTable:
    """Hash table with linear probing; grows to twice its size past the load factor."""

    def __init__(self, size: int = INITIAL_SIZE) -> None:
        if size < 1:
            raise ValueError("symbol table size must be positive")
        self._slots: list[Symbol | None] = [None] * size
        self._count = 0

    @property
    def size(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Symbol]:
        """Symbols in slot order."""
        return (sym for sym in self._slots if sym is not None)

    def _grow(self) -> None:
        old = list(self)
        size = len(self._slots) * 2
        self._slots = [None] * size
        for sym in old:
            index = hash_key(sym.name, size)
            while self._slots[index] is not None:
                index = (index + 1) % size
            self._slots[index] = sym

    def _find(self, name: str) -> Symbol | None:
        size = len(self._slots)
        index = hash_key(name, size)
        for _ in range(size):
            sym = self._slots[index]
            if sym is None:
                return None
            if sym.name == name:
                return sym
            index = (index + 1) % size
        return None

    def insert(
        self,
        name: str,
        address: int,
        kind: str,
        file_name: str,
        line_num: int,
        reporter: Reporter,
    ) -> bool:
        """Add or update a symbol of kind c, d, e or x.

        Conflicts are reported through the reporter; returns False if any was.
        """
        if kind not in _KINDS or len(kind) != 1:
            raise ValueError(f"unknown symbol kind {kind!r}")
        if self._count / len(self._slots) > LOAD_FACTOR:
            self._grow()

        ok = True
        size = len(self._slots)
        index = hash_key(name, size)
        while (sym := self._slots[index]) is not None:
            if sym.name == name:
                first = sym.flags[0]
                if kind == "e":
                    if first == "x":
                        reporter.error(file_name, line_num, ErrorCode.ENTRY_AS_EXTERN)
                        ok = False
                    if first != "e":
                        sym.flags = first + "e"
                    return ok
                if first == "e":
                    if kind == "x":
                        reporter.error(file_name, line_num, ErrorCode.EXTERN_AS_ENTRY)
                        ok = False
                    if sym.flags[1:2] in ("d", "c"):
                        reporter.error(file_name, line_num, ErrorCode.SYMBOL_REDEFINED)
                        ok = False
                    else:
                        sym.flags = "e" + kind
                        sym.address = address
                    return ok
                reporter.error(file_name, line_num, ErrorCode.SYMBOL_REDEFINED)
                ok = False
            index = (index + 1) % size

        self._slots[index] = Symbol(
            name[:_STORED_NAME_LEN], kind, 0 if kind in ("e", "x") else address
        )
        self._count += 1
        return ok

    def type_of(self, name: str) -> SymbolType | None:
        """Combined type of a symbol; None if absent or of no known combination."""
        sym = self._find(name)
        if sym is None:
            return None
        return _TYPES.get(sym.flags)

    def address_of(self, name: str) -> int | None:
        """Address of a symbol, 1 for an external one, None if absent."""
        sym = self._find(name)
        if sym is None:
            return None
        if sym.is_extern:
            return 1
        return sym.address