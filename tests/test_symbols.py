import io

import pytest

from twopass.errors import ErrorCode, Reporter, message
from twopass.symbols import Symbol, SymbolTable, SymbolType, hash_key


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def reporter(out):
    return Reporter(out)


def test_hash_key_basics():
    assert hash_key("", 10) == 0
    assert hash_key("anything", 0) == 0
    assert hash_key("a", 1000) == ord("a")


@pytest.mark.parametrize("key", ["MAIN", "LOOP", "x1", "a_very_long_label_name"])
@pytest.mark.parametrize("size", [1, 7, 1000])
def test_hash_key_in_range(key, size):
    assert 0 <= hash_key(key, size) < size


def test_code_symbol(reporter):
    table = SymbolTable()
    assert table.insert("MAIN", 100, "c", "f", 1, reporter)
    assert table.type_of("MAIN") is SymbolType.CODE
    assert table.address_of("MAIN") == 100
    assert len(table) == 1


def test_missing_symbol(reporter):
    table = SymbolTable()
    assert table.address_of("NOPE") is None
    assert table.type_of("NOPE") is None


def test_extern_symbol(reporter):
    table = SymbolTable()
    assert table.insert("EXT", 55, "x", "f", 1, reporter)
    assert table.type_of("EXT") is SymbolType.EXTERN
    assert table.address_of("EXT") == 1
    assert next(iter(table)).address == 0


def test_entry_then_code(reporter, out):
    table = SymbolTable()
    assert table.insert("L", 0, "e", "f", 1, reporter)
    assert table.type_of("L") is SymbolType.ENTRY
    assert table.insert("L", 104, "c", "f", 2, reporter)
    assert table.type_of("L") is SymbolType.ENT_CODE
    assert table.address_of("L") == 104
    assert len(table) == 1
    assert out.getvalue() == ""


def test_code_then_entry(reporter):
    table = SymbolTable()
    table.insert("L", 103, "c", "f", 1, reporter)
    assert table.insert("L", 0, "e", "f", 2, reporter)
    assert table.type_of("L") is SymbolType.ENT_CODE
    assert table.address_of("L") == 103


def test_data_then_entry(reporter):
    table = SymbolTable()
    table.insert("D", 3, "d", "f", 1, reporter)
    table.insert("D", 0, "e", "f", 2, reporter)
    assert table.type_of("D") is SymbolType.ENT_DATA
    sym = next(iter(table))
    assert sym.is_entry and sym.is_data


def test_duplicate_definition_reported_and_kept(reporter, out):
    table = SymbolTable()
    table.insert("X", 100, "c", "prog", 1, reporter)
    assert not table.insert("X", 101, "c", "prog", 5, reporter)
    assert out.getvalue() == f"ERROR in file prog, line 5: {message(ErrorCode.SYMBOL_REDEFINED)}\n"
    assert len(table) == 2
    assert [s.name for s in table] == ["X", "X"]
    assert table.address_of("X") == 100


def test_entry_on_extern_reported(reporter, out):
    table = SymbolTable()
    table.insert("E", 0, "x", "f", 1, reporter)
    assert not table.insert("E", 0, "e", "f", 2, reporter)
    assert message(ErrorCode.ENTRY_AS_EXTERN) in out.getvalue()
    assert reporter.count == 1


def test_extern_on_entry_reported(reporter, out):
    table = SymbolTable()
    table.insert("E", 0, "e", "f", 1, reporter)
    assert not table.insert("E", 0, "x", "f", 2, reporter)
    assert message(ErrorCode.EXTERN_AS_ENTRY) in out.getvalue()


def test_entry_redefined_after_definition(reporter, out):
    table = SymbolTable()
    table.insert("E", 0, "e", "f", 1, reporter)
    table.insert("E", 100, "c", "f", 2, reporter)
    assert not table.insert("E", 120, "d", "f", 3, reporter)
    assert message(ErrorCode.SYMBOL_REDEFINED) in out.getvalue()
    assert table.address_of("E") == 100


def test_growth_keeps_all_symbols(reporter):
    table = SymbolTable(4)
    names = [f"L{n}" for n in range(20)]
    for n, name in enumerate(names):
        assert table.insert(name, 100 + n, "c", "f", n, reporter)
    assert len(table) == len(names)
    assert table.size > 4
    assert sorted(s.name for s in table) == sorted(names)
    for n, name in enumerate(names):
        assert table.address_of(name) == 100 + n


def test_lookup_in_full_single_slot_table(reporter):
    table = SymbolTable(1)
    table.insert("A", 100, "c", "f", 1, reporter)
    assert table.address_of("B") is None


def test_iteration_follows_slot_order(reporter):
    table = SymbolTable()
    table.insert("b", 101, "c", "f", 1, reporter)
    table.insert("a", 100, "c", "f", 2, reporter)
    assert [s.name for s in table] == ["a", "b"]


def test_long_name_is_truncated(reporter):
    table = SymbolTable()
    table.insert("a" * 35, 100, "c", "f", 1, reporter)
    assert [s.name for s in table] == ["a" * 29]


def test_symbol_address_is_mutable(reporter):
    table = SymbolTable()
    table.insert("D", 2, "d", "f", 1, reporter)
    for sym in table:
        if sym.is_data:
            sym.address += 110
    assert table.address_of("D") == 112


def test_symbol_flags_properties():
    sym = Symbol("S", "xc", 0)
    assert sym.is_extern and sym.is_code
    assert not sym.is_entry and not sym.is_data


def test_invalid_kind_raises(reporter):
    with pytest.raises(ValueError):
        SymbolTable().insert("A", 0, "q", "f", 1, reporter)


def test_invalid_size_raises():
    with pytest.raises(ValueError):
        SymbolTable(0)