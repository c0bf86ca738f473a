from twopass.errors import Reporter
from twopass.first_scan import first_scan
from twopass.second_scan import second_scan, write_entries
from twopass.symbols import SymbolTable


def _run(tmp_path, text):
    am = tmp_path / "prog.am"
    am.write_text(text)
    base = str(tmp_path / "prog")
    reporter = Reporter()
    result = first_scan(str(am), base, reporter)
    return second_scan(str(am), base, result, reporter), tmp_path


def test_stop_object(tmp_path):
    ok, d = _run(tmp_path, "stop\n")
    assert ok
    assert (d / "prog.obj").read_text() == "    1 0\n000100 3c0004\n"
    assert not (d / "prog.ent").exists()


def test_extern_usage(tmp_path):
    ok, d = _run(tmp_path, ".extern X\njmp X\nstop\n")
    assert ok
    assert (d / "prog.ext").read_text() == "X 000101\n"


def test_entry_file(tmp_path):
    ok, d = _run(tmp_path, ".entry MAIN\nMAIN: stop\n")
    assert ok
    assert (d / "prog.ent").read_text() == "MAIN 000100\n"


def test_undefined_symbol(tmp_path, capsys):
    ok, d = _run(tmp_path, "jmp NOWHERE\nstop\n")
    assert not ok
    assert not (d / "prog.obj").exists()
    assert "Undefined symbol" in capsys.readouterr().out


def test_entry_never_defined(tmp_path, capsys):
    ok, _ = _run(tmp_path, ".entry GHOST\nstop\n")
    assert not ok
    assert "GHOST" in capsys.readouterr().out


def test_object_line_count(tmp_path):
    ok, d = _run(tmp_path, "mov #1, r2\nD: .data 4\nstop\n")
    assert ok
    lines = (d / "prog.obj").read_text().splitlines()
    icount, dcount = map(int, lines[0].split())
    assert len(lines) - 1 == icount + dcount


def test_write_entries_none(tmp_path):
    assert write_entries(SymbolTable(), str(tmp_path / "x")) is None