"""
Command-line tests for ucasm.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import pytest
import ucasm
from ucpu_asm.log_setup import setup_logging


def _run(tmp_path, source: str):
    """Write ``source`` and run the CLI; return (status, listing path, hex path)."""
    src = tmp_path / "prog.uca"
    src.write_text(source)
    lst = tmp_path / "prog.lst"
    hexf = tmp_path / "prog.hex"
    status = ucasm.main([str(src), str(lst), str(hexf)])
    return status, lst, hexf


class TestUsage:

    @pytest.mark.parametrize("argv", [[], ["a"], ["a", "b"], ["a", "b", "c", "d"]])
    def test_wrong_argument_count(self, argv, tmp_path, capsys, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc:
            ucasm.main(argv)
        assert exc.value.code == ucasm.EXIT_USAGE
        out = capsys.readouterr().out
        assert out.startswith("usage: ucasm")
        assert list(tmp_path.iterdir()) == []

    def test_usage_mentions_double_dash(self, capsys):
        with pytest.raises(SystemExit):
            ucasm.main([])
        assert "[--] source listing hexdump" in capsys.readouterr().out

    def test_dash_prefixed_paths_after_double_dash(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "-prog.uca").write_text("LDI 05\n")
        status = ucasm.main(["--", "-prog.uca", "-prog.lst", "-prog.hex"])
        assert status == ucasm.EXIT_OK
        assert (tmp_path / "-prog.hex").read_text().startswith(" D05")


class TestAssembleFile:

    def test_success(self, tmp_path, capsys):
        status, lst, hexf = _run(tmp_path, "LDI 05\n$1 ADI 01\nBNZ $1\n")
        assert status == ucasm.EXIT_OK
        rows = hexf.read_text().splitlines()
        assert len(rows) == 16
        assert rows[0].startswith(" D05 101 901 000")
        assert "Second pass assembler listing" in lst.read_text()
        assert capsys.readouterr().err == ""

    def test_syntax_error_writes_no_hex(self, tmp_path, capsys):
        status, lst, hexf = _run(tmp_path, "FOO 01\nLDA 05\n")
        assert status == ucasm.EXIT_SYNTAX
        assert not hexf.exists()
        assert "First pass assembler listing" in lst.read_text()
        err = capsys.readouterr().err
        assert "There were 2 syntax error(s), object file was not generated." in err

    def test_semantic_error_still_writes_hex(self, tmp_path, capsys):
        status, lst, hexf = _run(tmp_path, "JMP $5\n")
        assert status == ucasm.EXIT_OK
        assert hexf.read_text().startswith(" B00")
        err = capsys.readouterr().err
        assert "There were 0 warning(s) and 1 error(s). Check listing file." in err

    def test_warning_summary(self, tmp_path, capsys):
        status, _, hexf = _run(tmp_path, "$1 ADI 00\n$1 ADI 01\nJMP $1\n")
        assert status == ucasm.EXIT_OK
        assert hexf.exists()
        assert "There were 1 warning(s) and 0 error(s)." in capsys.readouterr().err

    def test_diagnostics_logged(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger="ucpu_asm"):
            _run(tmp_path, "$1 ADI 00\n$1 ADI 01\nJMP $5\n")
        assert "Line 1: warning:" in caplog.text
        assert "Line 3: error: label $5 is not defined" in caplog.text

    def test_missing_source(self, tmp_path, capsys):
        lst = tmp_path / "x.lst"
        hexf = tmp_path / "x.hex"
        status = ucasm.main([str(tmp_path / "nope.uca"), str(lst), str(hexf)])
        assert status == ucasm.EXIT_IO
        assert not lst.exists()
        assert not hexf.exists()
        assert "Error: cannot read" in capsys.readouterr().err

    def test_same_source_same_output(self, tmp_path):
        source = "JMP $2\n$2 LDA %IX ; go\n"
        _, lst, hexf = _run(tmp_path, source)
        first = (lst.read_text(), hexf.read_text())
        _, lst, hexf = _run(tmp_path, source)
        assert (lst.read_text(), hexf.read_text()) == first


class TestLogging:

    def test_log_file(self, tmp_path):
        log_path = tmp_path / "logs" / "asm.log"
        logger = setup_logging("ucpu_asm.test_file", logging.WARNING, log_path)
        logger.debug("hello from test")
        for h in logger.handlers:
            h.flush()
        assert "hello from test" in log_path.read_text(encoding="utf-8")

    def test_idempotent(self):
        a = setup_logging("ucpu_asm.test_twice")
        b = setup_logging("ucpu_asm.test_twice")
        assert a is b
        assert len(b.handlers) == 1
