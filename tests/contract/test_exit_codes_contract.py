from __future__ import annotations

from pathlib import Path

from guest_import.cli.main import EXIT_BLOCKED, EXIT_FATAL, EXIT_SUCCESS_ALL
from guest_import.cli.main import main as cli_main
from guest_import.logging.init import reset_logging

"""Exit code contract: 0 all importable, 2 some file blocked/unreadable, 1 fatal."""


def test_exit_code_values():
    assert (EXIT_SUCCESS_ALL, EXIT_FATAL, EXIT_BLOCKED) == (0, 1, 2)


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    assert code == EXIT_FATAL
    assert "ERROR no input files given" in capsys.readouterr().out


def test_exit_code_all_success(temp_workdir: Path, write_config, make_sheet, guest_rows, capsys):
    reset_logging()
    make_sheet(temp_workdir / "data" / "family.xlsx", guest_rows)
    code = cli_main(["data/family.xlsx"])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "SUMMARY files=1 valid=1" in out


def test_exit_code_partial(temp_workdir: Path, guest_files, capsys):
    reset_logging()
    code = cli_main([str(p) for p in guest_files])
    out = capsys.readouterr().out
    assert code == EXIT_BLOCKED
    assert "SUMMARY files=2 valid=1 blocked=1 failed=0" in out


def test_exit_code_unreadable_file(temp_workdir: Path, capsys):
    reset_logging()
    broken = temp_workdir / "data" / "broken.csv"
    broken.write_bytes(b"\xff\xfe\x00bad")
    code = cli_main([str(broken)])
    out = capsys.readouterr().out
    assert code == EXIT_BLOCKED
    assert "failed=1" in out
