import os
import subprocess
import sys
from pathlib import Path

from nanobasic.cli import main

ROOT = Path(__file__).resolve().parent.parent


def test_runs_program(programs_dir, capsys):
    assert main([str(programs_dir / "gosub.bas")]) == 0
    assert capsys.readouterr().out == "in sub\nafter 9\nend\n"


def test_fibonacci(programs_dir, capsys):
    assert main([str(programs_dir / "fib.bas")]) == 0
    out = capsys.readouterr().out.split()
    assert out[:6] == ["0", "1", "1", "2", "3", "5"]
    assert out[-2:] == ["89", "done"]


def test_runtime_error_exit_code(programs_dir, capsys):
    assert main([str(programs_dir / "bad_return.bas")]) == 1
    captured = capsys.readouterr()
    assert captured.out == "before\n"
    assert "RETURN without GOSUB" in captured.err


def test_parse_error_shows_caret(tmp_path, capsys):
    path = tmp_path / "bad.bas"
    path.write_text("10 PRINT 1\n20 LET X 5\n")
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert "ParseError" in err
    assert "20 LET X 5\n" + " " * 9 + "^" in err


def test_tokenize_error(tmp_path, capsys):
    path = tmp_path / "bad.bas"
    path.write_text("10 PRINT @\n")
    assert main([str(path)]) == 1
    assert "TokenizeError" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.bas")]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_ast_summary(programs_dir, capsys):
    assert main([str(programs_dir / "gosub.bas"), "--ast"]) == 0
    out = capsys.readouterr().out
    assert "Line    20: GoSubCall" in out
    assert "Statement counts" in out
    # --ast 는 실행하지 않는다
    assert "in sub" not in out


def test_token_dump(programs_dir, capsys):
    assert main([str(programs_dir / "gosub.bas"), "--tokens"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("NUMBER(10)")
    assert out[-1].startswith("EOF")


def test_module_entry_point(programs_dir):
    env = dict(os.environ)
    env["PYTHONPATH"] = str(ROOT) + os.pathsep + env.get("PYTHONPATH", "")
    proc = subprocess.run(
        [sys.executable, "-m", "nanobasic", str(programs_dir / "gosub.bas")],
        text=True,
        capture_output=True,
        cwd=str(ROOT),
        env=env,
        timeout=30,
    )
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.splitlines() == ["in sub", "after 9", "end"]


def test_non_utf8_file_is_unreadable(tmp_path, capsys):
    path = tmp_path / "latin.bas"
    path.write_bytes(b'10 PRINT "\xff"\n')
    assert main([str(path)]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_summarize_writes_to_current_stdout(capsys):
    from nanobasic import load
    from nanobasic.cli import summarize

    summarize(load("10 PRINT 1\n20 IF 1 = 1 THEN RETURN"))
    out = capsys.readouterr().out
    assert "Line    10: PrintStatement (1 items)" in out
    assert "Line    20: IfStatement -> ReturnStatement" in out


def test_cli_logger_is_module_scoped():
    from nanobasic import cli

    assert cli.logger.name == "nanobasic.cli"
