import io

from cky.__main__ import main


def test_eval_option_prints_last_result(capsys):
    assert main(["-e", "(define x 2) (+ x 40)"]) == 0
    assert capsys.readouterr().out == "42\n"


def test_file_mode(tmp_path, capsys):
    program = tmp_path / "prog.lisp"
    program.write_text("(define sq (lambda (n) (+ n n)))\n(sq 4)\n")
    assert main([str(program)]) == 0
    assert capsys.readouterr().out == "8\n"


def test_error_exits_with_status_one(capsys):
    assert main(["-e", "(car 1)"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "error: car: argument 0: expected type list, got type int\n"


def test_deeply_nested_form_exits_with_status_one(capsys):
    assert main(["-e", "'" + "(" * 5000 + ")" * 5000]) == 1
    assert capsys.readouterr().err == "error: Form nested too deeply\n"


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.lisp")]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_exit_value_is_printed(capsys):
    assert main(["-e", "(exit 'bye) 1"]) == 0
    assert capsys.readouterr().out == "'bye\n"


def test_custom_pattern_file(tmp_path, capsys):
    patterns = tmp_path / "digits.lex"
    patterns.write_text("\\s+\twhitespace\n\\d+\tinteger\n")
    assert main(["--patterns", str(patterns), "-e", "7 8"]) == 0
    assert capsys.readouterr().out == "8\n"


def test_bad_pattern_file(tmp_path, capsys):
    patterns = tmp_path / "bad.lex"
    patterns.write_text("no tab here\n")
    assert main(["--patterns", str(patterns), "-e", "1"]) == 1
    assert "expected 'pattern<TAB>token'" in capsys.readouterr().err


def test_interactive_mode_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("(+ 1 2)\n"))
    assert main([]) == 0
    assert capsys.readouterr().out == "> 3\n> "
