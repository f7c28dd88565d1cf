"""
Command line tests for Mint
"""

import pytest
from main import main, create_arg_parser


class TestCommandLine:
  """Exit status and output of the mint command"""

  def test_eval_success(self, capsys):
    with pytest.raises(SystemExit) as exc_info:
      main(["-e", "fn main(){let s = 2; s++;}"])
    assert exc_info.value.code == 0
    assert "Program executed successfully" in capsys.readouterr().out

  def test_eval_runtime_error(self, capsys):
    with pytest.raises(SystemExit) as exc_info:
      main(["-e", "fn main(){let s = 1/0;}"])
    assert exc_info.value.code == 1
    assert "DivisionByZero error in <eval>" in capsys.readouterr().out

  def test_eval_syntax_error(self, capsys):
    with pytest.raises(SystemExit) as exc_info:
      main(["-e", "fn main(){let s = 2}"])
    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "Syntax error in <eval>" in out
    assert "line 1, column 20" in out

  def test_memory_listing(self, capsys):
    with pytest.raises(SystemExit):
      main(["--memory", "-e", "fn main(){let s = 1 + 2; let t = 4; t--;}"])
    out = capsys.readouterr().out
    assert "s = 1 + 2  => 3" in out
    assert "t = 3  => 3" in out

  def test_parse_only(self, capsys):
    main(["--parse", "-e", "fn foo(n: int){let p = 2;} fn main(){let s = -1;}"])
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[-2] == "fn main() { let s = -1; }"
    assert lines[-1] == "fn foo(n: int) { let p = 2; }"

  def test_parse_tree(self, capsys):
    main(["--parse", "--tree", "-e", "fn main(){let s = 2;}"])
    out = capsys.readouterr().out
    assert "Function main() -> 0" in out
    assert "    Literal(2)" in out

  def test_script_file(self, tmp_path, capsys):
    script = tmp_path / "prog.mint"
    script.write_text("fn main() {\n  let s = 6 / 2;\n}\n")
    with pytest.raises(SystemExit) as exc_info:
      main([str(script)])
    assert exc_info.value.code == 0

  def test_missing_script(self, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
      main([str(tmp_path / "missing.mint")])
    assert exc_info.value.code == 1
    assert "does not exist" in capsys.readouterr().out

  def test_no_arguments(self, capsys):
    with pytest.raises(SystemExit) as exc_info:
      main([])
    assert exc_info.value.code == 2

  def test_arg_parser_flags(self):
    args = create_arg_parser().parse_args(["--debug", "--memory", "x.mint"])
    assert args.debug and args.memory
    assert args.script == "x.mint"
