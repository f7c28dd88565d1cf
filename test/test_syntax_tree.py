"""
Tests for the Mint syntax tree: operator model, canonical rendering and equality
"""

import pytest
from syntax_tree import (
  Operator, Literal, Reference, Unary, Binary, Param, Var, Function,
  render_expr, render_var, render_function, render_program, pretty_print_ast
)
from error_handling import MintUnsupportedOperatorError


class TestOperator:
  """Test the closed operator set"""

  @pytest.mark.parametrize("symbol,op", [
    ("+", Operator.ADD), ("-", Operator.SUB), ("*", Operator.MUL), ("/", Operator.DIV),
    ("++", Operator.INCR), ("--", Operator.DECR), ("!", Operator.COMP),
  ])
  def test_symbols(self, symbol, op):
    assert Operator.from_symbol(symbol) is op
    assert op.symbol == symbol
    assert str(op) == symbol

  def test_unknown_symbol(self):
    with pytest.raises(ValueError):
      Operator.from_symbol("%")


class TestRendering:
  """Test canonical rendering rules"""

  def test_atoms(self):
    assert render_expr(Literal(42)) == "42"
    assert render_expr(Literal(-3)) == "-3"
    assert render_expr(Reference("total")) == "total"

  def test_unary_sign(self):
    assert render_expr(Unary(Literal(3), Operator.ADD)) == "3"
    assert render_expr(Unary(Reference("x"), Operator.SUB)) == "-x"

  @pytest.mark.parametrize("op", [Operator.MUL, Operator.DIV, Operator.INCR, Operator.DECR, Operator.COMP])
  def test_reserved_unary_operators(self, op):
    """Only + and - are prefix signs, everything else is an error, not garbage output"""
    with pytest.raises(MintUnsupportedOperatorError) as exc_info:
      render_expr(Unary(Literal(1), op))
    assert exc_info.value.operator is op
    assert exc_info.value.kind == "UnsupportedOperator"

  def test_crements(self):
    """Increment renders as its target only, decrement keeps its suffix"""
    assert render_expr(Binary(Reference("s"), Operator.INCR, Literal(1))) == "s"
    assert render_expr(Binary(Reference("s"), Operator.DECR, Literal(1))) == "s--"

  def test_complement(self):
    assert render_expr(Binary(Reference("flag"), Operator.COMP, Literal(0))) == "!flag"

  def test_arithmetic(self):
    expr = Binary(Literal(1), Operator.ADD, Binary(Literal(2), Operator.MUL, Reference("x")))
    assert render_expr(expr) == "1 + 2 * x"
    assert str(expr) == "1 + 2 * x"

  def test_reserved_operator_nested_inside_arithmetic(self):
    expr = Binary(Literal(1), Operator.ADD, Unary(Literal(2), Operator.COMP))
    with pytest.raises(MintUnsupportedOperatorError):
      render_expr(expr)

  def test_var(self):
    var = Var("s", Binary(Literal(6), Operator.DIV, Literal(2)))
    assert render_var(var) == "let s = 6 / 2"
    assert str(var) == "let s = 6 / 2"

  def test_function(self):
    function = Function(
      "main",
      [Param("a", "int")],
      [Var("s", Literal(3))],
      [Binary(Reference("s"), Operator.DECR, Literal(1))]
    )
    assert render_function(function) == "fn main(a: int) { let s = 3; s--; }"

  def test_empty_function(self):
    assert render_function(Function("foo", [Param("name", "int")])) == "fn foo(name: int) {}"

  def test_program(self):
    program = [Function("main"), Function("foo")]
    assert render_program(program) == "fn main() {} fn foo() {}"

  def test_pretty_print(self):
    function = Function("main", [], [Var("s", Unary(Literal(2), Operator.SUB))], [])
    assert pretty_print_ast(function) == (
      "Function main() -> 0\n"
      "  Var s\n"
      "    Unary(SUB)\n"
      "      Literal(2)\n"
    )


class TestStructuralEquality:
  """Equality is derived from the tree itself, not from rendering"""

  def test_equal_trees(self):
    a = Binary(Reference("x"), Operator.ADD, Literal(1))
    b = Binary(Reference("x"), Operator.ADD, Literal(1))
    assert a == b

  def test_same_rendering_different_trees(self):
    """INCR renders like a plain reference but is a different tree"""
    incr = Binary(Reference("s"), Operator.INCR, Literal(1))
    assert render_expr(incr) == render_expr(Reference("s"))
    assert incr != Reference("s")

  def test_function_equality_includes_parameters(self):
    assert Function("foo", [Param("n", "int")]) != Function("foo")
    assert Function("foo", [Param("n", "int")]) == Function("foo", [Param("n", "int")])

  def test_nodes_are_immutable(self):
    with pytest.raises(AttributeError):
      Literal(1).value = 2

  def test_entry_point_flag(self):
    assert Function("main").is_entry_point
    assert not Function("foo").is_entry_point
