"""
Utilities module for the Mint interpreter
Integer arithmetic helpers shared by the evaluator
"""

from typing import Callable, Dict
import operator

from error_handling import MintDivisionByZeroError
from syntax_tree import Operator


# ==================== INTEGER ARITHMETIC ====================

def truncating_div(x: int, y: int) -> int:
  """
  Integer division rounding toward zero

  Args:
    x: Dividend
    y: Divisor

  Returns:
    Quotient truncated toward zero

  Raises:
    MintDivisionByZeroError if y is zero

  Examples:
    truncating_div(7, 2) -> 3
    truncating_div(-7, 2) -> -3
  """
  if y == 0:
    raise MintDivisionByZeroError(f"Division by zero: {x} / {y}")
  quotient = abs(x) // abs(y)
  return quotient if (x < 0) == (y < 0) else -quotient


# ==================== BINARY OPERATION FACTORIES ====================

def binary_arithmetic_op(
  op: Callable[[int, int], int],
  op_name: str
) -> Callable[[int, int], int]:
  """
  Factory for binary arithmetic operations on integers

  Args:
    op: Python operator function (e.g., operator.add)
    op_name: Name for error messages

  Returns:
    Function that performs the arithmetic operation

  Examples:
    mint_add = binary_arithmetic_op(operator.add, "add")
    mint_add(1, 2) -> 3
  """
  def arithmetic(x: int, y: int) -> int:
    if not isinstance(x, int) or not isinstance(y, int):
      raise TypeError(f"Cannot {op_name} {type(x).__name__} and {type(y).__name__}")
    return op(x, y)

  arithmetic.__name__ = f"mint_{op_name}"
  return arithmetic


mint_add = binary_arithmetic_op(operator.add, "add")
mint_sub = binary_arithmetic_op(operator.sub, "sub")
mint_mul = binary_arithmetic_op(operator.mul, "mul")
mint_div = binary_arithmetic_op(truncating_div, "div")


ARITHMETIC_OPS: Dict[Operator, Callable[[int, int], int]] = {
  Operator.ADD: mint_add,
  Operator.SUB: mint_sub,
  Operator.MUL: mint_mul,
  Operator.DIV: mint_div,
}

# Applied by INCR/DECR to the current value of the target
CREMENT_STEPS: Dict[Operator, int] = {
  Operator.INCR: 1,
  Operator.DECR: -1,
}
