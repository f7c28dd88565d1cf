"""
Mint Interpreter
Tree-walking evaluator over a shared symbol table, plus the run driver
"""

from typing import List, Optional

from error_handling import (
  MintError,
  MintInvalidError,
  MintInvalidTargetError,
  MintUnsupportedOperatorError,
  MintCyclicReferenceError,
  MintRecursionLimitError,
)
from memory import Memory
from parsing import MintParser, create_parser, create_debug_parser
from syntax_tree import (
  Operator,
  Literal,
  Reference,
  Unary,
  Binary,
  Var,
  Function,
  Expr,
  ARITHMETIC_OPERATORS,
  SIGN_OPERATORS,
  MUTATION_OPERATORS,
  render_expr,
)
from utilities import ARITHMETIC_OPS, CREMENT_STEPS


# ============================================================================
# EVALUATOR
# ============================================================================

class Evaluator:
  """Evaluates expressions against a Memory; references are re-evaluated on every use"""

  def __init__(self, memory: Memory, debug: bool = False):
    self.memory = memory
    self.debug = debug
    self._resolving: List[str] = []

  def evaluate(self, expr: Expr) -> int:
    """Evaluate an expression to an integer, applying mutations as a side effect"""
    if isinstance(expr, Literal):
      return expr.value
    elif isinstance(expr, Reference):
      return self.eval_reference(expr)
    elif isinstance(expr, Unary):
      return self.eval_unary(expr)
    elif isinstance(expr, Binary):
      if expr.operator in MUTATION_OPERATORS:
        return self.eval_crement(expr)
      return self.eval_binary(expr)
    raise TypeError(f"Not a Mint expression: {expr!r}")

  def eval_reference(self, expr: Reference) -> int:
    """Look the name up and evaluate whatever it is bound to right now"""
    name = expr.name
    if name in self._resolving:
      raise MintCyclicReferenceError(name, self._resolving[self._resolving.index(name):])
    bound = self.memory.resolve(name)

    self._resolving.append(name)
    try:
      return self.evaluate(bound)
    finally:
      self._resolving.pop()

  def eval_unary(self, expr: Unary) -> int:
    if expr.operator not in SIGN_OPERATORS:
      raise MintUnsupportedOperatorError(expr.operator, "unary")
    value = self.evaluate(expr.operand)
    return -value if expr.operator is Operator.SUB else value

  def eval_binary(self, expr: Binary) -> int:
    if expr.operator not in ARITHMETIC_OPERATORS:
      raise MintUnsupportedOperatorError(expr.operator, "binary")
    left = self.evaluate(expr.left)
    right = self.evaluate(expr.right)
    return ARITHMETIC_OPS[expr.operator](left, right)

  def eval_crement(self, expr: Binary) -> int:
    """x++ / x--: rebind x to a fresh literal, yield the previous value"""
    if not isinstance(expr.left, Reference):
      raise MintInvalidTargetError(
          f"'{expr.operator.symbol}' needs a variable, got '{render_expr(expr.left)}'")
    name = expr.left.name
    value = self.eval_reference(expr.left)
    updated = value + CREMENT_STEPS[expr.operator]
    self.memory.bind(name, Literal(updated))

    if self.debug:
      print(f"  {name}{expr.operator.symbol}: {value} -> {updated}")
    return value

  def bind_declaration(self, var: Var) -> int:
    """Store the initializer expression itself, then evaluate it once"""
    self.memory.bind(var.name, var.initializer)
    value = self.evaluate(var.initializer)

    if self.debug:
      print(f"  let {var.name} = {render_expr(var.initializer)}  => {value}")
    return value

  def execute_function(self, function: Function) -> int:
    """Bind every declaration, then evaluate every statement; parameters stay unbound"""
    if self.debug:
      print(f"Executing fn {function.name}")

    for var in function.declarations:
      self.bind_declaration(var)
    for statement in function.statements:
      self.evaluate(statement)
    return function.status

  def execute(self, functions: List[Function]) -> int:
    """Run every function in order; the first error aborts the whole program"""
    for function in functions:
      self.execute_function(function)
    return 0


def execute(functions: List[Function], memory: Memory, debug: bool = False) -> int:
  """Execute a canonicalized program against memory"""
  return Evaluator(memory, debug).execute(functions)


# ============================================================================
# INTERPRETER DRIVER
# ============================================================================

class Interpreter:
  """Parses and runs Mint source; every failure surfaces as MintInvalidError"""

  def __init__(self, debug: bool = False, parser: Optional[MintParser] = None):
    self.debug = debug
    self.parser = parser or create_parser(debug)
    self.memory = Memory()

  def parse(self, source: str) -> List[Function]:
    """Parse only, returning the canonicalized function list"""
    try:
      return self.parser.parse_string(source)
    except MintError as e:
      raise MintInvalidError(e) from e
    except RecursionError as e:
      raise MintInvalidError(MintRecursionLimitError()) from e

  def run_ast(self, functions: List[Function]) -> int:
    """Execute an already parsed program on a fresh memory"""
    self.memory = Memory()
    try:
      return execute(functions, self.memory, self.debug)
    except MintError as e:
      raise MintInvalidError(e) from e
    except RecursionError as e:
      # evaluation and rendering recurse once per tree level
      raise MintInvalidError(MintRecursionLimitError()) from e

  def run(self, source: str) -> int:
    return self.run_ast(self.parse(source))

  def run_file(self, path: str) -> int:
    with open(path, 'r', encoding='utf-8') as f:
      source = f.read()
    return self.run(source)


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False) -> Interpreter:
  """Factory function returning an interpreter"""
  return Interpreter(debug=debug)


def create_debug_interpreter() -> Interpreter:
  """Factory function returning a debug interpreter"""
  return Interpreter(debug=True, parser=create_debug_parser())


def run(source: str, debug: bool = False) -> int:
  """Parse and execute source, returning the status code"""
  return create_interpreter(debug).run(source)


def run_to_ast(source: str, debug: bool = False) -> List[Function]:
  """Parse source into its canonical function list"""
  return create_interpreter(debug).parse(source)
