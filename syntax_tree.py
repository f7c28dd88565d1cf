"""
Mint Abstract Syntax Tree
Program representation, operator model and canonical rendering
"""

from typing import List, Union
from dataclasses import dataclass, field
from enum import Enum

from error_handling import MintUnsupportedOperatorError


ENTRY_POINT = "main"


class Operator(Enum):
    """Closed operator set; the value is the source symbol"""
    ADD = "+"     # binary | unary
    SUB = "-"     # binary | unary
    MUL = "*"     # binary
    DIV = "/"     # binary
    INCR = "++"   # postfix crement
    DECR = "--"   # postfix crement
    COMP = "!"    # reserved

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Operator':
        return cls(symbol)

    def __str__(self) -> str:
        return self.value


ARITHMETIC_OPERATORS = frozenset({Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV})
SIGN_OPERATORS = frozenset({Operator.ADD, Operator.SUB})
MUTATION_OPERATORS = frozenset({Operator.INCR, Operator.DECR})


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass(frozen=True)
class Literal:
    value: int

    def __str__(self) -> str:
        return render_expr(self)


@dataclass(frozen=True)
class Reference:
    """Variable use, resolved against memory at evaluation time"""
    name: str

    def __str__(self) -> str:
        return render_expr(self)


@dataclass(frozen=True)
class Unary:
    operand: 'Expr'
    operator: Operator

    def __str__(self) -> str:
        return render_expr(self)


@dataclass(frozen=True)
class Binary:
    """Arithmetic, or a mutation when the operator is INCR/DECR (right is then unused)"""
    left: 'Expr'
    operator: Operator
    right: 'Expr'

    def __str__(self) -> str:
        return render_expr(self)


Expr = Union[Literal, Reference, Unary, Binary]


# ============================================================================
# DECLARATIONS
# ============================================================================

@dataclass(frozen=True)
class Param:
    name: str
    type_name: str

    def __str__(self) -> str:
        return f"{self.name}: {self.type_name}"


@dataclass(frozen=True)
class Var:
    """A let binding"""
    name: str
    initializer: Expr

    def __str__(self) -> str:
        return render_var(self)


@dataclass(frozen=True)
class Function:
    """One declared function; parameters are declared but never bound"""
    name: str
    parameters: List[Param] = field(default_factory=list)
    declarations: List[Var] = field(default_factory=list)
    statements: List[Expr] = field(default_factory=list)
    status: int = 0

    @property
    def is_entry_point(self) -> bool:
        return self.name == ENTRY_POINT

    def __str__(self) -> str:
        return render_function(self)


# ============================================================================
# CANONICAL RENDERING
# ============================================================================

def render_operator(op: Operator) -> str:
    return op.symbol


def render_expr(expr: Expr) -> str:
    """Render an expression; reserved operators raise instead of rendering"""
    if isinstance(expr, Literal):
        return str(expr.value)
    elif isinstance(expr, Reference):
        return expr.name
    elif isinstance(expr, Unary):
        if expr.operator is Operator.ADD:
            return render_expr(expr.operand)
        elif expr.operator is Operator.SUB:
            return f"-{render_expr(expr.operand)}"
        raise MintUnsupportedOperatorError(expr.operator, "unary")
    elif isinstance(expr, Binary):
        if expr.operator is Operator.INCR:
            return render_expr(expr.left)
        elif expr.operator is Operator.DECR:
            return f"{render_expr(expr.left)}--"
        elif expr.operator is Operator.COMP:
            return f"!{render_expr(expr.left)}"
        return f"{render_expr(expr.left)} {render_operator(expr.operator)} {render_expr(expr.right)}"
    raise TypeError(f"Not a Mint expression: {expr!r}")


def render_var(var: Var) -> str:
    return f"let {var.name} = {render_expr(var.initializer)}"


def render_function(function: Function) -> str:
    params = ", ".join(str(p) for p in function.parameters)
    body = [f"{render_var(v)};" for v in function.declarations]
    body += [f"{render_expr(e)};" for e in function.statements]
    if not body:
        return f"fn {function.name}({params}) {{}}"
    return f"fn {function.name}({params}) {{ {' '.join(body)} }}"


def render_program(functions: List[Function]) -> str:
    return " ".join(render_function(f) for f in functions)


def pretty_print_ast(node: Union[Function, Var, Expr], indent: int = 0) -> str:
    """Indented tree dump of a node for debugging"""
    pad = "  " * indent
    if isinstance(node, Function):
        params = ", ".join(str(p) for p in node.parameters)
        result = f"{pad}Function {node.name}({params}) -> {node.status}\n"
        for var in node.declarations:
            result += pretty_print_ast(var, indent + 1)
        for stmt in node.statements:
            result += pretty_print_ast(stmt, indent + 1)
        return result
    elif isinstance(node, Var):
        return f"{pad}Var {node.name}\n" + pretty_print_ast(node.initializer, indent + 1)
    elif isinstance(node, Unary):
        return f"{pad}Unary({node.operator.name})\n" + pretty_print_ast(node.operand, indent + 1)
    elif isinstance(node, Binary):
        result = f"{pad}Binary({node.operator.name})\n"
        result += pretty_print_ast(node.left, indent + 1)
        if node.operator not in MUTATION_OPERATORS:
            result += pretty_print_ast(node.right, indent + 1)
        return result
    elif isinstance(node, Literal):
        return f"{pad}Literal({node.value})\n"
    return f"{pad}Reference({node.name})\n"
