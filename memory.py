"""
Mint symbol table
Maps variable names to their currently bound expression (not to values)
"""

from typing import Dict, List
from error_handling import MintLookupError
from syntax_tree import Expr


class Memory:
  """Flat, mutable name -> expression table shared by every function in a run"""

  def __init__(self):
    self.vars: Dict[str, Expr] = {}

  def bind(self, name: str, expr: Expr) -> None:
    """Insert or overwrite the binding for name"""
    self.vars[name] = expr

  def resolve(self, name: str) -> Expr:
    """Currently bound expression for name"""
    try:
      return self.vars[name]
    except KeyError:
      raise MintLookupError(name) from None

  def names(self) -> List[str]:
    return list(self.vars)

  def snapshot(self) -> Dict[str, Expr]:
    return dict(self.vars)

  def copy(self) -> 'Memory':
    other = Memory()
    other.vars = dict(self.vars)
    return other

  def __contains__(self, name: str) -> bool:
    return name in self.vars

  def __len__(self) -> int:
    return len(self.vars)

  def __repr__(self) -> str:
    return f"Memory({self.vars!r})"
