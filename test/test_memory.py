"""
Tests for the Mint symbol table
"""

import pytest
from memory import Memory
from error_handling import MintLookupError
from syntax_tree import Literal, Reference, Binary, Operator


class TestMemory:
  """Test binding and lookup"""

  @pytest.fixture
  def memory(self):
    return Memory()

  def test_bind_and_resolve(self, memory):
    memory.bind("s", Literal(2))
    assert memory.resolve("s") == Literal(2)

  def test_stores_expressions_not_values(self, memory):
    expr = Binary(Literal(1), Operator.ADD, Literal(2))
    memory.bind("s", expr)
    assert memory.resolve("s") is expr

  def test_rebind_overwrites(self, memory):
    memory.bind("s", Literal(2))
    memory.bind("s", Reference("t"))
    assert memory.resolve("s") == Reference("t")
    assert len(memory) == 1

  def test_unbound_name(self, memory):
    with pytest.raises(MintLookupError) as exc_info:
      memory.resolve("missing")
    assert exc_info.value.name == "missing"
    assert exc_info.value.kind == "NotFound"

  def test_contains_and_names(self, memory):
    memory.bind("b", Literal(1))
    memory.bind("a", Literal(2))
    memory.bind("b", Literal(3))
    assert "a" in memory
    assert "c" not in memory
    assert memory.names() == ["b", "a"]

  def test_snapshot_is_detached(self, memory):
    memory.bind("s", Literal(1))
    snapshot = memory.snapshot()
    memory.bind("s", Literal(2))
    assert snapshot == {"s": Literal(1)}

  def test_copy_is_independent(self, memory):
    memory.bind("s", Literal(1))
    other = memory.copy()
    other.bind("s", Literal(5))
    other.bind("t", Literal(6))
    assert memory.resolve("s") == Literal(1)
    assert "t" not in memory
