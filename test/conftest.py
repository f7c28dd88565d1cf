"""
Test configuration for Mint tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import MintParser
from interpreter import Interpreter


@pytest.fixture
def parser():
  """Provide a fresh parser instance for each test"""
  return MintParser()


@pytest.fixture
def interpreter():
  """Provide a fresh interpreter instance for each test"""
  return Interpreter()


@pytest.fixture
def examples_dir():
  """Directory holding the example Mint programs"""
  return project_root / "examples"
