"""
Mint Programming Language - Main Entry Point
A minimal imperative language with integer bindings and a tree-walking interpreter
"""

import sys
import argparse
from pathlib import Path
from typing import Optional, List

from error_handling import MintError, MintInvalidError, MintSyntaxError, MintRecursionLimitError
from interpreter import create_interpreter, Evaluator
from memory import Memory
from syntax_tree import render_function, render_expr, pretty_print_ast


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      description='Mint Programming Language - tree-walking interpreter',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.mint                 # Run a Mint script
  %(prog)s -e "fn main(){let s = 2;}"  # Run inline source
  %(prog)s --parse script.mint         # Parse and show the canonical program
  %(prog)s --memory script.mint        # Run and show the final bindings
  %(prog)s --debug script.mint         # Run with debug output
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='Mint script file to execute'
  )

  parser.add_argument(
      '-e', '--eval',
      metavar='SOURCE',
      help='Run SOURCE instead of a script file'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse only and show the canonical rendering of every function'
  )

  parser.add_argument(
      '--tree',
      action='store_true',
      help='With --parse, show an indented syntax tree instead'
  )

  parser.add_argument(
      '--memory',
      action='store_true',
      help='Show the symbol table after a successful run'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version='Mint v0.1.0'
  )

  return parser


def read_source(script_path: str) -> str:
  """Read a script file, exiting with a hint when it cannot be read"""
  try:
    with open(script_path, 'r', encoding='utf-8') as f:
      return f.read()
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found")
    print(f"  Hint: Check the file path and make sure the file exists")
    sys.exit(1)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'")
    print(f"  Hint: Make sure you have read permissions for this file")
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}")
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding")
    sys.exit(1)


def report_error(error: MintInvalidError, origin: str) -> None:
  """Print a failed run in the shape of its category"""
  cause = error.cause
  if isinstance(cause, MintSyntaxError):
    print(f"Syntax error in {origin}:")
    print(str(cause))
  else:
    print(f"{error.kind} error in {origin}: {cause.message}")


def show_memory(memory: Memory) -> None:
  """Print every binding with its expression and current value"""
  print(f"\nFinal memory ({len(memory)} bindings):")
  for name in memory.names():
    expr = memory.resolve(name)
    try:
      # evaluated on a copy, x++ inside a binding must not mutate the real table
      value = str(Evaluator(memory.copy()).evaluate(expr))
    except MintError as e:
      value = f"<{e.kind}>"
    except RecursionError:
      value = f"<{MintRecursionLimitError.kind}>"
    print(f"  {name} = {render_expr(expr)}  => {value}")


def parse_source(source: str, origin: str, tree: bool = False, debug: bool = False) -> None:
  """Parse source and show the canonical program"""
  interpreter = create_interpreter(debug)
  try:
    functions = interpreter.parse(source)
  except MintInvalidError as e:
    report_error(e, origin)
    sys.exit(1)

  print(f"Parsed {len(functions)} functions from {origin}:")
  print("=" * 50)
  for function in functions:
    if tree:
      print(pretty_print_ast(function), end='')
    else:
      print(render_function(function))


def run_source(source: str, origin: str, show_bindings: bool = False, debug: bool = False) -> int:
  """Run source with full interpretation"""
  interpreter = create_interpreter(debug)
  try:
    status = interpreter.run(source)
  except MintInvalidError as e:
    report_error(e, origin)
    if debug and e.cause.__traceback__ is not None:
      import traceback
      traceback.print_exception(type(e.cause), e.cause, e.cause.__traceback__)
    sys.exit(1)

  print(f"Program executed successfully! (status {status})")
  if show_bindings or debug:
    show_memory(interpreter.memory)
  return status


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for Mint"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.eval is not None:
    source, origin = args.eval, "<eval>"
  elif args.script:
    if not Path(args.script).exists():
      print(f"Error: Script file '{args.script}' does not exist")
      sys.exit(1)
    source, origin = read_source(args.script), f"'{args.script}'"
  else:
    arg_parser.print_help()
    sys.exit(2)

  if args.parse:
    parse_source(source, origin, tree=args.tree, debug=args.debug)
  else:
    sys.exit(run_source(source, origin, show_bindings=args.memory, debug=args.debug))


if __name__ == "__main__":
  main()
