"""
Error handling for the Mint interpreter
Typed exception hierarchy plus pyparsing error enhancement with detailed messages
"""

from typing import List, Optional, Dict
from pyparsing import ParseBaseException
import re


# ============================================================================
# EXCEPTION HIERARCHY
# ============================================================================

class MintError(Exception):
    """Base class for every error raised while parsing or running Mint code"""
    kind = "Error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MintParseError(MintError):
    """Source text could not be turned into a program"""
    kind = "Parse"


class MintMissingEntryPointError(MintParseError):
    """No function named main"""
    kind = "MissingEntryPoint"

    def __init__(self, message: str = "Program has no entry function 'main'"):
        super().__init__(message)


class MintLookupError(MintError):
    """Reference to a variable that was never bound"""
    kind = "NotFound"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Couldn't find referenced variable '{name}'")


class MintRuntimeError(MintError):
    """Evaluation failed"""
    kind = "Runtime"


class MintDivisionByZeroError(MintRuntimeError):
    kind = "DivisionByZero"

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


class MintUnsupportedOperatorError(MintRuntimeError):
    """A reserved operator reached the renderer or the evaluator"""
    kind = "UnsupportedOperator"

    def __init__(self, operator, position: str = "expression"):
        self.operator = operator
        symbol = getattr(operator, 'symbol', operator)
        super().__init__(f"Operator '{symbol}' is not supported in {position} position")


class MintInvalidTargetError(MintRuntimeError):
    """Increment or decrement applied to something that is not a variable"""
    kind = "InvalidTarget"


class MintCyclicReferenceError(MintRuntimeError):
    """A variable's expression depends on the variable itself"""
    kind = "CyclicReference"

    def __init__(self, name: str, chain: Optional[List[str]] = None):
        self.name = name
        self.chain = chain or [name]
        path = " -> ".join(self.chain + [name])
        super().__init__(f"Cyclic reference while resolving '{name}': {path}")


class MintRecursionLimitError(MintRuntimeError):
    """Expression nesting deeper than the host interpreter's stack allows"""
    kind = "RecursionLimit"

    def __init__(self, message: str = "Expression nesting exceeds the interpreter's recursion limit"):
        super().__init__(message)


class MintInvalidError(MintError):
    """Single failure channel of the interpreter driver, keeps the category of the cause"""

    def __init__(self, cause: MintError):
        self.cause = cause
        super().__init__(f"{cause.kind}: {cause.message}")

    @property
    def kind(self) -> str:
        return self.cause.kind


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_parse_error(
    message: str,
    location: int,
    line: int,
    column: int,
    expected: Optional[List[str]] = None,
    got: Optional[str] = None,
    context: Optional[str] = None,
    suggestions: Optional[List[str]] = None
) -> Dict:
    """Create an immutable parse error structure"""
    return {
        'message': message,
        'location': location,
        'line': line,
        'column': column,
        'expected': expected or [],
        'got': got,
        'context': context,
        'suggestions': suggestions or []
    }


def format_parse_error(error: Dict) -> str:
    """Format parse error as string"""
    error_msg = f"Syntax error at line {error['line']}, column {error['column']}:\n"
    error_msg += f"  {error['message']}\n"

    if error['expected']:
        error_msg += f"  Expected: {', '.join(error['expected'])}\n"

    if error['got']:
        error_msg += f"  Got: {error['got']}\n"

    if error['context']:
        error_msg += f"  Context:\n{error['context']}\n"

    if error['suggestions']:
        error_msg += "  Suggestions:\n"
        for suggestion in error['suggestions']:
            error_msg += f"    - {suggestion}\n"

    return error_msg


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def get_context_lines(source_text: str, line_num: int, col_num: int, context_lines: int = 2) -> str:
    """Get context lines around the error"""
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        line_prefix = f"{i+1:4d}: "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:  # Error line
            context_parts.append(f"{'':6}{' ' * (col_num - 1)}^ Error here")

    return '\n'.join(context_parts)


def extract_expected(exc: ParseBaseException) -> List[str]:
    """Extract expected tokens from exception"""
    expected = []

    # pyparsing only reports the expectation in the message text
    msg = str(exc)
    if "Expected" in msg:
        expected_match = re.search(r"Expected\s+(.+?)(?:,\s+found|\s+\(at|$)", msg)
        if expected_match:
            expected.append(expected_match.group(1))

    return expected if expected else ["valid syntax"]


def extract_got(source_text: str, line_num: int, col_num: int) -> str:
    """Extract what was actually found at the error location"""
    lines = source_text.split('\n')

    if 0 < line_num <= len(lines):
        error_line = lines[line_num - 1]
        if col_num <= len(error_line):
            start = max(0, col_num - 1)
            end = min(len(error_line), col_num + 10)
            got_text = error_line[start:end].strip()
            if got_text:
                return f"'{got_text}'"
        return "end of line"
    return "end of input"


def generate_suggestions(exc: ParseBaseException, got: str, expected: List[str]) -> List[str]:
    """Generate helpful suggestions based on the error"""
    suggestions = []
    expected_text = str(expected)

    if "';'" in expected_text:
        suggestions.append("Every declaration and statement must end with ';'")

    if "'}'" in expected_text:
        suggestions.append("Check that every function body is closed with '}'")

    if "end of text" in str(exc):
        suggestions.append("Code must live inside a function: fn main() { ... }")

    if "':'" in expected_text:
        suggestions.append("Parameters are declared as name: type, e.g. fn foo(n: int)")

    if re.match(r"'(fn|let)\b", got):
        suggestions.append("'fn' and 'let' are reserved words and cannot name variables")

    if "++" in got or "--" in got:
        suggestions.append("'++' and '--' can only be applied to a variable")

    return suggestions


def enhance_parse_exception_dict(exc: ParseBaseException, source_text: str) -> Dict:
    """Convert pyparsing exception to an enhanced Mint error dict"""
    line_num = exc.lineno
    col_num = exc.column

    context = get_context_lines(source_text, line_num, col_num)
    expected = extract_expected(exc)
    got = extract_got(source_text, line_num, col_num)
    suggestions = generate_suggestions(exc, got, expected)

    return make_parse_error(
        message=exc.msg,
        location=exc.loc,
        line=line_num,
        column=col_num,
        expected=expected,
        got=got,
        context=context,
        suggestions=suggestions
    )


# ============================================================================
# SYNTAX ERROR
# ============================================================================

class MintSyntaxError(MintParseError):
    """Malformed token sequence, carries the position and a readable diagnosis"""
    kind = "Syntax"

    def __init__(self, message: str, location: int = 0, line: int = 0, column: int = 0,
                 expected: Optional[List[str]] = None, got: Optional[str] = None,
                 context: Optional[str] = None, suggestions: Optional[List[str]] = None):
        self.location = location
        self.line = line
        self.column = column
        self.expected = expected or []
        self.got = got
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(message)

    def __str__(self) -> str:
        error_dict = make_parse_error(
            self.message, self.location, self.line, self.column,
            self.expected, self.got, self.context, self.suggestions
        )
        return format_parse_error(error_dict)


class MintErrorHandler:
    """Builds MintSyntaxError instances for one source text"""
    def __init__(self, source_text: str, filename: str = "<input>"):
        self.source_text = source_text
        self.filename = filename

    def enhance_parse_exception(self, exc: ParseBaseException) -> MintSyntaxError:
        """Convert pyparsing exception to an enhanced Mint error"""
        error_dict = enhance_parse_exception_dict(exc, self.source_text)
        return MintSyntaxError(
            message=error_dict['message'],
            location=error_dict['location'],
            line=error_dict['line'],
            column=error_dict['column'],
            expected=error_dict['expected'],
            got=error_dict['got'],
            context=error_dict['context'],
            suggestions=error_dict['suggestions']
        )

    def error_at(self, message: str, location: int) -> MintSyntaxError:
        """Syntax error for a problem found after a successful grammar match"""
        line_num = self.source_text.count('\n', 0, location) + 1
        col_num = location - (self.source_text.rfind('\n', 0, location) + 1) + 1
        return MintSyntaxError(
            message=message,
            location=location,
            line=line_num,
            column=col_num,
            got=extract_got(self.source_text, line_num, col_num),
            context=get_context_lines(self.source_text, line_num, col_num)
        )
