"""
Mint Programming Language Parser
Turns source text into an ordered list of functions with the entry function first
"""

from typing import List
from functools import reduce

from pyparsing import (
    Keyword, Regex, Suppress, Group, ZeroOrMore, Optional as PyParsingOptional,
    Literal as PyParsingLiteral, DelimitedList, StringEnd, ParserElement,
    ParseBaseException, ParseResults, dbl_slash_comment, one_of
)

from syntax_tree import (
    ENTRY_POINT, Operator, Literal, Reference, Unary, Binary, Param, Var, Function,
    Expr, render_program
)
from error_handling import (
    MintParseError, MintMissingEntryPointError, MintErrorHandler
)

# Enable packrat parsing for performance
ParserElement.enable_packrat()


# ============================================================================
# PARSE ACTIONS
# ============================================================================

def make_unary(tokens: ParseResults) -> Expr:
    """Optional prefix sign followed by an operand"""
    items = list(tokens)
    if len(items) == 1:
        return items[0]
    return Unary(items[1], Operator.from_symbol(items[0]))


def make_crement(tokens: ParseResults) -> Binary:
    """x++ / x-- keep the binary shape; the right side is the unused step"""
    return Binary(tokens[0], Operator.from_symbol(tokens[1]), Literal(1))


def fold_binary(tokens: ParseResults) -> Expr:
    """operand (op operand)* -> left associative Binary chain"""
    items = list(tokens)
    pairs = zip(items[1::2], items[2::2])
    return reduce(
        lambda left, pair: Binary(left, Operator.from_symbol(pair[0]), pair[1]),
        pairs,
        items[0]
    )


def make_function(tokens: ParseResults) -> Function:
    """Split a function body into declarations and statements, keeping source order"""
    name, params, body = tokens[0], tokens[1], tokens[2]
    return Function(
        name=name,
        parameters=list(params),
        declarations=[item for item in body if isinstance(item, Var)],
        statements=[item for item in body if not isinstance(item, Var)]
    )


def canonicalize(functions: List[Function]) -> List[Function]:
    """Move the entry function to index 0, other functions keep their relative order"""
    entry = [f for f in functions if f.is_entry_point]
    rest = [f for f in functions if not f.is_entry_point]
    return entry + rest


# ============================================================================
# GRAMMAR
# ============================================================================

class MintGrammar:
    """Mint grammar definition using pyparsing"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._setup_grammar()

    def _setup_grammar(self):
        """Setup the Mint grammar"""

        # Punctuation
        LPAREN, RPAREN, LBRACE, RBRACE = map(Suppress, "(){}")
        SEMI, COLON, EQUALS = map(Suppress, ";:=")

        # Keywords
        fn_kw = Keyword("fn")
        let_kw = Keyword("let")
        reserved = fn_kw | let_kw

        # Identifiers and literals
        identifier = (~reserved + Regex(r'[A-Za-z_][A-Za-z0-9_]*')).set_name("identifier")
        integer = Regex(r'\d+').set_name("integer").set_parse_action(lambda t: Literal(int(t[0])))
        reference = identifier.copy().set_parse_action(lambda t: Reference(t[0]))

        # Operators - "+" and "-" must not eat the first half of "++" / "--"
        crement_op = (PyParsingLiteral("++") | PyParsingLiteral("--")).set_name("'++' or '--'")
        sign_op = Regex(r'[+\-](?![+\-])').set_name("sign")
        add_op = Regex(r'[+\-](?![+\-])').set_name("'+' or '-'")
        mul_op = one_of("* /").set_name("'*' or '/'")

        # Expressions, standard precedence: * / over + -, all left associative
        crement = (reference + crement_op).set_parse_action(make_crement)
        operand = crement | integer | reference
        unary_expr = (PyParsingOptional(sign_op) + operand).set_parse_action(make_unary)
        term = (unary_expr + ZeroOrMore(mul_op + unary_expr)).set_parse_action(fold_binary)
        expression = (term + ZeroOrMore(add_op + term)).set_parse_action(fold_binary)
        expression.set_name("expression")

        # Body items
        var_decl = (
            Suppress(let_kw) - identifier - EQUALS - expression - SEMI
        ).set_parse_action(lambda t: Var(t[0], t[1]))
        statement = expression - SEMI
        body = ZeroOrMore(var_decl | statement)

        # Functions
        param = (identifier + COLON + identifier).set_parse_action(lambda t: Param(t[0], t[1]))
        param_list = Group(PyParsingOptional(DelimitedList(param, delim=",")))
        function_def = (
            Suppress(fn_kw) - identifier - LPAREN - param_list - RPAREN
            - LBRACE - Group(body) - RBRACE
        ).set_parse_action(make_function)

        program = ZeroOrMore(function_def) + StringEnd()
        program.ignore(dbl_slash_comment)

        entry_header = fn_kw + Keyword(ENTRY_POINT) + PyParsingLiteral("(")
        entry_header.ignore(dbl_slash_comment)

        # Store the main parsers
        self.program = program
        self.function_def = function_def
        self.var_decl = var_decl
        self.statement = statement
        self.expression = expression
        self.param = param
        self.identifier = identifier
        self.entry_header = entry_header

    def find_entry_headers(self, text: str) -> List[int]:
        """Source locations of every 'fn main(' header outside a line comment"""
        comments = [(start, end) for _, start, end in dbl_slash_comment.scan_string(text)]
        return [
            start for _, start, _ in self.entry_header.scan_string(text)
            if not any(c_start <= start < c_end for c_start, c_end in comments)
        ]

    def parse_program(self, text: str, filename: str = "<input>") -> List[Function]:
        """Parse a complete Mint program, main first"""
        error_handler = MintErrorHandler(text, filename)

        entry_locations = self.find_entry_headers(text)
        if not entry_locations:
            raise MintMissingEntryPointError()

        try:
            result = self.program.parse_string(text, parse_all=True)
        except ParseBaseException as e:
            raise error_handler.enhance_parse_exception(e) from e

        functions: List[Function] = list(result)
        entries = [f for f in functions if f.is_entry_point]
        if len(entries) > 1:
            location = entry_locations[1]
            raise error_handler.error_at(f"Duplicate entry function '{ENTRY_POINT}'", location)

        functions = canonicalize(functions)
        if self.debug:
            print(f"Parsed {len(functions)} functions from {filename}:")
            print(f"  {render_program(functions)}")
        return functions

    def parse_expression(self, text: str, filename: str = "<input>") -> Expr:
        """Parse a single Mint expression"""
        try:
            result = self.expression.parse_string(text, parse_all=True)
        except ParseBaseException as e:
            raise MintErrorHandler(text, filename).enhance_parse_exception(e) from e
        return result[0]


class MintParser:
    """Main Mint parser facade"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.grammar = MintGrammar(debug)

    def parse_file(self, filepath: str) -> List[Function]:
        """Parse a Mint source file"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise MintParseError(f"Cannot decode file {filepath}: {e}") from e
        return self.parse_string(content, filepath)

    def parse_string(self, text: str, filename: str = "<input>") -> List[Function]:
        """Parse Mint source code from string"""
        if self.debug:
            print(f"Parsing source:\n  {text}")
        return self.grammar.parse_program(text, filename)

    def parse_expression(self, text: str, filename: str = "<input>") -> Expr:
        return self.grammar.parse_expression(text, filename)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> MintParser:
    """Create a Mint parser"""
    return MintParser(debug=debug)


def create_debug_parser() -> MintParser:
    """Create a Mint parser with debug enabled"""
    return MintParser(debug=True)


def parse(text: str, debug: bool = False) -> List[Function]:
    return create_parser(debug).parse_string(text)

