"""
Recursive-descent parser for label selector text (Layer 1: Text → Requirements).

Grammar:
    selector    := (requirement (',' requirement)*)? EOF
    requirement := '!' IDENT
                 | IDENT
                 | IDENT ('==' | '=') IDENT
                 | IDENT '!=' IDENT
                 | IDENT '>' IDENT
                 | IDENT '<' IDENT
                 | IDENT 'in' '(' identlist? ')'
                 | IDENT 'notin' '(' identlist? ')'
    identlist   := IDENT (',' IDENT)*

The whole input is lexed into a buffer first, then consumed through
lookahead()/consume(). Both take a ParserContext: in VALUES context the
keyword tokens "in"/"notin" read as plain identifiers, which is what lets
"notin=in" be a valid selector.
"""

from enum import Enum
from typing import List, NamedTuple, Optional, Set, Tuple

from labelsel.errors import SelectorSyntaxError
from labelsel.lexer import Lexer, Token
from labelsel.requirements import BINARY_OPERATORS, Operator, Requirement


class ParserContext(Enum):
    KEY_AND_OPERATOR = "key_and_operator"
    VALUES = "values"


class ScannedItem(NamedTuple):
    """A token together with the literal text it was lexed from."""
    token: Token
    literal: str


_OPERATOR_TOKENS = {
    Token.IN: Operator.IN,
    Token.EQUALS: Operator.EQUALS,
    Token.DOUBLE_EQUALS: Operator.DOUBLE_EQUALS,
    Token.GREATER_THAN: Operator.GREATER_THAN,
    Token.LESS_THAN: Operator.LESS_THAN,
    Token.NOT_IN: Operator.NOT_IN,
    Token.NOT_EQUALS: Operator.NOT_EQUALS,
}


class Parser:
    """
    Parses one selector string into a list of Requirements.

    The returned list keeps input order. Canonical ordering is the
    Selector's job, not the parser's.

    Raises:
        SelectorSyntaxError: On any lexer, grammar or validation failure
    """

    def __init__(self, text: str):
        self._text = text
        self._lexer = Lexer(text)
        self._scanned: List[ScannedItem] = []
        self._position = 0

    def scan(self) -> None:
        """Lex the entire input into a fresh scanned-item buffer."""
        self._lexer = Lexer(self._text)
        self._scanned = []
        self._position = 0
        while True:
            token, literal = self._lexer.lex()
            self._scanned.append(ScannedItem(token, literal))
            if token is Token.END_OF_STRING:
                break

    def lookahead(self, context: ParserContext) -> Tuple[Token, str]:
        token, literal = self._scanned[self._position]
        if context is ParserContext.VALUES and token in (Token.IN, Token.NOT_IN):
            token = Token.IDENTIFIER
        return token, literal

    def consume(self, context: ParserContext) -> Tuple[Token, str]:
        token, literal = self.lookahead(context)
        self._position += 1
        return token, literal

    def parse(self) -> List[Requirement]:
        """Scan the input and run the recursive descent over it."""
        self.scan()
        requirements: List[Requirement] = []
        while True:
            token, literal = self.lookahead(ParserContext.VALUES)
            if token is Token.END_OF_STRING:
                return requirements
            if token not in (Token.IDENTIFIER, Token.DOES_NOT_EXIST):
                raise SelectorSyntaxError(
                    f"found '{literal}', expected: !, identifier, or 'end of string'"
                )

            try:
                requirements.append(self.parse_requirement())
            except SelectorSyntaxError as e:
                raise SelectorSyntaxError(f"unable to parse requirement: {e}") from e

            token, literal = self.consume(ParserContext.VALUES)
            if token is Token.END_OF_STRING:
                return requirements
            if token is not Token.COMMA:
                raise SelectorSyntaxError(
                    f"found '{literal}', expected: ',' or 'end of string'"
                )
            next_token, next_literal = self.lookahead(ParserContext.VALUES)
            if next_token not in (Token.IDENTIFIER, Token.DOES_NOT_EXIST):
                raise SelectorSyntaxError(
                    f"found '{next_literal}', expected: identifier after ','"
                )

    def parse_requirement(self) -> Requirement:
        key, operator = self.parse_key_and_infer_operator()
        if operator is not None:
            return Requirement(key, operator)

        operator = self.parse_operator()
        if operator in (Operator.IN, Operator.NOT_IN):
            values = self.parse_values()
        else:
            values = self.parse_exact_value()
        return Requirement(key, operator, values)

    def parse_key_and_infer_operator(self) -> Tuple[str, Optional[Operator]]:
        """
        Read the key, plus the operator when it is implied.

        Returns:
            (key, DOES_NOT_EXIST) for "!key", (key, EXISTS) for a bare key
            followed by ',' or end of string, otherwise (key, None)
        """
        operator = None
        token, literal = self.consume(ParserContext.VALUES)
        if token is Token.DOES_NOT_EXIST:
            operator = Operator.DOES_NOT_EXIST
            token, literal = self.consume(ParserContext.VALUES)

        if token is not Token.IDENTIFIER:
            raise SelectorSyntaxError(f"found '{literal}', expected: identifier")

        next_token, _ = self.lookahead(ParserContext.VALUES)
        if next_token in (Token.END_OF_STRING, Token.COMMA) and operator is None:
            operator = Operator.EXISTS
        return literal, operator

    def parse_operator(self) -> Operator:
        token, literal = self.consume(ParserContext.KEY_AND_OPERATOR)
        operator = _OPERATOR_TOKENS.get(token)
        if operator is None:
            expected = ", ".join(sorted(op.value for op in BINARY_OPERATORS))
            raise SelectorSyntaxError(f"found '{literal}', expected: {expected}")
        return operator

    def parse_values(self) -> Set[str]:
        """Parse a parenthesized value list for in/notin."""
        token, literal = self.consume(ParserContext.VALUES)
        if token is not Token.OPEN_PAR:
            raise SelectorSyntaxError(f"found '{literal}', expected: '('")

        token, literal = self.lookahead(ParserContext.VALUES)
        if token in (Token.IDENTIFIER, Token.COMMA):
            values = self.parse_identifiers_list()
            token, literal = self.consume(ParserContext.VALUES)
            if token is not Token.CLOSED_PAR:
                raise SelectorSyntaxError(f"found '{literal}', expected: ')'")
            return values
        if token is Token.CLOSED_PAR:
            self.consume(ParserContext.VALUES)
            return {""}
        raise SelectorSyntaxError(f"found '{literal}', expected: ',', ')' or identifier")

    def parse_identifiers_list(self) -> Set[str]:
        """
        Parse comma separated identifiers up to (not including) ')'.

        Empty elements, from a leading, doubled or trailing comma, add the
        empty string to the set.
        """
        values: Set[str] = set()
        while True:
            token, literal = self.consume(ParserContext.VALUES)
            if token is Token.IDENTIFIER:
                values.add(literal)
                next_token, next_literal = self.lookahead(ParserContext.VALUES)
                if next_token is Token.COMMA:
                    continue
                if next_token is Token.CLOSED_PAR:
                    return values
                raise SelectorSyntaxError(f"found '{next_literal}', expected: ',' or ')'")

            if token is Token.COMMA:
                if not values:
                    values.add("")
                next_token, _ = self.lookahead(ParserContext.VALUES)
                if next_token is Token.CLOSED_PAR:
                    values.add("")
                    return values
                if next_token is Token.COMMA:
                    values.add("")
                    self.consume(ParserContext.VALUES)
                continue

            raise SelectorSyntaxError(f"found '{literal}', expected: ',' or identifier")

    def parse_exact_value(self) -> Set[str]:
        """Parse the single value of =, ==, !=, > or <. A missing value is ''."""
        token, _ = self.lookahead(ParserContext.VALUES)
        if token in (Token.END_OF_STRING, Token.COMMA):
            return {""}

        token, literal = self.consume(ParserContext.VALUES)
        if token is Token.IDENTIFIER:
            return {literal}
        raise SelectorSyntaxError(f"found '{literal}', expected: identifier")
