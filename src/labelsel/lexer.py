"""
Lexer for label selector text.

Turns raw selector text into (Token, literal) pairs, one at a time.

Token rules:
    - Whitespace before a token is skipped
    - Runs of special symbols (= ! ( ) , > <) are matched greedily
      against STRING_TO_TOKEN, longest prefix wins ("==" is one token)
    - Any other run of characters is an identifier, unless it is
      exactly a keyword ("in", "notin")
    - End of input yields END_OF_STRING with an empty literal

The token carries no payload. The literal text travels beside it.
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class Token(Enum):
    """Token kinds produced by the lexer."""

    ERROR = "error"
    END_OF_STRING = "end of string"
    CLOSED_PAR = ")"
    COMMA = ","
    DOES_NOT_EXIST = "!"
    DOUBLE_EQUALS = "=="
    EQUALS = "="
    GREATER_THAN = ">"
    IDENTIFIER = "identifier"
    IN = "in"
    LESS_THAN = "<"
    NOT_EQUALS = "!="
    NOT_IN = "notin"
    OPEN_PAR = "("


STRING_TO_TOKEN: Dict[str, Token] = {
    ")": Token.CLOSED_PAR,
    ",": Token.COMMA,
    "!": Token.DOES_NOT_EXIST,
    "==": Token.DOUBLE_EQUALS,
    "=": Token.EQUALS,
    ">": Token.GREATER_THAN,
    "in": Token.IN,
    "<": Token.LESS_THAN,
    "!=": Token.NOT_EQUALS,
    "notin": Token.NOT_IN,
    "(": Token.OPEN_PAR,
}

SPECIAL_SYMBOLS = frozenset("=!(),><")


def is_special_symbol(ch: str) -> bool:
    return ch in SPECIAL_SYMBOLS


class Lexer:
    """
    Produces tokens on demand from a selector string.

    Supports a single character of pushback (unread) so the symbol scanner
    can back off when a longer run stops matching a known token.

    Lexing past END_OF_STRING is not supported; callers stop once they
    see it.
    """

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def read(self) -> Optional[str]:
        """Return the next character, or None at end of input."""
        if self._pos >= len(self._text):
            return None
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def unread(self) -> None:
        self._pos -= 1

    def _skip_whitespace(self, ch: Optional[str]) -> Optional[str]:
        while ch is not None and ch.isspace():
            ch = self.read()
        return ch

    def _scan_id_or_keyword(self) -> Tuple[Token, str]:
        buffer = []
        while True:
            ch = self.read()
            if ch is None:
                break
            if ch.isspace() or is_special_symbol(ch):
                self.unread()
                break
            buffer.append(ch)

        literal = "".join(buffer)
        if literal in STRING_TO_TOKEN:
            return STRING_TO_TOKEN[literal], literal
        return Token.IDENTIFIER, literal

    def _scan_special_symbol(self) -> Tuple[Token, str]:
        last_token = Token.ERROR
        last_literal = ""
        buffer = ""
        while True:
            ch = self.read()
            if ch is None:
                break
            if not is_special_symbol(ch):
                self.unread()
                break
            buffer += ch
            if buffer in STRING_TO_TOKEN:
                last_token = STRING_TO_TOKEN[buffer]
                last_literal = buffer
                continue
            if last_token is not Token.ERROR:
                # one character too far: hand it back and stop
                self.unread()
                break

        if last_token is Token.ERROR:
            return Token.ERROR, f"error expected: keyword found '{buffer}'"
        return last_token, last_literal

    def lex(self) -> Tuple[Token, str]:
        """Return the next (Token, literal) pair and advance."""
        ch = self._skip_whitespace(self.read())
        if ch is None:
            return Token.END_OF_STRING, ""
        self.unread()
        if is_special_symbol(ch):
            return self._scan_special_symbol()
        return self._scan_id_or_keyword()
