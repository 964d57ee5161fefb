"""
Tests for the selector lexer.

These tests verify:
    - Every fixed token lexes from its literal
    - Multi-character symbols win over their prefixes
    - Keywords vs. identifiers
    - Whitespace handling and token sequences
"""

import pytest
from labelsel.lexer import Lexer, Token


def lex_all(text):
    """Lex until END_OF_STRING, returning the tokens before it."""
    lexer = Lexer(text)
    tokens = []
    while True:
        token, _ = lexer.lex()
        if token is Token.END_OF_STRING:
            return tokens
        tokens.append(token)


class TestSingleTokens:
    """One token per input."""

    @pytest.mark.parametrize("text, expected", [
        ("", Token.END_OF_STRING),
        (",", Token.COMMA),
        ("notin", Token.NOT_IN),
        ("in", Token.IN),
        ("=", Token.EQUALS),
        ("==", Token.DOUBLE_EQUALS),
        (">", Token.GREATER_THAN),
        ("<", Token.LESS_THAN),
        ("!", Token.DOES_NOT_EXIST),
        ("!=", Token.NOT_EQUALS),
        ("(", Token.OPEN_PAR),
        (")", Token.CLOSED_PAR),
        ("~", Token.IDENTIFIER),
        ("||", Token.IDENTIFIER),
    ])
    def test_lex_token(self, text, expected):
        """The literal should come back unchanged alongside its token."""
        token, literal = Lexer(text).lex()
        assert token is expected
        assert literal == text

    def test_double_equals_is_one_token(self):
        """'==' is DOUBLE_EQUALS, not two EQUALS."""
        assert lex_all("==") == [Token.DOUBLE_EQUALS]

    def test_keyword_prefix_is_identifier(self):
        """Only an exact keyword match is reclassified."""
        assert Lexer("inx").lex() == (Token.IDENTIFIER, "inx")
        assert Lexer("notinx").lex() == (Token.IDENTIFIER, "notinx")

    def test_leading_whitespace_skipped(self):
        assert Lexer("   \t key").lex() == (Token.IDENTIFIER, "key")

    def test_whitespace_only_is_end_of_string(self):
        assert Lexer("   ").lex() == (Token.END_OF_STRING, "")


class TestTokenSequences:
    """Whole inputs lexed to completion."""

    @pytest.mark.parametrize("text, expected", [
        ("key in ( value )",
         [Token.IDENTIFIER, Token.IN, Token.OPEN_PAR, Token.IDENTIFIER, Token.CLOSED_PAR]),
        ("key notin ( value )",
         [Token.IDENTIFIER, Token.NOT_IN, Token.OPEN_PAR, Token.IDENTIFIER, Token.CLOSED_PAR]),
        ("key in ( value1, value2 )",
         [Token.IDENTIFIER, Token.IN, Token.OPEN_PAR, Token.IDENTIFIER, Token.COMMA,
          Token.IDENTIFIER, Token.CLOSED_PAR]),
        ("key", [Token.IDENTIFIER]),
        ("!key", [Token.DOES_NOT_EXIST, Token.IDENTIFIER]),
        ("()", [Token.OPEN_PAR, Token.CLOSED_PAR]),
        ("x in (),y",
         [Token.IDENTIFIER, Token.IN, Token.OPEN_PAR, Token.CLOSED_PAR, Token.COMMA,
          Token.IDENTIFIER]),
        ("== != (), = notin",
         [Token.DOUBLE_EQUALS, Token.NOT_EQUALS, Token.OPEN_PAR, Token.CLOSED_PAR,
          Token.COMMA, Token.EQUALS, Token.NOT_IN]),
        ("key>2", [Token.IDENTIFIER, Token.GREATER_THAN, Token.IDENTIFIER]),
        ("key<1", [Token.IDENTIFIER, Token.LESS_THAN, Token.IDENTIFIER]),
    ])
    def test_lex_sequence(self, text, expected):
        assert lex_all(text) == expected

    def test_longest_symbol_then_backtrack(self):
        """'!==' is '!=' followed by '='."""
        lexer = Lexer("!==")
        assert lexer.lex() == (Token.NOT_EQUALS, "!=")
        assert lexer.lex() == (Token.EQUALS, "=")
        assert lexer.lex() == (Token.END_OF_STRING, "")

    def test_adjacent_symbols_split(self):
        """'=(' is not a token, so it lexes as '=' then '('."""
        assert lex_all("=(") == [Token.EQUALS, Token.OPEN_PAR]

    def test_identifier_stops_at_symbol(self):
        lexer = Lexer("a||y=b")
        assert lexer.lex() == (Token.IDENTIFIER, "a||y")
        assert lexer.lex() == (Token.EQUALS, "=")
        assert lexer.lex() == (Token.IDENTIFIER, "b")

    def test_identifier_literals(self):
        lexer = Lexer("example.com/tier in (front-end)")
        assert lexer.lex() == (Token.IDENTIFIER, "example.com/tier")
        assert lexer.lex() == (Token.IN, "in")
        assert lexer.lex() == (Token.OPEN_PAR, "(")
        assert lexer.lex() == (Token.IDENTIFIER, "front-end")
        assert lexer.lex() == (Token.CLOSED_PAR, ")")


class TestReadUnread:
    """Character-level pushback."""

    def test_read_returns_none_at_end(self):
        lexer = Lexer("a")
        assert lexer.read() == "a"
        assert lexer.read() is None

    def test_unread_pushes_back_one_character(self):
        lexer = Lexer("ab")
        assert lexer.read() == "a"
        lexer.unread()
        assert lexer.read() == "a"
        assert lexer.read() == "b"
