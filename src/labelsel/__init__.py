"""
Label Selector Engine

Parses label selector text ("env=prod,tier in (web,api),!debug") into a
canonical, immutable Selector and evaluates it against string label maps.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Where label maps come from (cluster APIs, cloud tags, ...)
    - Network access, retries or timeouts
    - Service discovery decisions

It parses and matches. Nothing else.
"""

import logging

from labelsel.errors import SelectorSyntaxError
from labelsel.lexer import Lexer, Token
from labelsel.parser import Parser, ParserContext
from labelsel.requirements import Operator, Requirement
from labelsel.selector import Everything, Nothing, Selector, SelectorKind, parse

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Everything",
    "Lexer",
    "Nothing",
    "Operator",
    "Parser",
    "ParserContext",
    "Requirement",
    "Selector",
    "SelectorKind",
    "SelectorSyntaxError",
    "Token",
    "parse",
]
