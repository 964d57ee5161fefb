"""
Error taxonomy for the selector engine.

There is exactly one error kind. Lexer failures, grammar violations and
requirement validation failures all surface as SelectorSyntaxError, raised
synchronously from parse() or the Requirement constructor.
"""


class SelectorSyntaxError(ValueError):
    """Raised when selector text or a requirement is invalid."""
    pass
