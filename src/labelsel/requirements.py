"""
Requirements: the atomic constraints of a label selector.

A Requirement is a (key, operator, values) triple checked against a single
label map. Selectors are conjunctions of Requirements.

ARCHITECTURAL RULE:
    A Requirement is validated when it is built.
    There is no such thing as a half-constructed or invalid Requirement,
    so matching never has to re-check arity.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Mapping, Optional, Union

from labelsel.errors import SelectorSyntaxError

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


class Operator(Enum):
    """
    Selection operators.

    The values are the canonical operator strings. EXISTS, GREATER_THAN and
    LESS_THAN have no direct spelling in selector text ("key", ">" and "<"
    map onto them), so their values are the names used in structured form.
    """

    DOES_NOT_EXIST = "!"
    EQUALS = "="
    DOUBLE_EQUALS = "=="
    IN = "in"
    NOT_EQUALS = "!="
    NOT_IN = "notin"
    EXISTS = "exists"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"


UNARY_OPERATORS = frozenset({Operator.DOES_NOT_EXIST})

BINARY_OPERATORS = frozenset({
    Operator.IN,
    Operator.NOT_IN,
    Operator.EQUALS,
    Operator.DOUBLE_EQUALS,
    Operator.NOT_EQUALS,
    Operator.GREATER_THAN,
    Operator.LESS_THAN,
})

VALID_REQUIREMENT_OPERATORS = UNARY_OPERATORS | BINARY_OPERATORS | {Operator.EXISTS}


def parse_integer(text: str) -> Optional[int]:
    """
    Parse a label value as a signed 64-bit decimal integer.

    Accepts an optional sign followed by ASCII digits, nothing else.

    Returns:
        The integer, or None if the text is not a valid integer
    """
    if not _INTEGER_RE.fullmatch(text):
        return None
    number = int(text)
    if number < _INT64_MIN or number > _INT64_MAX:
        return None
    return number


def _coerce_operator(operator: Union["Operator", str]) -> "Operator":
    if isinstance(operator, Operator):
        return operator
    try:
        return Operator(operator)
    except ValueError:
        valid = ", ".join(sorted(op.value for op in VALID_REQUIREMENT_OPERATORS))
        raise SelectorSyntaxError(
            f"operator '{operator}' not supported. Valid operators are: {valid}"
        ) from None


@dataclass(frozen=True)
class Requirement:
    """
    A single validated constraint over a label map.

    Examples:
        env=prod            -> Requirement("env", Operator.EQUALS, {"prod"})
        tier in (web,api)   -> Requirement("tier", Operator.IN, {"web", "api"})
        !debug              -> Requirement("debug", Operator.DOES_NOT_EXIST, ())

    Properties:
        key: Label key the constraint applies to
        operator: Operator enum (a string value is accepted and converted)
        values: Value set, stored as a frozenset

    Arity rules (enforced at construction):
        in, notin       -> at least one value
        =, ==, !=       -> exactly one value
        exists, !       -> no values
        gt, lt          -> exactly one value, and it must be an integer

    Equality compares key, operator and the value set (unordered).

    Raises:
        SelectorSyntaxError: If the operator is unknown or the values
            violate its arity/format rules
    """

    key: str
    operator: Operator
    values: FrozenSet[str] = frozenset()

    def __post_init__(self):
        operator = _coerce_operator(self.operator)
        if isinstance(self.values, str):
            raise SelectorSyntaxError(
                f"values must be a collection of strings, not the string {self.values!r}"
            )
        values = frozenset(self.values)

        if operator in (Operator.IN, Operator.NOT_IN):
            if not values:
                raise SelectorSyntaxError(
                    "for 'in' and 'notin' operators, values set can't be empty"
                )
        elif operator in (Operator.EQUALS, Operator.DOUBLE_EQUALS, Operator.NOT_EQUALS):
            if len(values) != 1:
                raise SelectorSyntaxError("exact-match compatibility requires one single value")
        elif operator in (Operator.EXISTS, Operator.DOES_NOT_EXIST):
            if values:
                raise SelectorSyntaxError(
                    "values set must be empty for exists and does not exist"
                )
        elif operator in (Operator.GREATER_THAN, Operator.LESS_THAN):
            if len(values) != 1:
                raise SelectorSyntaxError(
                    "for 'gt' and 'lt' operators, exactly one value is required"
                )
            (value,) = values
            if parse_integer(value) is None:
                raise SelectorSyntaxError(
                    "for 'gt' and 'lt' operators, the value must be an integer"
                )

        object.__setattr__(self, "operator", operator)
        object.__setattr__(self, "values", values)

    def has_value(self, value: str) -> bool:
        return value in self.values

    def matches(self, labels: Mapping[str, str]) -> bool:
        """
        Check this requirement against one label map.

        Keys and values compare case-sensitively. The label map is
        never modified.

        A gt/lt requirement does not match a label whose value is not an
        integer.
        """
        op = self.operator

        if op in (Operator.IN, Operator.EQUALS, Operator.DOUBLE_EQUALS):
            if self.key not in labels:
                return False
            return self.has_value(labels[self.key])

        if op in (Operator.NOT_IN, Operator.NOT_EQUALS):
            if self.key not in labels:
                return True
            return not self.has_value(labels[self.key])

        if op is Operator.EXISTS:
            return self.key in labels

        if op is Operator.DOES_NOT_EXIST:
            return self.key not in labels

        if op in (Operator.GREATER_THAN, Operator.LESS_THAN):
            if self.key not in labels:
                return False
            label_value = parse_integer(labels[self.key])
            if label_value is None:
                logger.debug(
                    "label %r has non-integer value %r, treating '%s' requirement as no match",
                    self.key, labels[self.key], op.value,
                )
                return False
            (raw,) = self.values
            target = int(raw)
            if op is Operator.GREATER_THAN:
                return label_value > target
            return label_value < target

        return False

    def sort_key(self):
        """Ordering used for canonical form: key first, ordinal comparison."""
        return (self.key, self.operator.value, tuple(sorted(self.values)))
