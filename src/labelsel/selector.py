"""
Label Selector

A Selector is a conjunction (AND) of Requirements, kept in canonical order.

Canonical form:
    Requirements are sorted by key (ordinal string comparison) when the
    Selector is built. Requirements sharing a key are further ordered by
    operator and values. Two selectors built from the same requirements in
    a different textual order are therefore equal, and expose identical
    requirement sequences.

Sentinels:
    Everything  - no requirements, matches every label map (even {})
    Nothing     - matches no label map; add() returns it unchanged

Both sentinels are plain Selector values, told apart by SelectorKind.
This keeps the empty() asymmetry in one place:

    Everything.empty() -> True
    Nothing.empty()    -> False   (holds no requirements, yet matches nothing)

ARCHITECTURAL RULE:
    Selectors are immutable. add() builds a new Selector.
    Nothing here performs I/O or knows where label maps come from.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Tuple

from labelsel.parser import Parser
from labelsel.requirements import Operator, Requirement

logger = logging.getLogger(__name__)


class SelectorKind(Enum):
    """Tag distinguishing ordinary selectors from the Nothing sentinel."""

    REQUIREMENTS = "requirements"
    NOTHING = "nothing"


@dataclass(frozen=True)
class Selector:
    """
    An immutable, canonically ordered conjunction of Requirements.

    Properties:
        requirements: Requirements sorted by key (tuple, never mutated)
        kind: REQUIREMENTS for ordinary selectors, NOTHING for the sentinel

    Build one with parse(), Selector.from_requirements(), or use the
    Everything / Nothing sentinels.
    """

    requirements: Tuple[Requirement, ...] = ()
    kind: SelectorKind = SelectorKind.REQUIREMENTS

    def __post_init__(self):
        if self.kind is SelectorKind.NOTHING and self.requirements:
            raise ValueError("the Nothing selector cannot hold requirements")
        ordered = tuple(sorted(self.requirements, key=Requirement.sort_key))
        object.__setattr__(self, "requirements", ordered)

    @classmethod
    def from_requirements(cls, requirements: Iterable[Requirement]) -> "Selector":
        return cls(tuple(requirements))

    @staticmethod
    def parse(text: str) -> "Selector":
        return parse(text)

    @property
    def is_nothing(self) -> bool:
        return self.kind is SelectorKind.NOTHING

    def matches(self, labels: Mapping[str, str]) -> bool:
        """
        Check every requirement against the label map.

        Returns:
            True if all requirements match (always True for Everything),
            False for Nothing
        """
        if self.is_nothing:
            return False
        return all(req.matches(labels) for req in self.requirements)

    def empty(self) -> bool:
        """
        True iff this is an ordinary selector with no requirements.

        Nothing reports False: it selects nothing, so treating it as the
        empty (select-all) selector would invert its meaning.
        """
        return not self.is_nothing and not self.requirements

    def add(self, *requirements: Requirement) -> "Selector":
        """Return a new Selector with the extra requirements (Nothing stays Nothing)."""
        if self.is_nothing:
            return self
        return Selector(self.requirements + tuple(requirements))

    def requires_exact_match(self, key: str) -> Tuple[str, bool]:
        """
        Report whether `key` is pinned to exactly one value.

        Only the first requirement on `key` is considered. It pins the key
        when it is =, == or an in with a single value.

        Returns:
            (value, True) when pinned, otherwise ("", False)
        """
        if self.is_nothing:
            return "", False
        for req in self.requirements:
            if req.key != key:
                continue
            if req.operator in (Operator.EQUALS, Operator.DOUBLE_EQUALS, Operator.IN):
                if len(req.values) == 1:
                    (value,) = req.values
                    return value, True
            return "", False
        return "", False


Everything = Selector()

Nothing = Selector(kind=SelectorKind.NOTHING)


def parse(text: str) -> Selector:
    """
    Parse selector text into a canonical Selector.

    Args:
        text: Selector text, e.g. "env=prod,tier in (web,api),!debug"

    Returns:
        Selector with requirements sorted by key. Empty text gives a
        selector equal to Everything.

    Raises:
        SelectorSyntaxError: If the text is not a valid selector
    """
    requirements = Parser(text).parse()
    selector = Selector.from_requirements(requirements)
    logger.debug("parsed selector %r into %d requirement(s)", text, len(selector.requirements))
    return selector
