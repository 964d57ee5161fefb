"""
Canonical text rendering for selectors.

Converts Requirement and Selector objects back into selector text.

Rendering rules:
    - Values of in/notin are sorted, so output is deterministic
    - exists renders as the bare key, gt/lt as '>' / '<'
    - Everything and Nothing both render as ""

Text produced here parses back to an equal selector (Nothing excepted,
which has no textual form).
"""

from labelsel.requirements import Operator, Requirement
from labelsel.selector import Selector


_INFIX = {
    Operator.EQUALS: "=",
    Operator.DOUBLE_EQUALS: "==",
    Operator.NOT_EQUALS: "!=",
    Operator.GREATER_THAN: ">",
    Operator.LESS_THAN: "<",
}


def requirement_to_text(req: Requirement) -> str:
    if req.operator is Operator.EXISTS:
        return req.key
    if req.operator is Operator.DOES_NOT_EXIST:
        return f"!{req.key}"
    if req.operator in (Operator.IN, Operator.NOT_IN):
        values = ",".join(sorted(req.values))
        return f"{req.key} {req.operator.value} ({values})"
    (value,) = req.values
    return f"{req.key}{_INFIX[req.operator]}{value}"


def selector_to_text(selector: Selector) -> str:
    if selector.is_nothing:
        return ""
    return ",".join(requirement_to_text(req) for req in selector.requirements)
