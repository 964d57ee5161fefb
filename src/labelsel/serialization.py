"""
Serialization helpers for selector objects (Requirement, Selector).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit:
values are written sorted, and requirements are rebuilt through the
Requirement constructor so documents are validated on the way in.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from labelsel.requirements import Requirement
from labelsel.selector import Nothing, Selector, SelectorKind


def requirement_to_dict(req: Requirement) -> Dict[str, Any]:
    return {
        "key": req.key,
        "operator": req.operator.value,
        "values": sorted(req.values),
    }


def requirement_from_dict(d: Dict[str, Any]) -> Requirement:
    if not isinstance(d, dict):
        raise TypeError(f"Unsupported requirement document: {type(d)}")
    for field in ("key", "operator"):
        if field not in d:
            raise TypeError(f"Requirement document is missing '{field}'")
        if not isinstance(d[field], str):
            raise TypeError(f"Requirement '{field}' must be a string, not {type(d[field])}")
    return Requirement(d["key"], d["operator"], d.get("values") or ())


def selector_to_dict(s: Selector) -> Dict[str, Any]:
    return {
        "kind": s.kind.value,
        "requirements": [requirement_to_dict(r) for r in s.requirements],
    }


def selector_from_dict(d: Dict[str, Any]) -> Selector:
    if not isinstance(d, dict):
        raise TypeError(f"Unsupported selector document: {type(d)}")
    kind = d.get("kind", SelectorKind.REQUIREMENTS.value)
    if kind == SelectorKind.NOTHING.value:
        return Nothing
    if kind != SelectorKind.REQUIREMENTS.value:
        raise TypeError(f"Unsupported selector kind: {kind}")
    return Selector.from_requirements(requirement_from_dict(r) for r in d.get("requirements", []))


def selector_to_json(s: Selector) -> str:
    return json.dumps(selector_to_dict(s), sort_keys=True)


def selector_from_json(s: str) -> Selector:
    d = json.loads(s)
    return selector_from_dict(d)


def selector_to_yaml(s: Selector) -> str:
    return yaml.safe_dump(selector_to_dict(s))


def selector_from_yaml(s: str) -> Selector:
    d = yaml.safe_load(s)
    return selector_from_dict(d)


__all__ = [
    "requirement_to_dict",
    "requirement_from_dict",
    "selector_to_dict",
    "selector_from_dict",
    "selector_to_json",
    "selector_from_json",
    "selector_to_yaml",
    "selector_from_yaml",
]
