"""
Tests for canonical text rendering.

Rendering must be deterministic and parse back to an equal selector.
"""

import pytest
from labelsel import Everything, Nothing, parse
from labelsel.backends import requirement_to_text, selector_to_text
from labelsel.requirements import Operator, Requirement


class TestRequirementText:
    """One requirement per operator."""

    @pytest.mark.parametrize("req, expected", [
        (Requirement("x", Operator.EXISTS), "x"),
        (Requirement("x", Operator.DOES_NOT_EXIST), "!x"),
        (Requirement("x", Operator.EQUALS, ["a"]), "x=a"),
        (Requirement("x", Operator.DOUBLE_EQUALS, ["a"]), "x==a"),
        (Requirement("x", Operator.NOT_EQUALS, ["a"]), "x!=a"),
        (Requirement("x", Operator.GREATER_THAN, ["1"]), "x>1"),
        (Requirement("x", Operator.LESS_THAN, ["-1"]), "x<-1"),
        (Requirement("x", Operator.IN, ["c", "a", "b"]), "x in (a,b,c)"),
        (Requirement("x", Operator.NOT_IN, ["b"]), "x notin (b)"),
        (Requirement("x", Operator.EQUALS, [""]), "x="),
    ])
    def test_render(self, req, expected):
        assert requirement_to_text(req) == expected


class TestSelectorText:

    def test_canonical_order(self):
        assert selector_to_text(parse("z=1, a in (y,x),  !m")) == "a in (x,y),!m,z=1"

    def test_sentinels_render_empty(self):
        assert selector_to_text(Everything) == ""
        assert selector_to_text(Nothing) == ""

    @pytest.mark.parametrize("text", [
        "x=a,y=b,z=c",
        "x!=a,y=b",
        "x=,z=",
        "!x",
        "x>1,z<5",
        "a in (b,c),d notin (e)",
        "x in ()",
        "x in (,a)",
        "notin=in",
        "k in (in,notin)",
    ])
    def test_text_parses_back(self, text):
        selector = parse(text)
        assert parse(selector_to_text(selector)) == selector
