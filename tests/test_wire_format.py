import json
from pathlib import Path

import pytest

from strips_planner.errors import ParseFailure
from strips_planner.pddl_ir import Polarity
from strips_planner.strips_search import SearchLimits, plan_via_search
from strips_planner.wire_format import (
    domain_from_dict,
    literal_from_dict,
    literal_to_dict,
    problem_from_dict,
    result_to_dict,
)

STACK_DIR = Path(__file__).resolve().parent.parent / "data" / "stack"


class TestLiteralWireShape:
    def test_operation_defaults_to_positive(self) -> None:
        lit = literal_from_dict({"action": "clear", "parameters": ["a"]})
        assert lit.polarity is Polarity.POSITIVE
        assert literal_from_dict({"action": "clear", "parameters": ["a"], "operation": "and"}).polarity is Polarity.POSITIVE

    def test_not_is_negative(self) -> None:
        lit = literal_from_dict({"action": "clear", "parameters": ["a"], "operation": "not"})
        assert lit.negative
        assert literal_to_dict(lit) == {"action": "clear", "parameters": ["a"], "operation": "not"}

    @pytest.mark.parametrize("bad", [
        {"parameters": ["a"]},
        {"action": "clear", "parameters": "a"},
        {"action": "clear", "parameters": ["a"], "operation": "or"},
        ["clear", "a"],
    ])
    def test_rejects_malformed(self, bad) -> None:
        with pytest.raises(ParseFailure):
            literal_from_dict(bad)


class TestDescriptions:
    @pytest.mark.parametrize("objects", ["ab", ["a", 1], {"a": "b"}])
    def test_problem_objects_must_be_strings(self, objects) -> None:
        with pytest.raises(ParseFailure, match="problem objects"):
            problem_from_dict({"objects": objects, "states": [{"actions": []}, {"actions": []}]})

    def test_domain_constants_must_be_strings(self) -> None:
        with pytest.raises(ParseFailure, match="domain constants"):
            domain_from_dict({"actions": [], "constants": "table"})

    def test_problem_needs_two_states(self) -> None:
        with pytest.raises(ParseFailure):
            problem_from_dict({"states": [{"actions": []}]})

    def test_domain_needs_actions(self) -> None:
        with pytest.raises(ParseFailure):
            domain_from_dict({"name": "empty"})

    def test_stack_fixture_solves(self) -> None:
        domain = domain_from_dict(json.loads((STACK_DIR / "domain.json").read_text()))
        problem = problem_from_dict(json.loads((STACK_DIR / "problem.json").read_text()))
        assert domain.predicates == {"clear": 1, "on": 2}
        result = plan_via_search(domain, problem, limits=SearchLimits())
        out = result_to_dict(result)
        assert out["status"] == "found"
        assert out["plan"] == [{"name": "stack", "args": ["a", "b"]}]
        assert out["stats"]["expansions"] >= 2

    def test_exhausted_result_shape(self, stack_domain, stack_problem) -> None:
        stack_problem.goal = [literal_from_dict({"action": "on", "parameters": ["a", "c"]})]
        out = result_to_dict(plan_via_search(stack_domain, stack_problem, limits=SearchLimits()))
        assert out["status"] == "exhausted"
        assert out["plan"] == []
        assert "reason" not in out
