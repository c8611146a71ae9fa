"""
JSON wire shape of parsed descriptions and search results.

Literal:  {"action": "on", "parameters": ["a", "b"], "operation": "not"}   (operation optional, "and" or "not")
Domain:   {"name": ..., "actions": [{"action": ..., "parameters": [...], "precondition": [...], "effect": [...]}]}
Problem:  {"objects": [...], "states": [{"actions": [<init literals>]}, {"actions": [<goal literals>]}]}
"""

from typing import Any, Dict, List

from strips_planner.errors import ParseFailure
from strips_planner.pddl_ir import ActionSchema, DomainIR, Literal, Polarity, ProblemIR, SearchResult

_OPERATIONS = {"and": Polarity.POSITIVE, "not": Polarity.NEGATIVE}


def literal_from_dict(d: Dict[str, Any]) -> Literal:
    if not isinstance(d, dict):
        raise ParseFailure(f"literal must be an object, got {d!r}")
    name = d.get("action")
    params = d.get("parameters", [])
    if not isinstance(name, str):
        raise ParseFailure(f"literal missing valid 'action' string: {d!r}")
    if not isinstance(params, list) or not all(isinstance(p, str) for p in params):
        raise ParseFailure(f"literal 'parameters' must be a list of strings: {d!r}")
    operation = d.get("operation", "and")
    if operation not in _OPERATIONS:
        raise ParseFailure(f"unknown literal operation '{operation}'")
    return Literal(name, tuple(params), _OPERATIONS[operation])


def literal_to_dict(lit: Literal) -> Dict[str, Any]:
    d: Dict[str, Any] = {"action": lit.name, "parameters": list(lit.parameters)}
    if lit.negative:
        d["operation"] = "not"
    return d


def _symbol_list(items: Any, where: str) -> List[str]:
    if items is None:
        return []
    if not isinstance(items, list) or not all(isinstance(s, str) for s in items):
        raise ParseFailure(f"{where} must be a list of strings")
    return list(items)


def _literal_list(items: Any, where: str) -> List[Literal]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise ParseFailure(f"{where} must be a list of literals")
    return [literal_from_dict(it) for it in items]


def domain_from_dict(d: Dict[str, Any]) -> DomainIR:
    if not isinstance(d, dict) or not isinstance(d.get("actions"), list):
        raise ParseFailure("domain must be an object with an 'actions' list")
    actions: Dict[str, ActionSchema] = {}
    predicates: Dict[str, int] = {}
    for a in d["actions"]:
        if not isinstance(a, dict):
            raise ParseFailure(f"action schema must be an object, got {a!r}")
        name = a.get("action") or a.get("name")
        if not isinstance(name, str):
            raise ParseFailure(f"action schema missing a name: {a!r}")
        params = a.get("parameters", [])
        if not isinstance(params, list) or not all(isinstance(p, str) for p in params):
            raise ParseFailure(f"action '{name}': 'parameters' must be a list of strings")
        schema = ActionSchema(
            name=name,
            parameters=list(params),
            precondition=_literal_list(a.get("precondition"), f"action '{name}' precondition"),
            effect=_literal_list(a.get("effect"), f"action '{name}' effect"),
        )
        for lit in schema.precondition + schema.effect:
            predicates.setdefault(lit.name, len(lit.parameters))
        actions[name] = schema
    return DomainIR(
        name=d.get("name", "unknown"),
        predicates=predicates,
        actions=actions,
        constants=_symbol_list(d.get("constants"), "domain constants"),
    )


def problem_from_dict(d: Dict[str, Any]) -> ProblemIR:
    states = d.get("states") if isinstance(d, dict) else None
    if not isinstance(states, list) or len(states) != 2:
        raise ParseFailure("problem must hold exactly two states: initial and goal")
    init_state, goal_state = states
    if not isinstance(init_state, dict) or not isinstance(goal_state, dict):
        raise ParseFailure("problem states must be objects with an 'actions' list")
    return ProblemIR(
        objects=_symbol_list(d.get("objects"), "problem objects"),
        init=_literal_list(init_state.get("actions"), "initial state"),
        goal=_literal_list(goal_state.get("actions"), "goal state"),
        name=d.get("name", "unknown"),
    )


def result_to_dict(result: SearchResult) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "status": result.status.value,
        "plan": [{"name": s.name, "args": s.args} for s in result.plan],
    }
    if result.reason:
        out["reason"] = result.reason
    if result.stats is not None:
        out["stats"] = dict(vars(result.stats))
    return out
