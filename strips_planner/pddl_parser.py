import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from strips_planner.errors import ParseFailure
from strips_planner.pddl_ir import ActionSchema, DomainIR, Literal, Polarity, ProblemIR
from strips_planner.wire_format import domain_from_dict, problem_from_dict

logger = logging.getLogger(__name__)


def _tokenize(s: str) -> List[str]:
    # drop ; comments
    s = "\n".join(line.split(";", 1)[0] for line in s.splitlines())
    s = s.replace("(", " ( ").replace(")", " ) ")
    return [t for t in s.split() if t]


def _parse(tokens: List[str]) -> Any:
    if not tokens:
        raise ParseFailure("empty description")

    def read(i: int) -> Tuple[Any, int]:
        if i >= len(tokens):
            raise ParseFailure("unexpected end of input: unbalanced parentheses")
        if tokens[i] == ")":
            raise ParseFailure(f"unexpected ')' at token {i}")
        if tokens[i] != "(":
            return tokens[i], i + 1
        i += 1
        out = []
        while i < len(tokens) and tokens[i] != ")":
            node, i = read(i)
            out.append(node)
        if i >= len(tokens):
            raise ParseFailure("unexpected end of input: unbalanced parentheses")
        return out, i + 1

    node, j = read(0)
    if j != len(tokens):
        raise ParseFailure(f"trailing tokens after expression: {' '.join(tokens[j:j + 5])}")
    return node


def _is_kw(x: Any, kw: str) -> bool:
    return isinstance(x, str) and x.lower() == kw


def _sexpr_find_blocks(tree: Any, head_kw: str) -> List[Any]:
    blocks = []
    if isinstance(tree, list) and tree:
        if isinstance(tree[0], str) and tree[0].lower() == head_kw:
            blocks.append(tree)
        for ch in tree:
            blocks.extend(_sexpr_find_blocks(ch, head_kw))
    return blocks


def _untyped(symbols: List[Any]) -> List[str]:
    # (?x ?y - block ?z) -> [?x, ?y, ?z]; types are not supported and are dropped
    out: List[str] = []
    skip = False
    for sym in symbols:
        if not isinstance(sym, str):
            raise ParseFailure(f"expected a symbol, got {sym}")
        if skip:
            skip = False
            continue
        if sym == "-":
            skip = True
            continue
        out.append(sym)
    return out


def _flatten_and(node: Any) -> List[Any]:
    # Turn (and a b (and c d)) into [a,b,c,d]; single term -> [term]; None or () -> []
    if node is None or node == []:
        return []
    if isinstance(node, list) and node and _is_kw(node[0], "and"):
        out: List[Any] = []
        for ch in node[1:]:
            out.extend(_flatten_and(ch))
        return out
    return [node]


def _literal_from_term(term: Any) -> Literal:
    if not isinstance(term, list) or not term:
        raise ParseFailure(f"Invalid literal term: {term}")
    if _is_kw(term[0], "not"):
        if len(term) != 2:
            raise ParseFailure(f"Invalid negated literal: {term}")
        base = term[1]
        if not isinstance(base, list) or not base or not isinstance(base[0], str):
            raise ParseFailure(f"Invalid negated literal: {term}")
        return Literal(base[0], tuple(_untyped(base[1:])), Polarity.NEGATIVE)
    if not isinstance(term[0], str):
        raise ParseFailure(f"Invalid literal head: {term}")
    return Literal(term[0], tuple(_untyped(term[1:])), Polarity.POSITIVE)


def _literals(node: Any) -> List[Literal]:
    return [_literal_from_term(t) for t in _flatten_and(node)]


def _extract_name(tree: Any, kw: str) -> str:
    # (define (domain NAME) ...) / (define (problem NAME) ...)
    for node in tree[1:]:
        if isinstance(node, list) and len(node) >= 2 and _is_kw(node[0], kw):
            if isinstance(node[1], str):
                return node[1]
    return "unknown"


def _root(text: str) -> Any:
    root = _parse(_tokenize(text))
    if not (isinstance(root, list) and root and _is_kw(root[0], "define")):
        raise ParseFailure("description must start with (define ...)")
    return root


def _parse_action(blk: List[Any]) -> ActionSchema:
    # (:action name :parameters (...) :precondition (...) :effect (...))
    if len(blk) < 2 or not isinstance(blk[1], str):
        raise ParseFailure(f"action block without a name: {blk[:2]}")
    act_name = blk[1]
    params: List[str] = []
    precond: List[Literal] = []
    effects: List[Literal] = []

    # scan tags inside this action block
    i = 2
    while i < len(blk):
        node = blk[i]
        if _is_kw(node, ":parameters") and i + 1 < len(blk):
            if isinstance(blk[i + 1], list):
                params = _untyped(blk[i + 1])
            i += 2
            continue
        if _is_kw(node, ":precondition") and i + 1 < len(blk):
            precond = _literals(blk[i + 1])
            i += 2
            continue
        if _is_kw(node, ":effect") and i + 1 < len(blk):
            effects = _literals(blk[i + 1])
            i += 2
            continue
        i += 1

    return ActionSchema(name=act_name, parameters=params, precondition=precond, effect=effects)


def parse_domain(domain_pddl: str) -> DomainIR:
    root = _root(domain_pddl)
    name = _extract_name(root, "domain")

    constants: List[str] = []
    for blk in _sexpr_find_blocks(root, ":constants"):
        constants.extend(_untyped(blk[1:]))

    predicates: Dict[str, int] = {}
    for blk in _sexpr_find_blocks(root, ":predicates"):
        # (:predicates (p ?x) (q ?x ?y) ...)
        for pred in blk[1:]:
            if isinstance(pred, list) and pred and isinstance(pred[0], str):
                predicates[pred[0]] = len(_untyped(pred[1:]))

    actions: Dict[str, ActionSchema] = {}
    for blk in _sexpr_find_blocks(root, ":action"):
        schema = _parse_action(blk)
        actions[schema.name] = schema

    logger.debug(f"Parsed domain {name}: {len(predicates)} predicates, {len(actions)} actions")
    return DomainIR(name=name, predicates=predicates, actions=actions, constants=constants)


def parse_problem(problem_pddl: str) -> ProblemIR:
    root = _root(problem_pddl)

    objects: List[str] = []
    for blk in _sexpr_find_blocks(root, ":objects"):
        # (:objects a b c)
        objects.extend(_untyped(blk[1:]))

    domain_name = None
    for blk in _sexpr_find_blocks(root, ":domain"):
        if len(blk) >= 2 and isinstance(blk[1], str):
            domain_name = blk[1]

    init_blocks = _sexpr_find_blocks(root, ":init")
    goal_blocks = _sexpr_find_blocks(root, ":goal")
    if not goal_blocks:
        raise ParseFailure("problem has no :goal")
    init: List[Literal] = []
    for t in (init_blocks[0][1:] if init_blocks else []):
        init.extend(_literals(t))
    goal: List[Literal] = []
    for t in goal_blocks[0][1:]:
        goal.extend(_literals(t))

    return ProblemIR(
        objects=objects,
        init=init,
        goal=goal,
        name=_extract_name(root, "problem"),
        domain_name=domain_name,
    )


def _read(path: Union[str, Path]) -> str:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Description file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseFailure(f"{path}: not valid UTF-8 text: {e}") from e
    except OSError as e:
        raise ParseFailure(f"{path}: cannot read description: {e}") from e


def load_domain(path: Union[str, Path]) -> DomainIR:
    """Read a domain from a PDDL file, or from the JSON wire shape if the file ends in .json."""
    text = _read(path)
    if str(path).endswith(".json"):
        return domain_from_dict(_load_json(text, path))
    return parse_domain(text)


def load_problem(path: Union[str, Path]) -> ProblemIR:
    """Read a problem from a PDDL file, or from the JSON wire shape if the file ends in .json."""
    text = _read(path)
    if str(path).endswith(".json"):
        return problem_from_dict(_load_json(text, path))
    return parse_problem(text)


def _load_json(text: str, path: Union[str, Path]) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseFailure(f"{path}: invalid JSON: {e}") from e
