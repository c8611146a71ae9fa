from typing import Iterable, Tuple

from strips_planner.pddl_ir import Atom, Literal, State


def equals(a: Literal, b: Literal) -> bool:
    # name, arity and positional parameters; polarity ignored
    return a.name == b.name and len(a.parameters) == len(b.parameters) and all(
        x == y for x, y in zip(a.parameters, b.parameters)
    )


def contains(state: State, lit: Literal) -> bool:
    return lit.atom in state


def add(state: State, lit: Literal) -> State:
    if contains(state, lit):
        return state
    return state | {lit.atom}


def remove(state: State, lit: Literal) -> State:
    return frozenset(a for a in state if a != lit.atom)


def canonical_key(state: State) -> Tuple[Atom, ...]:
    return tuple(sorted(state))


def initial_state(literals: Iterable[Literal]) -> State:
    """
    Build a state from an init listing.
    Positive literals are asserted; a negative literal retracts an earlier positive one.
    """
    facts: State = frozenset()
    for lit in literals:
        if lit.negative:
            facts = remove(facts, lit)
        else:
            facts = add(facts, lit)
    return facts
