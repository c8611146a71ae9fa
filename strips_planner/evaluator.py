from typing import Iterable, Sequence

from strips_planner.pddl_ir import Literal, State
from strips_planner.state import contains


def required_count(precondition: Iterable[Literal]) -> int:
    """Number of positive literals a state has to contain."""
    return sum(1 for lit in precondition if not lit.negative)


def is_satisfied(state: State, precondition: Sequence[Literal]) -> bool:
    """
    True if every positive literal of the precondition is in the state and no negative one is.
    Each precondition literal counts once, however many state members it matches.
    """
    matched = 0
    for lit in precondition:
        if lit.negative:
            if contains(state, lit):
                return False
        elif contains(state, lit):
            matched += 1
    return matched == required_count(precondition)


def is_goal(state: State, goal: Sequence[Literal]) -> bool:
    return is_satisfied(state, goal)
