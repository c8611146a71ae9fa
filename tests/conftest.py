from pathlib import Path

import pytest

from strips_planner.pddl_ir import ActionSchema, DomainIR, Literal, Polarity, ProblemIR
from strips_planner.pddl_parser import load_domain, load_problem

DATA_DIR = Path(__file__).parent / "data"


def pos(name, *params):
    return Literal(name, tuple(params), Polarity.POSITIVE)


def neg(name, *params):
    return Literal(name, tuple(params), Polarity.NEGATIVE)


@pytest.fixture
def stack_domain() -> DomainIR:
    stack = ActionSchema(
        name="stack",
        parameters=["x", "y"],
        precondition=[pos("clear", "x"), pos("clear", "y"), pos("on", "x", "table")],
        effect=[pos("on", "x", "y"), neg("clear", "y"), neg("on", "x", "table")],
    )
    return DomainIR(name="stack", predicates={"on": 2, "clear": 1}, actions={"stack": stack})


@pytest.fixture
def stack_problem() -> ProblemIR:
    return ProblemIR(
        objects=["a", "b"],
        init=[pos("on", "a", "table"), pos("on", "b", "table"), pos("clear", "a"), pos("clear", "b")],
        goal=[pos("on", "a", "b")],
    )


@pytest.fixture
def blocksworld_domain() -> DomainIR:
    return load_domain(DATA_DIR / "domain.pddl")


@pytest.fixture
def blocksworld_problem() -> ProblemIR:
    return load_problem(DATA_DIR / "problem.pddl")
