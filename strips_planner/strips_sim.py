from typing import Any, Dict, List, Sequence, Tuple, Union

from strips_planner.effects import apply
from strips_planner.errors import GroundingBindingMissing
from strips_planner.evaluator import is_goal
from strips_planner.grounding import ground_action
from strips_planner.pddl_ir import DomainIR, Literal, PlanStep, ProblemIR, State
from strips_planner.state import contains, initial_state


def _check_preconds(state: State, precondition: Sequence[Literal]) -> List[str]:
    errs: List[str] = []
    for lit in precondition:
        if lit.negative:
            if contains(state, lit):
                errs.append(f"negated precondition violated: {lit}")
        else:
            if not contains(state, lit):
                errs.append(f"missing precondition: {lit}")
    return errs


def _step_fields(step: Union[PlanStep, Dict[str, Any]]) -> Tuple[Any, List[Any]]:
    if isinstance(step, PlanStep):
        return step.name, step.args
    return step.get("name"), step.get("args", [])


def simulate_plan(
    domain_ir: DomainIR,
    problem_ir: ProblemIR,
    steps: Sequence[Union[PlanStep, Dict[str, Any]]],
) -> Tuple[bool, str]:
    """
    Symbolically simulate a structured plan (PlanStep objects or {"name":str,"args":[...]}) from
    the problem's initial state. Returns (ok, report). Report contains the first failure reason or
    success summary.
    """
    state = initial_state(problem_ir.init)
    if not steps and is_goal(state, problem_ir.goal):
        return True, "goal already holds in initial state"

    for idx, it in enumerate(steps):
        name, args = _step_fields(it)
        if name not in domain_ir.actions:
            return False, f"step {idx+1}: unknown action '{name}'"
        schema = domain_ir.actions[name]
        if len(args) != len(schema.parameters):
            return False, f"step {idx+1}: arity mismatch for '{name}': expected {len(schema.parameters)}, got {len(args)}"

        try:
            action = ground_action(schema, dict(zip(schema.parameters, args)))
        except GroundingBindingMissing as e:
            return False, f"step {idx+1}: {e}"

        missing = _check_preconds(state, action.precondition)
        if missing:
            return False, f"step {idx+1}: preconditions not satisfied for '{name}': " + "; ".join(missing)

        state = apply(action, state)

    if is_goal(state, problem_ir.goal):
        return True, "goal satisfied after executing plan"
    return False, "plan finished but goal not satisfied"
