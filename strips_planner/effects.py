import logging

from strips_planner.pddl_ir import GroundAction, State

logger = logging.getLogger(__name__)


def apply(action: GroundAction, state: State) -> State:
    """
    Apply a ground action's effect to a state and return the successor.
    The effect is evaluated as one batch against the given state, so literal order is irrelevant;
    a literal both added and deleted ends up deleted. Preconditions are not re-checked.
    """
    add_set = {lit.atom for lit in action.effect if not lit.negative}
    del_set = {lit.atom for lit in action.effect if lit.negative}
    conflicts = add_set & del_set
    if conflicts:
        logger.debug(f"{action}: add/delete conflict on {sorted(conflicts)}, delete wins")
    return frozenset((state | add_set) - del_set)
