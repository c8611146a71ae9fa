import itertools
import logging
from typing import Dict, Iterator, List, Sequence

from strips_planner.errors import GroundingBindingMissing
from strips_planner.pddl_ir import ActionSchema, DomainIR, GroundAction, Literal, ProblemIR

logger = logging.getLogger(__name__)


def _is_variable(symbol: str, parameters: Sequence[str]) -> bool:
    return symbol in parameters or symbol.startswith("?")


def object_universe(domain: DomainIR, problem: ProblemIR) -> List[str]:
    """
    Objects available for binding: the problem's objects, then domain constants.
    A problem without an :objects list (e.g. the JSON wire shape) falls back to every
    symbol mentioned in its init and goal, in order of first appearance.
    """
    objects: List[str] = list(problem.objects)
    if not objects:
        for lit in list(problem.init) + list(problem.goal):
            objects.extend(lit.parameters)
    objects.extend(domain.constants)
    # de-duplicate, keep first occurrence
    return list(dict.fromkeys(objects))


def enumerate_bindings(parameters: Sequence[str], objects: Sequence[str]) -> Iterator[Dict[str, str]]:
    # Cartesian product objects^arity, repetition allowed
    for values in itertools.product(objects, repeat=len(parameters)):
        yield dict(zip(parameters, values))


def substitute(lit: Literal, binding: Dict[str, str], schema: ActionSchema) -> Literal:
    args: List[str] = []
    for a in lit.parameters:
        if a in binding:
            args.append(binding[a])
        elif _is_variable(a, schema.parameters):
            raise GroundingBindingMissing(schema.name, a)
        else:
            args.append(a)  # domain constant
    return Literal(lit.name, tuple(args), lit.polarity)


def ground_action(schema: ActionSchema, binding: Dict[str, str]) -> GroundAction:
    return GroundAction(
        schema=schema,
        binding=tuple((p, binding[p]) for p in schema.parameters if p in binding),
        precondition=tuple(substitute(lit, binding, schema) for lit in schema.precondition),
        effect=tuple(substitute(lit, binding, schema) for lit in schema.effect),
    )


def ground_schema(schema: ActionSchema, objects: Sequence[str]) -> Iterator[GroundAction]:
    """
    Yield every ground instance of a schema over the object universe.
    Instances whose literals mention an unbound variable are logged and skipped.
    """
    for binding in enumerate_bindings(schema.parameters, objects):
        try:
            yield ground_action(schema, binding)
        except GroundingBindingMissing as e:
            logger.warning(f"Discarding grounding {schema.name}{tuple(binding.values())}: {e}")


def ground_domain(domain: DomainIR, objects: Sequence[str]) -> List[GroundAction]:
    ground_acts: List[GroundAction] = []
    for schema in domain.actions.values():
        ground_acts.extend(ground_schema(schema, objects))
    logger.debug(f"Grounded {len(domain.actions)} schemas over {len(objects)} objects: {len(ground_acts)} candidates")
    return ground_acts
