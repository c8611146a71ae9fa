import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from strips_planner import config
from strips_planner.effects import apply
from strips_planner.evaluator import is_goal, is_satisfied
from strips_planner.grounding import ground_domain, object_universe
from strips_planner.pddl_ir import (
    Atom,
    DomainIR,
    GroundAction,
    ProblemIR,
    SearchNode,
    SearchResult,
    SearchStats,
    SearchStatus,
    State,
)
from strips_planner.state import canonical_key, initial_state

logger = logging.getLogger(__name__)

VisitedSet = Set[Tuple[Atom, ...]]


def _bound(value: int) -> Optional[int]:
    return value if value > 0 else None


@dataclass
class SearchLimits:
    max_visited: Optional[int] = None   # distinct states held in the visited set
    max_frontier: Optional[int] = None  # untried applicable actions across the stack
    max_depth: Optional[int] = None     # nodes at this depth are not expanded

    @classmethod
    def from_config(cls) -> "SearchLimits":
        return cls(
            max_visited=_bound(config.MAX_VISITED_STATES),
            max_frontier=_bound(config.MAX_FRONTIER_SIZE),
            max_depth=_bound(config.MAX_SEARCH_DEPTH),
        )


@dataclass
class _Frame:
    node: SearchNode
    actions: List[GroundAction]
    index: int = 0


def applicable_actions(state: State, ground_acts: List[GroundAction]) -> List[GroundAction]:
    return [a for a in ground_acts if is_satisfied(state, a.precondition)]


def plan_via_search(
    domain: DomainIR,
    problem: ProblemIR,
    limits: Optional[SearchLimits] = None,
    visited: Optional[VisitedSet] = None,
) -> SearchResult:
    """
    Depth-first forward search over the states reachable from the problem's initial state.

    Grounds the domain once against the problem's object universe, then explores children in
    grounding order. A child state is marked visited before it is entered and the visited set is
    never cleared on backtrack, so each distinct state is expanded at most once in the whole search.
    The first goal state found wins; plan length is not minimized.

    Args:
        domain: Parsed domain
        problem: Parsed problem
        limits: Resource bounds; defaults to the configured ones
        visited: Caller-owned visited set, filled in place with canonical state keys

    Returns:
        SearchResult with status FOUND (actions from initial state to goal), EXHAUSTED (no plan
        in the reachable space) or RESOURCE_EXHAUSTED (a bound stopped or pruned the search).
    """
    if limits is None:
        limits = SearchLimits.from_config()
    if visited is None:
        visited = set()
    stats = SearchStats()

    objects = object_universe(domain, problem)
    ground_acts = ground_domain(domain, objects)
    stats.candidates = len(ground_acts)

    init_state = initial_state(problem.init)
    visited.add(canonical_key(init_state))
    logger.info(
        f"Searching {domain.name}: {len(objects)} objects, {len(ground_acts)} ground actions, "
        f"{len(init_state)} initial facts"
    )

    def finish(status: SearchStatus, actions: Optional[List[GroundAction]] = None, reason: Optional[str] = None) -> SearchResult:
        stats.visited = len(visited)
        logger.info(
            f"Search {status.value}: {stats.expansions} expansions, {stats.visited} visited states"
            + (f" ({reason})" if reason else "")
        )
        return SearchResult(status=status, actions=actions or [], reason=reason, stats=stats)

    stack: List[_Frame] = []
    pending = 0
    truncated = False
    node: Optional[SearchNode] = SearchNode(state=init_state)

    while True:
        if node is not None:
            # enter node
            stats.expansions += 1
            stats.deepest = max(stats.deepest, node.depth)
            if is_goal(node.state, problem.goal):
                plan = node.path()
                logger.info(f"*** Solution found in {len(plan)} steps!")
                return finish(SearchStatus.FOUND, plan)

            if limits.max_depth is not None and node.depth >= limits.max_depth:
                stats.pruned += 1
                truncated = True
            else:
                actions = applicable_actions(node.state, ground_acts)
                logger.debug(f"depth {node.depth}: {len(actions)} applicable actions")
                pending += len(actions)
                if limits.max_frontier is not None and pending > limits.max_frontier:
                    return finish(
                        SearchStatus.RESOURCE_EXHAUSTED,
                        reason=f"frontier exceeded {limits.max_frontier} pending actions",
                    )
                stack.append(_Frame(node, actions))
            node = None

        if not stack:
            break

        frame = stack[-1]
        if frame.index >= len(frame.actions):
            stack.pop()  # backtrack
            continue

        action = frame.actions[frame.index]
        frame.index += 1
        pending -= 1

        child_state = apply(action, frame.node.state)
        stats.generated += 1
        key = canonical_key(child_state)
        if key in visited:
            continue
        if limits.max_visited is not None and len(visited) >= limits.max_visited:
            return finish(
                SearchStatus.RESOURCE_EXHAUSTED,
                reason=f"visited set exceeded {limits.max_visited} states",
            )
        visited.add(key)
        node = SearchNode(state=child_state, parent=frame.node, action=action, depth=frame.node.depth + 1)

    if truncated:
        return finish(
            SearchStatus.RESOURCE_EXHAUSTED,
            reason=f"depth bound {limits.max_depth} pruned {stats.pruned} nodes",
        )
    return finish(SearchStatus.EXHAUSTED)
