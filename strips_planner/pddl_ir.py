from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


Atom = Tuple[str, Tuple[str, ...]]  # ("pred", ("a","b",...))
State = FrozenSet[Atom]


class Polarity(Enum):
    POSITIVE = "and"
    NEGATIVE = "not"


@dataclass(frozen=True, eq=False)
class Literal:
    name: str
    parameters: Tuple[str, ...] = ()
    polarity: Polarity = Polarity.POSITIVE

    @property
    def atom(self) -> Atom:
        return (self.name, self.parameters)

    @property
    def negative(self) -> bool:
        return self.polarity is Polarity.NEGATIVE

    # polarity is not part of identity
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self.atom == other.atom

    def __hash__(self) -> int:
        return hash(self.atom)

    def __str__(self) -> str:
        body = " ".join((self.name,) + self.parameters)
        return f"(not ({body}))" if self.negative else f"({body})"


@dataclass
class ActionSchema:
    name: str
    parameters: List[str]  # variable names as they appear in the domain (e.g., ?x, ?y)
    precondition: List[Literal] = field(default_factory=list)
    effect: List[Literal] = field(default_factory=list)


@dataclass
class DomainIR:
    name: str
    predicates: Dict[str, int]  # predicate name -> arity
    actions: Dict[str, ActionSchema]  # action name -> schema, in declaration order
    constants: List[str] = field(default_factory=list)


@dataclass
class ProblemIR:
    objects: List[str]
    init: List[Literal]
    goal: List[Literal]
    name: str = "unknown"
    domain_name: Optional[str] = None


@dataclass(frozen=True)
class GroundAction:
    schema: ActionSchema
    binding: Tuple[Tuple[str, str], ...]  # (parameter, object) pairs in schema order
    precondition: Tuple[Literal, ...]
    effect: Tuple[Literal, ...]

    @property
    def name(self) -> str:
        return self.schema.name

    @property
    def args(self) -> List[str]:
        return [value for _, value in self.binding]

    def to_step(self) -> "PlanStep":
        return PlanStep(name=self.name, args=self.args)

    def __str__(self) -> str:
        return " ".join([self.name] + self.args)


@dataclass
class PlanStep:
    name: str
    args: List[str]


@dataclass
class SearchNode:
    state: State
    parent: Optional["SearchNode"] = None
    action: Optional[GroundAction] = None
    depth: int = 0

    def path(self) -> List[GroundAction]:
        """Actions from the root to this node."""
        actions: List[GroundAction] = []
        node: Optional[SearchNode] = self
        while node is not None and node.parent is not None:
            actions.append(node.action)
            node = node.parent
        actions.reverse()
        return actions


class SearchStatus(Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"
    RESOURCE_EXHAUSTED = "resource_exhausted"


@dataclass
class SearchStats:
    candidates: int = 0   # ground actions produced by grounding
    expansions: int = 0   # nodes goal-tested
    generated: int = 0    # child states computed
    visited: int = 0
    deepest: int = 0
    pruned: int = 0       # nodes cut by max_depth


@dataclass
class SearchResult:
    status: SearchStatus
    actions: List[GroundAction] = field(default_factory=list)
    reason: Optional[str] = None
    stats: Optional[SearchStats] = None

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def plan(self) -> List[PlanStep]:
        return [a.to_step() for a in self.actions]
