class PlanningError(Exception):
    """Base class for planner errors."""


class ParseFailure(PlanningError, ValueError):
    """Malformed domain or problem description."""


class GroundingBindingMissing(PlanningError):
    """A schema variable has no value in the active binding."""

    def __init__(self, schema: str, symbol: str):
        super().__init__(f"Value not found for parameter '{symbol}' in action '{schema}'")
        self.schema = schema
        self.symbol = symbol
