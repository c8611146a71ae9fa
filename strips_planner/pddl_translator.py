from typing import Any, Dict, List, Sequence, Union

from strips_planner.grounding import object_universe
from strips_planner.pddl_ir import DomainIR, GroundAction, PlanStep, ProblemIR


class PDDLTranslator:
    """
    Translate a structured action sequence into a textual PDDL plan.
    - Steps are checked against the parsed domain's actions and the problem's object universe.
    - Output lines follow the usual plan-file format: "(stack a b)".
    """

    @staticmethod
    def _to_plan_steps(steps: Sequence[Union[PlanStep, GroundAction, Dict[str, Any]]]) -> List[PlanStep]:
        norm: List[PlanStep] = []
        for s in steps:
            if isinstance(s, PlanStep):
                norm.append(s)
            elif isinstance(s, GroundAction):
                norm.append(s.to_step())
            elif isinstance(s, dict):
                name = s.get("name")
                args = s.get("args", [])
                if not isinstance(name, str):
                    raise ValueError("Plan step missing valid 'name' string")
                if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
                    raise ValueError("Plan step 'args' must be a list of strings")
                norm.append(PlanStep(name=name, args=args))
            else:
                raise ValueError("Unsupported plan step type")
        return norm

    @staticmethod
    def _step_errors(idx: int, step: PlanStep, domain_ir: DomainIR, allowed_objects: set) -> List[str]:
        errors: List[str] = []
        if step.name not in domain_ir.actions:
            return [f"step {idx}: unknown action '{step.name}' (allowed: {sorted(domain_ir.actions)})"]

        schema = domain_ir.actions[step.name]
        if len(step.args) != len(schema.parameters):
            errors.append(
                f"step {idx}: arity mismatch for '{step.name}': "
                f"expected {len(schema.parameters)}, got {len(step.args)}"
            )
        for a in step.args:
            if a not in allowed_objects:
                errors.append(f"step {idx}: argument '{a}' not in problem objects {sorted(allowed_objects)}")
        return errors

    @staticmethod
    def format_numbered(steps: Sequence[PlanStep]) -> List[str]:
        # "1. stack a b"
        return [f"{i}. {' '.join([s.name] + list(s.args))}" for i, s in enumerate(steps, start=1)]

    def translate_to_pddl(
        self,
        plan_steps: Sequence[Union[PlanStep, GroundAction, Dict[str, Any]]],
        domain_ir: DomainIR,
        problem_ir: ProblemIR,
        strict: bool = True,
    ) -> List[str]:
        """
        Convert structured steps into PDDL plan lines.

        Args:
            plan_steps: PlanStep, GroundAction or dicts with {"name": str, "args": [str,...]}
            domain_ir: Parsed domain
            problem_ir: Parsed problem
            strict: If True, raise on validation errors; if False, drop invalid steps

        Returns:
            List[str]: e.g., ["(unstack b c)", "(put-down b)"]
        """
        steps = self._to_plan_steps(plan_steps)
        allowed_objects = set(object_universe(domain_ir, problem_ir))

        valid: List[PlanStep] = []
        errors: List[str] = []
        for idx, s in enumerate(steps):
            errs = self._step_errors(idx, s, domain_ir, allowed_objects)
            if errs:
                errors.extend(errs)
            else:
                valid.append(s)
        if errors and strict:
            raise ValueError("Plan validation failed: " + "; ".join(errors))

        return [f"({' '.join([s.name] + list(s.args))})" for s in valid]
