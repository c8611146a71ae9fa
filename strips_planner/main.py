# Main Entry Point - load a domain and problem, search for a plan, report it

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from strips_planner.config import (
    DOMAIN_PATH,
    LOG_LEVEL,
    MAX_FRONTIER_SIZE,
    MAX_SEARCH_DEPTH,
    MAX_VISITED_STATES,
    OUTPUT_FORMAT,
    PROBLEM_PATH,
    VALIDATE_PLAN,
)
from strips_planner.errors import ParseFailure
from strips_planner.pddl_ir import DomainIR, ProblemIR, SearchResult, SearchStatus
from strips_planner.pddl_parser import load_domain, load_problem
from strips_planner.pddl_translator import PDDLTranslator
from strips_planner.strips_search import SearchLimits, plan_via_search
from strips_planner.strips_sim import simulate_plan
from strips_planner.wire_format import result_to_dict

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PLAN = 1
EXIT_PARSE_FAILURE = 2


class PlanningRunner:
    def __init__(self, limits: SearchLimits, validate: bool = True):
        self.limits = limits
        self.validate = validate
        self.translator = PDDLTranslator()

    def load(self, domain_path: Path, problem_path: Path) -> tuple:
        """Load domain, then problem. Parse failures propagate to the caller."""
        logger.info(f"Loading domain {domain_path}")
        domain_ir = load_domain(domain_path)
        logger.info(f"Loading problem {problem_path}")
        problem_ir = load_problem(problem_path)
        if problem_ir.domain_name and problem_ir.domain_name != domain_ir.name:
            logger.warning(f"Problem targets domain '{problem_ir.domain_name}', loaded '{domain_ir.name}'")
        return domain_ir, problem_ir

    def solve(self, domain_ir: DomainIR, problem_ir: ProblemIR) -> SearchResult:
        result = plan_via_search(domain_ir, problem_ir, limits=self.limits)
        if result.found and self.validate:
            ok, report = simulate_plan(domain_ir, problem_ir, result.plan)
            if ok:
                logger.info(f"Plan replay: {report}")
            else:
                logger.error(f"Plan replay failed: {report}")
        return result

    def render_text(self, result: SearchResult) -> List[str]:
        if result.status is SearchStatus.FOUND:
            lines = [f"*** Solution found in {len(result.actions)} steps!"]
            lines.extend(self.translator.format_numbered(result.plan))
            return lines
        if result.status is SearchStatus.EXHAUSTED:
            return ["No solution: search space exhausted."]
        return [f"Search gave up: {result.reason}."]

    def save_result(self, result: SearchResult, output_path: Path):
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(result_to_dict(result), f, indent=2, default=str)
        logger.info(f"Result saved to {output_path}")


def _limits_from_args(args: argparse.Namespace) -> SearchLimits:
    def bound(v: int) -> Optional[int]:
        return v if v and v > 0 else None
    return SearchLimits(
        max_visited=bound(args.max_visited),
        max_frontier=bound(args.max_frontier),
        max_depth=bound(args.max_depth),
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Depth-first STRIPS planner")
    parser.add_argument("--domain", default=DOMAIN_PATH,
                        help="Domain file (PDDL, or .json wire shape)")
    parser.add_argument("--problem", default=PROBLEM_PATH,
                        help="Problem file (PDDL, or .json wire shape)")
    parser.add_argument("--format", choices=["text", "json"], default=OUTPUT_FORMAT,
                        help="Console output format")
    parser.add_argument("--output", default=None,
                        help="Also write the JSON result to this path")
    parser.add_argument("--max-visited", type=int, default=MAX_VISITED_STATES,
                        help="Give up once this many distinct states are visited (0 = unbounded)")
    parser.add_argument("--max-frontier", type=int, default=MAX_FRONTIER_SIZE,
                        help="Give up once this many actions are pending (0 = unbounded)")
    parser.add_argument("--max-depth", type=int, default=MAX_SEARCH_DEPTH,
                        help="Do not expand nodes at this depth (0 = unbounded)")
    parser.add_argument("--no-validate", action="store_true", default=not VALIDATE_PLAN,
                        help="Skip replaying the found plan through the simulator")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))

    runner = PlanningRunner(_limits_from_args(args), validate=not args.no_validate)
    try:
        domain_ir, problem_ir = runner.load(Path(args.domain), Path(args.problem))
    except (ParseFailure, FileNotFoundError) as e:
        logger.error(f"Failed to load planning task: {e}")
        return EXIT_PARSE_FAILURE

    result = runner.solve(domain_ir, problem_ir)

    if args.output:
        runner.save_result(result, Path(args.output))

    if args.format == "json":
        print(json.dumps(result_to_dict(result), indent=2, default=str))
    else:
        for line in runner.render_text(result):
            print(line)

    return EXIT_FOUND if result.found else EXIT_NO_PLAN


if __name__ == "__main__":
    sys.exit(main())
