import json
from pathlib import Path

from strips_planner.main import EXIT_FOUND, EXIT_NO_PLAN, EXIT_PARSE_FAILURE, main

from conftest import DATA_DIR

STACK_DIR = Path(__file__).resolve().parent.parent / "data" / "stack"


class TestMain:
    def test_text_output(self, capsys) -> None:
        code = main(["--domain", str(STACK_DIR / "domain.json"), "--problem", str(STACK_DIR / "problem.json")])
        assert code == EXIT_FOUND
        out = capsys.readouterr().out.splitlines()
        assert out == ["*** Solution found in 1 steps!", "1. stack a b"]

    def test_json_output_and_file(self, capsys, tmp_path) -> None:
        result_path = tmp_path / "out" / "result.json"
        code = main([
            "--domain", str(DATA_DIR / "domain.pddl"),
            "--problem", str(DATA_DIR / "problem.pddl"),
            "--format", "json",
            "--output", str(result_path),
        ])
        assert code == EXIT_FOUND
        printed = json.loads(capsys.readouterr().out)
        assert printed["status"] == "found"
        assert json.loads(result_path.read_text()) == printed

    def test_gave_up(self, capsys) -> None:
        code = main([
            "--domain", str(DATA_DIR / "domain.pddl"),
            "--problem", str(DATA_DIR / "problem.pddl"),
            "--max-depth", "1",
        ])
        assert code == EXIT_NO_PLAN
        assert capsys.readouterr().out.startswith("Search gave up: depth bound 1")

    def test_exhausted(self, capsys, tmp_path) -> None:
        problem = tmp_path / "problem.pddl"
        problem.write_text("(define (problem p) (:objects a b) (:init (ontable a) (clear a) (handempty)) (:goal (on a b)))")
        code = main(["--domain", str(DATA_DIR / "domain.pddl"), "--problem", str(problem)])
        assert code == EXIT_NO_PLAN
        assert capsys.readouterr().out.strip() == "No solution: search space exhausted."

    def test_parse_failure(self, tmp_path) -> None:
        broken = tmp_path / "domain.pddl"
        broken.write_text("(define (domain d)")
        assert main(["--domain", str(broken), "--problem", str(DATA_DIR / "problem.pddl")]) == EXIT_PARSE_FAILURE

    def test_missing_file(self, tmp_path) -> None:
        assert main(["--domain", str(tmp_path / "x.pddl"), "--problem", str(DATA_DIR / "problem.pddl")]) == EXIT_PARSE_FAILURE

    def test_non_utf8_domain(self, tmp_path) -> None:
        broken = tmp_path / "domain.pddl"
        broken.write_bytes(b"(define (domain d) \xff\xfe)")
        assert main(["--domain", str(broken), "--problem", str(DATA_DIR / "problem.pddl")]) == EXIT_PARSE_FAILURE

    def test_directory_as_domain(self, tmp_path) -> None:
        assert main(["--domain", str(tmp_path), "--problem", str(DATA_DIR / "problem.pddl")]) == EXIT_PARSE_FAILURE
