from strips_planner.evaluator import is_goal, is_satisfied, required_count
from strips_planner.state import initial_state

from conftest import neg, pos


STATE = initial_state([pos("on", "a", "table"), pos("on", "b", "table"), pos("clear", "a"), pos("clear", "b")])


class TestPrecondition:
    def test_empty_precondition_is_vacuous(self) -> None:
        assert is_satisfied(STATE, [])
        assert is_satisfied(frozenset(), [])

    def test_all_positives_present(self) -> None:
        assert is_satisfied(STATE, [pos("clear", "a"), pos("on", "a", "table")])

    def test_missing_positive(self) -> None:
        assert not is_satisfied(STATE, [pos("clear", "a"), pos("on", "a", "b")])

    def test_negative_literal_blocks(self) -> None:
        # matching positives do not compensate for a violated negative
        pre = [pos("clear", "a"), pos("on", "a", "table"), pos("on", "b", "table"), neg("clear", "b")]
        assert not is_satisfied(STATE, pre)

    def test_negative_literal_absent(self) -> None:
        assert is_satisfied(STATE, [pos("clear", "a"), neg("on", "a", "b")])

    def test_repeated_literal_counts_once_each(self) -> None:
        pre = [pos("clear", "a"), pos("clear", "a")]
        assert required_count(pre) == 2
        assert is_satisfied(STATE, pre)

    def test_required_count_ignores_negatives(self) -> None:
        assert required_count([pos("clear", "a"), neg("clear", "b"), pos("on", "a", "b")]) == 2


class TestGoal:
    def test_negative_goal_absent(self) -> None:
        assert is_goal(STATE, [neg("on", "a", "b")])

    def test_negative_goal_present(self) -> None:
        assert not is_goal(STATE, [neg("clear", "a")])

    def test_positive_goal(self) -> None:
        assert is_goal(STATE, [pos("on", "a", "table"), pos("on", "b", "table")])
        assert not is_goal(STATE, [pos("on", "a", "b")])
