"""Tests for the RankingSession handle."""

import math

import pytest

from khaikhai.config import Settings, Strategy
from khaikhai.engine import InvalidInput, Progress, RankingSession, start_session


def _play(session: RankingSession, order: list[str]) -> list:
    """Answer every comparison according to ``order`` (best first)."""
    rank = {item: i for i, item in enumerate(order)}
    asked = []
    pair = session.next_comparison()
    while pair is not None:
        asked.append(pair)
        session.answer(min(pair, key=rank.__getitem__))
        pair = session.next_comparison()
    return asked


class TestStartSession:
    """Tests for session creation and validation."""

    def test_needs_two_items(self):
        """Test fewer than 2 items is rejected."""
        with pytest.raises(InvalidInput):
            start_session(["Only"])
        with pytest.raises(InvalidInput):
            start_session([])

    def test_duplicate_items(self):
        """Test duplicate names are rejected."""
        with pytest.raises(InvalidInput):
            start_session(["Tea", "Coffee", "Tea"])

    def test_empty_item(self):
        """Test empty or blank names are rejected."""
        with pytest.raises(InvalidInput):
            start_session(["Tea", ""])
        with pytest.raises(InvalidInput):
            start_session(["Tea", "   "])

    def test_case_sensitive_names(self):
        """Test names differing only in case are distinct items."""
        session = start_session(["apple", "Apple"])
        assert session.items == ["apple", "Apple"]

    def test_strategy_by_count(self):
        """Test tournament up to ten items, quicksort above."""
        assert start_session([f"i{k}" for k in range(10)]).strategy is Strategy.TOURNAMENT
        assert start_session([f"i{k}" for k in range(11)]).strategy is Strategy.QUICKSORT

    def test_initial_progress(self):
        """Test progress starts at zero with the strategy's total."""
        session = start_session(["A", "B", "C", "D"])
        assert session.progress == Progress(0, 6)
        completed, total = session.progress
        assert (completed, total) == (0, 6)

    def test_invalid_input_is_value_error(self):
        """Test hosts can catch InvalidInput as ValueError."""
        with pytest.raises(ValueError):
            start_session(["A"])


class TestSessionFlow:
    """Tests for asking, answering and finishing."""

    def test_two_items(self):
        """Test X over Y ranks X first."""
        session = start_session(["X", "Y"])
        pair = session.next_comparison()
        assert pair == ("X", "Y")

        session.answer("X")
        assert session.next_comparison() is None
        assert session.current_ranking() == ["X", "Y"]
        assert session.progress == Progress(1, 1)
        assert session.is_finished

    def test_inferred_pair_never_presented(self):
        """Test answers A>B and B>C settle A vs C without asking."""
        session = start_session(["B", "C", "A"])
        asked = _play(session, ["A", "B", "C"])

        assert asked == [("B", "C"), ("B", "A")]
        assert session.current_ranking() == ["A", "B", "C"]
        assert session.questions_asked == 2
        assert session.progress == Progress(3, 3)

    def test_same_pair_until_answered(self):
        """Test next_comparison repeats the outstanding pair."""
        session = start_session(["A", "B", "C"])
        first = session.next_comparison()
        assert session.next_comparison() == first
        assert session.current_pair == first

    def test_answer_without_pair(self):
        """Test answering before a pair is shown is rejected."""
        session = start_session(["A", "B"])
        with pytest.raises(InvalidInput):
            session.answer("A")

    def test_answer_not_in_pair(self):
        """Test answering with an item outside the pair is rejected."""
        session = start_session(["A", "B", "C"])
        session.next_comparison()
        with pytest.raises(InvalidInput):
            session.answer("C")
        # The pair is still outstanding
        assert session.current_pair == ("A", "B")

    def test_answer_twice(self):
        """Test a pair can only be answered once."""
        session = start_session(["A", "B", "C"])
        session.next_comparison()
        session.answer("A")
        with pytest.raises(InvalidInput):
            session.answer("A")

    def test_tournament_linear_extension(self):
        """Test consistent answers give a complete ranking."""
        items = ["Tea", "Coffee", "Juice", "Water", "Milk", "Soda"]
        order = ["Water", "Tea", "Soda", "Coffee", "Milk", "Juice"]
        session = start_session(items)
        _play(session, order)

        ranking = session.current_ranking()
        assert ranking == order
        result = session.result()
        assert result.is_complete
        assert result.unranked == []
        for preferred, beaten in result.preferences.items():
            for less_preferred in beaten:
                assert ranking.index(preferred) < ranking.index(less_preferred)

    def test_partial_ranking_mid_session(self):
        """Test current_ranking is available before the session ends."""
        session = start_session(["A", "B", "C"])
        session.next_comparison()
        session.answer("B")
        # C is ready alongside B, so it queues ahead of the freed A
        assert session.current_ranking() == ["B", "C", "A"]
        assert not session.is_finished


class TestQuicksortSession:
    """Tests for sessions large enough to use the adaptive strategy."""

    ITEMS = [f"item{i:02d}" for i in range(12)]

    def test_progress_estimate(self):
        """Test the total is ceil(12 * log2(12))."""
        session = start_session(self.ITEMS)
        assert session.strategy is Strategy.QUICKSORT
        assert session.progress.total == math.ceil(12 * math.log2(12))

    def test_follow_up_batch_after_seed(self):
        """Test more comparisons follow the pivot batch before completion."""
        session = start_session(self.ITEMS)

        for item in self.ITEMS[1:]:
            pair = session.next_comparison()
            assert pair == ("item00", item)
            session.answer("item00")

        follow_up = session.next_comparison()
        assert follow_up is not None
        assert "item00" not in follow_up

        _play(session, self.ITEMS)
        assert session.current_ranking() == self.ITEMS
        assert session.questions_asked > 11

    def test_reverse_order(self):
        """Test the adaptive strategy recovers a reversed order."""
        order = list(reversed(self.ITEMS))
        session = start_session(self.ITEMS)
        _play(session, order)
        assert session.current_ranking() == order
        assert session.result().is_complete

    def test_percentage_clamped(self):
        """Test the displayed percentage never leaves 0-100."""
        session = start_session(self.ITEMS)
        pair = session.next_comparison()
        while pair is not None:
            assert 0 <= session.progress.percentage <= 100
            session.answer(pair.second)
            pair = session.next_comparison()
        assert 0 <= session.progress.percentage <= 100


class TestProgress:
    """Tests for the Progress tuple."""

    def test_percentage(self):
        assert Progress(22, 44).percentage == 50
        assert Progress(1, 3).percentage == 33

    def test_percentage_overshoot_clamped(self):
        """Test an estimate exceeded by the real count shows 100."""
        assert Progress(60, 44).percentage == 100

    def test_percentage_zero_total(self):
        assert Progress(0, 0).percentage == 0


class TestReset:
    """Tests for resetting a session."""

    def test_reset_forgets_answers(self):
        """Test reset returns the session to its initial state."""
        session = start_session(["A", "B", "C"])
        _play(session, ["C", "B", "A"])
        assert session.current_ranking() == ["C", "B", "A"]

        session.reset()
        assert session.progress == Progress(0, 3)
        assert session.questions_asked == 0
        assert session.current_ranking() == ["A", "B", "C"]
        assert session.next_comparison() == ("A", "B")

    def test_reset_clears_outstanding_pair(self):
        session = start_session(["A", "B"])
        session.next_comparison()
        session.reset()
        assert session.current_pair is None

    def test_result_snapshot(self):
        """Test result() reports strategy, counts and preferences."""
        session = start_session(["A", "B", "C"], Settings(strategy=Strategy.QUICKSORT))
        _play(session, ["A", "B", "C"])
        result = session.result()

        assert result.strategy is Strategy.QUICKSORT
        assert result.ranking == ["A", "B", "C"]
        assert result.items == ["A", "B", "C"]
        assert result.questions_asked == session.questions_asked
        assert result.preferences["A"] == ["B", "C"]
