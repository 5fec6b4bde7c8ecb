"""Unit tests for prefix scoring and ranking."""

import pytest

from cmdhints.core.scoring import (
    ALIAS_EXACT_SCORE,
    EMPTY_PREFIX_SCORE,
    EXACT_MATCH_SCORE,
    ScoringEngine,
    rank,
    score_flag,
    score_prefix,
)
from cmdhints.domain.models import CompletionCandidate


class TestScorePrefix:
    def test_exact_match(self):
        assert score_prefix("build", "build") == EXACT_MATCH_SCORE

    def test_empty_prefix(self):
        assert score_prefix("build", "") == EMPTY_PREFIX_SCORE

    def test_non_matching_prefix(self):
        assert score_prefix("build", "x") == 0.0

    def test_partial_match_formula(self):
        # 0.6 + (3/5)*0.3 + (1/(1+0.5))*0.1
        expected = 0.6 + 0.6 * 0.3 + (1 / 1.5) * 0.1
        assert score_prefix("build", "bui") == pytest.approx(expected)
        assert score_prefix("build", "bui") > 0.6

    def test_partial_match_stays_below_exact(self):
        for prefix in ("b", "bu", "bui", "buil"):
            assert score_prefix("build", prefix) < EXACT_MATCH_SCORE

    def test_longer_prefix_scores_higher(self):
        assert score_prefix("implement", "impl") > score_prefix("implement", "im")

    def test_shorter_candidate_scores_higher_for_same_prefix(self):
        assert score_prefix("test", "t") > score_prefix("troubleshoot", "t")


class TestScoreFlag:
    def test_exact_name(self):
        assert score_flag("uc", "ultracompressed", "uc") == EXACT_MATCH_SCORE

    def test_exact_alias(self):
        assert score_flag("uc", "ultracompressed", "ultracompressed") == ALIAS_EXACT_SCORE

    def test_empty_prefix(self):
        assert score_flag("plan", None, "") == EMPTY_PREFIX_SCORE

    def test_alias_prefix_adds_bonus_and_is_capped(self):
        score = score_flag("uc", "ultracompressed", "u")
        assert score > score_prefix("uc", "u")
        assert score <= 0.99

    def test_alias_only_match(self):
        score = score_flag("c7", "context7", "con")
        assert score == pytest.approx(0.6 + (3 / 8) * 0.2)

    def test_no_match(self):
        assert score_flag("plan", "p", "x") == 0.0


class TestRank:
    def test_sorted_descending(self):
        ranked = rank(
            [
                CompletionCandidate(name="a", score=0.2),
                CompletionCandidate(name="b", score=0.9),
                CompletionCandidate(name="c", score=0.5),
            ]
        )
        assert [c.name for c in ranked] == ["b", "c", "a"]

    def test_equal_scores_keep_input_order(self):
        ranked = ScoringEngine().rank(
            [
                CompletionCandidate(name="first", score=0.5),
                CompletionCandidate(name="top", score=0.7),
                CompletionCandidate(name="second", score=0.5),
            ]
        )
        assert [c.name for c in ranked] == ["top", "first", "second"]
