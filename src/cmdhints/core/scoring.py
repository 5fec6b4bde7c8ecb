"""Relevance scoring shared by command, flag and argument completion.

All functions are pure and return a value in ``[0.0, 1.0]``. An exact match
always outranks every partial match for the same prefix.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from cmdhints.domain.models import CompletionCandidate

__all__ = [
    "EXACT_MATCH_SCORE",
    "ALIAS_EXACT_SCORE",
    "EMPTY_PREFIX_SCORE",
    "PARTIAL_MATCH_CAP",
    "score_prefix",
    "score_flag",
    "rank",
    "ScoringEngine",
]

EXACT_MATCH_SCORE = 1.0
ALIAS_EXACT_SCORE = 0.95
EMPTY_PREFIX_SCORE = 0.5
PARTIAL_MATCH_CAP = 0.99

BASE_SCORE = 0.6
PREFIX_WEIGHT = 0.3
LENGTH_WEIGHT = 0.1
ALIAS_WEIGHT = 0.2


def _partial_score(candidate: str, prefix: str) -> float:
    # Longer prefixes and shorter candidates score higher
    prefix_ratio = len(prefix) / len(candidate)
    length_penalty = 1.0 / (1.0 + len(candidate) / 10.0)
    return BASE_SCORE + prefix_ratio * PREFIX_WEIGHT + length_penalty * LENGTH_WEIGHT


def score_prefix(candidate: str, prefix: str) -> float:
    """Score ``candidate`` against what the user typed.

    Both strings are compared as given; callers normalize case first.

    Returns:
        1.0 for an exact match, 0.5 for an empty prefix, 0.0 when the
        candidate does not start with the prefix, otherwise
        ``0.6 + ratio * 0.3 + penalty * 0.1``.
    """
    if candidate == prefix:
        return EXACT_MATCH_SCORE
    if not prefix:
        return EMPTY_PREFIX_SCORE
    if not candidate.startswith(prefix):
        return 0.0
    return _partial_score(candidate, prefix)


def score_flag(name: str, alias: Optional[str], prefix: str) -> float:
    """Score a flag by its bare name and optional alias.

    An alias prefix match adds ``ratio * 0.2`` on top of the name score, and
    anything short of an exact name match is capped at 0.99.
    """
    if name == prefix:
        return EXACT_MATCH_SCORE
    if alias is not None and alias == prefix:
        return ALIAS_EXACT_SCORE
    if not prefix:
        return EMPTY_PREFIX_SCORE

    alias_matches = bool(alias) and alias.startswith(prefix)
    if name.startswith(prefix):
        score = _partial_score(name, prefix)
    elif alias_matches:
        score = BASE_SCORE
    else:
        return 0.0

    if alias_matches:
        score += len(prefix) / len(alias) * ALIAS_WEIGHT

    return min(score, PARTIAL_MATCH_CAP)


def rank(candidates: Iterable[CompletionCandidate]) -> list[CompletionCandidate]:
    """Order by score descending; equal scores keep their enumeration order."""
    return sorted(candidates, key=lambda candidate: candidate.score, reverse=True)


class ScoringEngine:
    """Stateless facade so components can be handed a scorer explicitly."""

    def score(self, candidate: str, prefix: str) -> float:
        return score_prefix(candidate, prefix)

    def score_flag(self, name: str, alias: Optional[str], prefix: str) -> float:
        return score_flag(name, alias, prefix)

    def rank(self, candidates: Iterable[CompletionCandidate]) -> list[CompletionCandidate]:
        return rank(candidates)
