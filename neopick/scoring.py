"""Greedy fuzzy scorer for query/line pairs.

Matching is a case-insensitive, in-order subsequence test. Each query
character takes the first occurrence after the previous match; alignment
is never revisited, so a later, better-scoring alignment can be missed.
Rankings depend on that greedy behavior and must stay stable.
"""

from __future__ import annotations

from dataclasses import dataclass

SCORE_MATCH = 10
SCORE_CONSECUTIVE = 15
SCORE_BOUNDARY = 8
SCORE_GAP = -1

BOUNDARY_CHARS = frozenset("/_- ")


@dataclass(frozen=True)
class MatchResult:
    """Score plus the line offset matched by each query character."""

    score: int
    positions: tuple[int, ...]


EMPTY_QUERY_RESULT = MatchResult(score=0, positions=())


def fold_char(ch: str) -> str:
    """Lowercase one character, keeping it unchanged if lowering widens it."""
    lowered = ch.lower()
    return lowered if len(lowered) == 1 else ch


def fold_text(text: str) -> str:
    """Case-fold ``text`` while preserving a one-to-one offset mapping."""
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    return "".join(fold_char(ch) for ch in text)


def is_boundary(prev: str, curr: str) -> bool:
    """Return whether ``curr`` starts a word after ``prev``."""
    if prev in BOUNDARY_CHARS:
        return True
    return prev.islower() and curr.isupper()


def score(query: str, line: str) -> MatchResult | None:
    """Score ``line`` against ``query``; ``None`` means no match.

    An empty query matches everything with score 0 and no positions.
    """
    if not query:
        return EMPTY_QUERY_RESULT

    line_folded = fold_text(line)
    total = 0
    prev_idx = -1
    positions: list[int] = []
    for needle in fold_text(query):
        idx = line_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        total += SCORE_MATCH
        if idx == prev_idx + 1:
            total += SCORE_CONSECUTIVE
        else:
            total += SCORE_GAP * (idx - prev_idx - 1)
        if idx == 0 or is_boundary(line[idx - 1], line[idx]):
            total += SCORE_BOUNDARY
        positions.append(idx)
        prev_idx = idx

    return MatchResult(score=total, positions=tuple(positions))


__all__ = [
    "BOUNDARY_CHARS",
    "EMPTY_QUERY_RESULT",
    "MatchResult",
    "SCORE_BOUNDARY",
    "SCORE_CONSECUTIVE",
    "SCORE_GAP",
    "SCORE_MATCH",
    "fold_char",
    "fold_text",
    "is_boundary",
    "score",
]
