"""Ranked match index over the line store.

The index is rebuilt from scratch for every query. Entries are ordered by
descending score, then ascending input position.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from .scoring import MatchResult, score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """One matching line: its input position, text, and match result."""

    index: int
    line: str
    result: MatchResult

    @property
    def score(self) -> int:
        return self.result.score

    @property
    def positions(self) -> tuple[int, ...]:
        return self.result.positions

    def sort_key(self) -> tuple[int, int]:
        return (-self.result.score, self.index)


def rebuild(query: str, lines: Sequence[str]) -> list[Match]:
    """Score every line against ``query`` and return the ranked matches."""
    started = time.perf_counter()
    matches: list[Match] = []
    for idx, line in enumerate(lines):
        result = score(query, line)
        if result is None:
            continue
        matches.append(Match(index=idx, line=line, result=result))
    matches.sort(key=Match.sort_key)
    logger.debug(
        "rebuilt index for %r: %d/%d matches in %.2fms",
        query,
        len(matches),
        len(lines),
        (time.perf_counter() - started) * 1000.0,
    )
    return matches


def clamp_cursor(cursor: int, match_count: int) -> int:
    """Clamp ``cursor`` into ``[0, match_count - 1]``, or 0 when empty."""
    if match_count <= 0:
        return 0
    return max(0, min(cursor, match_count - 1))


__all__ = ["Match", "clamp_cursor", "rebuild"]
