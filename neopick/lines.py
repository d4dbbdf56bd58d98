"""Input line store.

Reads newline-delimited records once at startup and keeps them immutable.
Oversized records and record counts are capped rather than rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import BinaryIO

MAX_LINES = 10_000
MAX_LINE_LENGTH = 4096

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineStore:
    """Ordered, read-only sequence of input lines addressed by position."""

    lines: tuple[str, ...]
    truncated_lines: int = 0
    capped: bool = False

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> LineStore:
        """Build a store from already-decoded lines without any capping."""
        return cls(lines=tuple(lines))


def _decode_record(raw: bytes) -> str:
    """Decode one raw record and strip its line terminator."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw.decode("utf-8", errors="surrogateescape")


def load_lines(
    stream: BinaryIO,
    max_lines: int = MAX_LINES,
    max_line_length: int = MAX_LINE_LENGTH,
) -> LineStore:
    """Read up to ``max_lines`` records from ``stream``.

    Each record is decoded as UTF-8 with ``surrogateescape`` so undecodable
    bytes survive a round trip to standard output. Records are stripped
    of their ``\\n`` or ``\\r\\n`` terminator and truncated to
    ``max_line_length`` characters. Reading stops once ``max_lines`` records
    have been collected, so the rest of the stream is never consumed.
    """
    max_lines = max(1, max_lines)
    max_line_length = max(1, max_line_length)
    lines: list[str] = []
    truncated = 0
    capped = False
    for raw in stream:
        if len(lines) >= max_lines:
            capped = True
            break
        text = _decode_record(raw)
        if len(text) > max_line_length:
            text = text[:max_line_length]
            truncated += 1
        lines.append(text)

    if truncated:
        logger.info("truncated %d line(s) to %d characters", truncated, max_line_length)
    if capped:
        logger.info("input capped at %d lines", max_lines)
    logger.debug("loaded %d line(s)", len(lines))
    return LineStore(lines=tuple(lines), truncated_lines=truncated, capped=capped)


__all__ = ["LineStore", "MAX_LINES", "MAX_LINE_LENGTH", "load_lines"]
