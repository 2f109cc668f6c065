"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/selector.py

Dominant-motif selection over a frequency table.

Ranking:
  1. highest occurrence count
  2. longest run of identical adjacent symbols within the motif
  3. lexicographically smallest motif

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


def longest_run(motif: str) -> int:
    best = 0
    current = 0
    prev = None
    for ch in motif:
        current = current + 1 if ch == prev else 1
        best = max(best, current)
        prev = ch
    return best


@dataclass(frozen=True)
class MotifReport:
    max_count: int
    tied: tuple[str, ...]
    best_motif: str
    best_count: int

    @property
    def found(self) -> bool:
        return bool(self.best_motif)

    def to_dict(self) -> dict:
        return {
            "max_count": self.max_count,
            "tied": list(self.tied),
            "best_motif": self.best_motif,
            "best_count": self.best_count,
        }


EMPTY_REPORT = MotifReport(max_count=0, tied=(), best_motif="", best_count=0)


def select_dominant_motif(counts: Mapping[str, int]) -> MotifReport:
    if not counts:
        return EMPTY_REPORT
    max_count = max(counts.values())
    tied = tuple(sorted(m for m, c in counts.items() if c == max_count))
    # tied is sorted, so max() keeps the smallest motif among equal runs
    best = max(tied, key=longest_run)
    return MotifReport(max_count=int(max_count), tied=tied, best_motif=best, best_count=int(counts[best]))
