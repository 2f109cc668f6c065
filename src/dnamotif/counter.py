"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/counter.py

Sliding-window motif counting into a per-session frequency table.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Iterable, Mapping


class MotifCounter:
    """
    Exact substring counts for every length-k window across a corpus.

    One instance belongs to one analysis session; counts only ever grow.
    """

    def __init__(self, k: int):
        if int(k) < 1:
            raise ValueError("motif size k must be >= 1")
        self.k = int(k)
        self._counts: Counter[str] = Counter()
        self.sequences = 0
        self.windows = 0

    def add(self, sequence: str) -> int:
        """Count all windows of ``sequence``; returns the number of windows added."""
        self.sequences += 1
        n = len(sequence) - self.k + 1
        if n <= 0:
            return 0
        k = self.k
        self._counts.update(sequence[i : i + k] for i in range(n))
        self.windows += n
        return n

    def add_all(self, sequences: Iterable[str]) -> None:
        for seq in sequences:
            self.add(seq)

    def merge(self, other: "MotifCounter") -> "MotifCounter":
        if other.k != self.k:
            raise ValueError(f"Cannot merge counters with different motif sizes ({self.k} vs {other.k})")
        self._counts.update(other._counts)
        self.sequences += other.sequences
        self.windows += other.windows
        return self

    @property
    def counts(self) -> Mapping[str, int]:
        return MappingProxyType(self._counts)

    def most_common(self, n: int | None = None) -> list[tuple[str, int]]:
        # count desc, then motif
        ranked = sorted(self._counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return ranked if n is None else ranked[:n]

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"MotifCounter(k={self.k}, motifs={len(self._counts)}, windows={self.windows})"
