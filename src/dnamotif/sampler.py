"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/sampler.py

Weighted symbol sampling and random-length sequence generation.

Probability vectors are cumulative thresholds for (A, C, G, T):
  [P(A), P(A)+P(C), P(A)+P(C)+P(G), 1.0]
A draw is mapped to the first symbol whose threshold exceeds it; anything
left over falls through to T, so vectors that stop short of 1.0 still cover
every draw.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

ALPHABET = ("A", "C", "G", "T")
_ALPHABET_ARR = np.array(ALPHABET)


def sample_symbol(thresholds: Sequence[float], r: float) -> str:
    for symbol, bound in zip(ALPHABET[:-1], thresholds[:3]):
        if r < bound:
            return symbol
    return ALPHABET[-1]


def sample_symbols(thresholds: Sequence[float], draws: np.ndarray) -> np.ndarray:
    """Vectorised sample_symbol: one symbol per uniform draw, same first-exceeding rule."""
    bounds = np.asarray(thresholds[:3], dtype=float)
    hits = np.asarray(draws, dtype=float)[:, None] < bounds[None, :]
    idx = np.where(hits.any(axis=1), hits.argmax(axis=1), len(ALPHABET) - 1)
    return _ALPHABET_ARR[idx]


def cumulative_from_weights(weights: Sequence[float]) -> tuple[float, ...]:
    """Per-base weights (A, C, G, T) -> normalised cumulative thresholds."""
    arr = np.asarray(weights, dtype=float)
    if arr.shape != (len(ALPHABET),):
        raise ValueError(f"Expected {len(ALPHABET)} weights, got {arr.size}")
    if (arr < 0).any():
        raise ValueError("Weights must be non-negative")
    total = float(arr.sum())
    if total <= 0:
        raise ValueError("Weights must not all be zero")
    cum = np.cumsum(arr) / total
    cum[-1] = 1.0
    return tuple(float(x) for x in cum)


class SequenceGenerator:
    """
    Random sequence source with lengths drawn uniformly from [min_size, max_size).

    min_size < max_size is the caller's responsibility.
    """

    def __init__(
        self,
        min_size: int,
        max_size: int,
        thresholds: Sequence[float],
        rng: np.random.Generator,
    ):
        self.min_size = int(min_size)
        self.max_size = int(max_size)
        self.thresholds = tuple(float(x) for x in thresholds)
        self.rng = rng

    def draw_length(self) -> int:
        return int(self.rng.integers(self.min_size, self.max_size))

    def generate(self) -> str:
        size = self.draw_length()
        if size == 0:
            return ""
        return "".join(sample_symbols(self.thresholds, self.rng.random(size)))

    __call__ = generate
