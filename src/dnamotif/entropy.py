"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/entropy.py

Shannon-entropy complexity gate for generated sequences.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Callable

from .errors import ThresholdUnreachableError

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


def shannon_entropy(sequence: str) -> float:
    """
    Entropy in bits over the symbols actually present in ``sequence``.

    Absent symbols contribute nothing; an empty or single-symbol sequence is 0.0.
    """
    n = len(sequence)
    if n == 0:
        return 0.0
    entropy = 0.0
    for count in Counter(sequence).values():
        p = count / n
        entropy -= p * math.log2(p)
    return entropy


@dataclass(frozen=True)
class EntropyFilter:
    threshold: float
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if int(self.max_attempts) < 1:
            raise ValueError("max_attempts must be >= 1")

    def accepts(self, sequence: str) -> bool:
        return shannon_entropy(sequence) >= self.threshold

    def draw(self, generate: Callable[[], str]) -> tuple[str, int]:
        """
        Call ``generate`` until a candidate passes; return (sequence, attempts).

        Raises ThresholdUnreachableError once max_attempts candidates were rejected.
        """
        best = -math.inf
        for attempt in range(1, int(self.max_attempts) + 1):
            candidate = generate()
            h = shannon_entropy(candidate)
            if h >= self.threshold:
                if attempt > 1:
                    log.debug("Accepted candidate after %d attempt(s) (H=%.4f).", attempt, h)
                return candidate, attempt
            best = max(best, h)
        raise ThresholdUnreachableError(self.threshold, int(self.max_attempts), best)
