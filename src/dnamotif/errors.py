"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/errors.py

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations


class DnaMotifError(Exception):
    """Base exception for this package."""


class ConfigError(DnaMotifError): ...


class ThresholdUnreachableError(DnaMotifError):
    """Raised when the entropy filter rejects every candidate up to its attempt cap."""

    def __init__(self, threshold: float, attempts: int, best_entropy: float):
        self.threshold = float(threshold)
        self.attempts = int(attempts)
        self.best_entropy = float(best_entropy)
        super().__init__(
            f"Entropy threshold {self.threshold:.4f} not reached after {self.attempts} attempt(s) "
            f"(best entropy seen: {self.best_entropy:.4f})."
        )


class CorpusError(DnaMotifError):
    """Corpus storage issues."""


class CorpusIOError(CorpusError): ...


class CorpusFormatError(CorpusError): ...
