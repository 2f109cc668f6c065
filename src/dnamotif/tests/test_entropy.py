"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/tests/test_entropy.py

Shannon entropy and rejection-loop tests.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import itertools

import pytest

from dnamotif.entropy import EntropyFilter, shannon_entropy
from dnamotif.errors import ThresholdUnreachableError


def test_entropy_reference_values() -> None:
    assert shannon_entropy("AAAA") == 0.0
    assert shannon_entropy("ACGT") == pytest.approx(2.0)
    assert shannon_entropy("AACC") == pytest.approx(1.0)
    assert shannon_entropy("ACGTACGT") == pytest.approx(2.0)


def test_entropy_of_degenerate_sequences_is_zero() -> None:
    assert shannon_entropy("") == 0.0
    assert shannon_entropy("G") == 0.0


def test_filter_threshold_boundary() -> None:
    assert not EntropyFilter(2.1).accepts("ACGT")
    assert EntropyFilter(2.0).accepts("ACGT")
    assert not EntropyFilter(0.5).accepts("TTTT")
    assert EntropyFilter(0.0).accepts("TTTT")


def test_draw_regenerates_until_accepted() -> None:
    candidates = iter(["AAAA", "AAAC", "ACGT", "CCCC"])
    seq, attempts = EntropyFilter(1.5).draw(lambda: next(candidates))
    assert seq == "ACGT"
    assert attempts == 3


def test_draw_gives_up_after_max_attempts() -> None:
    calls = itertools.count(1)

    def _always_low() -> str:
        next(calls)
        return "AAAC"

    with pytest.raises(ThresholdUnreachableError) as excinfo:
        EntropyFilter(2.1, max_attempts=5).draw(_always_low)
    err = excinfo.value
    assert err.attempts == 5
    assert err.threshold == pytest.approx(2.1)
    assert err.best_entropy == pytest.approx(shannon_entropy("AAAC"))
    assert next(calls) == 6


def test_max_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        EntropyFilter(1.0, max_attempts=0)
