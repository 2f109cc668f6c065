"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/engine.py

Session orchestration: generate -> filter -> persist -> count, or read -> count,
followed by dominant-motif selection.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

import numpy as np

from .config import SessionConfig
from .corpus import SequenceSink, TextCorpusReader, TextCorpusWriter, resolve_corpus_path
from .counter import MotifCounter
from .entropy import EntropyFilter
from .errors import ConfigError
from .sampler import SequenceGenerator
from .selector import MotifReport, select_dominant_motif

log = logging.getLogger(__name__)

ProgressFactory = Optional[Callable[[str, int], Any]]  # returns handle with .update(n), .close()


class Stopwatch:
    """Accumulates wall time spent inside ``with`` blocks."""

    def __init__(self) -> None:
        self.elapsed = 0.0

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed += time.perf_counter() - self._t0


@dataclass(frozen=True)
class SessionResult:
    mode: str
    report: MotifReport
    counter: MotifCounter
    sequences: int
    attempts: int
    counting_seconds: float
    corpus_path: Optional[Path] = None

    @property
    def counting_ms(self) -> float:
        return self.counting_seconds * 1000.0

    @property
    def rejected(self) -> int:
        return max(0, self.attempts - self.sequences) if self.mode == "generate" else 0


def _count(counter: MotifCounter, sequence: str, watch: Stopwatch) -> None:
    with watch:
        counter.add(sequence)


def run_generate(
    cfg: SessionConfig,
    sink: SequenceSink,
    *,
    rng: Optional[np.random.Generator] = None,
    progress_factory: ProgressFactory = None,
) -> SessionResult:
    gen_cfg = cfg.generate
    if cfg.mode != "generate" or gen_cfg is None:
        raise ConfigError("run_generate requires a config in 'generate' mode")
    rng = rng if rng is not None else np.random.default_rng(gen_cfg.seed)
    generator = SequenceGenerator(gen_cfg.min_size, gen_cfg.max_size, gen_cfg.thresholds, rng)
    gate = EntropyFilter(gen_cfg.entropy_threshold, gen_cfg.max_attempts)
    counter = MotifCounter(cfg.motif_size)
    watch = Stopwatch()
    attempts = 0

    log.info(
        "Generating %d sequence(s), length [%d, %d), entropy >= %.3f, k=%d.",
        gen_cfg.loops,
        gen_cfg.min_size,
        gen_cfg.max_size,
        gen_cfg.entropy_threshold,
        cfg.motif_size,
    )
    handle = progress_factory("generate", gen_cfg.loops) if progress_factory else None
    try:
        for _ in range(gen_cfg.loops):
            sequence, tries = gate.draw(generator.generate)
            attempts += tries
            sink.write(sequence)
            _count(counter, sequence, watch)
            if handle is not None:
                handle.update(1)
    finally:
        if handle is not None:
            handle.close()

    if attempts > gen_cfg.loops:
        log.info("Entropy filter rejected %d candidate(s).", attempts - gen_cfg.loops)
    return SessionResult(
        mode="generate",
        report=select_dominant_motif(counter.counts),
        counter=counter,
        sequences=gen_cfg.loops,
        attempts=attempts,
        counting_seconds=watch.elapsed,
        corpus_path=getattr(sink, "path", None),
    )


def run_analyze(
    cfg: SessionConfig,
    source: Iterable[str],
    *,
    progress_factory: ProgressFactory = None,
) -> SessionResult:
    counter = MotifCounter(cfg.motif_size)
    watch = Stopwatch()
    handle = progress_factory("analyze", None) if progress_factory else None
    try:
        for sequence in source:
            _count(counter, sequence, watch)
            if handle is not None:
                handle.update(1)
    finally:
        if handle is not None:
            handle.close()

    log.info("Counted %d window(s) over %d sequence(s), k=%d.", counter.windows, counter.sequences, cfg.motif_size)
    return SessionResult(
        mode="read",
        report=select_dominant_motif(counter.counts),
        counter=counter,
        sequences=counter.sequences,
        attempts=0,
        counting_seconds=watch.elapsed,
        corpus_path=getattr(source, "path", None),
    )


def run_session(
    cfg: SessionConfig,
    *,
    rng: Optional[np.random.Generator] = None,
    overwrite: bool = True,
    progress_factory: ProgressFactory = None,
) -> SessionResult:
    path = resolve_corpus_path(cfg.corpus, cfg.data_dir)
    if cfg.mode == "generate":
        with TextCorpusWriter(path, overwrite=overwrite) as sink:
            result = run_generate(cfg, sink, rng=rng, progress_factory=progress_factory)
        log.info("Wrote %d sequence(s) to %s", result.sequences, path)
        return result
    if cfg.mode == "read":
        return run_analyze(cfg, TextCorpusReader(path), progress_factory=progress_factory)
    raise ConfigError(f"Unknown mode: {cfg.mode}")
