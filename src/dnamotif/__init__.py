"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/__init__.py

Public API:
  - run_generate / run_analyze / run_session
  - MotifCounter, select_dominant_motif, shannon_entropy, EntropyFilter
  - SequenceGenerator, sample_symbol
  - load_config / build_config

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from .config import GenerationConfig, LoadedConfig, SessionConfig, build_config, load_config
from .corpus import MemorySink, SequenceSink, SequenceSource, TextCorpusReader, TextCorpusWriter, resolve_corpus_path
from .counter import MotifCounter
from .engine import SessionResult, run_analyze, run_generate, run_session
from .entropy import EntropyFilter, shannon_entropy
from .errors import (
    ConfigError,
    CorpusError,
    CorpusFormatError,
    CorpusIOError,
    DnaMotifError,
    ThresholdUnreachableError,
)
from .sampler import ALPHABET, SequenceGenerator, sample_symbol
from .selector import MotifReport, longest_run, select_dominant_motif

__all__ = [
    "ALPHABET",
    "ConfigError",
    "CorpusError",
    "CorpusFormatError",
    "CorpusIOError",
    "DnaMotifError",
    "EntropyFilter",
    "GenerationConfig",
    "LoadedConfig",
    "MemorySink",
    "MotifCounter",
    "MotifReport",
    "SequenceGenerator",
    "SequenceSink",
    "SequenceSource",
    "SessionConfig",
    "SessionResult",
    "TextCorpusReader",
    "TextCorpusWriter",
    "ThresholdUnreachableError",
    "build_config",
    "load_config",
    "longest_run",
    "resolve_corpus_path",
    "run_analyze",
    "run_generate",
    "run_session",
    "sample_symbol",
    "select_dominant_motif",
    "shannon_entropy",
]
__version__ = "0.1.0"
