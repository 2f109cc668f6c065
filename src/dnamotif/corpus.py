"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/corpus.py

Flat text corpus storage: one A/C/G/T sequence per line, no header.

Sources and sinks are the only place corpus names become paths; the engine
works against the SequenceSource/SequenceSink interfaces.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import abc
import logging
import os
from pathlib import Path
from typing import IO, Iterator, List, Optional

from .errors import CorpusFormatError, CorpusIOError
from .sampler import ALPHABET

log = logging.getLogger(__name__)

CORPUS_SUFFIX = ".txt"
_VALID = frozenset(ALPHABET)


def resolve_corpus_path(name: str, data_dir: str | os.PathLike = "data") -> Path:
    """<data_dir>/<name>.txt"""
    text = str(name).strip()
    if not text:
        raise CorpusIOError("Corpus name must be a non-empty string")
    return Path(data_dir) / f"{text}{CORPUS_SUFFIX}"


class SequenceSource(abc.ABC):
    @abc.abstractmethod
    def __iter__(self) -> Iterator[str]:
        raise NotImplementedError


class SequenceSink(abc.ABC):
    @abc.abstractmethod
    def write(self, sequence: str) -> None:
        raise NotImplementedError

    def close(self) -> None:  # pragma: no cover - default
        return None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class TextCorpusReader(SequenceSource):
    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def __iter__(self) -> Iterator[str]:
        try:
            fh = self.path.open("r", encoding="utf-8")
        except OSError as e:
            raise CorpusIOError(f"Error while reading corpus {self.path}: {e}") from e
        lineno = 0
        with fh:
            try:
                for lineno, line in enumerate(fh, start=1):
                    seq = line.rstrip()
                    bad = set(seq) - _VALID
                    if bad:
                        raise CorpusFormatError(
                            f"{self.path}:{lineno}: invalid symbol(s) {''.join(sorted(bad))!r}; "
                            "corpus lines must contain only A/C/G/T"
                        )
                    yield seq
            except UnicodeDecodeError as e:
                raise CorpusFormatError(f"{self.path}:{lineno + 1}: not valid UTF-8 text ({e.reason})") from e
            except OSError as e:
                raise CorpusIOError(f"Error while reading corpus {self.path}: {e}") from e


class TextCorpusWriter(SequenceSink):
    """
    Writes to a sibling ``<name>.txt.tmp`` and replaces the corpus on a clean close.

    Leaving the ``with`` block on an exception discards the staged file, so an
    existing corpus is untouched by a failed session.
    """

    def __init__(self, path: str | os.PathLike, *, overwrite: bool = True):
        self.path = Path(path)
        self.tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        self.overwrite = overwrite
        self._fh: Optional[IO[str]] = None
        self.written = 0

    def _open(self) -> IO[str]:
        if self._fh is None:
            if self.path.exists() and not self.overwrite:
                raise CorpusIOError(f"Corpus already exists (overwrite disabled): {self.path}")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._fh = self.tmp_path.open("w", encoding="utf-8")
            except OSError as e:
                raise CorpusIOError(f"Error while writing corpus {self.path}: {e}") from e
            log.debug("Staging corpus at %s", self.tmp_path)
        return self._fh

    def write(self, sequence: str) -> None:
        fh = self._open()
        try:
            fh.write(sequence)
            fh.write("\n")
        except OSError as e:
            raise CorpusIOError(f"Error while writing corpus {self.path}: {e}") from e
        self.written += 1

    def close(self) -> None:
        if self._fh is None:
            return
        try:
            self._fh.close()
            os.replace(self.tmp_path, self.path)
        except OSError as e:
            self.tmp_path.unlink(missing_ok=True)
            raise CorpusIOError(f"Error while writing corpus {self.path}: {e}") from e
        finally:
            self._fh = None

    def discard(self) -> None:
        if self._fh is None:
            return
        try:
            self._fh.close()
        finally:
            self._fh = None
            self.tmp_path.unlink(missing_ok=True)
        log.debug("Discarded staged corpus %s", self.tmp_path)

    def __enter__(self):
        self._open()
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.discard()
        else:
            self.close()


class MemorySink(SequenceSink):
    def __init__(self) -> None:
        self.sequences: List[str] = []

    def write(self, sequence: str) -> None:
        self.sequences.append(sequence)
