"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/_console.py

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from rich import box
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as rich_tb

if TYPE_CHECKING:
    from .config import SessionConfig
    from .engine import SessionResult

theme = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "bad": "red",
        "muted": "dim",
        "accent": "bright_cyan",
        "kv": "bold white",
        "title": "bold bright_cyan",
    }
)
console = Console(theme=theme)


def rich_tracebacks(enabled: bool = True) -> None:
    if enabled:
        rich_tb(show_locals=False)


def _rounded_table(title: str) -> Table:
    return Table(
        title=Text(title, style="title"),
        show_header=True,
        header_style="bold white",
        border_style="accent",
        row_styles=["", "muted"],
        box=box.ROUNDED,
        min_width=60,
    )


def render_config_summary(cfg: "SessionConfig") -> None:
    t = _rounded_table("Session")
    t.add_column("key", style="kv")
    t.add_column("value")
    t.add_row("mode", cfg.mode)
    t.add_row("corpus", cfg.corpus)
    t.add_row("data_dir", Text(cfg.data_dir))
    t.add_row("motif_size", str(cfg.motif_size))
    gen = cfg.generate
    if cfg.mode == "generate" and gen is not None:
        t.add_row("loops", str(gen.loops))
        t.add_row("length", f"[{gen.min_size}, {gen.max_size})")
        t.add_row("thresholds", ", ".join(f"{x:.3f}" for x in gen.thresholds))
        t.add_row("entropy_threshold", f"{gen.entropy_threshold:.3f}")
        t.add_row("max_attempts", str(gen.max_attempts))
        t.add_row("seed", "—" if gen.seed is None else str(gen.seed))
    console.print(t)


def render_report(result: "SessionResult", *, top: int = 0) -> None:
    report = result.report
    t = _rounded_table(f"Motif(s) with the highest number of occurrences ({report.max_count})")
    t.add_column("key", style="kv")
    t.add_column("value")
    if report.found:
        t.add_row("pattern", Text(report.best_motif, style="ok"))
        t.add_row("occurrences", str(report.best_count))
        t.add_row("tied at max", str(len(report.tied)))
    else:
        t.add_row("pattern", Text("no motif found", style="warn"))
    t.add_row("sequences", str(result.sequences))
    if result.mode == "generate":
        t.add_row("rejected (entropy)", str(result.rejected))
    t.add_row("windows", str(result.counter.windows))
    t.add_row("counting time", f"{result.counting_ms:.1f} ms")
    if result.corpus_path is not None:
        t.add_row("corpus", Text(str(result.corpus_path)))
    console.print(t)

    if top > 0 and len(result.counter):
        tt = _rounded_table(f"Top {top} motif(s), k={result.counter.k}")
        tt.add_column("#", justify="right")
        tt.add_column("motif")
        tt.add_column("count", justify="right")
        for i, (motif, count) in enumerate(result.counter.most_common(top), start=1):
            tt.add_row(str(i), motif, str(count))
        console.print(tt)


class _RichHandle:
    def __init__(self, progress: Progress, task_id: int):
        self._p = progress
        self._id = task_id

    def update(self, n: int) -> None:
        self._p.update(self._id, advance=n)

    def close(self) -> None:
        self._p.update(self._id, visible=False)


class RichProgressManager:
    """Context-managed progress manager that exposes a factory for engine hooks."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._progress: Optional[Progress] = None
        if enabled:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(bar_width=None, complete_style="accent", finished_style="ok"),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                transient=True,
                console=console,
            )

    def __enter__(self):
        if self._progress is not None:
            self._progress.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._progress is not None:
            self._progress.__exit__(exc_type, exc, tb)

    def factory(self, label: str, total: Optional[int]):
        if self._progress is None:
            return None
        task_id = self._progress.add_task(label, total=total)
        return _RichHandle(self._progress, task_id)
