"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/cli.py

Typer/Rich CLI entrypoint for dnamotif.

Commands:
  - generate        : Generate an entropy-filtered corpus and report its dominant motif.
  - analyze         : Report the dominant motif of an existing corpus.
  - run             : Run the session described by a YAML config.
  - validate-config : Validate a YAML config and print a summary.
  - interactive     : Prompt for session settings, then run.

Run:
  python -m dnamotif --help

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer
from rich.markup import escape

from ._console import RichProgressManager, console, render_config_summary, render_report, rich_tracebacks
from ._logging import setup_console_logging
from .config import LOG_LEVELS, SessionConfig, build_config, load_config
from .engine import run_session
from .errors import ConfigError, CorpusFormatError, CorpusIOError, ThresholdUnreachableError

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Synthetic DNA corpus generation and dominant-motif analysis.",
)

DEFAULT_CONFIG_FILENAME = "config.yaml"


def _exit_for(e: Exception) -> int:
    mapping = {
        ConfigError: 2,
        ThresholdUnreachableError: 3,
        CorpusFormatError: 4,
        CorpusIOError: 5,
    }
    for etype, code in mapping.items():
        if isinstance(e, etype):
            return code
    return 1


def _discover_config(provided: Optional[Path]) -> Path:
    if provided:
        return provided.resolve()
    env_cfg = os.environ.get("DNAMOTIF_CONFIG_PATH")
    if env_cfg:
        return Path(env_cfg).resolve()
    cwd_cfg = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if cwd_cfg.exists():
        return cwd_cfg.resolve()
    raise ConfigError("No config found. Pass --config, set DNAMOTIF_CONFIG_PATH, or place config.yaml here.")


def _execute(cfg: SessionConfig, *, top: int, progress: bool, overwrite: bool) -> None:
    pm = RichProgressManager(enabled=progress)
    with pm:
        result = run_session(cfg, overwrite=overwrite, progress_factory=pm.factory if progress else None)
    render_report(result, top=top)


@app.callback()
def _root(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Console log level (default INFO)."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON logs."),
    trace: bool = typer.Option(False, "--trace", help="Rich tracebacks on errors."),
):
    level = (log_level or os.environ.get("DNAMOTIF_LOG_LEVEL") or "INFO").strip().upper()
    if level not in LOG_LEVELS:
        console.print(f"[red]Invalid log level {escape(level)!r}; choose one of {', '.join(LOG_LEVELS)}.[/red]")
        raise typer.Exit(code=2)
    setup_console_logging(level, json_logs)
    rich_tracebacks(enabled=trace)
    ctx.obj = {"log_level_explicit": log_level is not None}


# ───────────────────────────────────────────────────────────────────────────────
# GENERATE / ANALYZE (ad-hoc)
# ───────────────────────────────────────────────────────────────────────────────


@app.command(help="Generate an entropy-filtered corpus, then report its dominant motif.")
def generate(
    corpus: str = typer.Option(..., "--corpus", "-n", help="Corpus name (written to <data-dir>/<name>.txt)."),
    loops: int = typer.Option(..., "--loops", help="Number of sequences to generate."),
    min_size: int = typer.Option(..., "--min-size", help="Minimum sequence length (inclusive)."),
    max_size: int = typer.Option(..., "--max-size", help="Maximum sequence length (exclusive)."),
    probs: Tuple[float, float, float, float] = typer.Option(
        (0.25, 0.5, 0.75, 1.0), "--probs", help="Cumulative thresholds for A, C, G, T."
    ),
    weights: bool = typer.Option(False, "--weights", help="Treat --probs as per-base weights."),
    motif_size: int = typer.Option(..., "--motif-size", "-k", help="Motif length k."),
    entropy_threshold: float = typer.Option(0.0, "--entropy-threshold", help="Minimum Shannon entropy (bits)."),
    max_attempts: int = typer.Option(10_000, "--max-attempts", help="Candidates tried per sequence."),
    seed: Optional[int] = typer.Option(None, "--seed", help="RNG seed."),
    data_dir: Path = typer.Option(Path("data"), "--data-dir", help="Corpus directory."),
    overwrite: bool = typer.Option(True, "--overwrite/--no-overwrite", help="Replace an existing corpus."),
    top: int = typer.Option(0, "--top", help="Also list the N most frequent motifs."),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Use progress bars."),
):
    try:
        cfg = build_config(
            {
                "mode": "generate",
                "corpus": corpus,
                "data_dir": str(data_dir),
                "motif_size": motif_size,
                "generate": {
                    "loops": loops,
                    "min_size": min_size,
                    "max_size": max_size,
                    "probabilities": list(probs),
                    "probability_mode": "weights" if weights else "cumulative",
                    "entropy_threshold": entropy_threshold,
                    "max_attempts": max_attempts,
                    "seed": seed,
                },
            }
        )
        _execute(cfg, top=top, progress=progress, overwrite=overwrite)
    except Exception as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=_exit_for(e))


@app.command(help="Count motifs in an existing corpus and report the dominant one.")
def analyze(
    corpus: str = typer.Option(..., "--corpus", "-n", help="Corpus name (read from <data-dir>/<name>.txt)."),
    motif_size: int = typer.Option(..., "--motif-size", "-k", help="Motif length k."),
    data_dir: Path = typer.Option(Path("data"), "--data-dir", help="Corpus directory."),
    top: int = typer.Option(0, "--top", help="Also list the N most frequent motifs."),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Use progress bars."),
):
    try:
        cfg = build_config({"mode": "read", "corpus": corpus, "data_dir": str(data_dir), "motif_size": motif_size})
        _execute(cfg, top=top, progress=progress, overwrite=False)
    except Exception as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=_exit_for(e))


# ───────────────────────────────────────────────────────────────────────────────
# CONFIG-DRIVEN
# ───────────────────────────────────────────────────────────────────────────────


@app.command(help="Run the session described by a YAML config.")
def run(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    top: int = typer.Option(0, "--top", help="Also list the N most frequent motifs."),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Use progress bars."),
    overwrite: bool = typer.Option(True, "--overwrite/--no-overwrite", help="Replace an existing corpus."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate and print summary, then exit."),
):
    try:
        loaded = load_config(_discover_config(config))
        cfg = loaded.root
        if not (ctx.obj or {}).get("log_level_explicit"):
            logging.getLogger().setLevel(cfg.logging.level)
        if dry_run:
            render_config_summary(cfg)
            console.print("[green]✔ Config validated (dry run).[/green]")
            raise typer.Exit(code=0)
        _execute(cfg, top=top, progress=progress, overwrite=overwrite)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=_exit_for(e))


@app.command("validate-config", help="Validate a YAML config (schema + sanity).")
def validate_config(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
):
    try:
        loaded = load_config(_discover_config(config))
    except Exception as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=_exit_for(e))
    render_config_summary(loaded.root)
    console.print(f"[green]✔ Config OK:[/green] {loaded.path}")


# ───────────────────────────────────────────────────────────────────────────────
# INTERACTIVE
# ───────────────────────────────────────────────────────────────────────────────


def _prompt_mode() -> str:
    while True:
        mode = typer.prompt("Generate new sequences or read from an existing file? (write (w)/read (r))")
        mode = mode.strip().lower()
        if mode in {"w", "write"}:
            return "generate"
        if mode in {"r", "read"}:
            return "read"
        console.print('[warn]Invalid option. Please choose "write (w)" or "read (r)".[/warn]')


def _prompt_probabilities() -> List[float]:
    while True:
        raw = typer.prompt("Cumulative thresholds for A, C, G, T (space separated)", default="0.25 0.5 0.75 1.0")
        try:
            values = [float(x) for x in raw.replace(",", " ").split()]
        except ValueError:
            values = []
        if len(values) == 4 and all(v >= 0 for v in values):
            return values
        console.print("[warn]Enter four non-negative numbers.[/warn]")


@app.command(help="Prompt for session settings, then run.")
def interactive(
    data_dir: Path = typer.Option(Path("data"), "--data-dir", help="Corpus directory."),
    top: int = typer.Option(0, "--top", help="Also list the N most frequent motifs."),
):
    mode = _prompt_mode()
    corpus = typer.prompt("Corpus name (without the extension)")
    data: Dict[str, Any] = {"mode": mode, "corpus": corpus, "data_dir": str(data_dir)}
    if mode == "generate":
        loops = typer.prompt("Number of sequences to generate", type=int)
        min_size = typer.prompt("Minimum sequence length", type=int)
        while True:
            max_size = typer.prompt("Maximum sequence length", type=int)
            if max_size > min_size:
                break
            console.print("[warn]The maximum length must be greater than the minimum length.[/warn]")
        probabilities = _prompt_probabilities()
        data["motif_size"] = typer.prompt("Motif size", type=int)
        entropy_threshold = typer.prompt("Entropy threshold", type=float, default=0.0)
        data["generate"] = {
            "loops": loops,
            "min_size": min_size,
            "max_size": max_size,
            "probabilities": probabilities,
            "entropy_threshold": entropy_threshold,
        }
    else:
        data["motif_size"] = typer.prompt("Motif size", type=int)
    try:
        cfg = build_config(data)
        _execute(cfg, top=top, progress=False, overwrite=True)
    except Exception as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=_exit_for(e))


def main() -> None:
    app()
