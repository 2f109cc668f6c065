"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/tests/test_cli.py

CLI command and exit-code tests for dnamotif.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import textwrap
from pathlib import Path

from typer.testing import CliRunner

from dnamotif.cli import app

runner = CliRunner()


def _generate_args(tmp_path: Path, *extra: str) -> list[str]:
    return [
        "generate",
        "--corpus",
        "demo",
        "--data-dir",
        str(tmp_path),
        "--loops",
        "12",
        "--min-size",
        "10",
        "--max-size",
        "20",
        "--probs",
        "0.25",
        "0.5",
        "0.75",
        "1.0",
        "--motif-size",
        "3",
        "--entropy-threshold",
        "1.0",
        "--seed",
        "9",
        "--no-progress",
        *extra,
    ]


def test_generate_writes_corpus_and_reports(tmp_path: Path) -> None:
    result = runner.invoke(app, _generate_args(tmp_path))
    assert result.exit_code == 0, result.output
    lines = (tmp_path / "demo.txt").read_text().splitlines()
    assert len(lines) == 12
    assert all(10 <= len(line) < 20 for line in lines)
    assert "highest number of occurrences" in result.output


def test_generate_then_analyze_same_corpus(tmp_path: Path) -> None:
    assert runner.invoke(app, _generate_args(tmp_path)).exit_code == 0
    result = runner.invoke(
        app,
        ["analyze", "--corpus", "demo", "--data-dir", str(tmp_path), "-k", "3", "--no-progress", "--top", "3"],
    )
    assert result.exit_code == 0, result.output
    assert "Top 3 motif(s)" in result.output


def test_analyze_reports_tie_broken_motif(tmp_path: Path, sample_corpus: Path) -> None:
    result = runner.invoke(
        app, ["analyze", "--corpus", "tie", "--data-dir", str(tmp_path), "--motif-size", "4", "--no-progress"]
    )
    assert result.exit_code == 0, result.output
    assert "AATT" in result.output
    assert "ACGT" not in result.output


def test_analyze_reports_no_motif_when_k_too_large(tmp_path: Path, sample_corpus: Path) -> None:
    result = runner.invoke(
        app, ["analyze", "--corpus", "tie", "--data-dir", str(tmp_path), "--motif-size", "9", "--no-progress"]
    )
    assert result.exit_code == 0, result.output
    assert "no motif found" in result.output


def test_missing_corpus_exit_code(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["analyze", "--corpus", "nope", "--data-dir", str(tmp_path), "--motif-size", "3", "--no-progress"]
    )
    assert result.exit_code == 5


def test_invalid_corpus_symbols_exit_code(tmp_path: Path) -> None:
    (tmp_path / "bad.txt").write_text("ACGU\n")
    result = runner.invoke(
        app, ["analyze", "--corpus", "bad", "--data-dir", str(tmp_path), "--motif-size", "2", "--no-progress"]
    )
    assert result.exit_code == 4


def test_undecodable_corpus_exit_code(tmp_path: Path) -> None:
    (tmp_path / "bin.txt").write_bytes(b"AC\xffGT\n")
    result = runner.invoke(
        app, ["analyze", "--corpus", "bin", "--data-dir", str(tmp_path), "--motif-size", "2", "--no-progress"]
    )
    assert result.exit_code == 4


def test_invalid_log_level_exit_code(tmp_path: Path, sample_corpus: Path) -> None:
    result = runner.invoke(
        app,
        ["--log-level", "NOPE", "analyze", "--corpus", "tie", "--data-dir", str(tmp_path), "--motif-size", "2"],
    )
    assert result.exit_code == 2
    assert "Invalid log level" in result.output


def test_log_level_is_case_insensitive(tmp_path: Path, sample_corpus: Path) -> None:
    result = runner.invoke(
        app,
        ["--log-level", "debug", "analyze", "--corpus", "tie", "--data-dir", str(tmp_path), "--motif-size", "2"],
        catch_exceptions=False,
    )
    assert result.exit_code == 0, result.output


def test_invalid_sizes_exit_code(tmp_path: Path) -> None:
    args = _generate_args(tmp_path)
    args[args.index("--max-size") + 1] = "10"
    result = runner.invoke(app, args)
    assert result.exit_code == 2
    assert not (tmp_path / "demo.txt").exists()


def test_unreachable_threshold_exit_code(tmp_path: Path) -> None:
    args = _generate_args(tmp_path, "--max-attempts", "20")
    args[args.index("--entropy-threshold") + 1] = "2.5"
    result = runner.invoke(app, args)
    assert result.exit_code == 3


def _write_config(tmp_path: Path, mode: str = "generate") -> Path:
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        textwrap.dedent(
            f"""
            dnamotif:
              mode: {mode}
              corpus: cfgrun
              data_dir: out
              motif_size: 2
              generate:
                loops: 5
                min_size: 6
                max_size: 9
                probabilities: [1, 1, 1, 1]
                probability_mode: weights
                seed: 3
            """
        )
    )
    return cfg_path


def test_run_from_config(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path)
    result = runner.invoke(app, ["run", "--config", str(cfg_path), "--no-progress"])
    assert result.exit_code == 0, result.output
    assert len((tmp_path / "out" / "cfgrun.txt").read_text().splitlines()) == 5

    cfg_path = _write_config(tmp_path, mode="read")
    result = runner.invoke(app, ["run", "-c", str(cfg_path), "--no-progress"])
    assert result.exit_code == 0, result.output


def test_run_dry_run_writes_nothing(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path)
    result = runner.invoke(app, ["run", "--config", str(cfg_path), "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "dry run" in result.output
    assert not (tmp_path / "out").exists()


def test_validate_config(tmp_path: Path) -> None:
    cfg_path = _write_config(tmp_path)
    result = runner.invoke(app, ["validate-config", "--config", str(cfg_path)])
    assert result.exit_code == 0, result.output
    assert "Config OK" in result.output

    cfg_path.write_text("dnamotif:\n  mode: generate\n  corpus: x\n  motif_size: 2\n")
    result = runner.invoke(app, ["validate-config", "--config", str(cfg_path)])
    assert result.exit_code == 2


def test_interactive_generate_reprompts_for_max(tmp_path: Path) -> None:
    answers = "\n".join(["x", "w", "wiz", "6", "10", "8", "14", "", "3", "0"]) + "\n"
    result = runner.invoke(app, ["interactive", "--data-dir", str(tmp_path)], input=answers)
    assert result.exit_code == 0, result.output
    assert "Invalid option" in result.output
    assert "must be greater than the minimum" in result.output
    lines = (tmp_path / "wiz.txt").read_text().splitlines()
    assert len(lines) == 6
    assert all(10 <= len(line) < 14 for line in lines)


def test_interactive_read(tmp_path: Path, sample_corpus: Path) -> None:
    result = runner.invoke(app, ["interactive", "--data-dir", str(tmp_path)], input="r\ntie\n4\n")
    assert result.exit_code == 0, result.output
    assert "AATT" in result.output
