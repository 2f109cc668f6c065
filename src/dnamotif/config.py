"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/config.py

Strict session config schema for dnamotif (YAML root key: ``dnamotif``).

Example:
  dnamotif:
    mode: generate
    corpus: demo
    data_dir: data
    motif_size: 4
    generate:
      loops: 100
      min_size: 20
      max_size: 40
      probabilities: [0.25, 0.5, 0.75, 1.0]
      entropy_threshold: 1.8
      seed: 7

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .entropy import DEFAULT_MAX_ATTEMPTS
from .errors import ConfigError
from .sampler import ALPHABET, cumulative_from_weights

log = logging.getLogger(__name__)

MAX_ENTROPY = math.log2(len(ALPHABET))
_MODE_ALIASES = {"w": "generate", "write": "generate", "r": "read", "read-existing": "read"}


# ---- Strict YAML loader (duplicate keys fail) ----
class _StrictLoader(yaml.SafeLoader):
    pass


def _construct_mapping(loader, node, deep: bool = False):
    mapping: Dict[Any, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise KeyError(f"Duplicate key in YAML: {key!r}")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


_StrictLoader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping)


class GenerationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    loops: int = Field(..., ge=1)
    min_size: int = Field(..., ge=0)
    max_size: int
    probabilities: List[float]
    probability_mode: Literal["cumulative", "weights"] = "cumulative"
    entropy_threshold: float = 0.0
    max_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, ge=1)
    seed: Optional[int] = None

    @field_validator("probabilities")
    @classmethod
    def _probabilities_ok(cls, v: List[float]):
        if len(v) != len(ALPHABET):
            raise ValueError(f"generate.probabilities must have {len(ALPHABET)} values (A, C, G, T), got {len(v)}")
        if any(not math.isfinite(float(x)) for x in v):
            raise ValueError("generate.probabilities must be finite numbers")
        if any(float(x) < 0 for x in v):
            raise ValueError("generate.probabilities must be non-negative")
        return [float(x) for x in v]

    @model_validator(mode="after")
    def _sizes_and_vector(self):
        if self.max_size <= self.min_size:
            raise ValueError(
                f"generate.max_size must be greater than generate.min_size (got {self.min_size}..{self.max_size})"
            )
        if self.probability_mode == "weights" and sum(self.probabilities) <= 0:
            raise ValueError("generate.probabilities weights must not all be zero")
        return self

    @property
    def thresholds(self) -> tuple[float, ...]:
        """Cumulative thresholds fed to the sampler."""
        if self.probability_mode == "weights":
            return cumulative_from_weights(self.probabilities)
        return tuple(self.probabilities)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _level_ok(cls, v: str):
        lv = (v or "").upper()
        if lv not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {list(LOG_LEVELS)}")
        return lv


class SessionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: Literal["generate", "read"]
    corpus: str
    data_dir: str = "data"
    motif_size: int = Field(..., ge=1)
    generate: Optional[GenerationConfig] = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("mode", mode="before")
    @classmethod
    def _mode_alias(cls, v):
        if isinstance(v, str):
            key = v.strip().lower()
            return _MODE_ALIASES.get(key, key)
        return v

    @field_validator("corpus")
    @classmethod
    def _corpus_nonempty(cls, v: str):
        value = str(v).strip()
        if not value:
            raise ValueError("corpus must be a non-empty name")
        if "/" in value or "\\" in value:
            raise ValueError("corpus must be a name, not a path (use data_dir for the location)")
        return value

    @model_validator(mode="after")
    def _by_mode(self):
        if self.mode == "generate" and self.generate is None:
            raise ValueError("mode 'generate' requires a 'generate' block")
        return self


@dataclass(frozen=True)
class LoadedConfig:
    path: Optional[Path]
    root: SessionConfig


def _format_validation_error(e: ValidationError) -> str:
    lines = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        lines.append(f"{loc}: {err.get('msg')}")
    return "Invalid dnamotif config:\n  - " + "\n  - ".join(lines)


def _warn_unreachable(cfg: SessionConfig) -> None:
    gen = cfg.generate
    if cfg.mode != "generate" or gen is None:
        return
    if gen.entropy_threshold > MAX_ENTROPY:
        log.warning(
            "generate.entropy_threshold=%.3f exceeds log2(%d)=%.1f; every candidate will be rejected.",
            gen.entropy_threshold,
            len(ALPHABET),
            MAX_ENTROPY,
        )
    if gen.probability_mode == "cumulative":
        probs = gen.probabilities
        if any(b < a for a, b in zip(probs, probs[1:])):
            log.warning("generate.probabilities are not non-decreasing; thresholds are applied in A, C, G order.")


def build_config(data: Dict[str, Any]) -> SessionConfig:
    if not isinstance(data, dict):
        raise ConfigError("dnamotif config must be a mapping")
    try:
        cfg = SessionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_format_validation_error(e)) from e
    _warn_unreachable(cfg)
    return cfg


def load_config(path: str | os.PathLike) -> LoadedConfig:
    cfg_path = Path(os.path.expanduser(os.path.expandvars(str(path)))).resolve()
    if not cfg_path.exists():
        raise ConfigError(f"Config file not found: {cfg_path}")
    try:
        raw = yaml.load(cfg_path.read_text(), Loader=_StrictLoader)
    except (yaml.YAMLError, KeyError) as e:
        raise ConfigError(f"Could not parse {cfg_path}: {e}") from e
    if not isinstance(raw, dict) or "dnamotif" not in raw:
        raise ConfigError(f"{cfg_path} must contain a top-level 'dnamotif' mapping")
    extra = sorted(set(raw) - {"dnamotif"})
    if extra:
        raise ConfigError(f"Unknown top-level key(s) in {cfg_path}: {', '.join(map(str, extra))}")
    cfg = build_config(raw["dnamotif"])
    data_dir = Path(os.path.expanduser(cfg.data_dir))
    if not data_dir.is_absolute():
        cfg = cfg.model_copy(update={"data_dir": str((cfg_path.parent / data_dir).resolve())})
    return LoadedConfig(path=cfg_path, root=cfg)
