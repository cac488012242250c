# src/mdgi/config.py
from __future__ import annotations
from pathlib import Path
from typing import Optional
import os
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------- Typed configuration (validated) ----------

class IndexParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    delta: float = Field(2.0, gt=0.0, description="Rank-weighting exponent; recommended [1, 2]")
    beta: float = Field(0.005, gt=0.0, lt=1.0, description="Power-mean exponent (substitutability)")

class ALSParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nstart: int = Field(100, ge=1, description="Independent random restarts")
    tol: float = Field(1e-6, gt=0.0, description="Relative SSE decrease that stops a restart")
    max_iter: int = Field(500, ge=1, description="Sweep cap per restart")
    seed: Optional[int] = 42
    n_jobs: int = Field(1, ge=1, description="Worker threads for the restarts")
    progress: bool = False

    @field_validator("seed")
    @classmethod
    def _seed_nonnegative(cls, v):
        if v is not None and v < 0:
            raise ValueError("seed must be >= 0")
        return v

class MDGIConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index: IndexParams = IndexParams()
    als: ALSParams = ALSParams()

# ---------- Loading & merging ----------

def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def load_config(config_path: os.PathLike | str) -> MDGIConfig:
    """
    Load base.yaml (if present next to the file) and merge the given YAML over it.
    Returns a validated MDGIConfig.
    """
    config_path = Path(config_path)
    base_path = config_path.resolve().parent / "base.yaml"
    base: dict = {}
    if base_path.exists() and base_path.resolve() != config_path.resolve():
        with base_path.open("r") as f:
            base = yaml.safe_load(f) or {}
    with config_path.open("r") as f:
        over = yaml.safe_load(f) or {}
    merged = _deep_merge(base, over)
    return MDGIConfig.model_validate(merged)

# ---------- Convenience helpers ----------

def config_summary(cfg: MDGIConfig) -> str:
    seed = "random" if cfg.als.seed is None else cfg.als.seed
    return (
        f"[MDGI] delta={cfg.index.delta}, beta={cfg.index.beta} | "
        f"ALS(nstart={cfg.als.nstart}, tol={cfg.als.tol:g}, max_iter={cfg.als.max_iter}, "
        f"seed={seed}, n_jobs={cfg.als.n_jobs})"
    )
