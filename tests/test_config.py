import pytest
from pydantic import ValidationError
from mdgi.config import ALSParams, IndexParams, MDGIConfig, load_config, config_summary

def test_defaults():
    cfg = MDGIConfig()
    assert cfg.index.delta == 2.0 and cfg.index.beta == 0.005
    assert cfg.als.nstart == 100 and cfg.als.seed == 42

def test_bounds_are_validated():
    with pytest.raises(ValidationError):
        IndexParams(beta=1.0)
    with pytest.raises(ValidationError):
        IndexParams(delta=0.0)
    with pytest.raises(ValidationError):
        ALSParams(nstart=0)
    with pytest.raises(ValidationError):
        ALSParams(seed=-3)

def test_load_config_merges_over_base(tmp_path):
    (tmp_path / "base.yaml").write_text("index:\n  delta: 2.0\n  beta: 0.005\nals:\n  nstart: 50\n  seed: 1\n")
    (tmp_path / "run.yaml").write_text("index:\n  delta: 1.5\nals:\n  n_jobs: 2\n")
    cfg = load_config(tmp_path / "run.yaml")
    assert cfg.index.delta == 1.5
    assert cfg.index.beta == 0.005
    assert cfg.als.nstart == 50 and cfg.als.n_jobs == 2 and cfg.als.seed == 1
    assert "delta=1.5" in config_summary(cfg)

def test_load_config_without_base(tmp_path):
    (tmp_path / "only.yaml").write_text("als:\n  nstart: 3\n")
    cfg = load_config(tmp_path / "only.yaml")
    assert cfg.als.nstart == 3 and cfg.index.delta == 2.0

def test_shipped_base_config_matches_defaults():
    from pathlib import Path
    cfg = load_config(Path(__file__).resolve().parents[1] / "configs" / "base.yaml")
    assert cfg == MDGIConfig()

def test_unknown_keys_are_rejected(tmp_path):
    with pytest.raises(ValidationError):
        ALSParams(nstrat=50)
    with pytest.raises(ValidationError):
        IndexParams(detla=1.5)
    (tmp_path / "typo.yaml").write_text("index:\n  delta: 1.5\nalss:\n  nstart: 3\n")
    with pytest.raises(ValidationError):
        load_config(tmp_path / "typo.yaml")
