# src/mdgi/__init__.py
from .config import ALSParams, IndexParams, MDGIConfig, load_config, config_summary
from .errors import (
    MDGIError, InvalidInput, InvalidParameter, DecompositionFailure,
    DegenerateWeights, DegenerateReference,
)
from .pipeline import MDGIResult, compute_mdgi, compute_from_config
from .tensor import RankOneFactors, decompose_rank1

__version__ = "0.1.0"
