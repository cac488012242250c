# src/mdgi/tensor/__init__.py
from .decomposition import RankOneFactors, decompose_rank1, validate_tensor
