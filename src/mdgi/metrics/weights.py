# src/mdgi/metrics/weights.py
from __future__ import annotations
import numpy as np

from mdgi.errors import DegenerateWeights

def normalize_weights(var_weights: np.ndarray, time_weights: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Per-occasion and global variable weights that sum to one.

        xn[j, h]     = b_j * c_h / sum_j (b_j * c_h)     shape (m, H)
        xn_global[j] = b_j / sum_j b_j                   shape (m,)

    c_h cancels inside each column, so every column of xn equals xn_global.
    It is still built column by column and returned with the (m, H) shape.
    """
    b = np.asarray(var_weights, dtype=float).ravel()
    c = np.asarray(time_weights, dtype=float).ravel()

    total = float(np.sum(b))
    if total == 0.0:
        raise DegenerateWeights("variable weights sum to zero")

    X_3w = b[:, None] * c[None, :]
    col = X_3w.sum(axis=0)
    zero = np.flatnonzero(col == 0.0)
    if zero.size:
        raise DegenerateWeights(
            f"variable weights sum to zero on occasion(s) {zero.tolist()} (time weight is zero)"
        )
    xn = X_3w / col[None, :]
    xn_global = b / total
    return xn, xn_global
