# src/mdgi/metrics/inequality.py
from __future__ import annotations
import numpy as np

from mdgi.errors import DegenerateReference, InvalidParameter

def check_delta(delta: float) -> float:
    delta = float(delta)
    if not delta > 0.0:
        raise InvalidParameter(f"delta must be > 0, got {delta}")
    return delta

def rank_order(scores: np.ndarray) -> np.ndarray:
    """Unit indices by descending score; equal scores keep their original order."""
    s = np.asarray(scores, dtype=float).ravel()
    return np.argsort(-s, kind="stable")

def rank_weights(n: int, delta: float) -> np.ndarray:
    """
    w_k = (k/n)^delta - ((k-1)/n)^delta for rank positions k = 1..n.
    Sums to 1; flat for delta=1, and for delta>1 it grows with k, i.e. the
    lowest-ranked units weigh most.
    """
    delta = check_delta(delta)
    k = np.arange(1, n + 1, dtype=float)
    return (k / n) ** delta - ((k - 1) / n) ** delta

def _check_reference(weig_mu: float, where: str) -> float:
    weig_mu = float(weig_mu)
    if weig_mu == 0.0:
        raise DegenerateReference(f"reference mean well-being is zero ({where})")
    return weig_mu

def mdgi(scores: np.ndarray, weig_mu: float, delta: float, where: str = "global") -> float:
    """
    Rank-dependent Gini-type index:
        MDGI = 1 - sum_k w_k * score[rank[k]] / weig_mu
    with ranks by descending score and w_k from rank_weights.
    """
    s = np.asarray(scores, dtype=float).ravel()
    weig_mu = _check_reference(weig_mu, where)
    wind = rank_order(s)
    w = rank_weights(s.size, delta)
    return float(1.0 - np.sum(w * s[wind]) / weig_mu)

def gini_contributions(scores: np.ndarray, weig_mu: float, where: str = "global") -> np.ndarray:
    """eta_i = score_i / weig_mu (1.0 for a unit exactly at the reference mean)."""
    weig_mu = _check_reference(weig_mu, where)
    return np.asarray(scores, dtype=float) / weig_mu
