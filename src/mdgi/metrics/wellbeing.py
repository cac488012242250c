# src/mdgi/metrics/wellbeing.py
from __future__ import annotations
import numpy as np

from mdgi.errors import InvalidInput, InvalidParameter

def check_beta(beta: float) -> float:
    beta = float(beta)
    if not (0.0 < beta < 1.0):
        raise InvalidParameter(f"beta must satisfy 0 < beta < 1, got {beta}")
    return beta

def power_mean(values: np.ndarray, weights: np.ndarray, beta: float, strict: bool = True) -> np.ndarray:
    """
    Weighted power mean along the last axis: (sum_j w_j * x_j^beta)^(1/beta).

    Precondition: values >= 0 (a fractional power of a negative base is undefined).
    strict=False admits any beta > 0, e.g. to check the beta -> 1 arithmetic limit.
    """
    x = np.asarray(values, dtype=float)
    w = np.asarray(weights, dtype=float)
    if strict:
        beta = check_beta(beta)
    elif not beta > 0.0:
        raise InvalidParameter(f"beta must be > 0, got {beta}")
    if np.any(x < 0):
        raise InvalidInput("power mean is undefined for negative values")
    return np.power(np.sum(w * np.power(x, beta), axis=-1), 1.0 / beta)

def occasion_scores(tensor: np.ndarray, xn: np.ndarray, beta: float) -> tuple[np.ndarray, np.ndarray]:
    """
    Per-occasion well-being.
    Returns (scores (n, H), weig_mu (H,)) where weig_mu[h] applies the same
    power mean to the across-unit column means of occasion h.
    """
    X = np.asarray(tensor, dtype=float)
    n, m, H = X.shape
    sum_w = np.zeros((n, H))
    weig_mu = np.zeros(H)
    for h in range(H):
        sum_w[:, h] = power_mean(X[:, :, h], xn[:, h], beta)
        mucol = X[:, :, h].mean(axis=0)
        weig_mu[h] = power_mean(mucol, xn[:, h], beta)
    return sum_w, weig_mu

def time_aggregate(tensor: np.ndarray, time_weights: np.ndarray) -> np.ndarray:
    """Ac[i, j] = sum_h X[i, j, h] * c_h."""
    X = np.asarray(tensor, dtype=float)
    return X @ np.asarray(time_weights, dtype=float)

def global_scores(tensor: np.ndarray, xn_global: np.ndarray, time_weights: np.ndarray,
                  beta: float) -> tuple[np.ndarray, float]:
    """Well-being on the time-aggregated data: (scores_global (n,), weig_mu_global)."""
    Ac = time_aggregate(tensor, time_weights)
    scores = power_mean(Ac, xn_global, beta)
    weig_mu = float(power_mean(Ac.mean(axis=0), xn_global, beta))
    return scores, weig_mu
