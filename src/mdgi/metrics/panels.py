# src/mdgi/metrics/panels.py
from __future__ import annotations
from typing import Optional, Sequence
import numpy as np
import pandas as pd

from mdgi.metrics.inequality import rank_order

def _labels(labels: Optional[Sequence], size: int, what: str) -> list:
    if labels is None:
        return list(range(size))
    labels = list(labels)
    if len(labels) != size:
        raise ValueError(f"expected {size} {what} labels, got {len(labels)}")
    return labels

def scores_panel(result, unit_labels: Optional[Sequence] = None,
                 occasion_labels: Optional[Sequence] = None) -> pd.DataFrame:
    """
    Long panel with one row per (unit, occasion):
    columns [unit, occasion, score, gini_score, rank] where rank 1 is the best-off unit.
    """
    n, H = result.scores.shape
    units = _labels(unit_labels, n, "unit")
    occs = _labels(occasion_labels, H, "occasion")
    frames = []
    for h in range(H):
        s = result.scores[:, h]
        order = rank_order(s)
        rank = np.empty(n, dtype=int)
        rank[order] = np.arange(1, n + 1)
        frames.append(pd.DataFrame({
            "unit": units,
            "occasion": occs[h],
            "score": s,
            "gini_score": result.gini_scores[:, h],
            "rank": rank,
        }))
    return pd.concat(frames, ignore_index=True)

def weights_frame(result, variable_labels: Optional[Sequence] = None) -> pd.DataFrame:
    """Variable weights from the CP model and their normalized (sum-to-one) version."""
    m = result.weights_var.size
    return pd.DataFrame({
        "variable": _labels(variable_labels, m, "variable"),
        "weight": result.weights_var,
        "weight_normalized": result.xn_global,
    })

def yearly_frame(result, occasion_labels: Optional[Sequence] = None) -> pd.DataFrame:
    """One row per occasion: [occasion, time_weight, reference_mean, mdgi]."""
    H = result.mdgi_yearly.size
    return pd.DataFrame({
        "occasion": _labels(occasion_labels, H, "occasion"),
        "time_weight": result.weights_time,
        "reference_mean": result.reference_mean,
        "mdgi": result.mdgi_yearly,
    })
