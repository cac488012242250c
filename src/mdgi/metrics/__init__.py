# src/mdgi/metrics/__init__.py
# (intentional: expose small convenience surface)
from .inequality import mdgi, rank_order, rank_weights, gini_contributions
from .weights import normalize_weights
from .wellbeing import power_mean, occasion_scores, global_scores, time_aggregate
from .panels import scores_panel, weights_frame, yearly_frame
