"""Funding-rate mean-reversion signal core.

Pure, synchronous building blocks (statistics, z-score, trend reversal,
confirmations, classification, edge estimation) and the SignalEngine that
chains them into an AnalysisResult per symbol.
"""

from meanrev.signals.classifier import classify_signal, mirror_signal
from meanrev.signals.confirmations import is_near_extreme, score_confirmations
from meanrev.signals.edge import compute_edge_score, estimate_win_probability
from meanrev.signals.engine import SignalEngine, order_samples
from meanrev.signals.statistics import compute_stats
from meanrev.signals.trend import compute_funding_trend, detect_reversal, is_funding_reversing
from meanrev.signals.zscore import compute_zscore, zscore_from_stats

__all__ = [
    "SignalEngine",
    "classify_signal",
    "compute_edge_score",
    "compute_funding_trend",
    "compute_stats",
    "compute_zscore",
    "detect_reversal",
    "estimate_win_probability",
    "is_funding_reversing",
    "is_near_extreme",
    "mirror_signal",
    "order_samples",
    "score_confirmations",
    "zscore_from_stats",
]
