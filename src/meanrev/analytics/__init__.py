"""Portfolio analytics -- capital progress toward a goal."""

from meanrev.analytics.progress import calculate_progress, log2

__all__ = ["calculate_progress", "log2"]
