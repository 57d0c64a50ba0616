"""Analytic queueing results."""

from .theoretical import TheoreticalMetrics, calculate_mm1_metrics

__all__ = ["TheoreticalMetrics", "calculate_mm1_metrics"]
