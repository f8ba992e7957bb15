"""Posture indicators computed from store state."""

from src.monitor.metrics import (
    MetricsEngine,
    compute_metrics,
    percentage,
    round_half_up,
    security_score,
)

__all__ = [
    "MetricsEngine",
    "compute_metrics",
    "percentage",
    "round_half_up",
    "security_score",
]
