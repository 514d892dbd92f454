# Application Stats Package
from .metrics_calculator import CardMetrics, MetricsCalculator

__all__ = ["MetricsCalculator", "CardMetrics"]
