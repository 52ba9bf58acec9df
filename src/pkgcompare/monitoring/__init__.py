"""Batch monitoring and metrics collection."""

from .metrics import BatchMetrics, MetricsCollector, StageTimer

__all__ = ["BatchMetrics", "MetricsCollector", "StageTimer"]
