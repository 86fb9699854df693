"""Utility modules."""

from .anomaly_logger import AnomalyLogger

__all__ = ["AnomalyLogger"]
