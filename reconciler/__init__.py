"""Reconciliation of pending transactions against processed outcomes."""

from .models import PendingTransaction, ProcessedTransaction
from .reconciliation import Reconciler, reconcile

__all__ = [
    "PendingTransaction",
    "ProcessedTransaction",
    "Reconciler",
    "reconcile",
]

__version__ = "1.0.0"
