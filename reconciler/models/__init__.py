"""Data models for the pending transaction reconciler."""

from .enums import AnomalyKind
from .transaction import (
    PendingTransaction,
    ProcessedTransaction,
)
from .audit import (
    AuditEntry,
    ReconciliationSummary,
)

__all__ = [
    # Enums
    "AnomalyKind",
    # Transactions
    "PendingTransaction",
    "ProcessedTransaction",
    # Audit
    "AuditEntry",
    "ReconciliationSummary",
]
