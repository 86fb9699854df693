"""Reconciliation engine components."""

from .engine import Reconciler, reconcile
from .parsing import parse_identifier, is_completed_status
from .sequences import safe_iter, flatten_groups

__all__ = [
    "Reconciler",
    "reconcile",
    "parse_identifier",
    "is_completed_status",
    "safe_iter",
    "flatten_groups",
]
