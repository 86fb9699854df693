"""Enumerations for the pending transaction reconciler."""

from enum import Enum


class AnomalyKind(str, Enum):
    """
    Data-quality anomaly that caused an input to be excluded.

    None of these are errors: every anomaly is handled by leaving the
    offending item out of the reconciliation.
    """
    MISSING_PENDING_RECORD = "missing_pending_record"
    MISSING_GROUP = "missing_group"
    MISSING_PROCESSED_RECORD = "missing_processed_record"
    MISSING_STATUS = "missing_status"
    STATUS_NOT_COMPLETED = "status_not_completed"
    MISSING_IDENTIFIER = "missing_identifier"
    INVALID_IDENTIFIER = "invalid_identifier"
