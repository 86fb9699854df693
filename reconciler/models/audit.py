"""Audit and summary models for reconciliation runs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any
from uuid import uuid4

from .enums import AnomalyKind


@dataclass
class AuditEntry:
    """An excluded input recorded during reconciliation."""
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.utcnow)

    kind: AnomalyKind = AnomalyKind.MISSING_PROCESSED_RECORD

    # Details
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


@dataclass
class ReconciliationSummary:
    """Summary statistics of a reconciliation run."""
    # Counts
    processed_records: int = 0
    completed_ids: int = 0
    pending_records: int = 0
    matched_records: int = 0

    # Anomalies by kind value
    anomaly_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def unmatched_records(self) -> int:
        return self.pending_records - self.matched_records

    @property
    def total_anomalies(self) -> int:
        return sum(self.anomaly_counts.values())

    @property
    def match_rate(self) -> float:
        """Percentage of pending records matched."""
        if self.pending_records == 0:
            return 0.0
        return (self.matched_records / self.pending_records) * 100
