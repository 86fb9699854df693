"""
Audit logging for inputs excluded during reconciliation.
"""

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import structlog

from ..config import get_settings
from ..models import AnomalyKind, AuditEntry

logger = structlog.get_logger()


class AnomalyLogger:
    """
    Collects data-quality anomalies seen by a reconciler.

    Attaching one never changes what a reconciliation returns; it only
    makes the silently excluded inputs visible afterwards.
    """

    def __init__(self, run_id: str):
        self.run_id = run_id
        self.entries: List[AuditEntry] = []
        self.settings = get_settings()

    def record(self, kind: AnomalyKind, message: str, **details) -> AuditEntry:
        """Add an anomaly entry."""
        entry = AuditEntry(kind=kind, message=message, details=details)
        self.entries.append(entry)

        logger.debug(
            message,
            run_id=self.run_id,
            kind=kind.value,
            **details,
        )
        return entry

    def get_entries(self, kind: Optional[AnomalyKind] = None) -> List[AuditEntry]:
        """Get audit entries, optionally restricted to one kind."""
        if kind is None:
            return list(self.entries)
        return [e for e in self.entries if e.kind == kind]

    def clear(self) -> None:
        self.entries.clear()

    def export_to_file(self, output_path: Optional[Path] = None) -> Path:
        """Export anomaly log to JSON file."""
        if output_path is None:
            output_path = self.settings.reports_dir / f"anomalies_{self.run_id}.json"

        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "run_id": self.run_id,
            "exported_at": datetime.utcnow().isoformat(),
            "total_entries": len(self.entries),
            "entries": [e.to_dict() for e in self.entries],
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info("Anomaly log exported", path=str(output_path))
        return output_path

    def summary(self) -> dict:
        """Get summary statistics of anomaly log."""
        kind_counts = Counter(e.kind.value for e in self.entries)

        return {
            "total_entries": len(self.entries),
            "kind_counts": dict(kind_counts),
        }
