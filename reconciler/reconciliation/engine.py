"""
Reconciler - filters pending transactions down to those confirmed as done.

Two phases:
1. Build the set of identifiers reported as completed by processed records
2. Keep the pending transactions whose identifier is in that set

Malformed upstream data never fails a run. Missing containers, missing
records, missing or non-numeric identifiers and non-completed statuses
are all excluded silently; an optional AnomalyLogger makes them visible.
"""

from typing import Callable, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

import structlog

from ..config import get_settings
from ..models import (
    AnomalyKind,
    PendingTransaction,
    ProcessedTransaction,
    ReconciliationSummary,
)
from ..utils.anomaly_logger import AnomalyLogger
from .parsing import is_completed_status, parse_identifier
from .sequences import flatten_groups, safe_iter

logger = structlog.get_logger()

PendingInput = Optional[Iterable[Optional[PendingTransaction]]]
ProcessedInput = Optional[Iterable[Optional[Iterable[Optional[ProcessedTransaction]]]]]


class Reconciler:
    """
    Stateless reconciler of pending against processed transactions.

    Instances only hold configuration and an optional anomaly logger
    supplied by the caller, so one instance can serve any number of
    independent calls. Recorded anomalies belong to that logger.
    """

    def __init__(
        self,
        anomaly_logger: Optional[AnomalyLogger] = None,
        completed_status: Optional[str] = None,
    ):
        self.settings = get_settings()
        self.completed_status = completed_status or self.settings.completed_status
        self.anomaly_logger = anomaly_logger

    def reconcile(
        self,
        pending: PendingInput,
        processed_groups: ProcessedInput,
    ) -> Iterator[PendingTransaction]:
        """
        Return the pending transactions that have a completed counterpart.

        The completed-identifier set is built before this returns; the
        pending input is consumed lazily as the result is iterated.

        Args:
            pending: Pending transactions, or None
            processed_groups: Groups of processed transactions, or None

        Returns:
            Iterator over matching pending transactions, in input order
        """
        completed = self.completed_ids(processed_groups)
        return self._filter_pending(pending, completed)

    def completed_ids(self, processed_groups: ProcessedInput) -> FrozenSet[int]:
        """Identifiers of all processed records that denote completed work."""
        ids, seen = self._collect_completed(processed_groups)
        logger.debug(
            "Completed identifiers collected",
            processed_records=seen,
            completed_ids=len(ids),
        )
        return ids

    def summarize(
        self,
        pending: PendingInput,
        processed_groups: ProcessedInput,
    ) -> Tuple[List[PendingTransaction], ReconciliationSummary]:
        """
        Materialize a reconciliation and report counts alongside it.

        Anomaly counts are only populated when an anomaly logger is attached.
        """
        before = len(self.anomaly_logger.entries) if self.anomaly_logger else 0

        completed, processed_count = self._collect_completed(processed_groups)

        seen_pending: List[PendingTransaction] = []
        matched = list(self._filter_pending(pending, completed, on_pending=seen_pending.append))

        anomaly_counts = {}
        if self.anomaly_logger is not None:
            for entry in self.anomaly_logger.entries[before:]:
                anomaly_counts[entry.kind.value] = anomaly_counts.get(entry.kind.value, 0) + 1

        summary = ReconciliationSummary(
            processed_records=processed_count,
            completed_ids=len(completed),
            pending_records=len(seen_pending),
            matched_records=len(matched),
            anomaly_counts=anomaly_counts,
        )

        logger.info(
            "Reconciliation summarized",
            pending=summary.pending_records,
            matched=summary.matched_records,
            completed_ids=summary.completed_ids,
            anomalies=summary.total_anomalies,
        )
        return matched, summary

    def _collect_completed(
        self,
        processed_groups: ProcessedInput,
    ) -> Tuple[FrozenSet[int], int]:
        """Build the completed-identifier set and count processed records seen."""
        if processed_groups is None:
            return frozenset(), 0

        ids: Set[int] = set()
        seen = 0

        records = flatten_groups(
            processed_groups,
            on_missing_group=lambda position: self._record(
                AnomalyKind.MISSING_GROUP,
                "Skipped missing processed group",
                group=position,
            ),
        )

        for record in records:
            if record is None:
                self._record(
                    AnomalyKind.MISSING_PROCESSED_RECORD,
                    "Skipped missing processed record",
                )
                continue
            seen += 1

            identifier = self._completed_identifier(record)
            if identifier is not None:
                ids.add(identifier)

        return frozenset(ids), seen

    def _completed_identifier(self, record: ProcessedTransaction) -> Optional[int]:
        """Numeric identifier of a completed record, or None if it doesn't count."""
        if not record.has_status:
            self._record(
                AnomalyKind.MISSING_STATUS,
                "Processed record has no status",
                processed_id=record.id,
            )
            return None

        if not is_completed_status(record.status, self.completed_status):
            self._record(
                AnomalyKind.STATUS_NOT_COMPLETED,
                "Processed record is not completed",
                processed_id=record.id,
                status=record.status,
            )
            return None

        if not record.id:
            self._record(
                AnomalyKind.MISSING_IDENTIFIER,
                "Completed record has no identifier",
                status=record.status,
            )
            return None

        identifier = parse_identifier(record.id)
        if identifier is None:
            self._record(
                AnomalyKind.INVALID_IDENTIFIER,
                "Completed record identifier is not a valid integer",
                processed_id=record.id,
            )
        return identifier

    def _filter_pending(
        self,
        pending: PendingInput,
        completed: FrozenSet[int],
        on_pending: Optional[Callable[[PendingTransaction], None]] = None,
    ) -> Iterator[PendingTransaction]:
        for position, transaction in enumerate(safe_iter(pending)):
            if transaction is None:
                self._record(
                    AnomalyKind.MISSING_PENDING_RECORD,
                    "Skipped missing pending record",
                    position=position,
                )
                continue
            if on_pending is not None:
                on_pending(transaction)
            if transaction.id in completed:
                yield transaction

    def _record(self, kind: AnomalyKind, message: str, **details) -> None:
        if self.anomaly_logger is not None:
            self.anomaly_logger.record(kind, message, **details)


def reconcile(
    pending: PendingInput,
    processed_groups: ProcessedInput,
    anomaly_logger: Optional[AnomalyLogger] = None,
) -> Iterator[PendingTransaction]:
    """Reconcile with a default Reconciler, optionally recording anomalies."""
    return Reconciler(anomaly_logger=anomaly_logger).reconcile(pending, processed_groups)
