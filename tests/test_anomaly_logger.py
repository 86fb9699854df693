"""
Tests for anomaly recording during reconciliation.
"""

import json

import pytest

from reconciler.config import get_settings
from reconciler.models import AnomalyKind, PendingTransaction, ProcessedTransaction
from reconciler.reconciliation.engine import Reconciler, reconcile
from reconciler.utils.anomaly_logger import AnomalyLogger


@pytest.fixture
def anomaly_logger():
    return AnomalyLogger(run_id="test-run")


@pytest.fixture
def messy_input():
    """Pending and processed data with one of every anomaly."""
    pending = [PendingTransaction(1), None, PendingTransaction(2), PendingTransaction(3)]
    processed = [
        None,
        [None, ProcessedTransaction("1", "DONE")],
        [ProcessedTransaction("2", None)],
        [ProcessedTransaction("3", "PENDING")],
        [ProcessedTransaction(None, "DONE"), ProcessedTransaction("x9", "done")],
    ]
    return pending, processed


class TestAnomalyLogger:
    """Test suite for the anomaly audit trail."""

    def test_records_every_kind(self, anomaly_logger, messy_input):
        reconciler = Reconciler(anomaly_logger=anomaly_logger)
        pending, processed = messy_input

        list(reconciler.reconcile(pending, processed))

        kinds = [e.kind for e in anomaly_logger.entries]
        assert kinds == [
            AnomalyKind.MISSING_GROUP,
            AnomalyKind.MISSING_PROCESSED_RECORD,
            AnomalyKind.MISSING_STATUS,
            AnomalyKind.STATUS_NOT_COMPLETED,
            AnomalyKind.MISSING_IDENTIFIER,
            AnomalyKind.INVALID_IDENTIFIER,
            AnomalyKind.MISSING_PENDING_RECORD,
        ]

    def test_hook_does_not_change_output(self, anomaly_logger, messy_input):
        pending, processed = messy_input

        silent = [t.id for t in Reconciler().reconcile(pending, processed)]
        audited = [
            t.id
            for t in Reconciler(anomaly_logger=anomaly_logger).reconcile(pending, processed)
        ]

        assert silent == audited == [1]

    def test_entry_details(self, anomaly_logger):
        reconciler = Reconciler(anomaly_logger=anomaly_logger)

        reconciler.completed_ids([[ProcessedTransaction("INVALID", "DONE")]])

        entries = anomaly_logger.get_entries(AnomalyKind.INVALID_IDENTIFIER)
        assert len(entries) == 1
        assert entries[0].details == {"processed_id": "INVALID"}

    def test_get_entries_unfiltered_returns_copy(self, anomaly_logger):
        anomaly_logger.record(AnomalyKind.MISSING_GROUP, "gone", group=0)

        entries = anomaly_logger.get_entries()
        entries.clear()

        assert len(anomaly_logger.entries) == 1

    def test_summary(self, anomaly_logger, messy_input):
        pending, processed = messy_input
        Reconciler(anomaly_logger=anomaly_logger).completed_ids(processed)

        summary = anomaly_logger.summary()

        assert summary["total_entries"] == 6
        assert summary["kind_counts"]["missing_group"] == 1
        assert summary["kind_counts"]["invalid_identifier"] == 1

    def test_summarize_reports_anomalies(self, anomaly_logger, messy_input):
        pending, processed = messy_input
        reconciler = Reconciler(anomaly_logger=anomaly_logger)

        matched, summary = reconciler.summarize(pending, processed)

        assert [t.id for t in matched] == [1]
        assert summary.total_anomalies == 7
        assert summary.anomaly_counts["missing_pending_record"] == 1

    def test_export_to_file(self, anomaly_logger, tmp_path):
        anomaly_logger.record(AnomalyKind.MISSING_STATUS, "no status", processed_id="5")
        output = tmp_path / "nested" / "anomalies.json"

        path = anomaly_logger.export_to_file(output)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert path == output
        assert data["run_id"] == "test-run"
        assert data["total_entries"] == 1
        assert data["entries"][0]["kind"] == "missing_status"
        assert data["entries"][0]["details"] == {"processed_id": "5"}

    def test_clear(self, anomaly_logger):
        anomaly_logger.record(AnomalyKind.MISSING_GROUP, "gone", group=0)
        anomaly_logger.clear()

        assert anomaly_logger.entries == []


class TestLoggerOwnership:
    """Anomalies live in the caller's logger, never in the reconciler."""

    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_no_logger_created_from_environment(self, monkeypatch):
        monkeypatch.setenv("RECORD_ANOMALIES", "true")

        assert Reconciler().anomaly_logger is None

    def test_module_function_records_to_given_logger(self, anomaly_logger):
        result = reconcile(
            [PendingTransaction(1)],
            [None, [ProcessedTransaction("1", "DONE")]],
            anomaly_logger=anomaly_logger,
        )

        assert [t.id for t in result] == [1]
        assert [e.kind for e in anomaly_logger.entries] == [AnomalyKind.MISSING_GROUP]

    def test_separate_loggers_per_call(self):
        reconciler_input = ([PendingTransaction(1)], [[ProcessedTransaction("x", "DONE")]])
        first = AnomalyLogger(run_id="first")
        second = AnomalyLogger(run_id="second")

        list(Reconciler(anomaly_logger=first).reconcile(*reconciler_input))
        list(Reconciler(anomaly_logger=second).reconcile(*reconciler_input))

        assert len(first.entries) == 1
        assert len(second.entries) == 1
