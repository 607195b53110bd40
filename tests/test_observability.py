# tests/test_observability.py
import json
import logging

from app.observability.logger import JSONFormatter
from app.observability.metrics import MetricsTracker


class TestJSONFormatter:
    """Structured log lines."""

    def _record(self, **extra):
        record = logging.LogRecord(
            name="app.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Document stored",
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_core_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "app.test"
        assert data["message"] == "Document stored"
        assert data["timestamp"].endswith("Z")

    def test_extra_fields_flattened(self):
        data = json.loads(JSONFormatter().format(self._record(doc_id="d1", pages=3)))

        assert data["doc_id"] == "d1"
        assert data["pages"] == 3

    def test_colliding_extra_is_prefixed(self):
        data = json.loads(JSONFormatter().format(self._record(level_hint="x", timestamp="mine")))

        assert data["extra_timestamp"] == "mine"


class TestMetricsTracker:
    """In-memory request metrics."""

    def test_counts(self):
        tracker = MetricsTracker()

        tracker.record_success(0.5)
        tracker.record_success(1.5)
        tracker.record_failure()

        metrics = tracker.get_metrics()

        assert metrics["total_requests"] == 3
        assert metrics["successful_requests"] == 2
        assert metrics["failed_requests"] == 1
        assert metrics["avg_latency"] == 1.0

    def test_percentile(self):
        tracker = MetricsTracker()

        for i in range(1, 101):
            tracker.record_success(float(i))

        assert tracker.get_latency_percentile(95) == 96.0
        assert tracker.get_latency_percentile(100) == 100.0

    def test_empty_percentile(self):
        assert MetricsTracker().get_latency_percentile(95) == 0.0

    def test_reset(self):
        tracker = MetricsTracker()
        tracker.record_failure()

        tracker.reset()

        assert tracker.get_metrics()["total_requests"] == 0
