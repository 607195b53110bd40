import threading
from collections import deque
from typing import Dict


# Bounded so a long-running process does not grow without limit
_MAX_LATENCY_SAMPLES = 10000


class MetricsTracker:
    """
    In-memory request counters, reset on restart.
    """

    def __init__(self, max_samples: int = _MAX_LATENCY_SAMPLES):

        self._lock = threading.Lock()
        self._max_samples = max_samples
        self.reset()

    def reset(self):

        with self._lock:

            self._total_requests = 0
            self._successful_requests = 0
            self._failed_requests = 0
            self._total_latency = 0.0
            self._latencies = deque(maxlen=self._max_samples)

    def record_success(self, latency: float):

        with self._lock:

            self._total_requests += 1
            self._successful_requests += 1
            self._total_latency += latency
            self._latencies.append(latency)

    def record_failure(self):

        with self._lock:

            self._total_requests += 1
            self._failed_requests += 1

    def get_latency_percentile(self, percentile: float) -> float:

        with self._lock:
            latencies = sorted(self._latencies)

        if not latencies:
            return 0.0

        index = int(len(latencies) * percentile / 100)

        index = min(index, len(latencies) - 1)

        return latencies[index]

    def get_metrics(self) -> Dict:

        with self._lock:

            avg_latency = (
                self._total_latency / self._successful_requests
                if self._successful_requests
                else 0.0
            )

            snapshot = {
                "total_requests": self._total_requests,
                "successful_requests": self._successful_requests,
                "failed_requests": self._failed_requests,
                "avg_latency": round(avg_latency, 4),
            }

        snapshot["p95_latency"] = round(self.get_latency_percentile(95), 4)

        return snapshot


metrics_tracker = MetricsTracker()
