"""In-process counters for gateway traffic (per process, not aggregated)."""

from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import Dict, Optional


class MetricsRecorder:
    def __init__(self, max_durations: int = 100) -> None:
        self._lock = Lock()
        self._max_durations = max_durations
        self._requests = 0
        self._rate_limited = 0
        self._internal_errors = 0
        self._request_durations_ms: Dict[str, float] = {}
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._tool_rejected: Counter[str] = Counter()
        self._fault_codes: Counter[str] = Counter()

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        with self._lock:
            self._request_durations_ms[request_id] = duration_ms
            # Keep only the most recent entries.
            while len(self._request_durations_ms) > self._max_durations:
                oldest = next(iter(self._request_durations_ms))
                del self._request_durations_ms[oldest]

    def incr_rate_limited(self) -> None:
        with self._lock:
            self._rate_limited += 1

    def incr_internal_error(self) -> None:
        with self._lock:
            self._internal_errors += 1

    def record_tool(self, tool: str, *, success: bool, code: Optional[str] = None) -> None:
        """Count an executed tool call; ``code`` is the application fault code on failure."""
        with self._lock:
            if success:
                self._tool_success[tool] += 1
                return
            self._tool_error[tool] += 1
            if code:
                self._fault_codes[code] += 1

    def record_rejected(self, tool: str) -> None:
        """Count a call refused before execution (unknown tool or bad arguments)."""
        with self._lock:
            self._tool_rejected[tool] += 1

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "requests": self._requests,
                "rate_limited": self._rate_limited,
                "internal_errors": self._internal_errors,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "tool_rejected": dict(self._tool_rejected),
                "fault_codes": dict(self._fault_codes),
                "recent_request_durations_ms": dict(self._request_durations_ms),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._rate_limited = 0
            self._internal_errors = 0
            self._request_durations_ms.clear()
            self._tool_success.clear()
            self._tool_error.clear()
            self._tool_rejected.clear()
            self._fault_codes.clear()


default_metrics = MetricsRecorder()
