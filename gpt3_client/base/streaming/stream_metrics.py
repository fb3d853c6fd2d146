"""Per-stream counters reported on the ``stream.end`` / ``stream.error`` events."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters for one streaming call.

    Attributes:
        emitted: Data events decoded and handed to the consumer.
        skipped: Lines discarded because they were not ``data:`` frames.
        time_to_first_event_ms: Delay until the first decoded event.
        total_duration_ms: Wall time from the first read to the terminal state.
    """

    emitted: int = 0
    skipped: int = 0
    time_to_first_event_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    _t0: float = field(default_factory=time.perf_counter, repr=False)

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self._t0) * 1000.0

    def record_event(self) -> None:
        if self.time_to_first_event_ms is None:
            self.time_to_first_event_ms = self._elapsed_ms()
        self.emitted += 1

    def record_skip(self) -> None:
        self.skipped += 1

    def finish(self) -> None:
        self.total_duration_ms = self._elapsed_ms()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emitted": self.emitted,
            "skipped": self.skipped,
            "time_to_first_event_ms": self.time_to_first_event_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics"]
