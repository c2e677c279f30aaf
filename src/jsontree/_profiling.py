"""
Opt-in hot path profiling for the parser and serializer.

Enabled by setting ``JSONTREE_PROFILE`` in the environment while running with
assertions on. When disabled, ``ProfileContext`` is a no-op.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "JSONTREE_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Call count, time and characters handled by one profiled stage."""

    stage: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Adds one timed pass over ``chars`` characters."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


if PROFILE_HOT_PATHS:
    _stats_by_stage: dict[str, HotPathStats] = {}

    class ProfileContext:
        """
        Times one pass through a parser or serializer stage.

        ``chars`` may be updated inside the block once the amount of text
        the stage handled is known.
        """

        def __init__(self, stage: str, chars: int = 0) -> None:
            self.stage = stage
            self.chars = chars
            self._started_ns = 0

        def __enter__(self) -> "ProfileContext":
            self._started_ns = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            elapsed_ns = time.perf_counter_ns() - self._started_ns
            stats = _stats_by_stage.get(self.stage)
            if stats is None:
                stats = _stats_by_stage[self.stage] = HotPathStats(self.stage)
            stats.record_call(elapsed_ns, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the per-stage counters."""
        return dict(_stats_by_stage)

    def clear_hot_path_stats() -> None:
        _stats_by_stage.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, stage: str, chars: int = 0) -> None:
            self.chars = chars

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass
