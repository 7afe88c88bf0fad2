from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, Optional, Protocol


class MetricsRecorder(Protocol):
    """Write-only sink for per-phase operation counts and timings."""

    def on_dfs_visit(self) -> None: ...

    def on_edge(self) -> None: ...

    def on_queue_push(self) -> None: ...

    def on_queue_pop(self) -> None: ...

    def on_relaxation(self) -> None: ...

    def record_time(self, ns: int) -> None: ...


class NullMetrics:
    """Recorder that drops everything; used when no recorder is injected."""

    __slots__ = ()

    def on_dfs_visit(self) -> None:
        pass

    def on_edge(self) -> None:
        pass

    def on_queue_push(self) -> None:
        pass

    def on_queue_pop(self) -> None:
        pass

    def on_relaxation(self) -> None:
        pass

    def record_time(self, ns: int) -> None:
        pass


NULL_METRICS = NullMetrics()


@dataclass
class PhaseMetrics:
    """Counters for one analysis phase (scc, condensation, topo, ...)."""

    dfs_visits: int = 0
    edges_processed: int = 0
    queue_pushes: int = 0
    queue_pops: int = 0
    relaxations: int = 0
    time_ns: int = 0

    def on_dfs_visit(self) -> None:
        self.dfs_visits += 1

    def on_edge(self) -> None:
        self.edges_processed += 1

    def on_queue_push(self) -> None:
        self.queue_pushes += 1

    def on_queue_pop(self) -> None:
        self.queue_pops += 1

    def on_relaxation(self) -> None:
        self.relaxations += 1

    def record_time(self, ns: int) -> None:
        self.time_ns = int(ns)

    def reset(self) -> None:
        self.dfs_visits = 0
        self.edges_processed = 0
        self.queue_pushes = 0
        self.queue_pops = 0
        self.relaxations = 0
        self.time_ns = 0

    @property
    def time_ms(self) -> float:
        return self.time_ns / 1_000_000.0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def resolve(metrics: Optional[MetricsRecorder]) -> MetricsRecorder:
    return NULL_METRICS if metrics is None else metrics


@contextmanager
def timed_phase(metrics: MetricsRecorder) -> Iterator[None]:
    """Record the wall time of the enclosed block once, on exit."""
    t0 = time.perf_counter_ns()
    try:
        yield
    finally:
        metrics.record_time(time.perf_counter_ns() - t0)
