"""Shortest and longest (critical) paths on a weighted DAG.

Both modes are one dynamic-programming pass over a topological order:
only vertices already reached from the source relax their outgoing edges,
and a predecessor is recorded only on a strict improvement, so ties keep
the predecessor found first under the given order.

Reachability is tracked in a separate boolean array next to the distance,
so no sentinel value can be mistaken for a real distance whatever the
weights or path lengths are.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
import numpy as np

from sccdag.errors import MalformedGraphError
from sccdag.graph import WeightedAdj
from sccdag.metrics import MetricsRecorder, resolve, timed_phase

logger = logging.getLogger(__name__)

SHORTEST = "shortest"
LONGEST = "longest"
NO_PRED = -1

_INT64 = np.iinfo(np.int64)


@dataclass(frozen=True)
class PathResult:
    """Distances from `source` with reachability flags and predecessors.

    dist:
        int64 array, or an object array of exact ints once any distance
        leaves the int64 range; dist[v] is meaningful only where
        reached[v] is True.
    reached:
        bool array; False means v cannot be reached from the source.
    pred:
        int32 array; pred[v] is the vertex v was last strictly improved
        from, or NO_PRED.
    """

    dist: np.ndarray
    reached: np.ndarray
    pred: np.ndarray
    source: int
    mode: str

    def __len__(self) -> int:
        return len(self.dist)

    def is_reached(self, v: int) -> bool:
        return bool(self.reached[v])

    def distance(self, v: int) -> Optional[int]:
        return int(self.dist[v]) if self.reached[v] else None

    def distances(self) -> List[Optional[int]]:
        return [self.distance(v) for v in range(len(self.dist))]


def _dist_array(dist: List[int]) -> np.ndarray:
    if dist and (max(dist) > _INT64.max or min(dist) < _INT64.min):
        return np.asarray(dist, dtype=object)
    return np.asarray(dist, dtype=np.int64)


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _relax_dag(
    adj: WeightedAdj,
    source: int,
    order: Sequence[int],
    mode: str,
    metrics: Optional[MetricsRecorder],
) -> PathResult:
    if mode not in (SHORTEST, LONGEST):
        raise ValueError(f"Unknown path mode: {mode!r}")
    n = len(adj)
    if not 0 <= source < n:
        raise MalformedGraphError(
            f"Source vertex {source} is outside [0, {n})",
            context={"vertex": source, "n": n},
        )
    rec = resolve(metrics)
    longest = mode == LONGEST

    with timed_phase(rec):
        # plain Python ints during relaxation, no overflow
        dist = [0] * n
        reached = [False] * n
        pred = [NO_PRED] * n
        reached[source] = True

        for u in order:
            if not reached[u]:
                continue
            du = dist[u]
            for v, w in adj[u]:
                rec.on_relaxation()
                cand = du + w
                if not reached[v] or (cand > dist[v] if longest else cand < dist[v]):
                    dist[v] = cand
                    reached[v] = True
                    pred[v] = u

    return PathResult(
        dist=_frozen(_dist_array(dist)),
        reached=_frozen(np.asarray(reached, dtype=bool)),
        pred=_frozen(np.asarray(pred, dtype=np.int32)),
        source=int(source),
        mode=mode,
    )


def dag_shortest_paths(
    adj: WeightedAdj,
    source: int,
    order: Sequence[int],
    *,
    metrics: Optional[MetricsRecorder] = None,
) -> PathResult:
    """Single-source shortest paths over a DAG given its topological `order`.

    Negative and zero weights are fine. `order` must cover every vertex;
    it is not re-checked here.
    """
    return _relax_dag(adj, source, order, SHORTEST, metrics)


def dag_longest_paths(
    adj: WeightedAdj,
    source: int,
    order: Sequence[int],
    *,
    metrics: Optional[MetricsRecorder] = None,
) -> PathResult:
    """Single-source longest (critical) paths over a DAG given its topological `order`."""
    return _relax_dag(adj, source, order, LONGEST, metrics)


def reconstruct_path(result: PathResult, target: int) -> List[int]:
    """Walk predecessors back from `target` to the source.

    Returns the forward vertex sequence source..target, or [] when the
    target is unreached or the chain does not end at the source.
    """
    n = len(result.pred)
    if not 0 <= target < n:
        raise MalformedGraphError(
            f"Target vertex {target} is outside [0, {n})",
            context={"vertex": target, "n": n},
        )
    if not result.reached[target]:
        return []
    path = [int(target)]
    cur = int(target)
    # a chain can never be longer than the vertex count
    for _ in range(n):
        p = int(result.pred[cur])
        if p == NO_PRED:
            break
        path.append(p)
        cur = p
    if cur != result.source:
        return []
    path.reverse()
    return path


def critical_path_length(result: PathResult) -> Optional[int]:
    """Largest reached distance, or None when nothing is reached."""
    if not result.reached.any():
        return None
    return int(result.dist[result.reached].max())


def critical_path_target(result: PathResult) -> Optional[int]:
    """Lowest-index vertex attaining the critical path length."""
    best = critical_path_length(result)
    if best is None:
        return None
    hits = np.flatnonzero(result.reached & (result.dist == best))
    return int(hits[0])


def critical_path(result: PathResult) -> List[int]:
    """Vertices on the critical path, or [] if nothing beyond the source is on it."""
    end = critical_path_target(result)
    if end is None or end == result.source:
        return []
    return reconstruct_path(result, end)


def path_weight(adj: WeightedAdj, path: Sequence[int], mode: str = SHORTEST) -> int:
    """Sum of edge weights along `path`.

    Between parallel edges the one the DP would have used is taken: the
    lightest in shortest mode, the heaviest in longest mode.
    """
    pick = max if mode == LONGEST else min
    total = 0
    for u, v in zip(path, path[1:]):
        ws = [w for x, w in adj[u] if x == v]
        if not ws:
            raise ValueError(f"No edge {u} -> {v} on path")
        total += pick(ws)
    return total
