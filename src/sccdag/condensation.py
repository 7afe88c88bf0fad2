"""Contract strongly connected components into a DAG.

Two variants are produced from the same edge scan order:

- the plain condensation: one edge per ordered component pair that has at
  least one crossing edge;
- the weighted condensation: the same pairs, each carrying the minimum weight
  among its crossing edges (best-case transition cost between components).

Edges inside a component are dropped, so neither variant has self-loops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple
import numpy as np

from sccdag.graph import Adj, WeightedAdj, edge_count
from sccdag.metrics import MetricsRecorder, resolve, timed_phase
from sccdag.scc import SCCResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Condensation:
    dag: Adj
    weighted: WeightedAdj

    @property
    def num_components(self) -> int:
        return len(self.dag)

    @property
    def edge_count(self) -> int:
        return edge_count(self.dag)


def condensation_dag(
    out_adj: WeightedAdj,
    comp_id: np.ndarray,
    k: int,
    *,
    metrics: Optional[MetricsRecorder] = None,
) -> Adj:
    """Deduplicated cross-component edges, in first-seen order."""
    rec = resolve(metrics)
    with timed_phase(rec):
        dag: Adj = [[] for _ in range(k)]
        seen: Set[Tuple[int, int]] = set()
        for u, nbrs in enumerate(out_adj):
            cu = int(comp_id[u])
            for v, _ in nbrs:
                rec.on_edge()
                cv = int(comp_id[v])
                if cu == cv:
                    continue
                key = (cu, cv)
                if key not in seen:
                    seen.add(key)
                    dag[cu].append(cv)
    return dag


def weighted_condensation(
    out_adj: WeightedAdj,
    comp_id: np.ndarray,
    k: int,
    *,
    metrics: Optional[MetricsRecorder] = None,
) -> WeightedAdj:
    """Cross-component edges aggregated to their minimum weight.

    Returns
    -------
    adjacency list of k components; cond[a] holds (b, min_w) pairs, one per b,
    ordered by the first crossing edge seen for each pair.
    """
    rec = resolve(metrics)
    with timed_phase(rec):
        best: Dict[Tuple[int, int], int] = {}  # (ca,cb) -> min weight
        for u, nbrs in enumerate(out_adj):
            cu = int(comp_id[u])
            for v, w in nbrs:
                rec.on_edge()
                cv = int(comp_id[v])
                if cu == cv:
                    continue
                key = (cu, cv)
                prev = best.get(key)
                if prev is None or w < prev:
                    best[key] = w

        cond: WeightedAdj = [[] for _ in range(k)]
        for (cu, cv), w in best.items():
            cond[cu].append((cv, w))
    return cond


def condense(
    out_adj: WeightedAdj,
    scc: SCCResult,
    *,
    metrics: Optional[MetricsRecorder] = None,
) -> Condensation:
    """Build both condensation variants.

    `metrics` sees every original edge twice (once per variant) and its
    time is that of the whole call.
    """
    rec = resolve(metrics)
    k = scc.num_components
    with timed_phase(rec):
        dag = condensation_dag(out_adj, scc.comp_id, k, metrics=_Untimed(rec))
        weighted = weighted_condensation(out_adj, scc.comp_id, k, metrics=_Untimed(rec))
    result = Condensation(dag=dag, weighted=weighted)
    logger.debug("condense: %d components, %d edges", k, result.edge_count)
    return result


class _Untimed:
    """Forwards counters to the wrapped recorder but keeps its time untouched."""

    __slots__ = ("_inner",)

    def __init__(self, inner: MetricsRecorder) -> None:
        self._inner = inner

    def on_dfs_visit(self) -> None:
        self._inner.on_dfs_visit()

    def on_edge(self) -> None:
        self._inner.on_edge()

    def on_queue_push(self) -> None:
        self._inner.on_queue_push()

    def on_queue_pop(self) -> None:
        self._inner.on_queue_pop()

    def on_relaxation(self) -> None:
        self._inner.on_relaxation()

    def record_time(self, ns: int) -> None:
        pass
