"""Topological order via Kahn's algorithm.

Zero in-degree vertices seed a FIFO queue in ascending index order, and
successors are released in adjacency order as their in-degree drops to
zero, so the output is fully determined by the adjacency list.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional

from sccdag.errors import CyclicGraphError
from sccdag.graph import AnyAdj, target
from sccdag.metrics import MetricsRecorder, resolve, timed_phase

logger = logging.getLogger(__name__)


def topological_order(adj: AnyAdj, *, metrics: Optional[MetricsRecorder] = None) -> List[int]:
    """Return every vertex of the DAG `adj`, each before all of its successors.

    Raises CyclicGraphError if some vertices cannot be ordered; the result
    is never truncated.
    """
    rec = resolve(metrics)
    n = len(adj)

    with timed_phase(rec):
        indeg = [0] * n
        for nbrs in adj:
            for e in nbrs:
                indeg[target(e)] += 1

        q: Deque[int] = deque()
        for v in range(n):
            if indeg[v] == 0:
                q.append(v)
                rec.on_queue_push()

        order: List[int] = []
        while q:
            u = q.popleft()
            rec.on_queue_pop()
            order.append(u)
            for e in adj[u]:
                rec.on_edge()
                v = target(e)
                indeg[v] -= 1
                if indeg[v] == 0:
                    q.append(v)
                    rec.on_queue_push()

    if len(order) < n:
        emitted = set(order)
        raise CyclicGraphError([v for v in range(n) if v not in emitted], n)

    logger.debug("topological_order: ordered %d vertices", n)
    return order


def is_topological_order(adj: AnyAdj, order: List[int]) -> bool:
    """True if `order` is a permutation of the vertices respecting every edge."""
    n = len(adj)
    if len(order) != n or sorted(order) != list(range(n)):
        return False
    pos = [0] * n
    for i, v in enumerate(order):
        pos[v] = i
    return all(pos[u] < pos[target(e)] for u, nbrs in enumerate(adj) for e in nbrs)
