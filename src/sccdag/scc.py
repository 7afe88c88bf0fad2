from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional
import numpy as np

from sccdag.graph import AnyAdj, target
from sccdag.metrics import MetricsRecorder, resolve, timed_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SCCResult:
    """Partition of the vertices into strongly connected components.

    comp_id:
        read-only np.ndarray of length n mapping vertex -> component index.
    components:
        components[c] lists the vertices of component c in the order they
        were popped off the Tarjan stack.

    Components are numbered in the order Tarjan finalizes them. For every
    condensation edge (a, b) this gives a > b, so reversing the component
    list yields a valid topological order of the condensation.
    """

    comp_id: np.ndarray
    components: List[List[int]]

    @property
    def num_components(self) -> int:
        return len(self.components)

    def component_of(self, v: int) -> int:
        return int(self.comp_id[v])

    def component_sizes(self) -> np.ndarray:
        return np.fromiter(
            (len(c) for c in self.components), dtype=np.int64, count=len(self.components)
        )

    def reverse_topological_components(self) -> List[int]:
        """Component ids in forward topological order (reverse of finalization)."""
        return list(range(self.num_components - 1, -1, -1))


def tarjan_scc(out_adj: AnyAdj, *, metrics: Optional[MetricsRecorder] = None) -> SCCResult:
    """Strongly connected components via Tarjan (iterative).

    Parameters
    ----------
    out_adj:
        adjacency list; entries may be bare destinations or (destination, weight)
        pairs (weights are ignored). Self-loops and parallel edges are allowed.
    metrics:
        optional recorder; receives one dfs visit per vertex and one edge per
        adjacency entry examined.

    Returns
    -------
    SCCResult
    """
    rec = resolve(metrics)
    n = len(out_adj)

    with timed_phase(rec):
        index = [-1] * n
        low = [0] * n
        on_stack = [False] * n
        path: List[int] = []
        comps: List[List[int]] = []
        counter = 0

        for start in range(n):
            if index[start] != -1:
                continue
            rec.on_dfs_visit()
            index[start] = low[start] = counter
            counter += 1
            path.append(start)
            on_stack[start] = True
            # each frame is (vertex, index of the next outgoing edge to examine)
            stack = [(start, 0)]
            while stack:
                u, i = stack[-1]
                nbrs = out_adj[u]
                if i < len(nbrs):
                    stack[-1] = (u, i + 1)
                    v = target(nbrs[i])
                    rec.on_edge()
                    if index[v] == -1:
                        rec.on_dfs_visit()
                        index[v] = low[v] = counter
                        counter += 1
                        path.append(v)
                        on_stack[v] = True
                        stack.append((v, 0))
                    elif on_stack[v] and low[v] < low[u]:
                        low[u] = low[v]
                    continue

                stack.pop()
                if low[u] == index[u]:
                    comp: List[int] = []
                    while True:
                        x = path.pop()
                        on_stack[x] = False
                        low[x] = index[u]
                        comp.append(x)
                        if x == u:
                            break
                    comps.append(comp)
                if stack:
                    parent = stack[-1][0]
                    if low[u] < low[parent]:
                        low[parent] = low[u]

        comp_id = np.full(n, -1, dtype=np.int32)
        for c, members in enumerate(comps):
            comp_id[members] = c
        comp_id.setflags(write=False)

    logger.debug("tarjan_scc: %d vertices -> %d components", n, len(comps))
    return SCCResult(comp_id=comp_id, components=comps)
