from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from sccdag.errors import MalformedGraphError

WeightedAdj = List[List[Tuple[int, int]]]
Adj = List[List[int]]
# adjacency entries are either bare destinations or (destination, weight) pairs
AnyAdj = Sequence[Sequence[Union[int, Tuple[int, int]]]]

DEFAULT_WEIGHT_MODEL = "edge"


class Edge(NamedTuple):
    u: int
    v: int
    w: int = 1


def _as_int(x, what: str, index: Optional[int] = None) -> int:
    # bool is an Integral subclass but never a vertex or weight
    if isinstance(x, bool) or not isinstance(x, numbers.Integral):
        ctx = {"value": x}
        if index is not None:
            ctx["edge_index"] = index
        raise MalformedGraphError(f"{what} must be an integer, got {x!r}", context=ctx)
    return int(x)


def _check_vertex(x: int, n: int, what: str, index: Optional[int] = None) -> None:
    if not 0 <= x < n:
        ctx = {"vertex": x, "n": n}
        if index is not None:
            ctx["edge_index"] = index
        raise MalformedGraphError(
            f"{what} {x} is outside [0, {n})",
            context=ctx,
        )


def build_adjacency(n: int, edges: Iterable[Tuple[int, int, int]]) -> WeightedAdj:
    """Validate `edges` against `n` vertices and build the weighted adjacency list.

    Every edge is checked before the list is built, so a bad edge never
    leaves a partially populated structure behind.

    Parameters
    ----------
    n:
        number of vertices, labelled 0..n-1.
    edges:
        iterable of (u, v, weight) triples; order is preserved per source vertex.

    Returns
    -------
    out_adj:
        out_adj[u] is the list of (v, weight) pairs leaving u.
    """
    n = _as_int(n, "Vertex count")
    if n < 0:
        raise MalformedGraphError(f"Vertex count must be non-negative, got {n}")
    checked: List[Tuple[int, int, int]] = []
    for i, (u, v, w) in enumerate(edges):
        u = _as_int(u, "Edge source", i)
        v = _as_int(v, "Edge target", i)
        w = _as_int(w, "Edge weight", i)
        _check_vertex(u, n, "Edge source", i)
        _check_vertex(v, n, "Edge target", i)
        checked.append((u, v, w))

    out_adj: WeightedAdj = [[] for _ in range(n)]
    for u, v, w in checked:
        out_adj[u].append((v, w))
    return out_adj


def target(entry: Union[int, Tuple[int, int]]) -> int:
    """Destination of an adjacency entry, weighted or not."""
    if isinstance(entry, tuple):
        return int(entry[0])
    return int(entry)


def unweighted(out_adj: AnyAdj) -> Adj:
    return [[target(e) for e in nbrs] for nbrs in out_adj]


def edge_count(adj: AnyAdj) -> int:
    return sum(len(nbrs) for nbrs in adj)


@dataclass(frozen=True)
class GraphDescriptor:
    """A graph as handed over by a loader: vertex count, edges, source vertex.

    `weight_model` is carried through to reports without interpretation.
    """

    n: int
    edges: Tuple[Edge, ...] = ()
    source: int = 0
    weight_model: str = DEFAULT_WEIGHT_MODEL
    name: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_edges(
        cls,
        n: int,
        edges: Iterable[Tuple[int, ...]],
        source: int = 0,
        *,
        weight_model: str = DEFAULT_WEIGHT_MODEL,
        name: Optional[str] = None,
    ) -> "GraphDescriptor":
        return cls(
            n=n,
            edges=tuple(Edge(*e) for e in edges),
            source=source,
            weight_model=weight_model,
            name=name,
        )

    @property
    def label(self) -> str:
        return self.name if self.name is not None else f"graph(n={self.n})"

    def validate(self) -> None:
        n = _as_int(self.n, "Vertex count")
        if n < 0:
            raise MalformedGraphError(f"Vertex count must be non-negative, got {n}")
        for i, e in enumerate(self.edges):
            _check_vertex(_as_int(e.u, "Edge source", i), n, "Edge source", i)
            _check_vertex(_as_int(e.v, "Edge target", i), n, "Edge target", i)
            _as_int(e.w, "Edge weight", i)
        source = _as_int(self.source, "Source vertex")
        if n > 0:
            _check_vertex(source, n, "Source vertex")

    def adjacency(self) -> WeightedAdj:
        self.validate()
        return build_adjacency(self.n, self.edges)
