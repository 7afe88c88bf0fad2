"""Shared fixtures and graph builders for sccdag tests."""
from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Dict, List, Set, Tuple

import pytest

from sccdag.graph import WeightedAdj, build_adjacency

SEED = 42


def random_edges(
    rng: random.Random, n: int, m: int, lo: int = 0, hi: int = 10
) -> List[Tuple[int, int, int]]:
    """m random edges on n vertices; self-loops and duplicates allowed."""
    return [(rng.randrange(n), rng.randrange(n), rng.randint(lo, hi)) for _ in range(m)]


def random_dag_edges(
    rng: random.Random, n: int, m: int, lo: int = -5, hi: int = 10
) -> List[Tuple[int, int, int]]:
    """m random edges that only go from a lower to a higher label under a shuffled labelling."""
    perm = list(range(n))
    rng.shuffle(perm)
    edges = []
    for _ in range(m):
        a, b = rng.sample(range(n), 2)
        if a > b:
            a, b = b, a
        edges.append((perm[a], perm[b], rng.randint(lo, hi)))
    return edges


def reachable_from(adj: WeightedAdj, s: int) -> Set[int]:
    seen = {s}
    stack = [s]
    while stack:
        u = stack.pop()
        for v, _ in adj[u]:
            if v not in seen:
                seen.add(v)
                stack.append(v)
    return seen


def brute_force_paths(adj: WeightedAdj, s: int) -> Tuple[Dict[int, int], Dict[int, int]]:
    """Shortest and longest distances from s by enumerating every path of a small DAG."""
    shortest: Dict[int, int] = {}
    longest: Dict[int, int] = {}

    def walk(u: int, d: int) -> None:
        shortest[u] = min(shortest.get(u, d), d)
        longest[u] = max(longest.get(u, d), d)
        for v, w in adj[u]:
            walk(v, d + w)

    walk(s, 0)
    return shortest, longest


@pytest.fixture
def scenario_a() -> WeightedAdj:
    """0->1(2), 0->2(5), 1->2(3), 2->3(1)"""
    return build_adjacency(4, [(0, 1, 2), (0, 2, 5), (1, 2, 3), (2, 3, 1)])


@pytest.fixture
def scenario_b() -> WeightedAdj:
    """Cycle 1->2->3->1 fed by 0->1."""
    return build_adjacency(4, [(1, 2, 1), (2, 3, 1), (3, 1, 1), (0, 1, 1)])


@pytest.fixture
def scenario_c() -> WeightedAdj:
    """0->1(10), 0->2(5), 1->3(5), 2->3(5)"""
    return build_adjacency(4, [(0, 1, 10), (0, 2, 5), (1, 3, 5), (2, 3, 5)])


@pytest.fixture
def two_cycles() -> WeightedAdj:
    """
    {0,1} -> {2,3,4} -> 5, plus a parallel cheaper edge between the cycles.
    """
    return build_adjacency(
        6,
        [
            (0, 1, 1), (1, 0, 1),
            (2, 3, 1), (3, 4, 1), (4, 2, 1),
            (1, 2, 7), (0, 3, 4),
            (4, 5, 2),
        ],
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(SEED)


def write_dataset(path: Path, n: int, edges, source: int = 0, **extra) -> Path:
    obj = {
        "directed": True,
        "n": n,
        "edges": [{"u": u, "v": v, "w": w} for u, v, w in edges],
        "source": source,
    }
    obj.update(extra)
    path.write_text(json.dumps(obj), encoding="utf-8")
    return path
