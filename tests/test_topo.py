"""Tests for topological order (Kahn's algorithm)."""
from __future__ import annotations

import pickle
import random

import pytest

from sccdag.errors import CyclicGraphError, SccDagError
from sccdag.graph import build_adjacency, unweighted
from sccdag.metrics import PhaseMetrics
from sccdag.topo import is_topological_order, topological_order

from conftest import random_dag_edges


class TestTopologicalOrder:
    def test_empty(self) -> None:
        assert topological_order([]) == []

    def test_single_vertex(self) -> None:
        assert topological_order([[]]) == [0]

    def test_scenario_a(self, scenario_a) -> None:
        assert topological_order(scenario_a) == [0, 1, 2, 3]

    def test_ties_broken_by_index_then_adjacency(self) -> None:
        # 3 and 1 are sources; 3 releases 2 before 0
        adj = [[], [], [], [2, 0]]
        assert topological_order(adj) == [1, 3, 2, 0]

    def test_disconnected(self) -> None:
        adj = [[1], [], [3], []]
        order = topological_order(adj)
        assert order == [0, 2, 1, 3]

    def test_weighted_entries_accepted(self, scenario_a) -> None:
        assert topological_order(scenario_a) == topological_order(unweighted(scenario_a))

    def test_cycle_raises(self) -> None:
        adj = [[1], [2], [0], []]
        with pytest.raises(CyclicGraphError) as exc_info:
            topological_order(adj)
        assert exc_info.value.remaining == [0, 1, 2]
        assert isinstance(exc_info.value, SccDagError)

    def test_cycle_behind_valid_prefix(self) -> None:
        # 0 is orderable, 1<->2 is not, 3 sits behind the cycle
        adj = [[1], [2], [1, 3], []]
        with pytest.raises(CyclicGraphError) as exc_info:
            topological_order(adj)
        assert exc_info.value.remaining == [1, 2, 3]

    def test_self_loop_raises(self) -> None:
        with pytest.raises(CyclicGraphError):
            topological_order([[0]])

    def test_cycle_error_survives_pickling(self) -> None:
        with pytest.raises(CyclicGraphError) as exc_info:
            topological_order([[1], [2], [1, 3], []])
        copy = pickle.loads(pickle.dumps(exc_info.value))
        assert type(copy) is CyclicGraphError
        assert copy.remaining == [1, 2, 3]
        assert copy.n == 4
        assert str(copy) == str(exc_info.value)
        assert copy.context == exc_info.value.context

    def test_metrics_counts(self, scenario_a) -> None:
        m = PhaseMetrics()
        topological_order(scenario_a, metrics=m)
        assert m.queue_pushes == 4
        assert m.queue_pops == 4
        assert m.edges_processed == 4
        assert m.dfs_visits == 0


class TestTopologicalProperties:
    @pytest.mark.parametrize("trial", range(10))
    def test_metrics_do_not_change_result(self, trial: int) -> None:
        rng = random.Random(3500 + trial)
        n = rng.randint(2, 30)
        adj = build_adjacency(n, random_dag_edges(rng, n, rng.randint(0, 3 * n)))
        assert topological_order(adj, metrics=PhaseMetrics()) == topological_order(adj)

    @pytest.mark.parametrize("trial", range(25))
    def test_random_dag_order_respects_edges(self, trial: int) -> None:
        rng = random.Random(3000 + trial)
        n = rng.randint(1, 40)
        m = rng.randint(0, 3 * n) if n > 1 else 0
        adj = build_adjacency(n, random_dag_edges(rng, n, m))
        order = topological_order(adj)
        assert len(order) == n
        assert is_topological_order(adj, order)

    def test_is_topological_order_rejects_bad_orders(self, scenario_a) -> None:
        assert not is_topological_order(scenario_a, [1, 0, 2, 3])
        assert not is_topological_order(scenario_a, [0, 1, 2])
        assert not is_topological_order(scenario_a, [0, 1, 1, 3])
