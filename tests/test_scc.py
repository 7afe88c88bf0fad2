"""Tests for Tarjan strongly connected components."""
from __future__ import annotations

import random

import numpy as np
import pytest

from sccdag.graph import build_adjacency, unweighted
from sccdag.metrics import PhaseMetrics
from sccdag.scc import tarjan_scc

from conftest import random_edges, reachable_from


class TestTarjanSCC:
    def test_empty_graph(self) -> None:
        res = tarjan_scc([])
        assert res.num_components == 0
        assert res.comp_id.shape == (0,)

    def test_single_vertex(self) -> None:
        res = tarjan_scc([[]])
        assert res.components == [[0]]
        assert res.component_of(0) == 0

    def test_scenario_b(self, scenario_b) -> None:
        res = tarjan_scc(scenario_b)
        assert res.num_components == 2
        sets = [set(c) for c in res.components]
        assert {1, 2, 3} in sets
        assert {0} in sets
        assert res.comp_id[1] == res.comp_id[2] == res.comp_id[3]
        assert res.comp_id[0] != res.comp_id[1]

    def test_dag_gives_singletons(self, scenario_a) -> None:
        res = tarjan_scc(scenario_a)
        assert res.num_components == 4
        assert sorted(len(c) for c in res.components) == [1, 1, 1, 1]

    def test_finalization_order_is_reverse_topological(self, scenario_a) -> None:
        # sinks finish first: vertex 3 is the only sink
        res = tarjan_scc(scenario_a)
        assert res.components[0] == [3]
        assert res.components[-1] == [0]
        assert res.reverse_topological_components() == [3, 2, 1, 0]

    def test_self_loops_and_parallel_edges(self) -> None:
        adj = build_adjacency(3, [(0, 0, 1), (0, 1, 1), (0, 1, 2), (1, 1, 5), (1, 2, 1)])
        res = tarjan_scc(adj)
        assert res.num_components == 3

    def test_two_cycles(self, two_cycles) -> None:
        res = tarjan_scc(two_cycles)
        sets = sorted((sorted(c) for c in res.components), key=len)
        assert sets == [[5], [0, 1], [2, 3, 4]]
        assert list(res.component_sizes()) == [len(c) for c in res.components]

    def test_unweighted_input_accepted(self, scenario_b) -> None:
        a = tarjan_scc(scenario_b)
        b = tarjan_scc(unweighted(scenario_b))
        assert a.components == b.components
        assert np.array_equal(a.comp_id, b.comp_id)

    def test_comp_id_is_read_only(self, scenario_b) -> None:
        res = tarjan_scc(scenario_b)
        with pytest.raises(ValueError):
            res.comp_id[0] = 5

    def test_deep_chain_does_not_recurse(self) -> None:
        n = 50_000
        adj = build_adjacency(n, [(i, i + 1, 1) for i in range(n - 1)] + [(n - 1, 0, 1)])
        res = tarjan_scc(adj)
        assert res.num_components == 1
        assert len(res.components[0]) == n

    def test_metrics_counts(self, two_cycles) -> None:
        m = PhaseMetrics()
        tarjan_scc(two_cycles, metrics=m)
        assert m.dfs_visits == 6
        assert m.edges_processed == 8
        assert m.queue_pushes == 0
        assert m.relaxations == 0
        assert m.time_ns > 0

    def test_metrics_do_not_change_result(self, two_cycles) -> None:
        a = tarjan_scc(two_cycles)
        b = tarjan_scc(two_cycles, metrics=PhaseMetrics())
        assert a.components == b.components


class TestSCCProperties:
    @pytest.mark.parametrize("trial", range(25))
    def test_partition_matches_mutual_reachability(self, trial: int) -> None:
        rng = random.Random(1000 + trial)
        n = rng.randint(1, 12)
        adj = build_adjacency(n, random_edges(rng, n, rng.randint(0, 3 * n)))
        res = tarjan_scc(adj)

        # disjoint and covering
        flat = [v for c in res.components for v in c]
        assert sorted(flat) == list(range(n))
        for c, members in enumerate(res.components):
            assert members
            for v in members:
                assert res.comp_id[v] == c

        reach = [reachable_from(adj, v) for v in range(n)]
        for u in range(n):
            for v in range(n):
                mutual = v in reach[u] and u in reach[v]
                assert (res.comp_id[u] == res.comp_id[v]) == mutual
