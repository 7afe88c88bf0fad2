"""Structural analysis of weighted dependency graphs.

This package provides:
- strongly connected components (iterative Tarjan),
- condensation of components into a DAG, plain and min-weight aggregated,
- topological ordering (Kahn),
- shortest and longest (critical) paths over a DAG with path reconstruction,
- per-phase operation counters and timings,
- a JSON loader, batch runner and tabular reports around the above.
"""

from .errors import CyclicGraphError, GraphFormatError, MalformedGraphError, SccDagError
from .graph import Edge, GraphDescriptor, build_adjacency
from .metrics import MetricsRecorder, NullMetrics, PhaseMetrics
from .scc import SCCResult, tarjan_scc
from .condensation import Condensation, condensation_dag, condense, weighted_condensation
from .topo import topological_order
from .paths import (
    PathResult,
    critical_path,
    critical_path_length,
    dag_longest_paths,
    dag_shortest_paths,
    reconstruct_path,
)
from .pipeline import AnalysisResult, analyze_graph, analyze_many

__all__ = [
    "AnalysisResult",
    "Condensation",
    "CyclicGraphError",
    "Edge",
    "GraphDescriptor",
    "GraphFormatError",
    "MalformedGraphError",
    "MetricsRecorder",
    "NullMetrics",
    "PathResult",
    "PhaseMetrics",
    "SCCResult",
    "SccDagError",
    "analyze_graph",
    "analyze_many",
    "build_adjacency",
    "condensation_dag",
    "condense",
    "critical_path",
    "critical_path_length",
    "dag_longest_paths",
    "dag_shortest_paths",
    "reconstruct_path",
    "tarjan_scc",
    "topological_order",
    "weighted_condensation",
]
