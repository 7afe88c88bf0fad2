"""End-to-end analysis of one graph, and batches of dataset files.

    raw graph -> SCCs -> condensation -> topological order -> shortest /
    longest paths on the weighted condensation

Distances, orders and paths in an AnalysisResult are expressed in
component ids; `comp_id` maps original vertices onto them.
"""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import numpy as np
from tqdm.auto import tqdm

from sccdag.condensation import condense
from sccdag.config import AnalysisConfig
from sccdag.errors import MalformedGraphError
from sccdag.graph import GraphDescriptor, edge_count
from sccdag.io import discover_datasets, load_descriptor
from sccdag.logging_utils import get_logger, log_exception
from sccdag.metrics import PhaseMetrics
from sccdag.paths import (
    PathResult,
    critical_path,
    critical_path_length,
    dag_longest_paths,
    dag_shortest_paths,
)
from sccdag.scc import tarjan_scc
from sccdag.topo import topological_order

logger = get_logger(__name__)

PHASES = ("scc", "condensation", "topo", "shortest", "longest")


@dataclass(frozen=True)
class AnalysisResult:
    name: str
    n: int
    edge_count: int
    weight_model: str
    source: int
    source_component: int
    components: List[List[int]]
    comp_id: np.ndarray
    component_sizes: np.ndarray
    condensation_edge_count: int
    topo_order: List[int]
    shortest: PathResult
    longest: PathResult
    critical_path_length: Optional[int]
    critical_path: List[int]
    metrics: Dict[str, PhaseMetrics] = field(default_factory=dict)

    @property
    def num_components(self) -> int:
        return len(self.components)

    def summary(self) -> Dict[str, Any]:
        """Flat row for tabular reports."""
        return {
            "dataset": self.name,
            "n": self.n,
            "edges": self.edge_count,
            "weight_model": self.weight_model,
            "source": self.source,
            "source_component": self.source_component,
            "num_sccs": self.num_components,
            "largest_scc": int(self.component_sizes.max()) if self.n else 0,
            "condensation_edges": self.condensation_edge_count,
            "reached": int(self.shortest.reached.sum()),
            "critical_path_length": self.critical_path_length,
            "critical_path": " -> ".join(str(c) for c in self.critical_path),
            "total_time_ms": sum(m.time_ms for m in self.metrics.values()),
        }


def analyze_graph(descriptor: GraphDescriptor, *, collect_metrics: bool = True) -> AnalysisResult:
    """Run the full chain on one graph.

    Raises MalformedGraphError before any traversal if the descriptor is
    invalid or has no vertices.
    """
    descriptor.validate()
    if descriptor.n == 0:
        raise MalformedGraphError(
            f"{descriptor.label}: graph has no vertices, so no source vertex"
        )
    out_adj = descriptor.adjacency()

    metrics: Dict[str, PhaseMetrics] = (
        {phase: PhaseMetrics() for phase in PHASES} if collect_metrics else {}
    )

    scc = tarjan_scc(out_adj, metrics=metrics.get("scc"))
    cond = condense(out_adj, scc, metrics=metrics.get("condensation"))
    order = topological_order(cond.dag, metrics=metrics.get("topo"))

    src_comp = scc.component_of(descriptor.source)
    shortest = dag_shortest_paths(cond.weighted, src_comp, order, metrics=metrics.get("shortest"))
    longest = dag_longest_paths(cond.weighted, src_comp, order, metrics=metrics.get("longest"))

    result = AnalysisResult(
        name=descriptor.label,
        n=descriptor.n,
        edge_count=edge_count(out_adj),
        weight_model=descriptor.weight_model,
        source=descriptor.source,
        source_component=src_comp,
        components=scc.components,
        comp_id=scc.comp_id,
        component_sizes=scc.component_sizes(),
        condensation_edge_count=cond.edge_count,
        topo_order=order,
        shortest=shortest,
        longest=longest,
        critical_path_length=critical_path_length(longest),
        critical_path=critical_path(longest),
        metrics=metrics,
    )
    logger.info(
        "%s: n=%d sccs=%d condensation_edges=%d critical_path_length=%s",
        result.name,
        result.n,
        result.num_components,
        result.condensation_edge_count,
        result.critical_path_length,
    )
    return result


def analyze_many(
    descriptors: Iterable[GraphDescriptor],
    *,
    collect_metrics: bool = True,
    show_progress: bool = False,
) -> List[AnalysisResult]:
    """Analyze independent graphs one after another, preserving input order."""
    items = list(descriptors)
    return [
        analyze_graph(d, collect_metrics=collect_metrics)
        for d in tqdm(items, desc="Analyzing graphs", disable=not show_progress)
    ]


def analyze_file(path: Union[str, Path], collect_metrics: bool = True) -> AnalysisResult:
    return analyze_graph(load_descriptor(path), collect_metrics=collect_metrics)


def run_datasets(
    config: AnalysisConfig,
    *,
    show_traceback: bool = False,
) -> Tuple[List[AnalysisResult], Dict[str, str]]:
    """Analyze every dataset named by `config`.

    A dataset that fails to load or analyze is logged and skipped.

    Returns
    -------
    results:
        successful runs in dataset order.
    failures:
        dataset name -> user-facing error message.
    """
    paths: Sequence[Path] = discover_datasets(config.data_dir, config.datasets)
    results: List[AnalysisResult] = []
    failures: Dict[str, str] = {}

    if config.workers > 1 and len(paths) > 1:
        with ProcessPoolExecutor(max_workers=config.workers) as pool:
            futures = [pool.submit(analyze_file, p, config.collect_metrics) for p in paths]
            pairs = zip(paths, futures)
            for path, fut in tqdm(pairs, total=len(paths), desc="Datasets",
                                  disable=not config.show_progress):
                try:
                    results.append(fut.result())
                except Exception as exc:
                    failures[path.name] = log_exception(logger, exc, show_traceback=show_traceback)
    else:
        for path in tqdm(paths, desc="Datasets", disable=not config.show_progress):
            try:
                results.append(analyze_file(path, config.collect_metrics))
            except Exception as exc:
                failures[path.name] = log_exception(logger, exc, show_traceback=show_traceback)

    logger.info("Processed %d dataset(s), %d failed", len(results), len(failures))
    return results, failures
