from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Union

import pandas as pd

from sccdag.pipeline import PHASES, AnalysisResult

SUMMARY_CSV = "summary.csv"
METRICS_CSV = "metrics.csv"

_METRIC_COLUMNS = [
    "dataset", "phase", "dfs_visits", "edges_processed",
    "queue_pushes", "queue_pops", "relaxations", "time_ns", "time_ms",
]


def summary_frame(results: Iterable[AnalysisResult]) -> pd.DataFrame:
    """One row per analyzed graph."""
    rows = [r.summary() for r in results]
    return pd.DataFrame(rows)


def metrics_frame(results: Iterable[AnalysisResult]) -> pd.DataFrame:
    """One row per (graph, phase); empty when metrics were not collected."""
    rows = []
    for r in results:
        for phase in PHASES:
            m = r.metrics.get(phase)
            if m is None:
                continue
            row = {"dataset": r.name, "phase": phase}
            row.update(m.as_dict())
            row["time_ms"] = m.time_ms
            rows.append(row)
    return pd.DataFrame(rows, columns=_METRIC_COLUMNS)


def write_reports(
    results: Iterable[AnalysisResult], outputs_dir: Union[str, Path]
) -> Dict[str, Path]:
    outputs_dir = Path(outputs_dir)
    outputs_dir.mkdir(parents=True, exist_ok=True)
    results = list(results)

    summary_path = outputs_dir / SUMMARY_CSV
    metrics_path = outputs_dir / METRICS_CSV
    summary_frame(results).to_csv(summary_path, index=False)
    metrics_frame(results).to_csv(metrics_path, index=False)
    return {"summary": summary_path, "metrics": metrics_path}
