"""Command-line runner over a directory of JSON task graphs."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from sccdag.config import DEFAULT_DATA_DIR, DEFAULT_OUTPUTS_DIR, AnalysisConfig
from sccdag.logging_utils import configure_logging
from sccdag.pipeline import run_datasets
from sccdag.report import metrics_frame, summary_frame, write_reports


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="SCC, condensation, topological order and critical-path analysis of task graphs."
    )
    ap.add_argument("--data-dir", default=str(DEFAULT_DATA_DIR), help="Directory holding the JSON datasets.")
    ap.add_argument("--outputs-dir", default=str(DEFAULT_OUTPUTS_DIR), help="Directory to save CSV reports.")
    ap.add_argument("--dataset", action="append",
                    help="Dataset file name inside --data-dir (repeatable). Defaults to the nine bundled datasets.")
    ap.add_argument("--single", action="store_true", help="Only run tasks.json.")
    ap.add_argument("--workers", type=int, default=1, help="Process pool size for running datasets in parallel.")
    ap.add_argument("--no-metrics", action="store_true", help="Skip operation counters and timings.")
    ap.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    ap.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...).")
    ap.add_argument("--traceback", action="store_true", help="Log full tracebacks for failed datasets.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = AnalysisConfig.from_args(args)
    configure_logging(config.log_level)

    results, failures = run_datasets(config, show_traceback=args.traceback)

    if results:
        paths = write_reports(results, config.outputs_dir)
        print(summary_frame(results).to_string(index=False))
        if config.collect_metrics:
            print()
            print(metrics_frame(results).to_string(index=False))
        print("\nSaved:", paths["summary"])
        print("Saved:", paths["metrics"])

    if failures:
        print(f"\n{len(failures)} dataset(s) failed:", file=sys.stderr)
        for name, msg in failures.items():
            print(f" - {name}: {msg}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
