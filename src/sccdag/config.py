from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_DATASETS: Tuple[str, ...] = (
    "small1.json", "small2.json", "small3.json",
    "medium1.json", "medium2.json", "medium3.json",
    "large1.json", "large2.json", "large3.json",
)
SINGLE_DATASET = "tasks.json"

DEFAULT_DATA_DIR = Path("data")
DEFAULT_OUTPUTS_DIR = Path("outputs")


@dataclass(frozen=True)
class AnalysisConfig:
    """Settings for a batch of dataset runs."""

    data_dir: Path = DEFAULT_DATA_DIR
    outputs_dir: Path = DEFAULT_OUTPUTS_DIR
    # None: the default datasets found in data_dir
    datasets: Optional[Tuple[str, ...]] = None
    collect_metrics: bool = True
    workers: int = 1
    log_level: str = "INFO"
    show_progress: bool = True

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AnalysisConfig":
        if getattr(args, "single", False):
            datasets: Optional[Tuple[str, ...]] = (SINGLE_DATASET,)
        elif getattr(args, "dataset", None):
            datasets = tuple(args.dataset)
        else:
            datasets = None
        return cls(
            data_dir=Path(args.data_dir),
            outputs_dir=Path(args.outputs_dir),
            datasets=datasets,
            collect_metrics=not args.no_metrics,
            workers=int(args.workers),
            log_level=str(args.log_level),
            show_progress=not getattr(args, "no_progress", False),
        )
