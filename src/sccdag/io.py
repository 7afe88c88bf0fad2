"""Read graph descriptors from JSON files.

Expected layout::

    {"directed": true, "n": 8,
     "edges": [{"u": 0, "v": 1, "w": 3}, ...],
     "source": 4, "weight_model": "edge"}

`directed` and `weight_model` are optional; `w` defaults to 1.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from sccdag.config import DEFAULT_DATASETS
from sccdag.errors import GraphFormatError
from sccdag.graph import DEFAULT_WEIGHT_MODEL, Edge, GraphDescriptor

PathLike = Union[str, Path]


def _int_field(obj: Mapping[str, Any], key: str, where: str) -> int:
    if key not in obj:
        raise GraphFormatError(f"{where}: missing required key {key!r}")
    val = obj[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(val, bool) or not isinstance(val, int):
        raise GraphFormatError(
            f"{where}: key {key!r} must be an integer, got {type(val).__name__}"
        )
    return val


def parse_descriptor(obj: Any, name: Optional[str] = None) -> GraphDescriptor:
    """Build a validated GraphDescriptor from an already-decoded JSON object."""
    where = name or "<graph>"
    if not isinstance(obj, Mapping):
        raise GraphFormatError(f"{where}: top-level value must be an object")
    if obj.get("directed", True) is False:
        raise GraphFormatError(f"{where}: undirected graphs are not supported")

    n = _int_field(obj, "n", where)
    source = _int_field(obj, "source", where)

    raw_edges = obj.get("edges")
    if not isinstance(raw_edges, list):
        raise GraphFormatError(f"{where}: 'edges' must be a list")
    edges: List[Edge] = []
    for i, e in enumerate(raw_edges):
        if not isinstance(e, Mapping):
            raise GraphFormatError(f"{where}: edge #{i} must be an object")
        ew = f"{where} edge #{i}"
        w = _int_field(e, "w", ew) if "w" in e else 1
        edges.append(Edge(_int_field(e, "u", ew), _int_field(e, "v", ew), w))

    weight_model = obj.get("weight_model", DEFAULT_WEIGHT_MODEL)
    desc = GraphDescriptor(
        n=n,
        edges=tuple(edges),
        source=source,
        weight_model=str(weight_model),
        name=name,
    )
    desc.validate()
    return desc


def load_descriptor(path: PathLike) -> GraphDescriptor:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            obj = json.load(fh)
    except json.JSONDecodeError as exc:
        raise GraphFormatError(
            f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})",
            context={"path": str(path)},
        ) from exc
    return parse_descriptor(obj, name=path.stem)


def discover_datasets(
    data_dir: PathLike, names: Optional[Iterable[str]] = None
) -> List[Path]:
    """Dataset files to run, in run order.

    With `names`, those files (relative to `data_dir`) are returned as given,
    whether or not they exist, so a missing one fails loudly when loaded.
    Otherwise the default dataset names present in `data_dir` are used, and
    if none of them are there, every *.json file in sorted order.
    """
    data_dir = Path(data_dir)
    if names is not None:
        return [data_dir / nm for nm in names]
    defaults = [data_dir / nm for nm in DEFAULT_DATASETS if (data_dir / nm).is_file()]
    if defaults:
        return defaults
    return sorted(data_dir.glob("*.json"))
