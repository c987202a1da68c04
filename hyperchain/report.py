"""
Report generation for one-dimensional hypercomplexes.

A report lists, for every index of a window, whether the object and the
outgoing map can be computed, their ranks and shapes, and the rank of the
homology wherever both neighbouring maps are known.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import validate as _jsonschema_validate

from .complex import CHAIN
from .hypercomplex import HyperComplex

REPORT_VERSION = "0.1"
SCHEMA_NAME = "complex-report-0.1.schema.json"


def _object_entry(hc: HyperComplex, k: int) -> Dict[str, Any]:
    if not hc.can_compute_index((k,)):
        return {"index": k, "computable": False, "rank": None}
    return {"index": k, "computable": True, "rank": int(hc[(k,)].rank)}


def _map_entry(hc: HyperComplex, k: int) -> Dict[str, Any]:
    if not hc.can_compute_map(1, (k,)):
        return {"index": k, "computable": False, "shape": None, "rank": None, "is_zero": None}
    f = hc.map(1, (k,))
    return {
        "index": k,
        "computable": True,
        "shape": [int(f.shape[0]), int(f.shape[1])],
        "rank": int(f.rank()),
        "is_zero": bool(f.is_zero()),
    }


def _homology_ranks(
    hc: HyperComplex,
    objects: Dict[int, Dict[str, Any]],
    maps: Dict[int, Dict[str, Any]],
) -> Dict[str, int]:
    step = 1 if hc.direction(1) == CHAIN else -1
    ranks: Dict[str, int] = {}
    for k, obj in objects.items():
        if not obj["computable"]:
            continue
        rank = obj["rank"]
        outgoing = maps.get(k)
        if outgoing is not None and outgoing["computable"]:
            rank -= outgoing["rank"]
        incoming = maps.get(k + step)
        if incoming is not None and incoming["computable"]:
            rank -= incoming["rank"]
        ranks[str(k)] = int(rank)
    return ranks


def build_complex_report(
    hc: HyperComplex,
    window: Tuple[int, int],
    notes: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Builds a report over the indices ``window[0] .. window[1]`` (inclusive).

    Homology ranks at the window edges only account for maps inside the
    window.
    """
    if hc.dim != 1:
        raise ValueError(f"reports need a one-dimensional hypercomplex, got dimension {hc.dim}")
    low, high = int(window[0]), int(window[1])
    if low > high:
        raise ValueError("window must satisfy low <= high")

    objects = {k: _object_entry(hc, k) for k in range(low, high + 1)}
    maps = {k: _map_entry(hc, k) for k in range(low, high + 1)}

    return {
        "report_version": REPORT_VERSION,
        "notes": notes or [],
        "dimension": int(hc.dim),
        "typ": hc.direction(1),
        "bounds": {
            "upper": hc.upper_bound(1),
            "lower": hc.lower_bound(1),
        },
        "window": [low, high],
        "objects": list(objects.values()),
        "maps": list(maps.values()),
        "homology": _homology_ranks(hc, objects, maps),
    }


def flatten_report(report: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    """
    Flattens a nested report into a flat dict suitable for CSV/JSONL.
    Lists are expanded by index.
    """
    flat: Dict[str, str] = {}
    for key, value in report.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_report(value, prefix=path))
        elif isinstance(value, list):
            for idx, item in enumerate(value):
                flat.update(flatten_report({str(idx): item}, prefix=path))
        else:
            flat[path] = str(value)
    return flat


def load_complex_report_schema() -> Dict[str, Any]:
    schema_path = resources.files("hyperchain").joinpath(f"schemas/{SCHEMA_NAME}")
    with schema_path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def validate_complex_report(report: Dict[str, Any], schema: Optional[Dict[str, Any]] = None) -> None:
    schema_obj = schema or load_complex_report_schema()
    _jsonschema_validate(instance=report, schema=schema_obj)
