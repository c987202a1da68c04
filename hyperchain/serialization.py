"""
JSON ingestion and export of complexes of free modules.

Format::

    {
      "ring": "QQ",
      "typ": "chain",
      "seed": 0,
      "maps": [{"rows": 1, "cols": 2, "matrix": [["x", "-y"]]}, ...]
    }

Each matrix has one row per generator of the map's domain. Entries are
numbers or sympy-parsable strings.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List

import numpy as np
from sympy import GF, QQ, ZZ, symbols, sympify

from .complex import ComplexOfMorphisms
from .modules import FreeModule, ModuleHom

_GF = re.compile(r"^GF\((\d+)\)$")
_POLY_RING = re.compile(r"^(QQ|ZZ)\[(.+)\]$")


def parse_ring(text: str):
    """
    Parses ``QQ``, ``ZZ``, ``GF(p)`` or ``QQ[x,y]`` into a sympy domain.
    """
    text = text.replace(" ", "")
    if text == "QQ":
        return QQ
    if text == "ZZ":
        return ZZ
    match = _GF.match(text)
    if match:
        return GF(int(match.group(1)))
    match = _POLY_RING.match(text)
    if match:
        base = QQ if match.group(1) == "QQ" else ZZ
        gens = symbols(match.group(2).replace(",", " "))
        if not isinstance(gens, tuple):
            gens = (gens,)
        return base.poly_ring(*gens)
    raise ValueError(f"Unsupported ring: {text}")


def ring_to_text(ring) -> str:
    if ring == QQ:
        return "QQ"
    if ring == ZZ:
        return "ZZ"
    if ring.is_FiniteField:
        return f"GF({ring.mod})"
    if ring.is_PolynomialRing:
        gens = ",".join(str(s) for s in ring.symbols)
        return f"{ring_to_text(ring.domain)}[{gens}]"
    raise ValueError(f"Unsupported ring: {ring}")


def _ring_symbols(ring) -> Dict[str, Any]:
    if getattr(ring, "is_PolynomialRing", False):
        return {str(s): s for s in ring.symbols}
    return {}


def _parse_entry(value, local: Dict[str, Any]):
    if isinstance(value, str):
        return sympify(value, locals=local)
    return value


def complex_from_dict(data: Dict[str, Any], check: bool = True) -> ComplexOfMorphisms:
    ring = parse_ring(data.get("ring", "QQ"))
    local = _ring_symbols(ring)
    entries = data.get("maps") or []
    if not entries:
        raise ValueError("complex must contain at least one map")

    maps: List[ModuleHom] = []
    domain = None
    for pos, entry in enumerate(entries):
        rows = int(entry["rows"])
        cols = int(entry["cols"])
        matrix = np.asarray(entry.get("matrix", []), dtype=object)
        if matrix.size == 0:
            matrix = matrix.reshape((rows, cols))
        if matrix.shape != (rows, cols):
            raise ValueError(
                f"map {pos}: matrix shape {matrix.shape} does not match ({rows}, {cols})"
            )
        if domain is None:
            domain = FreeModule(ring, rows)
        elif domain.rank != rows:
            raise ValueError(f"map {pos}: expected {domain.rank} rows, got {rows}")
        codomain = FreeModule(ring, cols)
        images = [[_parse_entry(v, local) for v in row] for row in matrix.tolist()]
        maps.append(ModuleHom(domain, codomain, images))
        domain = codomain

    return ComplexOfMorphisms(
        maps,
        seed=int(data.get("seed", 0)),
        typ=data.get("typ", "chain"),
        check=check,
    )


def _entry_to_json(value):
    if value.is_Integer:
        return int(value)
    return str(value)


def complex_to_dict(C: ComplexOfMorphisms) -> Dict[str, Any]:
    maps = []
    for f in C.maps():
        rows, cols = f.shape
        maps.append({
            "rows": rows,
            "cols": cols,
            "matrix": [[_entry_to_json(c) for c in img.coordinates] for img in f.images],
        })
    return {
        "ring": ring_to_text(C.base_ring),
        "typ": C.typ,
        "seed": C.seed,
        "maps": maps,
    }


def load_complex_json(path: str, check: bool = True) -> ComplexOfMorphisms:
    with open(path, "r", encoding="utf-8") as handle:
        return complex_from_dict(json.load(handle), check=check)


def save_complex_json(path: str, C: ComplexOfMorphisms) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(complex_to_dict(C), handle, indent=2)
