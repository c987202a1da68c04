"""
Conversion between sympy polynomials and Singular source/output text.

Indexed Singular variables such as ``y(1)`` are mapped to sympy symbols
named ``y_1`` and back.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence

from sympy import Poly, Rational, Symbol
from sympy.parsing.sympy_parser import parse_expr

_PLAIN_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
_INDEXED_NAME = re.compile(r"^([A-Za-z][A-Za-z0-9]*)_(\d+)$")
_INDEXED_SINGULAR = re.compile(r"\b([A-Za-z][A-Za-z0-9]*)\((\d+)\)")

BEGIN_MARKER = "@@BEGIN"
END_MARKER = "@@END"


def singular_name(symbol) -> str:
    name = str(symbol)
    if _PLAIN_NAME.match(name):
        return name
    match = _INDEXED_NAME.match(name)
    if match:
        return f"{match.group(1)}({match.group(2)})"
    raise ValueError(f"{name!r} is not a valid Singular identifier")


def sympy_name(name: str) -> str:
    return _INDEXED_SINGULAR.sub(r"\1_\2", name.strip())


def ring_declaration(
    name: str,
    gens: Sequence[Symbol],
    parameter: Optional[Symbol] = None,
    minpoly: Optional[Poly] = None,
) -> List[str]:
    """
    Singular lines declaring a ring in characteristic 0 with ``dp`` ordering.

    A ``parameter`` adjoins a transcendental element; together with
    ``minpoly`` it becomes an algebraic extension of QQ.
    """
    if not _PLAIN_NAME.match(name):
        raise ValueError(f"{name!r} is not a valid Singular identifier")
    variables = ",".join(singular_name(g) for g in gens)
    char = "0" if parameter is None else f"(0,{singular_name(parameter)})"
    lines = [f"ring {name} = {char},({variables}),dp;", "short = 0;"]
    if minpoly is not None:
        if parameter is None:
            raise ValueError("minpoly requires a parameter")
        lines.append(f"minpoly = {to_singular(minpoly)};")
    return lines


def _coefficient(c) -> str:
    c = Rational(c)
    if c.q == 1:
        return f"({c.p})" if c.p < 0 else str(c.p)
    return f"({c.p}/{c.q})"


def to_singular(poly: Poly) -> str:
    """Writes ``poly`` (rational coefficients) as a Singular polynomial."""
    names = [singular_name(g) for g in poly.gens]
    terms = []
    for monom, coeff in poly.terms():
        factors = [
            name if e == 1 else f"{name}^{e}"
            for name, e in zip(names, monom)
            if e
        ]
        coeff_text = _coefficient(coeff)
        if not factors:
            terms.append(coeff_text)
        elif coeff == 1:
            terms.append("*".join(factors))
        else:
            terms.append(coeff_text + "*" + "*".join(factors))
    return "+".join(terms) if terms else "0"


def ideal_declaration(name: str, polys: Iterable[Poly]) -> str:
    body = ",".join(to_singular(p) for p in polys)
    return f"ideal {name} = {body};"


def from_singular(text: str, symbols: Iterable[Symbol]):
    """Parses a Singular polynomial printed with ``short = 0``."""
    local: Dict[str, Symbol] = {str(s): s for s in symbols}
    expr_text = sympy_name(text).replace("^", "**")
    return parse_expr(expr_text, local_dict=local)


def print_block(block: str, body: Sequence[str]) -> List[str]:
    return [f'print("{BEGIN_MARKER} {block}");', *body, f'print("{END_MARKER} {block}");']


def print_ideal(block: str, ideal: str) -> List[str]:
    return print_block(
        block,
        [f"for (@k = 1; @k <= ncols({ideal}); @k++) {{ print(string({ideal}[@k])); }}"],
    )


def print_matrix_row(block: str, matrix: str) -> List[str]:
    return print_block(
        block,
        [f"for (@k = 1; @k <= ncols({matrix}); @k++) {{ print(string({matrix}[1, @k])); }}"],
    )


def print_poly(block: str, poly: str) -> List[str]:
    return print_block(block, [f"print(string({poly}));"])


def print_ring(block: str = "ring") -> List[str]:
    """Prints the variables of the basering, then its parameter and minpoly if any."""
    return print_block(
        block,
        [
            "print(varstr(basering));",
            "if (npars(basering) > 0) { print(parstr(1)); print(string(minpoly)); }",
        ],
    )


def parse_blocks(output: str) -> Dict[str, List[str]]:
    blocks: Dict[str, List[str]] = {}
    current: Optional[str] = None
    for raw in output.splitlines():
        line = raw.strip()
        if line.startswith(BEGIN_MARKER):
            current = line[len(BEGIN_MARKER):].strip()
            blocks[current] = []
            continue
        if line.startswith(END_MARKER):
            name = line[len(END_MARKER):].strip()
            if name != current:
                raise ValueError(f"unbalanced output block {name!r}")
            current = None
            continue
        if current is not None and line:
            blocks[current].append(line)
    if current is not None:
        raise ValueError(f"output block {current!r} was not closed")
    return blocks
