"""
Rational parametrization of projective plane curves.

The algorithms live in Singular's ``paraplanecurves.lib``. Each function
here converts its input to Singular, runs one procedure through the
``SingularSession`` it is given, and reads the result back into sympy
polynomials over a freshly built coefficient ring: either QQ or a number
field QQ(a) given by the minimal polynomial of ``a``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from sympy import QQ, Poly, Symbol, roots, sympify

from .conversion import (
    from_singular,
    ideal_declaration,
    print_ideal,
    print_matrix_row,
    print_poly,
    print_ring,
    ring_declaration,
    sympy_name,
    to_singular,
)
from .engine import SingularError, SingularSession


def _rational_poly(expr, gens: Optional[Sequence[Symbol]]) -> Poly:
    if isinstance(expr, Poly):
        poly = expr if gens is None else Poly(expr.as_expr(), *gens)
    else:
        expr = sympify(expr)
        if gens is None:
            gens = sorted(expr.free_symbols, key=str)
        poly = Poly(expr, *gens)
    if poly.domain not in (QQ, QQ.get_ring()):
        raise ValueError(f"coefficients must be rational, got domain {poly.domain}")
    return poly.set_domain(QQ)


class ProjectivePlaneCurve:
    """
    Plane curve ``{F = 0}`` in P^2 given by a homogeneous polynomial in three
    variables with rational coefficients.
    """

    def __init__(self, equation, gens: Optional[Sequence[Symbol]] = None):
        poly = _rational_poly(equation, gens)
        if len(poly.gens) != 3:
            raise ValueError(f"a plane curve needs three variables, got {poly.gens}")
        if poly.is_zero or poly.total_degree() < 1:
            raise ValueError("defining equation must be a non-constant polynomial")
        if not poly.is_homogeneous:
            raise ValueError("defining equation must be homogeneous")
        self.defining_equation = poly

    @property
    def gens(self) -> Tuple[Symbol, ...]:
        return tuple(self.defining_equation.gens)

    @property
    def degree(self) -> int:
        return self.defining_equation.total_degree()

    def __repr__(self) -> str:
        return f"ProjectivePlaneCurve({self.defining_equation.as_expr()} = 0)"


class ProjectiveCurve:
    """Curve in P^n given by homogeneous generators of its ideal."""

    def __init__(self, generators: Iterable, gens: Optional[Sequence[Symbol]] = None):
        generators = list(generators)
        if not generators:
            raise ValueError("a curve needs at least one generator")
        if gens is None:
            symbols = set()
            for g in generators:
                symbols |= set(g.gens if isinstance(g, Poly) else sympify(g).free_symbols)
            gens = sorted(symbols, key=str)
        polys = [_rational_poly(g, gens) for g in generators]
        for p in polys:
            if not p.is_homogeneous:
                raise ValueError(f"generator {p.as_expr()} is not homogeneous")
        self.ideal: List[Poly] = polys

    @property
    def gens(self) -> Tuple[Symbol, ...]:
        return tuple(self.ideal[0].gens)

    @property
    def ambient_dim(self) -> int:
        return len(self.gens) - 1

    def __repr__(self) -> str:
        body = ", ".join(str(p.as_expr()) for p in self.ideal)
        return f"ProjectiveCurve(ideal({body}))"


@dataclass(frozen=True)
class NumberField:
    minpoly: Poly
    generator: Symbol

    @property
    def degree(self) -> int:
        return self.minpoly.degree()

    def embeddings(self) -> List:
        """Explicit roots of the minimal polynomial."""
        return list(roots(self.minpoly).keys())


@dataclass(frozen=True)
class EngineRing:
    gens: Tuple[Symbol, ...]
    number_field: Optional[NumberField] = None

    @property
    def coefficient_domain(self):
        if self.number_field is None:
            return QQ
        return QQ[self.number_field.generator]

    @property
    def symbols(self) -> Tuple[Symbol, ...]:
        if self.number_field is None:
            return self.gens
        return self.gens + (self.number_field.generator,)

    def poly(self, expr) -> Poly:
        return Poly(expr, *self.gens, domain=self.coefficient_domain)

    def parse(self, text: str) -> Poly:
        return self.poly(from_singular(text, self.symbols))


@dataclass(frozen=True)
class RingElements:
    """Polynomials returned by the engine together with the ring they live in."""

    ring: EngineRing
    elements: Tuple[Poly, ...]

    def __iter__(self) -> Iterator[Poly]:
        return iter(self.elements)

    def __getitem__(self, i: int) -> Poly:
        return self.elements[i]

    def __len__(self) -> int:
        return len(self.elements)

    def as_exprs(self) -> List:
        return [p.as_expr() for p in self.elements]


def _ring_from_block(lines: List[str]) -> EngineRing:
    if not lines:
        raise SingularError("engine did not report the result ring")
    gens = tuple(Symbol(sympy_name(v)) for v in lines[0].split(","))
    if len(lines) == 1:
        return EngineRing(gens)
    if len(lines) != 3:
        raise SingularError(f"unexpected ring description: {lines}")
    generator = Symbol(sympy_name(lines[1]))
    minpoly_expr = from_singular(lines[2], [generator])
    if minpoly_expr == 0:
        raise SingularError("result ring has a transcendental parameter")
    return EngineRing(gens, NumberField(Poly(minpoly_expr, generator, domain=QQ), generator))


def _block(blocks: Dict[str, List[str]], name: str) -> List[str]:
    if name not in blocks:
        raise SingularError(f"engine output is missing {name!r}")
    return blocks[name]


def _elements(ring: EngineRing, lines: List[str]) -> RingElements:
    return RingElements(ring, tuple(ring.parse(t) for t in lines))


def _curve_lines(C: ProjectivePlaneCurve) -> List[str]:
    return [
        *ring_declaration("R", C.gens),
        f"poly f = {to_singular(C.defining_equation)};",
    ]


def _ideal_lines(D: ProjectiveCurve) -> List[str]:
    return [*ring_declaration("R", D.gens), ideal_declaration("I", D.ideal)]


def _result_in_new_ring(handle: str, printers: List[str]) -> List[str]:
    return [f"setring {handle};", "short = 0;", *print_ring(), *printers]


def _check_conic(C: ProjectivePlaneCurve) -> None:
    if C.degree != 2:
        raise ValueError(f"expected a conic, got a curve of degree {C.degree}")


def parametrization(C: ProjectivePlaneCurve, session: SingularSession) -> RingElements:
    """
    Returns a rational parametrization of the rational curve ``C``: three
    forms in ``s, t``, possibly over a real quadratic extension of QQ.
    """
    body = [
        *_curve_lines(C),
        "def RP1 = paraPlaneCurve(f);",
        *_result_in_new_ring("RP1", print_ideal("PARA", "PARA")),
    ]
    blocks = session.call("paraPlaneCurve", body)
    ring = _ring_from_block(_block(blocks, "ring"))
    return _elements(ring, _block(blocks, "PARA"))


def adjoint_ideal(C: ProjectivePlaneCurve, session: SingularSession) -> RingElements:
    """Returns generators of the Gorenstein adjoint ideal of ``C``."""
    body = [
        *_curve_lines(C),
        "ideal AI = adjointIdeal(f, 2);",
        *print_ideal("AI", "AI"),
    ]
    blocks = session.call("adjointIdeal", body)
    return _elements(EngineRing(C.gens), _block(blocks, "AI"))


def rational_point_conic(C: ProjectivePlaneCurve, session: SingularSession) -> RingElements:
    """
    Returns homogeneous coordinates of a point on the conic ``C``: rational
    when one exists, otherwise over a quadratic extension of QQ.
    """
    _check_conic(C)
    body = [
        *_curve_lines(C),
        "def RP = rationalPointConic(f);",
        *_result_in_new_ring("RP", print_matrix_row("point", "point")),
    ]
    blocks = session.call("rationalPointConic", body)
    ring = _ring_from_block(_block(blocks, "ring"))
    point = _elements(ring, _block(blocks, "point"))
    if len(point) != 3:
        raise SingularError(f"expected three coordinates, got {len(point)}")
    return point


def parametrization_conic(C: ProjectivePlaneCurve, session: SingularSession) -> RingElements:
    """Returns forms in the coordinates of P^1 parametrizing the conic ``C``."""
    _check_conic(C)
    body = [
        *_curve_lines(C),
        "def RP1 = paraConic(f);",
        *_result_in_new_ring("RP1", print_ideal("PARACONIC", "PARACONIC")),
    ]
    blocks = session.call("paraConic", body)
    ring = _ring_from_block(_block(blocks, "ring"))
    return _elements(ring, _block(blocks, "PARACONIC"))


def map_to_rational_normal_curve(C: ProjectivePlaneCurve, session: SingularSession) -> ProjectiveCurve:
    """Returns the rational normal curve of degree ``deg C - 2`` that ``C`` maps to."""
    body = [
        *_curve_lines(C),
        "ideal AI = adjointIdeal(f);",
        "def RNCring = mapToRatNormCurve(f, AI);",
        *_result_in_new_ring("RNCring", print_ideal("RNC", "RNC")),
    ]
    blocks = session.call("mapToRatNormCurve", body)
    ring = _ring_from_block(_block(blocks, "ring"))
    elements = _elements(ring, _block(blocks, "RNC"))
    return ProjectiveCurve(elements, gens=ring.gens)


def rat_normal_curve_anticanonical_map(D: ProjectiveCurve, session: SingularSession) -> RingElements:
    """
    Returns forms defining the anticanonical map of the rational normal
    curve ``D``; they represent classes modulo the ideal of ``D``.
    """
    body = [*_ideal_lines(D), "ideal J = rncAntiCanonicalMap(I);", *print_ideal("J", "J")]
    blocks = session.call("rncAntiCanonicalMap", body)
    return _elements(EngineRing(D.gens), _block(blocks, "J"))


def rat_normal_curve_it_proj_odd(D: ProjectiveCurve, session: SingularSession) -> RingElements:
    """Returns forms defining an isomorphic projection of ``D`` to P^1."""
    body = [*_ideal_lines(D), "ideal J = rncItProjOdd(I);", *print_ideal("J", "J")]
    blocks = session.call("rncItProjOdd", body)
    return _elements(EngineRing(D.gens), _block(blocks, "J"))


def rat_normal_curve_it_proj_even(
    D: ProjectiveCurve, session: SingularSession
) -> Tuple[RingElements, ProjectivePlaneCurve]:
    """
    Returns the forms ``PHI`` of an isomorphic projection of ``D`` to a plane
    conic, and that conic.
    """
    body = [
        *_ideal_lines(D),
        "def RP2 = rncItProjEven(I);",
        *print_ideal("PHI", "PHI"),
        *_result_in_new_ring("RP2", print_poly("CONIC", "CONIC")),
    ]
    blocks = session.call("rncItProjEven", body)
    phi = _elements(EngineRing(D.gens), _block(blocks, "PHI"))
    ring = _ring_from_block(_block(blocks, "ring"))
    conic_lines = _block(blocks, "CONIC")
    if len(conic_lines) != 1:
        raise SingularError("expected a single conic equation")
    conic = ProjectivePlaneCurve(ring.parse(conic_lines[0]), gens=ring.gens)
    return phi, conic


def invert_birational_map(
    phi: Sequence, C: ProjectivePlaneCurve, session: SingularSession
) -> Dict[str, RingElements]:
    """
    Inverts the birational map given by ``phi`` from ``C`` onto its image.

    Returns ``{"image": ..., "inverse": ...}``; the inverse is given by
    representatives modulo the ideal of the image.
    """
    phi_polys = [_rational_poly(p, C.gens) for p in phi]
    if not phi_polys:
        raise ValueError("phi must have at least one component")
    body = [
        *_curve_lines(C),
        ideal_declaration("phi", phi_polys),
        "def Rinv = invertBirMap(phi, f);",
        *_result_in_new_ring("Rinv", [*print_ideal("J", "J"), *print_ideal("psi", "psi")]),
    ]
    blocks = session.call("invertBirMap", body)
    ring = _ring_from_block(_block(blocks, "ring"))
    return {
        "image": _elements(ring, _block(blocks, "J")),
        "inverse": _elements(ring, _block(blocks, "psi")),
    }
