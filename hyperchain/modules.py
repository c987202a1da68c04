"""
Free modules and homomorphisms over sympy coefficient rings.

A coefficient ring is any sympy domain (``QQ``, ``ZZ``, ``GF(p)``,
``QQ[x, y]``). Elements are stored as tuples of sympy expressions that have
been normalised through the ring, so equal elements compare equal.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

from sympy import Matrix, sympify
from sympy.polys.matrices import DomainMatrix
from sympy.polys.polyerrors import CoercionFailed


def _coerce(ring, value):
    try:
        return ring.to_sympy(ring.from_sympy(sympify(value)))
    except (CoercionFailed, TypeError, ValueError) as exc:
        raise ValueError(f"cannot coerce {value!r} into {ring}") from exc


class FreeModule:
    """
    Free module ``R^rank`` with standard generators.

    Two modules built with the same ring and rank are still distinct
    objects: maps are composable only when codomain and domain are the
    same module.
    """

    def __init__(self, ring, rank: int):
        if rank < 0:
            raise ValueError("rank must be non-negative")
        self.base_ring = ring
        self.rank = int(rank)

    @property
    def ngens(self) -> int:
        return self.rank

    def __call__(self, coordinates: Iterable) -> "FreeModuleElement":
        return FreeModuleElement(self, coordinates)

    def zero(self) -> "FreeModuleElement":
        return FreeModuleElement(self, [0] * self.rank)

    def gen(self, i: int) -> "FreeModuleElement":
        if not 0 <= i < self.rank:
            raise IndexError(f"generator {i} out of range for rank {self.rank}")
        return FreeModuleElement(self, [1 if j == i else 0 for j in range(self.rank)])

    def gens(self) -> List["FreeModuleElement"]:
        return [self.gen(i) for i in range(self.rank)]

    def is_zero(self) -> bool:
        return self.rank == 0

    def __repr__(self) -> str:
        return f"FreeModule({self.base_ring}, {self.rank})"


class FreeModuleElement:
    def __init__(self, parent: FreeModule, coordinates: Iterable):
        coords = tuple(_coerce(parent.base_ring, c) for c in coordinates)
        if len(coords) != parent.rank:
            raise ValueError(
                f"expected {parent.rank} coordinates, got {len(coords)}"
            )
        self.parent = parent
        self.coordinates: Tuple = coords

    def is_zero(self) -> bool:
        return all(c == 0 for c in self.coordinates)

    def _check_same_parent(self, other: "FreeModuleElement") -> None:
        if other.parent is not self.parent:
            raise ValueError("elements belong to different modules")

    def __add__(self, other: "FreeModuleElement") -> "FreeModuleElement":
        self._check_same_parent(other)
        return FreeModuleElement(
            self.parent, [a + b for a, b in zip(self.coordinates, other.coordinates)]
        )

    def __sub__(self, other: "FreeModuleElement") -> "FreeModuleElement":
        self._check_same_parent(other)
        return FreeModuleElement(
            self.parent, [a - b for a, b in zip(self.coordinates, other.coordinates)]
        )

    def __neg__(self) -> "FreeModuleElement":
        return FreeModuleElement(self.parent, [-a for a in self.coordinates])

    def __rmul__(self, scalar) -> "FreeModuleElement":
        c = _coerce(self.parent.base_ring, scalar)
        return FreeModuleElement(self.parent, [c * a for a in self.coordinates])

    def __eq__(self, other) -> bool:
        if not isinstance(other, FreeModuleElement):
            return NotImplemented
        return self.parent is other.parent and self.coordinates == other.coordinates

    def __hash__(self) -> int:
        return hash((id(self.parent), self.coordinates))

    def __repr__(self) -> str:
        return f"FreeModuleElement({list(self.coordinates)})"


ImageLike = Union[FreeModuleElement, Sequence]


class ModuleHom:
    """
    Homomorphism of free modules given by the images of the domain generators.

    ``matrix`` has one row per domain generator: row ``i`` holds the
    coordinates of the image of generator ``i``.
    """

    def __init__(self, domain: FreeModule, codomain: FreeModule, images: Iterable[ImageLike]):
        if domain.base_ring != codomain.base_ring:
            raise ValueError("domain and codomain must share the coefficient ring")
        resolved: List[FreeModuleElement] = []
        for img in images:
            if isinstance(img, FreeModuleElement):
                if img.parent is not codomain:
                    raise ValueError("image is not an element of the codomain")
                resolved.append(img)
            else:
                resolved.append(codomain(img))
        if len(resolved) != domain.ngens:
            raise ValueError(
                f"expected {domain.ngens} generator images, got {len(resolved)}"
            )
        self.domain = domain
        self.codomain = codomain
        self.images: Tuple[FreeModuleElement, ...] = tuple(resolved)

    @property
    def base_ring(self):
        return self.domain.base_ring

    @property
    def matrix(self) -> Matrix:
        rows = [list(img.coordinates) for img in self.images]
        if not rows:
            return Matrix.zeros(0, self.codomain.rank)
        return Matrix(rows)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.domain.rank, self.codomain.rank)

    def __call__(self, element: FreeModuleElement) -> FreeModuleElement:
        if element.parent is not self.domain:
            raise ValueError("element is not in the domain")
        result = self.codomain.zero()
        for coeff, img in zip(element.coordinates, self.images):
            result = result + coeff * img
        return result

    def is_zero(self) -> bool:
        return all(img.is_zero() for img in self.images)

    def rank(self) -> int:
        """Rank of the matrix over the fraction field of the base ring."""
        rows, cols = self.shape
        if rows == 0 or cols == 0:
            return 0
        ring = self.base_ring
        dm = DomainMatrix(
            [[ring.from_sympy(c) for c in img.coordinates] for img in self.images],
            (rows, cols),
            ring,
        )
        if not ring.is_Field:
            dm = dm.to_field()
        return int(dm.rank())

    def __repr__(self) -> str:
        return f"ModuleHom({self.domain!r} -> {self.codomain!r})"


def hom(domain: FreeModule, codomain: FreeModule, images: Iterable[ImageLike]) -> ModuleHom:
    return ModuleHom(domain, codomain, images)


def zero_hom(domain: FreeModule, codomain: FreeModule) -> ModuleHom:
    """The map sending every generator of ``domain`` to zero."""
    return ModuleHom(domain, codomain, [codomain.zero() for _ in range(domain.ngens)])


def compose(f: ModuleHom, g: ModuleHom) -> ModuleHom:
    """``f`` followed by ``g``."""
    if f.codomain is not g.domain:
        raise ValueError("maps are not composable")
    return ModuleHom(f.domain, g.codomain, [g(img) for img in f.images])
