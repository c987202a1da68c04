"""
Lazily evaluated multi-indexed complexes.

A ``HyperComplex`` does not store its objects up front. It asks a chain
factory for the object at a tuple index and a map factory for the map
leaving that index in direction ``p`` (1-based), and caches every answer
so that repeated queries return the same object.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Tuple

from .complex import VARIANCES

Index = Tuple[int, ...]


class HyperComplexIndexError(ValueError):
    """Raised when a hypercomplex is addressed with a malformed index."""


class NotComputableError(LookupError):
    """Raised when an entry is requested that its factory cannot produce."""


class HyperComplexChainFactory(ABC):
    @abstractmethod
    def __call__(self, hc: "HyperComplex", index: Index) -> Any:
        ...

    @abstractmethod
    def can_compute(self, hc: "HyperComplex", index: Index) -> bool:
        ...


class HyperComplexMapFactory(ABC):
    @abstractmethod
    def __call__(self, hc: "HyperComplex", p: int, index: Index) -> Any:
        ...

    @abstractmethod
    def can_compute(self, hc: "HyperComplex", p: int, index: Index) -> bool:
        ...


def _as_index(index) -> Index:
    if isinstance(index, int):
        return (index,)
    return tuple(int(i) for i in index)


class HyperComplex:
    def __init__(
        self,
        dim: int,
        chain_factory: HyperComplexChainFactory,
        map_factory: HyperComplexMapFactory,
        directions: Sequence[str],
        upper_bounds: Optional[Sequence[Optional[int]]] = None,
        lower_bounds: Optional[Sequence[Optional[int]]] = None,
    ):
        if dim < 0:
            raise ValueError("dimension must be non-negative")
        directions = list(directions)
        if len(directions) != dim:
            raise ValueError(f"expected {dim} directions, got {len(directions)}")
        for d in directions:
            if d not in VARIANCES:
                raise ValueError(f"direction must be one of {VARIANCES}, got {d!r}")
        if upper_bounds is not None and len(upper_bounds) != dim:
            raise ValueError(f"expected {dim} upper bounds")
        if lower_bounds is not None and len(lower_bounds) != dim:
            raise ValueError(f"expected {dim} lower bounds")

        self.dim = int(dim)
        self.chain_factory = chain_factory
        self.map_factory = map_factory
        self.directions = directions
        self.upper_bounds = list(upper_bounds) if upper_bounds is not None else [None] * dim
        self.lower_bounds = list(lower_bounds) if lower_bounds is not None else [None] * dim
        self._objects: Dict[Index, Any] = {}
        self._maps: Dict[Tuple[int, Index], Any] = {}

    def __getitem__(self, index) -> Any:
        idx = _as_index(index)
        if idx in self._objects:
            return self._objects[idx]
        if not self.chain_factory.can_compute(self, idx):
            raise NotComputableError(f"object at {idx} can not be computed")
        result = self.chain_factory(self, idx)
        self._objects[idx] = result
        return result

    def can_compute_index(self, index) -> bool:
        idx = _as_index(index)
        if idx in self._objects:
            return True
        return self.chain_factory.can_compute(self, idx)

    def map(self, p: int, index) -> Any:
        idx = _as_index(index)
        key = (p, idx)
        if key in self._maps:
            return self._maps[key]
        if not self.map_factory.can_compute(self, p, idx):
            raise NotComputableError(f"map in direction {p} at {idx} can not be computed")
        result = self.map_factory(self, p, idx)
        self._maps[key] = result
        return result

    def can_compute_map(self, p: int, index) -> bool:
        idx = _as_index(index)
        if (p, idx) in self._maps:
            return True
        return self.map_factory.can_compute(self, p, idx)

    def _check_direction(self, p: int) -> int:
        if not 1 <= p <= self.dim:
            raise HyperComplexIndexError(f"direction {p} out of bounds for dimension {self.dim}")
        return p - 1

    def direction(self, p: int) -> str:
        return self.directions[self._check_direction(p)]

    def upper_bound(self, p: int) -> Optional[int]:
        return self.upper_bounds[self._check_direction(p)]

    def lower_bound(self, p: int) -> Optional[int]:
        return self.lower_bounds[self._check_direction(p)]

    def has_upper_bound(self, p: int) -> bool:
        return self.upper_bound(p) is not None

    def has_lower_bound(self, p: int) -> bool:
        return self.lower_bound(p) is not None

    def __repr__(self) -> str:
        return f"HyperComplex(dim={self.dim}, directions={self.directions})"


class SimpleComplexWrapper:
    """
    Integer-indexed view of a one-dimensional hypercomplex.
    """

    def __init__(self, hc: HyperComplex):
        if hc.dim != 1:
            raise ValueError(f"expected a one-dimensional hypercomplex, got dimension {hc.dim}")
        self.underlying_complex = hc

    def __getitem__(self, k: int) -> Any:
        return self.underlying_complex[(k,)]

    def map(self, k: int) -> Any:
        return self.underlying_complex.map(1, (k,))

    def can_compute_index(self, k: int) -> bool:
        return self.underlying_complex.can_compute_index((k,))

    def can_compute_map(self, k: int) -> bool:
        return self.underlying_complex.can_compute_map(1, (k,))

    @property
    def typ(self) -> str:
        return self.underlying_complex.direction(1)

    @property
    def upper_bound(self) -> Optional[int]:
        return self.underlying_complex.upper_bound(1)

    @property
    def lower_bound(self) -> Optional[int]:
        return self.underlying_complex.lower_bound(1)

    def __repr__(self) -> str:
        return f"SimpleComplexWrapper({self.underlying_complex!r})"
