"""
Finite indexed complexes of free modules.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from .modules import FreeModule, ModuleHom, compose

CHAIN = "chain"
COCHAIN = "cochain"
VARIANCES = (CHAIN, COCHAIN)


class ComplexOfMorphisms:
    """
    A finite sequence of composable homomorphisms.

    ``maps`` are given in composition order. For a chain complex the
    domain of the first map sits in degree ``seed + len(maps)`` and the
    maps lower the degree; for a cochain complex the domain of the first
    map sits in degree ``seed`` and the maps raise it.

    ``range`` is a Python ``range`` listing the object indices in the order
    the maps traverse them, so it is descending for chain complexes.
    """

    def __init__(
        self,
        maps: Sequence[ModuleHom],
        seed: int = 0,
        typ: str = CHAIN,
        check: bool = True,
    ):
        if typ not in VARIANCES:
            raise ValueError(f"typ must be one of {VARIANCES}, got {typ!r}")
        maps = list(maps)
        if not maps:
            raise ValueError("a complex needs at least one map")
        for f, g in zip(maps, maps[1:]):
            if f.codomain is not g.domain:
                raise ValueError("maps are not composable")

        self.typ = typ
        self.seed = int(seed)
        self._maps: List[ModuleHom] = maps
        self._objects: List[FreeModule] = [maps[0].domain] + [f.codomain for f in maps]

        if check:
            for f, g in zip(maps, maps[1:]):
                if not compose(f, g).is_zero():
                    raise ValueError("consecutive maps do not compose to zero")

    @property
    def range(self) -> range:
        n = len(self._maps)
        if self.typ == CHAIN:
            return range(self.seed + n, self.seed - 1, -1)
        return range(self.seed, self.seed + n + 1)

    @property
    def map_range(self) -> range:
        n = len(self._maps)
        if self.typ == CHAIN:
            return range(self.seed + n, self.seed, -1)
        return range(self.seed, self.seed + n)

    @property
    def base_ring(self):
        return self._objects[0].base_ring

    def _position(self, k: int) -> int:
        if self.typ == CHAIN:
            return self.seed + len(self._maps) - k
        return k - self.seed

    def __getitem__(self, k: int) -> FreeModule:
        if k not in self.range:
            raise IndexError(f"index {k} outside of {self.range}")
        return self._objects[self._position(k)]

    def map(self, k: int) -> ModuleHom:
        if k not in self.map_range:
            raise IndexError(f"no map at index {k}; maps exist for {self.map_range}")
        return self._maps[self._position(k)]

    def maps(self) -> List[ModuleHom]:
        return list(self._maps)

    def __len__(self) -> int:
        return len(self._objects)

    def _incoming_index(self, k: int) -> int:
        return k + 1 if self.typ == CHAIN else k - 1

    def homology_rank(self, k: int) -> int:
        """
        Rank of the homology at ``k`` over the fraction field of the base ring.
        """
        rank = self[k].rank
        if k in self.map_range:
            rank -= self.map(k).rank()
        incoming = self._incoming_index(k)
        if incoming in self.map_range:
            rank -= self.map(incoming).rank()
        return rank

    def betti_numbers(self) -> Dict[int, int]:
        return {k: self.homology_rank(k) for k in self.range}

    def __repr__(self) -> str:
        ranks = ", ".join(f"{k}: {self[k].rank}" for k in self.range)
        return f"ComplexOfMorphisms({self.typ}, {{{ranks}}})"


def chain_complex(maps: Sequence[ModuleHom], seed: int = 0, check: bool = True) -> ComplexOfMorphisms:
    return ComplexOfMorphisms(maps, seed=seed, typ=CHAIN, check=check)


def cochain_complex(maps: Sequence[ModuleHom], seed: int = 0, check: bool = True) -> ComplexOfMorphisms:
    return ComplexOfMorphisms(maps, seed=seed, typ=COCHAIN, check=check)
