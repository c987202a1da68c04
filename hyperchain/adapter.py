"""
Wrap a conventional complex into a one-dimensional hypercomplex.
"""

from __future__ import annotations

import logging
from typing import Tuple

from .complex import CHAIN, COCHAIN, ComplexOfMorphisms
from .hypercomplex import (
    HyperComplex,
    HyperComplexChainFactory,
    HyperComplexIndexError,
    HyperComplexMapFactory,
    NotComputableError,
    SimpleComplexWrapper,
)
from .modules import FreeModule, ModuleHom, zero_hom

_logger = logging.getLogger(__name__)


def _check_arity(index: Tuple[int, ...]) -> int:
    if len(index) != 1:
        raise HyperComplexIndexError(f"wrong type of index: expected a 1-tuple, got {index!r}")
    return index[0]


def _check_degree(p: int) -> None:
    if p != 1:
        raise HyperComplexIndexError(f"complex is one-dimensional: map degree must be 1, got {p}")


class ChainFactoryFromComplex(HyperComplexChainFactory):
    def __init__(self, C: ComplexOfMorphisms, auto_extend: bool = False):
        self.C = C
        self.auto_extend = bool(auto_extend)

    def __call__(self, hc: HyperComplex, index: Tuple[int, ...]) -> FreeModule:
        k = _check_arity(index)
        if k in self.C.range:
            return self.C[k]
        if not self.auto_extend:
            raise NotComputableError(f"index {k} outside of {self.C.range}")
        ring = self.C[self.C.range[0]].base_ring
        _logger.debug("Synthesizing zero module at %d over %s", k, ring)
        return FreeModule(ring, 0)

    def can_compute(self, hc: HyperComplex, index: Tuple[int, ...]) -> bool:
        k = _check_arity(index)
        if self.auto_extend:
            return True
        return k in self.C.range


class MapFactoryFromComplex(HyperComplexMapFactory):
    def __init__(self, C: ComplexOfMorphisms, auto_extend: bool = False):
        self.C = C
        self.auto_extend = bool(auto_extend)

    def __call__(self, hc: HyperComplex, p: int, index: Tuple[int, ...]) -> ModuleHom:
        k = _check_arity(index)
        _check_degree(p)
        if k in self.C.map_range:
            return self.C.map(k)
        if not self.auto_extend:
            raise NotComputableError(f"no map at {k}; maps exist for {self.C.map_range}")
        dom = hc[(k,)]
        cod = hc[(k - 1,)]
        _logger.debug("Synthesizing zero map at %d", k)
        return zero_hom(dom, cod)

    def can_compute(self, hc: HyperComplex, p: int, index: Tuple[int, ...]) -> bool:
        _check_degree(p)
        k = _check_arity(index)
        if self.auto_extend:
            return True
        return k in self.C.map_range


def hyper_complex(C: ComplexOfMorphisms, auto_extend: bool = False) -> HyperComplex:
    """
    Returns a one-dimensional hypercomplex backed by ``C``.

    With ``auto_extend=False`` only the indices of ``C`` can be computed.
    With ``auto_extend=True`` every other index holds a zero module and
    every other map is a zero map.
    """
    chain_factory = ChainFactoryFromComplex(C, auto_extend=auto_extend)
    map_factory = MapFactoryFromComplex(C, auto_extend=auto_extend)
    upper_bound = C.range[-1] if C.typ == COCHAIN else C.range[0]
    lower_bound = C.range[-1] if C.typ == CHAIN else C.range[0]
    return HyperComplex(
        1,
        chain_factory,
        map_factory,
        [C.typ],
        upper_bounds=[upper_bound],
        lower_bounds=[lower_bound],
    )


def simple_complex_wrapper(C: ComplexOfMorphisms, auto_extend: bool = False) -> SimpleComplexWrapper:
    return SimpleComplexWrapper(hyper_complex(C, auto_extend=auto_extend))
